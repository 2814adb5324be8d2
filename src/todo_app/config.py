"""
設定管理モジュール

関連クラス:
  - src.server.dependencies: この設定でTodoStoreとロガーを初期化
  - src.server.run: サーバーのホスト/ポート設定を使用
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from src.todo import DEFAULT_SEED

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "app_config.yaml"


@dataclass
class ServerConfig:
    """HTTPサーバー設定"""

    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: str = "public"

    @property
    def static_path(self) -> Path:
        """静的ファイルディレクトリ（相対パスはプロジェクトルート基準）"""
        path = Path(self.static_dir)
        return path if path.is_absolute() else PROJECT_ROOT / path


@dataclass
class Config:
    """アプリケーション設定クラス"""

    server: ServerConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/todo_app.log"

    # 起動時に投入するTodo
    seed_todos: List[str] = field(default_factory=lambda: list(DEFAULT_SEED))

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.server is None:
            self.server = ServerConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        server_data = yaml_data.get("server", {})
        log_data = yaml_data.get("log", {})
        todos_data = yaml_data.get("todos", {})

        seed = todos_data.get("seed")
        return cls(
            server=ServerConfig(
                host=server_data.get("host", "0.0.0.0"),
                port=int(server_data.get("port", 3000)),
                static_dir=server_data.get("static_dir", "public"),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/todo_app.log"),
            seed_todos=list(DEFAULT_SEED) if seed is None else [str(text) for text in seed],
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            server=ServerConfig(
                host=os.getenv("HOST", "0.0.0.0"),
                port=int(os.getenv("PORT", "3000")),
                static_dir=os.getenv("STATIC_DIR", "public"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/todo_app.log"),
        )

    @classmethod
    def load(cls) -> "Config":
        """YAMLがあればそれを使い、なければ環境変数から読み込む

        TODO_APP_CONFIGで設定ファイルを差し替えられる。PORTは常にYAMLより優先。
        """
        env_path = os.getenv("TODO_APP_CONFIG")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return cls.from_env()

        config = cls.from_yaml(config_path)
        if os.getenv("PORT"):
            config.server.port = int(os.environ["PORT"])
        return config
