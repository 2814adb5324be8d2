from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List


class BulkDeleteFilter(str, Enum):
    """一括削除の対象。"""

    COMPLETED = "completed-only"
    ALL = "all"


@dataclass(slots=True)
class TodoItem:
    """メモリ上のTodoアイテム。"""

    id: int
    text: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class TodoStats:
    total: int
    completed: int
    pending: int


@dataclass(frozen=True, slots=True)
class ExportSnapshot:
    """エクスポート時点のコレクションのスナップショット。"""

    export_date: str
    total_todos: int
    completed_todos: int
    pending_todos: int
    todos: List[TodoItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON出力用のキー（camelCase）に変換"""
        return {
            "exportDate": self.export_date,
            "totalTodos": self.total_todos,
            "completedTodos": self.completed_todos,
            "pendingTodos": self.pending_todos,
            "todos": [todo.to_dict() for todo in self.todos],
        }
