#!/usr/bin/env python3
"""
TODO管理CLI - 起動中のTodoサーバーをHTTP経由で操作するコマンドラインインターフェース

Usage:
    python -m src.todo list [--format json|text]
    python -m src.todo get --id ID [--format json|text]
    python -m src.todo add --text "内容" [--format json|text]
    python -m src.todo update --id ID [--text "新しい内容"] [--completed | --pending] [--format json|text]
    python -m src.todo complete --id ID [--format json|text]
    python -m src.todo delete --id ID
    python -m src.todo clear [--completed-only]
    python -m src.todo stats [--format json|text]
    python -m src.todo export [--output PATH]
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

DEFAULT_BASE_URL = os.getenv("TODO_API_URL", "http://localhost:3000")
REQUEST_TIMEOUT = 10.0


class ApiError(Exception):
    """サーバーがエラーステータスを返した"""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class TodoApiClient:
    """Todo HTTP APIの薄いラッパー。sessionは requests.Session 互換であればよい。"""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, session: Any = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self.session.request(
            method, f"{self.base_url}{path}", timeout=REQUEST_TIMEOUT, **kwargs
        )
        if response.status_code >= 400:
            try:
                message = response.json().get("error", response.text)
            except ValueError:
                message = response.text
            raise ApiError(response.status_code, message)
        return response

    def list(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/todos").json()

    def get(self, todo_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/todos/{todo_id}").json()

    def create(self, text: str) -> Dict[str, Any]:
        return self._request("POST", "/api/todos", json={"text": text}).json()

    def update(self, todo_id: int, **fields: Any) -> Dict[str, Any]:
        return self._request("PUT", f"/api/todos/{todo_id}", json=fields).json()

    def delete(self, todo_id: int) -> None:
        self._request("DELETE", f"/api/todos/{todo_id}")

    def clear(self, completed_only: bool = False) -> Dict[str, Any]:
        params = {"completed": "true"} if completed_only else None
        return self._request("DELETE", "/api/todos", params=params).json()

    def stats(self) -> Dict[str, Any]:
        return self._request("GET", "/api/todos/stats").json()

    def export(self) -> tuple[str, Dict[str, Any]]:
        """エクスポート本体と、Content-Dispositionから取り出したファイル名を返す"""
        response = self._request("GET", "/api/todos/export")
        disposition = response.headers.get("content-disposition", "")
        filename = "todos-export.json"
        if 'filename="' in disposition:
            filename = disposition.split('filename="', 1)[1].rstrip('"')
        return filename, response.json()


def format_todo_text(todo: Dict[str, Any]) -> str:
    """Todoアイテムをテキスト形式で整形"""
    mark = "x" if todo["completed"] else " "
    return f"[{todo['id']}] [{mark}] {todo['text']}"


def _print_todo(todo: Dict[str, Any], output_format: str, prefix: str = "") -> None:
    if output_format == "json":
        print(json.dumps(todo, ensure_ascii=False))
    else:
        print(f"{prefix}{format_todo_text(todo)}")


def cmd_list(client: TodoApiClient, output_format: str) -> int:
    """Todoリストを表示"""
    items = client.list()
    if output_format == "json":
        print(json.dumps(items, ensure_ascii=False))
    elif not items:
        print("TODOは登録されていません。")
    else:
        for item in items:
            print(format_todo_text(item))
    return 0


def cmd_get(client: TodoApiClient, todo_id: int, output_format: str) -> int:
    """特定のTodoを取得"""
    _print_todo(client.get(todo_id), output_format)
    return 0


def cmd_add(client: TodoApiClient, text: str, output_format: str) -> int:
    """新しいTodoを追加"""
    _print_todo(client.create(text), output_format, prefix="追加しました: ")
    return 0


def cmd_update(
    client: TodoApiClient,
    todo_id: int,
    text: Optional[str],
    completed: Optional[bool],
    output_format: str,
) -> int:
    """既存のTodoを更新"""
    fields: Dict[str, Any] = {}
    if text is not None:
        fields["text"] = text
    if completed is not None:
        fields["completed"] = completed
    _print_todo(client.update(todo_id, **fields), output_format, prefix="更新しました: ")
    return 0


def cmd_complete(client: TodoApiClient, todo_id: int, output_format: str) -> int:
    """Todoを完了状態にする"""
    _print_todo(client.update(todo_id, completed=True), output_format, prefix="完了しました: ")
    return 0


def cmd_delete(client: TodoApiClient, todo_id: int) -> int:
    """Todoを削除"""
    client.delete(todo_id)
    print(f"削除しました: ID {todo_id}")
    return 0


def cmd_clear(client: TodoApiClient, completed_only: bool) -> int:
    """完了済み、または全てのTodoを削除"""
    result = client.clear(completed_only=completed_only)
    if "remaining" in result:
        print(f"{result['message']} (残り {result['remaining']} 件)")
    else:
        print(result["message"])
    return 0


def cmd_stats(client: TodoApiClient, output_format: str) -> int:
    """件数の集計を表示"""
    stats = client.stats()
    if output_format == "json":
        print(json.dumps(stats, ensure_ascii=False))
    else:
        print(f"合計: {stats['total']} / 完了: {stats['completed']} / 未完了: {stats['pending']}")
    return 0


def cmd_export(client: TodoApiClient, output: Optional[str]) -> int:
    """エクスポートをファイルに保存"""
    filename, data = client.export()
    path = Path(output) if output else Path(filename)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"エクスポートしました: {path} ({data['totalTodos']} 件)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TODO管理CLI - Todoサーバーを操作するインターフェース",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"TodoサーバーのURL（デフォルト: {DEFAULT_BASE_URL}）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    def add_format(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--format",
            choices=["json", "text"],
            default="text",
            help="出力フォーマット（デフォルト: text）",
        )

    add_format(subparsers.add_parser("list", help="TODOリストを表示"))

    parser_get = subparsers.add_parser("get", help="特定のTODOを取得")
    parser_get.add_argument("--id", type=int, required=True, help="取得するTODOのID")
    add_format(parser_get)

    parser_add = subparsers.add_parser("add", help="新しいTODOを追加")
    parser_add.add_argument("--text", required=True, help="TODOの内容")
    add_format(parser_add)

    parser_update = subparsers.add_parser("update", help="既存のTODOを更新")
    parser_update.add_argument("--id", type=int, required=True, help="更新するTODOのID")
    parser_update.add_argument("--text", help="新しい内容")
    state = parser_update.add_mutually_exclusive_group()
    state.add_argument("--completed", dest="completed", action="store_const", const=True, help="完了にする")
    state.add_argument("--pending", dest="completed", action="store_const", const=False, help="未完了に戻す")
    add_format(parser_update)

    parser_complete = subparsers.add_parser("complete", help="TODOを完了状態にする")
    parser_complete.add_argument("--id", type=int, required=True, help="完了するTODOのID")
    add_format(parser_complete)

    parser_delete = subparsers.add_parser("delete", help="TODOを削除")
    parser_delete.add_argument("--id", type=int, required=True, help="削除するTODOのID")

    parser_clear = subparsers.add_parser("clear", help="TODOを一括削除")
    parser_clear.add_argument(
        "--completed-only", action="store_true", help="完了済みのTODOだけを削除"
    )

    add_format(subparsers.add_parser("stats", help="件数の集計を表示"))

    parser_export = subparsers.add_parser("export", help="TODOをJSONファイルにエクスポート")
    parser_export.add_argument("--output", help="保存先（省略時はサーバーが付けたファイル名）")

    return parser


def main(argv: Optional[List[str]] = None, session: Any = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)
    client = TodoApiClient(args.base_url, session=session)

    try:
        if args.command == "list":
            return cmd_list(client, args.format)
        elif args.command == "get":
            return cmd_get(client, args.id, args.format)
        elif args.command == "add":
            return cmd_add(client, args.text, args.format)
        elif args.command == "update":
            return cmd_update(client, args.id, args.text, args.completed, args.format)
        elif args.command == "complete":
            return cmd_complete(client, args.id, args.format)
        elif args.command == "delete":
            return cmd_delete(client, args.id)
        elif args.command == "clear":
            return cmd_clear(client, args.completed_only)
        elif args.command == "stats":
            return cmd_stats(client, args.format)
        elif args.command == "export":
            return cmd_export(client, args.output)
        else:
            print(f"Error: 不明なコマンド: {args.command}", file=sys.stderr)
            return 1
    except ApiError as exc:
        if exc.status_code == 404:
            print(f"Error: 指定したTODOが見つかりません ({exc})", file=sys.stderr)
        else:
            print(f"Error: リクエストに失敗しました ({exc.status_code}): {exc}", file=sys.stderr)
        return 1
    except requests.RequestException as exc:
        print(f"Error: サーバーに接続できません: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
