"""Todoストアのカスタム例外定義

HTTPアダプタはこれらの例外をステータスコードに変換する
(ValidationError → 400, NotFoundError → 404, InternalError → 500)。
"""

from typing import Union


class TodoError(Exception):
    """Todo基底例外"""

    status_code = 500


class ValidationError(TodoError):
    """入力値が不正"""

    status_code = 400


class NotFoundError(TodoError):
    """指定IDのTodoが存在しない"""

    status_code = 404

    def __init__(self, todo_id: Union[int, str]) -> None:
        super().__init__("Todo not found")
        self.todo_id = todo_id


class InternalError(TodoError):
    """想定外の内部エラー（詳細はログのみに出力）"""

    pass
