from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from .exceptions import InternalError, NotFoundError, ValidationError
from .models import BulkDeleteFilter, ExportSnapshot, TodoItem, TodoStats

logger = logging.getLogger(__name__)

UNSET = object()

INITIAL_ID = 1

DEFAULT_SEED = (
    "Learn about Claude Code Action",
    "Test @claude mentions in PRs",
    "Try automated code reviews",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def export_filename(now: Optional[datetime] = None) -> str:
    """Attachment filename for an export taken at ``now``.

    The timestamp is ISO-8601 truncated to seconds with ``:`` replaced by
    ``-``, e.g. ``todos-export-2024-05-01T12-30-45.json``.
    """
    moment = (now or _utcnow()).astimezone(timezone.utc)
    timestamp = moment.replace(microsecond=0, tzinfo=None).isoformat()
    return f"todos-export-{timestamp.replace(':', '-')}.json"


def _clean_text(text: Any) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Todo text is required")
    return text.strip()


class TodoStore:
    """メモリ上のTODO管理。スレッドセーフ。

    The store owns its list and id counter exclusively. Every item handed out
    is a copy, so callers cannot bypass the invariants by mutating results.
    """

    def __init__(self, seed: Optional[Iterable[str]] = None) -> None:
        self._lock = threading.Lock()
        self._todos: list[TodoItem] = []
        self._next_id = INITIAL_ID
        for text in seed or ():
            self.create(text)

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def _find_index(self, todo_id: int) -> int:
        for index, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return index
        raise NotFoundError(todo_id)

    def create(self, text: Any) -> TodoItem:
        cleaned = _clean_text(text)
        with self._lock:
            todo = TodoItem(id=self._next_id, text=cleaned, completed=False)
            self._next_id += 1
            self._todos.append(todo)
        logger.info("Todo created: %s", todo.id)
        return replace(todo)

    def list_all(self) -> list[TodoItem]:
        with self._lock:
            return [replace(todo) for todo in self._todos]

    def get(self, todo_id: int) -> TodoItem:
        with self._lock:
            return replace(self._todos[self._find_index(todo_id)])

    def update(
        self,
        todo_id: int,
        *,
        text: Any = UNSET,
        completed: Any = UNSET,
    ) -> TodoItem:
        """Apply a partial update; fields left as ``UNSET`` are untouched.

        Validation happens before any field is written, so a rejected update
        leaves the item as it was.
        """
        cleaned = UNSET if text is UNSET else _clean_text(text)
        if completed is not UNSET and not isinstance(completed, bool):
            raise ValidationError("completed must be a boolean")

        with self._lock:
            todo = self._todos[self._find_index(todo_id)]
            if cleaned is not UNSET:
                todo.text = cleaned
            if completed is not UNSET:
                todo.completed = completed
            updated = replace(todo)
        logger.info("Todo updated: %s", todo_id)
        return updated

    def delete_one(self, todo_id: int) -> None:
        with self._lock:
            del self._todos[self._find_index(todo_id)]
        logger.info("Todo deleted: %s", todo_id)

    def delete_bulk(self, bulk_filter: BulkDeleteFilter) -> int:
        """Remove completed items or everything; returns the remaining count.

        Clearing everything also resets the id counter, completed-only leaves
        it alone.
        """
        try:
            bulk_filter = BulkDeleteFilter(bulk_filter)
        except ValueError:
            raise ValidationError(f"Unknown bulk delete filter: {bulk_filter!r}") from None
        with self._lock:
            if bulk_filter is BulkDeleteFilter.COMPLETED:
                before = len(self._todos)
                self._todos = [todo for todo in self._todos if not todo.completed]
                removed = before - len(self._todos)
            else:
                removed = len(self._todos)
                self._todos = []
                self._next_id = INITIAL_ID
            remaining = len(self._todos)
        logger.info("Bulk delete (%s): removed=%s remaining=%s", bulk_filter.value, removed, remaining)
        return remaining

    @staticmethod
    def _count(todos: list[TodoItem]) -> TodoStats:
        completed = sum(1 for todo in todos if todo.completed)
        return TodoStats(total=len(todos), completed=completed, pending=len(todos) - completed)

    def stats(self) -> TodoStats:
        with self._lock:
            return self._count(self._todos)

    def export_snapshot(self, now: Optional[datetime] = None) -> ExportSnapshot:
        """Snapshot of the whole collection for download.

        Raises:
            InternalError: if the collection cannot be read. The cause is
                logged, never exposed.
        """
        moment = (now or _utcnow()).astimezone(timezone.utc)
        try:
            with self._lock:
                todos = [replace(todo) for todo in self._todos]
            counts = self._count(todos)
        except Exception as exc:
            logger.exception("Failed to build export snapshot: %s", exc)
            raise InternalError("Failed to export todos") from exc

        return ExportSnapshot(
            export_date=moment.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            total_todos=counts.total,
            completed_todos=counts.completed,
            pending_todos=counts.pending,
            todos=todos,
        )
