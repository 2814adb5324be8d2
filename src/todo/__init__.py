"""In-memory todo collection shared by the HTTP server and the CLI client."""

from .exceptions import InternalError, NotFoundError, TodoError, ValidationError
from .models import BulkDeleteFilter, ExportSnapshot, TodoItem, TodoStats
from .store import DEFAULT_SEED, UNSET, TodoStore, export_filename

__all__ = [
    "BulkDeleteFilter",
    "DEFAULT_SEED",
    "ExportSnapshot",
    "InternalError",
    "NotFoundError",
    "TodoError",
    "TodoItem",
    "TodoStats",
    "TodoStore",
    "UNSET",
    "ValidationError",
    "export_filename",
]
