"""Route registration helpers."""

from .static import register_static_routes
from .todo import register_todo_routes

__all__ = [
    "register_static_routes",
    "register_todo_routes",
]
