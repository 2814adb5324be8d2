"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

from functools import lru_cache

from src.todo import TodoItem, TodoStats, TodoStore
from src.todo_app.config import Config
from src.todo_app.logger import setup_logger

from .schemas import TodoResponse, TodoStatsResponse


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load configuration once and configure logging from it."""
    config = Config.load()
    setup_logger(log_level=config.log_level, log_file=config.log_file)
    return config


@lru_cache(maxsize=1)
def get_todo_store() -> TodoStore:
    """Singleton TodoStore, seeded from configuration."""
    return TodoStore(seed=get_config().seed_todos)


def serialize_todo(item: TodoItem) -> TodoResponse:
    """Convert domain TodoItem to API response."""
    return TodoResponse(id=item.id, text=item.text, completed=item.completed)


def serialize_stats(stats: TodoStats) -> TodoStatsResponse:
    """Convert domain TodoStats to API response."""
    return TodoStatsResponse(
        total=stats.total,
        completed=stats.completed,
        pending=stats.pending,
    )
