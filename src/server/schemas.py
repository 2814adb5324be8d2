"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class TodoResponse(BaseModel):
    """Serialized todo item."""

    id: int
    text: str
    completed: bool


class TodoCreateRequest(BaseModel):
    """Request body for creating todo.

    ``text`` is left loosely typed so that a missing, blank or non-string value
    reaches the store and is reported as a 400 rather than a schema error.
    """

    text: Any = Field(default=None, description="Todo text (trimmed, must not be blank)")


class TodoUpdateRequest(BaseModel):
    """Request body for updating todo. Omitted fields are left untouched."""

    text: Any = Field(default=None)
    completed: Any = Field(default=None)


class TodoStatsResponse(BaseModel):
    """Aggregate counts over the collection."""

    total: int
    completed: int
    pending: int


class BulkDeleteResponse(BaseModel):
    """Response for bulk delete endpoint."""

    message: str
    remaining: Optional[int] = None


class ExportResponse(BaseModel):
    """Body of the export download."""

    exportDate: str
    totalTodos: int
    completedTodos: int
    pendingTodos: int
    todos: List[TodoResponse]


class ErrorResponse(BaseModel):
    """Error body returned for domain errors."""

    error: str
    message: Optional[str] = None
