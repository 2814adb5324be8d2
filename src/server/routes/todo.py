"""Todo endpoints."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse

from src.todo import (
    UNSET,
    BulkDeleteFilter,
    InternalError,
    NotFoundError,
    TodoError,
    export_filename,
)

from ..dependencies import get_todo_store, serialize_stats, serialize_todo
from ..schemas import (
    BulkDeleteResponse,
    ErrorResponse,
    ExportResponse,
    TodoCreateRequest,
    TodoResponse,
    TodoStatsResponse,
    TodoUpdateRequest,
)

logger = logging.getLogger(__name__)


def parse_todo_id(raw_id: str) -> int:
    """Path ids that are not integers cannot match any todo."""
    try:
        return int(raw_id)
    except ValueError:
        raise NotFoundError(raw_id) from None


def register_todo_routes(app: FastAPI) -> None:
    """Register todo CRUD, stats, export and bulk delete endpoints."""

    @app.get("/api/todos", response_model=List[TodoResponse])
    async def list_todos() -> List[TodoResponse]:
        """List todos in insertion order."""
        store = get_todo_store()
        try:
            todos = await asyncio.to_thread(store.list_all)
            return [serialize_todo(todo) for todo in todos]
        except Exception as exc:
            logger.exception("Failed to list todos: %s", exc)
            raise InternalError("Failed to list todos") from exc

    @app.post(
        "/api/todos",
        response_model=TodoResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}},
    )
    async def create_todo(request: Optional[TodoCreateRequest] = None) -> TodoResponse:
        """Create a new todo. A missing body is treated like one without text."""
        store = get_todo_store()
        try:
            text = request.text if request else None
            todo = await asyncio.to_thread(store.create, text)
            return serialize_todo(todo)
        except TodoError:
            raise
        except Exception as exc:
            logger.exception("Failed to create todo: %s", exc)
            raise InternalError("Failed to create todo") from exc

    @app.get("/api/todos/stats", response_model=TodoStatsResponse)
    async def todo_stats() -> TodoStatsResponse:
        """Total, completed and pending counts."""
        store = get_todo_store()
        try:
            stats = await asyncio.to_thread(store.stats)
            return serialize_stats(stats)
        except Exception as exc:
            logger.exception("Failed to compute todo stats: %s", exc)
            raise InternalError("Failed to compute stats") from exc

    @app.get(
        "/api/todos/export",
        responses={200: {"model": ExportResponse}, 500: {"model": ErrorResponse}},
    )
    async def export_todos() -> JSONResponse:
        """Download the whole collection as a JSON attachment."""
        store = get_todo_store()
        now = datetime.now(timezone.utc)
        try:
            snapshot = await asyncio.to_thread(store.export_snapshot, now)
        except TodoError:
            raise
        except Exception as exc:
            logger.exception("Failed to export todos: %s", exc)
            raise InternalError("Failed to export todos") from exc

        filename = export_filename(now)
        logger.info("Exporting %s todos as %s", snapshot.total_todos, filename)
        return JSONResponse(
            content=snapshot.to_dict(),
            headers={
                "Content-Disposition": f'attachment; filename="{filename}"',
                "Cache-Control": "no-cache",
            },
        )

    @app.get(
        "/api/todos/{todo_id}",
        response_model=TodoResponse,
        responses={404: {"model": ErrorResponse}},
    )
    async def get_todo(todo_id: str) -> TodoResponse:
        """Fetch a single todo."""
        store = get_todo_store()
        todo = await asyncio.to_thread(store.get, parse_todo_id(todo_id))
        return serialize_todo(todo)

    @app.put(
        "/api/todos/{todo_id}",
        response_model=TodoResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    async def update_todo(todo_id: str, request: TodoUpdateRequest) -> TodoResponse:
        """Update text and/or completion flag of an existing todo."""
        store = get_todo_store()
        try:
            payload = request.model_dump(exclude_unset=True)
            todo = await asyncio.to_thread(
                store.update,
                parse_todo_id(todo_id),
                text=payload.get("text", UNSET),
                completed=payload.get("completed", UNSET),
            )
            return serialize_todo(todo)
        except TodoError:
            raise
        except Exception as exc:
            logger.exception("Failed to update todo: %s", exc)
            raise InternalError("Failed to update todo") from exc

    @app.delete(
        "/api/todos/{todo_id}",
        status_code=204,
        response_class=Response,
        responses={404: {"model": ErrorResponse}},
    )
    async def delete_todo(todo_id: str) -> Response:
        """Delete a todo."""
        store = get_todo_store()
        try:
            await asyncio.to_thread(store.delete_one, parse_todo_id(todo_id))
            return Response(status_code=204)
        except TodoError:
            raise
        except Exception as exc:
            logger.exception("Failed to delete todo: %s", exc)
            raise InternalError("Failed to delete todo") from exc

    @app.delete(
        "/api/todos",
        response_model=BulkDeleteResponse,
        response_model_exclude_none=True,
    )
    async def delete_todos(completed: Optional[str] = None) -> BulkDeleteResponse:
        """Delete completed todos (``?completed=true``) or all of them."""
        store = get_todo_store()
        if completed == "true":
            remaining = await asyncio.to_thread(store.delete_bulk, BulkDeleteFilter.COMPLETED)
            return BulkDeleteResponse(message="Completed todos deleted", remaining=remaining)

        await asyncio.to_thread(store.delete_bulk, BulkDeleteFilter.ALL)
        return BulkDeleteResponse(message="All todos deleted")
