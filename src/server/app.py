"""FastAPI application bootstrap."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.todo import InternalError, TodoError

from .dependencies import get_config, get_todo_store
from .routes import register_static_routes, register_todo_routes

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


async def handle_todo_error(request: Request, exc: TodoError) -> JSONResponse:
    """Map domain errors to their HTTP status; internal details stay in the log."""
    if isinstance(exc, InternalError):
        logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc), "message": INTERNAL_ERROR_MESSAGE},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_config()
    app = FastAPI(title="Todo API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TodoError, handle_todo_error)

    register_todo_routes(app)
    register_static_routes(app, config.server.static_path)

    return app


__all__ = ["create_app", "get_config", "get_todo_store"]
