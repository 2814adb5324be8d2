"""Front-end asset routes."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

logger = logging.getLogger(__name__)


def register_static_routes(app: FastAPI, static_dir: Path) -> None:
    """Serve ``index.html`` at ``/`` and the rest of ``static_dir`` under ``/static``."""
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")
    else:
        logger.warning("Static directory not found: %s", static_dir)

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        """Serve the front-end entry page."""
        index_path = static_dir / "index.html"
        if not index_path.is_file():
            raise HTTPException(status_code=404, detail="index.html not found")
        return FileResponse(index_path)
