"""Logging setup for the todo server and CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(log_level: str = "INFO", log_file: Optional[str] = "logs/todo_app.log") -> None:
    """Send records to stderr and, when ``log_file`` is set, to that file too.

    Calling it again replaces the previously installed handlers, so a reloaded
    configuration takes effect instead of being ignored by ``basicConfig``.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    logging.getLogger(__name__).debug("Logging configured: level=%s file=%s", log_level, log_file)
