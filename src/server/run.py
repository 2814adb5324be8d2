"""CLI entry point for launching the FastAPI app with uvicorn."""

import logging

import uvicorn

from .app import create_app
from .dependencies import get_config

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the server on the configured host/port."""
    config = get_config()
    logger.info(
        "Todo app server running on http://localhost:%s", config.server.port
    )
    uvicorn.run(
        create_app(),
        host=config.server.host,
        port=config.server.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
