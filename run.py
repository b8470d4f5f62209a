"""Entry point for the Memo API server.

Launches the FastAPI application with Uvicorn.  Host, port, log level
and the database path are read from environment variables (see
``memo_api.app.core.config``); a ``.env`` loader or the process
manager should export them before startup.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from memo_api.app.core.config import settings
from memo_api.app.core.logging_config import resolve_level
from memo_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=resolve_level(settings),
        # Server loggers are configured by setup_logging.
        log_config=None,
    )
    server = Server(config)
    logging.getLogger(__name__).info("Memo API listening on http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
