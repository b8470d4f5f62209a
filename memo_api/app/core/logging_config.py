"""
Logging for the Memo API and the uvicorn server that hosts it.

``setup_logging`` takes the application ``Settings``: ``log_level``
picks the level, ``debug`` forces ``DEBUG`` and ``log_file`` adds a
file handler next to the console one.  The ``uvicorn.*`` loggers are
routed through the root logger so server and application lines share
one format.  ``run.py`` starts uvicorn with ``log_config=None`` for
the same reason.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Name given to the handlers installed here; used to keep setup idempotent.
HANDLER_NAME = "memo_api"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(app_settings: Settings) -> int:
    """Numeric level for ``app_settings``; unknown names mean ``INFO``."""
    if app_settings.debug:
        return logging.DEBUG
    level = getattr(logging, app_settings.log_level.upper(), logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(Path(log_file).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(app_settings: Settings) -> None:
    """Configure the root and uvicorn loggers from ``app_settings``.

    The level is applied on every call.  Handlers are attached only
    once per process, so repeated ``create_app`` calls do not
    duplicate output.
    """
    level = resolve_level(app_settings)
    root = logging.getLogger()
    root.setLevel(level)

    if not any(handler.get_name() == HANDLER_NAME for handler in root.handlers):
        for handler in _build_handlers(app_settings.log_file):
            root.addHandler(handler)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(level)
