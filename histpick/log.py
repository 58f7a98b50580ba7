"""Logging setup.

The Textual UI owns the terminal, so records go to a file instead of stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import LOG_FILE
from .settings import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _log_level(settings: Settings) -> int:
    return getattr(logging, str(settings.logging.level).upper(), logging.WARNING)


def _log_path(settings: Settings) -> Path:
    if settings.logging.file:
        return Path(settings.logging.file).expanduser()
    return LOG_FILE


def configure_logging(settings: Settings) -> Path:
    """Attach a file handler to the ``histpick`` logger; return the log path."""
    log_path = _log_path(settings)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("histpick")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_log_level(settings))
    logger.propagate = False
    return log_path
