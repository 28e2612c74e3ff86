"""Console logging setup shared by the server and the CLI."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

LOGGER_NAME = "hme_blog"


def _level_from_string(level: str) -> int:
    value = getattr(logging, level.upper(), None)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single RichHandler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_string(level))
    logger.handlers = []
    logger.propagate = False

    handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
    handler.setLevel(_level_from_string(level))
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
