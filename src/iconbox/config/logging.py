"""Logging setup for iconbox."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "iconbox"
_configured = False


def setup_logging(level: str | int = "INFO", console: Console | None = None) -> logging.Logger:
    """Attach a rich handler to the package logger (once) and set its level."""
    global _configured
    logger = logging.getLogger(_ROOT_LOGGER)
    if not _configured:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module."""
    return logging.getLogger(name)
