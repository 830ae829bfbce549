from __future__ import annotations

"""Logging helpers for schedgraph."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import LoggingSettings

PACKAGE_LOGGER = "schedgraph"


def getLogger(name: str) -> logging.Logger:
    """Return the logger for ``name``; modules call this with ``__name__``."""
    return logging.getLogger(name)


def configure_logging(settings: LoggingSettings) -> logging.Logger:
    """
    Apply level and format from ``settings`` to the package logger.

    Installs a single stream handler; calling again replaces the formatter
    and level instead of stacking handlers.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.level)

    handler = next(
        (h for h in logger.handlers if getattr(h, "_schedgraph_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler._schedgraph_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    handler.setFormatter(logging.Formatter(settings.format))
    return logger


__all__ = ["getLogger", "configure_logging", "PACKAGE_LOGGER"]
