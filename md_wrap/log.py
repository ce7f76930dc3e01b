"""Logging setup for md-wrap."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "md_wrap"


def setup_logger(level: str = "WARNING") -> logging.Logger:
    """Send package log records to stderr through a rich handler.

    Unknown level names fall back to ``WARNING``. Calling this again replaces
    the handler instead of stacking a second one.

    Args:
        level: Logging level name such as ``"DEBUG"`` or ``"info"``.

    Returns:
        logging.Logger: The package logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    console = Console(stderr=True, highlight=False)
    handler = RichHandler(console=console, show_time=False, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or LOGGER_NAME)
