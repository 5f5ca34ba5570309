"""Shared logger initialization.

Usage:
    from utils.logger import get_logger
    log = get_logger(__name__)
    log.info("message")

Log output goes to stderr; stdout carries command results only.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

_FORMAT = "%(message)s"  # rich handler already adds time & level

_DEFAULT_HANDLER = RichHandler(console=Console(stderr=True), rich_tracebacks=True, markup=False)


def _level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Idempotently configure root logger with a nicer handler.

    Calling it again only adjusts the level.
    """
    root = logging.getLogger()
    level = _level(level)
    root.setLevel(level)
    _DEFAULT_HANDLER.setLevel(level)
    if _DEFAULT_HANDLER in root.handlers:
        return
    _DEFAULT_HANDLER.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(_DEFAULT_HANDLER)


def get_logger(name: str = __name__, level: Optional[int] = None) -> logging.Logger:
    """Return a module-level logger (configuring root on first call)."""
    if _DEFAULT_HANDLER not in logging.getLogger().handlers:
        configure_logging()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
