"""
Logging utilities for the inspector.

All modules log under the ``ydoc_inspector`` root logger.  The terminal
viewer draws on stdout, so when it is running logs must go to a file.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_ROOT_NAME = "ydoc_inspector"

# Package root logger
_root_logger = logging.getLogger(_ROOT_NAME)
_root_logger.addHandler(logging.NullHandler())

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _coerce_level(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for the inspector.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr). Ignored when *file* is
            given, since the file is used for the full-screen viewer.
        file: Optional file path to write logs

    Example:
        from ydoc_inspector.logging import setup_logging

        setup_logging("DEBUG")
        setup_logging("INFO", file="inspector.log")
    """
    level = _coerce_level(level)
    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    formatter = logging.Formatter(format or DEFAULT_FORMAT)

    if file:
        handler: logging.Handler = logging.FileHandler(file)
    else:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(level)
    _root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Example:
        logger = get_logger("decoder")
        logger.debug("Applying update")
    """
    if name == _ROOT_NAME or name.startswith(f"{_ROOT_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")


def set_level(level: str | int) -> None:
    """Set the log level for the inspector."""
    _root_logger.setLevel(_coerce_level(level))


_MUTED = logging.CRITICAL + 1
_level_before_disable: int | None = None


def disable() -> None:
    """
    Disable all logging for the inspector.

    Child loggers ignore a disabled parent, so this raises the root
    level above CRITICAL instead.
    """
    global _level_before_disable
    if _level_before_disable is None:
        _level_before_disable = _root_logger.level
    _root_logger.setLevel(_MUTED)


def enable() -> None:
    """Re-enable logging for the inspector."""
    global _level_before_disable
    if _level_before_disable is not None:
        _root_logger.setLevel(_level_before_disable)
        _level_before_disable = None
