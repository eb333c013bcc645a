"""Logging helpers for tiny-qsim.

Loggers live under the ``tiny_qsim`` namespace, write to stderr and are
quiet (WARNING) unless the level is raised.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_format = _DEFAULT_FORMAT
_stream: Optional[object] = None

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a cached logger for a module.

    Args:
        name: Logger name, usually ``__name__``. Names outside the package
            namespace are prefixed with ``tiny_qsim.``.

    Returns:
        Configured logger instance.

    Example:
        >>> from tiny_qsim.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("applying gate")
    """
    if name is None:
        name = "tiny_qsim"
    if name != "tiny_qsim" and not name.startswith("tiny_qsim."):
        name = f"tiny_qsim.{name}"

    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(_stream or sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_format))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every tiny-qsim logger, current and future.

    Args:
        level: A ``logging`` level constant or its name (``"DEBUG"``...).
    """
    global _DEFAULT_LEVEL
    level = _coerce_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Replace the handlers of all tiny-qsim loggers.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: sys.stderr).
    """
    global _DEFAULT_LEVEL, _format, _stream
    level = _coerce_level(level)
    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level
    _format = format_string or _DEFAULT_FORMAT
    _stream = stream
