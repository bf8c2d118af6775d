"""Logging utilities for qkron.

All package loggers live under the ``qkron.`` namespace, write to stderr
and do not propagate to the root logger. The level defaults to WARNING,
so the DEBUG messages emitted by the gate engine stay silent unless
requested.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_ROOT_NAME = "qkron"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_level: int = logging.WARNING
_format: str = _DEFAULT_FORMAT
_stream: Optional[IO[str]] = None

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _make_handler() -> logging.Handler:
    handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
    handler.setLevel(_level)
    handler.setFormatter(logging.Formatter(_format))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Args:
        name: Logger name (typically ``__name__``). Names outside the
            ``qkron`` namespace are nested under it. If None, returns the
            package logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from qkron.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("expanding gate")
    """
    if name is None or name == _ROOT_NAME:
        logger_name = _ROOT_NAME
    elif name.startswith(_ROOT_NAME + "."):
        logger_name = name
    else:
        logger_name = f"{_ROOT_NAME}.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_level)
        logger.addHandler(_make_handler())
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for all qkron loggers.

    Args:
        level: Logging level (``logging.DEBUG`` etc.) or its name
            (``"DEBUG"``, ``"INFO"``, ...). Unknown names fall back to
            WARNING.
    """
    global _level
    _level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Reconfigure every qkron logger.

    Existing handlers are replaced, and loggers created later pick up the
    same settings.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses
            ``[LEVEL] name: message``.
        stream: Output stream (default: ``sys.stderr``).
    """
    global _level, _format, _stream
    _level = _coerce_level(level)
    _format = format_string if format_string is not None else _DEFAULT_FORMAT
    _stream = stream

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler())


__all__ = ["get_logger", "set_log_level", "configure_logging"]
