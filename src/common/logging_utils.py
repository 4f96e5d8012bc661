"""Centralized logging configuration and structured-context helpers.

All modules obtain loggers via ``logging.getLogger(__name__)`` and rely on
``configure_logging()`` being called once by the entry point (CLI or host
adapter). Verbose tracing is switched on by the ``VLP_DEBUG`` environment
toggle and goes to standard output.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, List, Optional

from constants import Constants

# Attribute name used to carry structured fields on a LogRecord
CONTEXT_ATTR = "vlp_context"

# Handlers added by configure_logging, replaced on reconfiguration
_installed_handlers: List[logging.Handler] = []


def debug_env_enabled() -> bool:
    """Return True when the VLP_DEBUG toggle is set to "true"."""
    return os.environ.get(Constants.ENV_DEBUG, "").strip().lower() == "true"


def _level_from_env() -> int:
    if debug_env_enabled():
        return logging.DEBUG
    name = os.environ.get(Constants.ENV_LOG_LEVEL, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


class ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields to the message."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, CONTEXT_ATTR, None)
        if not context:
            return message
        fields = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{message} [{fields}]"


def configure_logging(level: Optional[int] = None, logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Args:
        level: Explicit level; when omitted it is derived from VLP_DEBUG / VLP_LOG_LEVEL.
        logfile: Optional path of a file that receives the same records.
    """
    if level is None:
        level = _level_from_env()

    fmt = Constants.LOG_FORMAT
    if debug_env_enabled():
        fmt = f"{Constants.DEBUG_PREFIX} {fmt}"
    formatter = ContextFormatter(fmt)

    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()

    stream = sys.stdout if debug_env_enabled() else sys.stderr
    console = logging.StreamHandler(stream)
    console.setFormatter(formatter)
    root.addHandler(console)
    _installed_handlers.append(console)

    if logfile:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    root.setLevel(level)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Cheap guard so structured debug payloads are only built when needed."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Dict[str, Any]]:
    """Build the ``extra`` mapping for a structured log call.

    None values are dropped so call sites can pass optional fields freely.
    """
    return {CONTEXT_ATTR: {key: value for key, value in fields.items() if value is not None}}


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
