"""Centralized logging helpers.

Module loggers are created with ``logging.getLogger(__name__)``; this module
only configures the root handler and offers helpers for structured ``extra``
payloads and cheap DEBUG guards.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_SENSITIVE_PARAMS = ("token", "key", "secret", "password", "sig")


def configure_logging(level: Optional[str] = None) -> None:
    """Install a stream handler on the root logger.

    The level comes from ``level`` or the TYPESREG_LOG_LEVEL environment
    variable, defaulting to INFO. Calling this more than once is harmless.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build a logging ``extra`` mapping, dropping fields that are None."""
    return {k: v for k, v in fields.items() if v is not None}


def redact(value: Optional[str]) -> str:
    """Mask all but the first characters of a secret."""
    if not value:
        return ""
    return value[:2] + "***"


def safe_url(url: str) -> str:
    """Strip credentials and sensitive query parameters from a URL for logs."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid-url>"
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    query = "&".join(
        pair if not any(s in pair.split("=", 1)[0].lower() for s in _SENSITIVE_PARAMS)
        else pair.split("=", 1)[0] + "=" + redact(pair.split("=", 1)[1] if "=" in pair else "")
        for pair in parts.query.split("&") if pair
    )
    return urlunsplit((parts.scheme, netloc, parts.path, query, ""))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self):
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds, measured up to now while still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
