"""Logging helpers shared by the search, storage and service layers.

Keeps structured ``extra=`` payloads consistent and makes sure credentials in
URLs never reach the log output.
"""
from __future__ import annotations

import logging
import os
import re
import time
import urllib.parse
from typing import Any, Dict, Optional

from ..constants import Constants

_CONFIGURED = False

_SECRET_PATTERN = re.compile(r"(?i)(password|token|secret|authorization)=([^&\s]+)")


def configure_logging(level: Optional[str] = None) -> None:
    """Install a root handler once; honors RUNDECK_OPTIONS_LOG_LEVEL."""
    global _CONFIGURED  # pylint: disable=global-statement
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger()
    if not _CONFIGURED and not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level_value)
    _CONFIGURED = True


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping, dropping fields that are None."""
    return {key: value for key, value in fields.items() if value is not None}


def redact(text: str) -> str:
    """Mask secret-looking key=value pairs."""
    if not text:
        return text
    return _SECRET_PATTERN.sub(r"\1=***", text)


def safe_url(url: str) -> str:
    """Strip userinfo and secret query values from a URL for logging."""
    if not url:
        return url
    try:
        parts = urllib.parse.urlsplit(url)
    except ValueError:
        return redact(url)
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return redact(urllib.parse.urlunsplit((parts.scheme, netloc, parts.path, parts.query, "")))


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 2)
