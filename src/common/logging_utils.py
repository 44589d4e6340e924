"""Logging helpers shared across modules.

Provides a single place to configure the root logger, plus small helpers
for structured DEBUG traces (``extra_context``), URL redaction and timing.
"""
from __future__ import annotations

import logging
import os
import sys
import time
import urllib.parse
from typing import Any, Dict, Optional

from constants import Constants


class GithubActionsFormatter(logging.Formatter):
    """Render warnings and errors as GitHub Actions workflow commands."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"::error::{message}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{message}"
        return message


def _running_in_github_actions() -> bool:
    return os.environ.get(Constants.ENV_GITHUB_ACTIONS, "").lower() == "true"


def configure_logging(level: Optional[str] = None) -> None:
    """Install one stream handler on the root logger.

    Args:
        level: Level name; falls back to PYVERSIONS_LOG_LEVEL, then INFO.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_pyversions", False):
            root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler._pyversions = True  # type: ignore[attr-defined]
    if _running_in_github_actions():
        handler.setFormatter(GithubActionsFormatter("%(message)s"))
    else:
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True if DEBUG records would be emitted by this logger."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` payload for structured log records, dropping None values."""
    return {key: value for key, value in fields.items() if value is not None}


def safe_url(url: str) -> str:
    """Strip credentials, query string and fragment from a URL for logging."""
    try:
        parts = urllib.parse.urlsplit(url)
    except ValueError:
        return "<invalid-url>"
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urllib.parse.urlunsplit((parts.scheme, netloc, parts.path, "", ""))


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Elapsed milliseconds; still running timers report time so far."""
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 2)
