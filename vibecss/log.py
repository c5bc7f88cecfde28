"""Logging setup for vibecss.

Human-readable output goes to stdout; pass summaries are structured
(``event`` + ``data``) and render as JSON lines when requested.

Configuration via environment variables:
  VIBECSS_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
  VIBECSS_LOG_FORMAT: text or json (default: text)
  VIBECSS_LOG_FILE: optional path to also write JSON logs to a file
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time

LOGGER_NAME = "vibecss"

# ── Formatters ────────────────────────────────────────────────────────


class _JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "event": record.getMessage(),
        }
        data = getattr(record, "data", None)
        if data is not None:
            entry["data"] = data
        return json.dumps(entry, default=str, ensure_ascii=False)


class _TextFormatter(logging.Formatter):
    """Plain message, followed by key=value pairs for structured records."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        data = getattr(record, "data", None)
        if data:
            pairs = " ".join(f"{key}={value}" for key, value in data.items())
            return f"{message} {pairs}"
        return message


# ── Logger setup ──────────────────────────────────────────────────────

_CONFIGURED = False


def _level_from_name(name: str) -> int:
    level = getattr(logging, name.upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | None = None, fmt: str | None = None, force: bool = False) -> logging.Logger:
    """Configure the vibecss root logger (idempotent unless force=True).

    Args:
        level: Level name; falls back to VIBECSS_LOG_LEVEL, then INFO.
        fmt: "text" or "json"; falls back to VIBECSS_LOG_FORMAT, then text.
        force: Drop previously installed handlers and configure again.

    Returns:
        The "vibecss" logger.
    """
    global _CONFIGURED  # noqa: PLW0603
    root = logging.getLogger(LOGGER_NAME)
    if _CONFIGURED and not force:
        return root
    _CONFIGURED = True

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(_level_from_name(level or os.environ.get("VIBECSS_LOG_LEVEL", "INFO")))

    fmt = (fmt or os.environ.get("VIBECSS_LOG_FORMAT", "text")).lower()
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(_JSONFormatter() if fmt == "json" else _TextFormatter())
    root.addHandler(stdout_handler)

    log_file = os.environ.get("VIBECSS_LOG_FILE")
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_JSONFormatter())
        root.addHandler(file_handler)

    root.propagate = False
    return root


def set_level(level: int) -> None:
    """Change the vibecss logger level (used by -v)."""
    logging.getLogger(LOGGER_NAME).setLevel(level)


# ── Pass logging ──────────────────────────────────────────────────────


def log_pass(event: str, data: dict | None = None, level: int = logging.DEBUG) -> None:
    """Emit a structured summary for a scan/generate pass.

    Args:
        event: Short event name (e.g. "generate_complete").
        data: JSON-serializable counters and paths.
        level: Log level, DEBUG by default so summaries show with -v.
    """
    logging.getLogger(f"{LOGGER_NAME}.runner").log(level, event, extra={"data": data})


# ── Timer context ─────────────────────────────────────────────────────


class pass_timer:
    """Context manager that measures elapsed time in milliseconds.

    Usage:
        with pass_timer() as t:
            result = do_work()
        elapsed = t.ms
    """

    __slots__ = ("_start", "ms")

    def __enter__(self) -> pass_timer:
        self._start = time.monotonic()
        self.ms = 0.0
        return self

    def __exit__(self, *_: object) -> None:
        self.ms = (time.monotonic() - self._start) * 1000
