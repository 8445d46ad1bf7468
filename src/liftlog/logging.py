"""Structured logging for liftlog.

The format is picked by LIFTLOG_LOG_FORMAT: "json" (default) writes one JSON
object per line, "text" writes a plain line with context as key=value pairs.
Context is passed through ``extra=log_extra(...)`` and lands under
``context`` in JSON output.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import IO, Any

EXTRA_PREFIX = "liftlog_"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def log_extra(**fields: Any) -> dict[str, Any]:
    """Build an ``extra=`` mapping whose keys the formatters pick up."""
    return {f"{EXTRA_PREFIX}{key}": value for key, value in fields.items()}


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the ``log_extra`` fields of a record, prefix removed."""
    return {
        key[len(EXTRA_PREFIX):]: value
        for key, value in record.__dict__.items()
        if key.startswith(EXTRA_PREFIX)
    }


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = record_context(record)
        if context:
            entry["context"] = context
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = "".join(traceback.format_exception(*record.exc_info))
        return json.dumps(entry, default=str)


class ContextTextFormatter(logging.Formatter):
    """Plain text lines with ``log_extra`` context appended as key=value."""

    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT)

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value!r}" for key, value in context.items())
        return f"{line} [{pairs}]"


def setup_logging(
    log_format: str,
    level: int = logging.INFO,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Install a single handler on the root logger and return it."""
    root = logging.getLogger()
    root.setLevel(level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_format == "json" else ContextTextFormatter())
    root.addHandler(handler)
    return handler
