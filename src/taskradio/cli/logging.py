"""
Logging setup for the taskradio CLI.

Two formats:
- text: human-readable lines for terminals
- json: one JSON object per line for log collectors
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


# Attributes every LogRecord has; anything else was passed via extra=
_RESERVED_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class TextFormatter(logging.Formatter):
    """Plain text formatter: time, level, logger, message."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )


class JSONFormatter(logging.Formatter):
    """
    JSON formatter emitting one object per record.

    Fields: timestamp (ISO-8601 UTC), level, logger, message, plus
    static_fields, a context object for extra= fields, and exception text.
    """

    def __init__(self, static_fields: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.static_fields = static_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(self.static_fields)

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(
    level: int = logging.INFO,
    log_format: str = "text",
    log_file: str | Path | None = None,
    static_fields: dict[str, Any] | None = None,
) -> None:
    """
    Configure root logging for a CLI run.

    Args:
        level: Root log level
        log_format: "text" or "json"
        log_file: Also write logs to this file
        static_fields: Fields added to every JSON record
    """
    formatter: logging.Formatter
    if log_format == "json":
        formatter = JSONFormatter(static_fields=static_fields)
    else:
        formatter = TextFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    # Quiet noisy HTTP libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
