"""Structured logging for medtimeline.

``MEDTIMELINE_LOG_FORMAT`` selects "text" (default) or "json";
``MEDTIMELINE_LOG_LEVEL`` sets the threshold. Modules attach context with
``extra={"medtimeline_<field>": value}``. Both formatters surface those
fields without the prefix: JSON nests them under ``context``, text appends
``key=value`` pairs.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

EXTRA_PREFIX = "medtimeline_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s%(medtimeline_context)s"


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """``medtimeline_*`` extras of a record, keyed without the prefix."""
    return {
        key[len(EXTRA_PREFIX):]: value
        for key, value in record.__dict__.items()
        if key.startswith(EXTRA_PREFIX) and key != "medtimeline_context"
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = record_context(record)
        if context:
            payload["context"] = context
        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextTextFormatter(logging.Formatter):
    """Plain text with the record's context appended as sorted ``key=value`` pairs."""

    def __init__(self) -> None:
        super().__init__(_TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        context = record_context(record)
        record.medtimeline_context = (
            " [" + " ".join(f"{key}={value}" for key, value in sorted(context.items())) + "]"
            if context
            else ""
        )
        return super().format(record)


def setup_logging(log_format: str, level: int | str = logging.INFO) -> None:
    """Install a single stderr handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if log_format == "json" else ContextTextFormatter())
    root.addHandler(handler)
