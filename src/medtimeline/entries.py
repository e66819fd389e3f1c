"""Adapt spreadsheet-style rows into ``LogEntry`` values."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from .models import LogEntry

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/Los_Angeles"

_TIMESTAMP_FIELDS: tuple[str, ...] = ("Timestamp (Calculated)", "timestamp", "Timestamp")
_TEXT_FIELDS: tuple[str, ...] = ("💊💊 Medicine Taken:", "Medicine Taken", "medicine_taken", "text")

# Spreadsheet exports, tried after ISO-8601
_TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%Y-%m-%d %H:%M:%S",
)


def _as_utc(ts: datetime, timezone_name: str) -> datetime:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=ZoneInfo(timezone_name))
    return ts.astimezone(timezone.utc)


def parse_timestamp(value: Any, timezone_name: str = DEFAULT_TIMEZONE) -> datetime | None:
    """Resolve a row timestamp to an aware UTC datetime, or None.

    Naive values are interpreted in ``timezone_name``. Numbers are epoch
    seconds (or milliseconds when large).
    """
    if isinstance(value, datetime):
        return _as_utc(value, timezone_name)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            epoch = float(value)
        except OverflowError:
            return None
        if not math.isfinite(epoch):
            return None
        if epoch > 1_000_000_000_000:
            epoch /= 1000.0
        try:
            return datetime.fromtimestamp(epoch, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if not raw:
        return None

    try:
        return _as_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")), timezone_name)
    except ValueError:
        pass

    for fmt in _TIMESTAMP_FORMATS:
        try:
            return _as_utc(datetime.strptime(raw, fmt), timezone_name)
        except ValueError:
            continue
    return None


def _first_present(row: Mapping[str, Any], fields: tuple[str, ...]) -> Any:
    for field in fields:
        if field in row and row[field] is not None:
            return row[field]
    return None


def entries_from_rows(
    rows: Iterable[Mapping[str, Any]],
    timezone_name: str = DEFAULT_TIMEZONE,
) -> list[LogEntry]:
    """Convert raw rows to entries, skipping rows without a usable timestamp."""
    entries: list[LogEntry] = []
    skipped = 0
    for row in rows:
        timestamp = parse_timestamp(_first_present(row, _TIMESTAMP_FIELDS), timezone_name)
        if timestamp is None:
            skipped += 1
            logger.warning("Skipping row without a parseable timestamp: %r", dict(row))
            continue
        text = _first_present(row, _TEXT_FIELDS)
        entries.append(
            LogEntry(
                id=str(row.get("id") or timestamp.isoformat()),
                timestamp=timestamp,
                raw_text=str(text) if text is not None else None,
            )
        )
    logger.debug(
        "Converted %d rows into %d entries",
        len(entries) + skipped,
        len(entries),
        extra={"medtimeline_skipped_rows": skipped},
    )
    return entries


def load_entries(path: str | Path, timezone_name: str = DEFAULT_TIMEZONE) -> list[LogEntry]:
    """Read a JSON list of rows from ``path``."""
    with Path(path).open(encoding="utf-8") as f:
        rows = json.load(f)
    if not isinstance(rows, list):
        raise ValueError(f"Expected a JSON list of rows in {path}")
    return entries_from_rows(rows, timezone_name)
