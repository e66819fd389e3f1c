"""Compose the pipeline at its two refresh cadences.

- ``TimelineProcessor.compute``: parse -> project -> rows -> lanes, rows
  ordered by the latest end time over all of their doses. Depends only on
  the entries and the catalog, so the result is memoized on their identity
  and reused until either changes.
- ``TimelineProcessor.view``: window filtering and active flags relative to
  ``now``. Cheap, recomputed on every tick; keeps the computed row order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from .catalog import Catalog
from .models import LogEntry, PackedRow, ProcessedDose, TimeRange
from .packing import pack_rows
from .projection import project_entries
from .ranges import filter_packed_rows, is_dose_active_at, sort_rows_by_latest_end, timeline_range
from .rows import build_timeline_rows

logger = logging.getLogger(__name__)

DEFAULT_RANGE_START_OFFSET_HOURS = -72.0
DEFAULT_RANGE_END_OFFSET_HOURS = 12.0


@dataclass(frozen=True)
class TimelineData:
    rows: tuple[PackedRow, ...]
    dose_count: int


@dataclass(frozen=True)
class TimelineView:
    now: datetime
    time_range: TimeRange
    rows: tuple[PackedRow, ...]
    active_doses: tuple[ProcessedDose, ...]

    def is_active(self, dose: ProcessedDose) -> bool:
        return dose in self.active_doses


def build_timeline(entries: Sequence[LogEntry], catalog: Catalog) -> TimelineData:
    """Full time-independent pipeline, without memoization."""
    doses = project_entries(entries, catalog)
    rows = sort_rows_by_latest_end(pack_rows(build_timeline_rows(doses, catalog)))
    logger.debug(
        "Built %d timeline rows from %d doses",
        len(rows),
        len(doses),
        extra={"medtimeline_row_count": len(rows), "medtimeline_dose_count": len(doses)},
    )
    return TimelineData(rows=tuple(rows), dose_count=len(doses))


def view_timeline(
    data: TimelineData,
    now: datetime,
    start_offset_hours: float = DEFAULT_RANGE_START_OFFSET_HOURS,
    end_offset_hours: float = DEFAULT_RANGE_END_OFFSET_HOURS,
) -> TimelineView:
    time_range = timeline_range(now, start_offset_hours, end_offset_hours)
    rows = filter_packed_rows(data.rows, time_range)
    active = tuple(
        dose
        for row in rows
        for dose in row.doses
        if is_dose_active_at(dose, now)
    )
    return TimelineView(now=now, time_range=time_range, rows=tuple(rows), active_doses=active)


class TimelineProcessor:
    """Caches the expensive stage; call ``view`` once per tick."""

    def __init__(
        self,
        catalog: Catalog,
        start_offset_hours: float = DEFAULT_RANGE_START_OFFSET_HOURS,
        end_offset_hours: float = DEFAULT_RANGE_END_OFFSET_HOURS,
    ) -> None:
        self.catalog = catalog
        self.start_offset_hours = start_offset_hours
        self.end_offset_hours = end_offset_hours
        self._cached_entries: Sequence[LogEntry] | None = None
        self._cached_catalog: Catalog | None = None
        self._cached_data: TimelineData | None = None
        self.compute_count = 0

    def compute(self, entries: Sequence[LogEntry]) -> TimelineData:
        if (
            self._cached_data is not None
            and self._cached_entries is entries
            and self._cached_catalog is self.catalog
        ):
            return self._cached_data
        data = build_timeline(entries, self.catalog)
        self._cached_entries = entries
        self._cached_catalog = self.catalog
        self._cached_data = data
        self.compute_count += 1
        return data

    def view(self, entries: Sequence[LogEntry], now: datetime) -> TimelineView:
        return view_timeline(
            self.compute(entries),
            now,
            self.start_offset_hours,
            self.end_offset_hours,
        )
