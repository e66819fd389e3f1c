"""Time-window predicates and filters that depend on the current instant.

These use inclusive bounds and are cheap enough to re-run on every tick.
Lane packing uses its own strict predicate (``packing.intersects_strict``);
the two are deliberately not interchangeable.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from .models import PackedRow, ProcessedDose, TimeRange, TimelineRow


def intersects_inclusive(range1: TimeRange, range2: TimeRange) -> bool:
    return range1.start <= range2.end and range1.end >= range2.start


# Name used by the timeline view code.
is_overlapping = intersects_inclusive


def dose_range(dose: ProcessedDose) -> TimeRange:
    return TimeRange(start=dose.start_time, end=dose.end_time)


def is_dose_within_range(dose: ProcessedDose, time_range: TimeRange) -> bool:
    return intersects_inclusive(dose_range(dose), time_range)


def is_dose_active_at(dose: ProcessedDose, instant: datetime) -> bool:
    """True while ``instant`` lies in ``[start_time, end_time]``."""
    return dose.start_time <= instant <= dose.end_time


def timeline_range(now: datetime, start_offset_hours: float, end_offset_hours: float) -> TimeRange:
    """Range anchored on ``now``, e.g. offsets (-72, 12) for three days back, half a day ahead."""
    return TimeRange(
        start=now + timedelta(hours=start_offset_hours),
        end=now + timedelta(hours=end_offset_hours),
    )


def window_filter(doses: Iterable[ProcessedDose], time_range: TimeRange) -> list[ProcessedDose]:
    return [dose for dose in doses if is_dose_within_range(dose, time_range)]


def latest_dose_end_time(doses: Iterable[ProcessedDose]) -> datetime | None:
    return max((dose.end_time for dose in doses), default=None)


def latest_dose_start_time(doses: Iterable[ProcessedDose]) -> datetime | None:
    return max((dose.start_time for dose in doses), default=None)


def sort_rows_by_latest_end(rows: Sequence[PackedRow]) -> list[PackedRow]:
    """Rows whose latest dose ends last come first; ties keep their order."""
    return sorted(rows, key=lambda row: max(dose.end_time for dose in row.doses), reverse=True)


def filter_packed_row(row: PackedRow, time_range: TimeRange) -> PackedRow | None:
    """Keep only doses inside ``time_range``; drop emptied lanes, and the row if nothing is left."""
    doses = tuple(window_filter(row.doses, time_range))
    if not doses:
        return None
    lanes = tuple(
        kept
        for kept in (tuple(window_filter(lane, time_range)) for lane in row.lanes)
        if kept
    )
    filtered_row = TimelineRow(
        medication_id=row.medication_id,
        display_name=row.display_name,
        theme=row.theme,
        doses=doses,
    )
    return PackedRow(row=filtered_row, lanes=lanes)


def filter_packed_rows(rows: Iterable[PackedRow], time_range: TimeRange) -> list[PackedRow]:
    filtered: list[PackedRow] = []
    for row in rows:
        kept = filter_packed_row(row, time_range)
        if kept is not None:
            filtered.append(kept)
    return filtered
