"""Pack a row's doses into non-overlapping lanes.

Doses are visited most-recent-start first and each goes into the first lane
(in creation order) where it does not strictly overlap anything. Touching
intervals (one ends exactly when the other starts) share a lane.

When every dose in a row has the same duration (one medication, one active
duration) the lane count equals the maximum overlap depth. Rows mixing
durations can need more lanes than that depth.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from .models import PackedRow, ProcessedDose, TimelineRow
from .rows import sort_doses_descending


def intersects_strict(a: ProcessedDose, b: ProcessedDose) -> bool:
    """Half-open overlap: ``[a.start, a.end)`` and ``[b.start, b.end)`` share an instant."""
    return a.start_time < b.end_time and a.end_time > b.start_time


def pack_lanes(doses: Iterable[ProcessedDose]) -> list[list[ProcessedDose]]:
    lanes: list[list[ProcessedDose]] = []
    for dose in sort_doses_descending(doses):
        for lane in lanes:
            if not any(intersects_strict(dose, existing) for existing in lane):
                lane.append(dose)
                break
        else:
            lanes.append([dose])
    return lanes


def pack_row(row: TimelineRow) -> PackedRow:
    return PackedRow(row=row, lanes=tuple(tuple(lane) for lane in pack_lanes(row.doses)))


def pack_rows(rows: Sequence[TimelineRow]) -> list[PackedRow]:
    return [pack_row(row) for row in rows]


def max_overlap_depth(doses: Iterable[ProcessedDose]) -> int:
    """Largest number of doses active at one instant (half-open intervals)."""
    events: list[tuple[datetime, int]] = []
    for dose in doses:
        events.append((dose.start_time, 1))
        events.append((dose.end_time, -1))
    # ends (-1) sort before starts (+1) at the same instant, so touching doses don't stack
    events.sort()
    depth = 0
    deepest = 0
    for _, delta in events:
        depth += delta
        deepest = max(deepest, depth)
    return deepest
