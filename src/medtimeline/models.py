"""Core data models for the medication timeline pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_THEME = "jade"


@dataclass(frozen=True)
class LogEntry:
    """One raw medication-log row. Owned by the ingestion side, never mutated."""

    id: str
    timestamp: datetime
    raw_text: str | None

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is None or self.timestamp.utcoffset() is None:
            raise ValueError(f"timestamp of entry {self.id!r} must be timezone-aware")


@dataclass(frozen=True)
class DoseAmount:
    amount: float
    unit: str


@dataclass(frozen=True)
class ParsedDose:
    """One medication mention resolved against the catalog."""

    medication_id: str
    display_name: str
    timestamp: datetime
    amount: float | None
    unit: str
    is_configured: bool
    active_duration_hours: float | None
    theme: str


@dataclass(frozen=True)
class ProcessedDose:
    """A dose projected onto the half-open interval [start_time, end_time)."""

    medication_id: str
    display_name: str
    start_time: datetime
    end_time: datetime
    amount: float | None
    unit: str
    is_configured: bool
    theme: str

    def __post_init__(self) -> None:
        if self.end_time <= self.start_time:
            raise ValueError(
                f"end_time must be after start_time for {self.medication_id!r} "
                f"({self.start_time.isoformat()} -> {self.end_time.isoformat()})"
            )


@dataclass(frozen=True)
class TimelineRow:
    """All doses of one medication, most recent first."""

    medication_id: str
    display_name: str
    theme: str
    doses: tuple[ProcessedDose, ...]


@dataclass(frozen=True)
class PackedRow:
    """A timeline row with its doses spread over non-overlapping lanes."""

    row: TimelineRow
    lanes: tuple[tuple[ProcessedDose, ...], ...]

    @property
    def medication_id(self) -> str:
        return self.row.medication_id

    @property
    def display_name(self) -> str:
        return self.row.display_name

    @property
    def theme(self) -> str:
        return self.row.theme

    @property
    def doses(self) -> tuple[ProcessedDose, ...]:
        return self.row.doses


@dataclass(frozen=True)
class TimeRange:
    """Closed range of instants [start, end]."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class ConsumptionResult:
    total: float
    unit: str
