"""Project parsed doses onto concrete active-time intervals."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import timedelta

from .catalog import DEFAULT_MEDICATION_DURATION_HOURS, Catalog
from .models import LogEntry, ParsedDose, ProcessedDose
from .resolver import parse_entries

logger = logging.getLogger(__name__)


def effective_duration_hours(dose: ParsedDose) -> float:
    # Configured doses already carry their resolved duration; only
    # unconfigured doses arrive without one.
    if dose.active_duration_hours is None:
        return DEFAULT_MEDICATION_DURATION_HOURS
    return dose.active_duration_hours


def project_dose(dose: ParsedDose) -> ProcessedDose:
    """``[timestamp, timestamp + duration)`` for one parsed dose."""
    end_time = dose.timestamp + timedelta(hours=effective_duration_hours(dose))
    return ProcessedDose(
        medication_id=dose.medication_id,
        display_name=dose.display_name,
        start_time=dose.timestamp,
        end_time=end_time,
        amount=dose.amount,
        unit=dose.unit,
        is_configured=dose.is_configured,
        theme=dose.theme,
    )


def project_doses(doses: Iterable[ParsedDose]) -> list[ProcessedDose]:
    return [project_dose(dose) for dose in doses]


def project_entries(entries: Sequence[LogEntry], catalog: Catalog) -> list[ProcessedDose]:
    """Parse and project every entry. Independent of the current time."""
    parsed = parse_entries(entries, catalog)
    processed = project_doses(parsed)
    logger.debug(
        "Projected %d entries into %d doses",
        len(entries),
        len(processed),
        extra={"medtimeline_entry_count": len(entries), "medtimeline_dose_count": len(processed)},
    )
    return processed
