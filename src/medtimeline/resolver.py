"""Resolve medication mentions against the catalog.

Matching walks catalog entries in declaration order and their patterns in
order. A pattern hit only counts when the entry's extractor also yields a
dose; otherwise the scan moves on to the next entry, so a later entry whose
pattern also matches the text still gets its chance. Text that no entry can
extract becomes an "unconfigured" dose instead of an error.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import datetime

from .catalog import Catalog, CatalogEntry, resolve_duration_hours
from .models import DEFAULT_THEME, DoseAmount, LogEntry, ParsedDose
from .tokenizer import split_mentions

logger = logging.getLogger(__name__)

UNCONFIGURED_PREFIX = "unconfigured_"

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def unconfigured_medication_id(mention: str) -> str:
    """``"Tylenol Extra Strength"`` -> ``"unconfigured_tylenol_extra_strength"``."""
    return UNCONFIGURED_PREFIX + _NON_ALNUM_RUN.sub("_", mention.strip().lower())


def _safe_extract(entry: CatalogEntry, mention: str) -> DoseAmount | None:
    # A broken extractor only loses its own entry, not the whole batch.
    try:
        return entry.extract_dose(mention)
    except Exception:
        logger.warning(
            "Dose extractor for %s failed on %r; skipping entry",
            entry.id,
            mention,
            exc_info=True,
            extra={"medtimeline_medication_id": entry.id},
        )
        return None


def resolve_mention(mention: str, timestamp: datetime, catalog: Catalog) -> ParsedDose:
    """Resolve one mention to a configured or unconfigured dose."""
    for entry in catalog:
        if not entry.matches(mention):
            continue
        dose = _safe_extract(entry, mention)
        if dose is None:
            # Pattern hit without a dose is not a match; keep scanning.
            continue
        return ParsedDose(
            medication_id=entry.id,
            display_name=entry.display_name,
            timestamp=timestamp,
            amount=dose.amount,
            unit=dose.unit,
            is_configured=True,
            active_duration_hours=resolve_duration_hours(entry),
            theme=entry.theme,
        )

    trimmed = mention.strip()
    return ParsedDose(
        medication_id=unconfigured_medication_id(trimmed),
        display_name=trimmed,
        timestamp=timestamp,
        amount=None,
        unit="",
        is_configured=False,
        active_duration_hours=None,
        theme=DEFAULT_THEME,
    )


def parse_entry(entry: LogEntry, catalog: Catalog) -> list[ParsedDose]:
    """Tokenize one log entry and resolve every mention in it."""
    doses = [
        resolve_mention(mention, entry.timestamp, catalog)
        for mention in split_mentions(entry.raw_text)
    ]
    logger.debug(
        "Parsed entry %s into %d doses",
        entry.id,
        len(doses),
        extra={"medtimeline_entry_id": entry.id, "medtimeline_dose_count": len(doses)},
    )
    return doses


def parse_entries(entries: Sequence[LogEntry], catalog: Catalog) -> list[ParsedDose]:
    return [dose for entry in entries for dose in parse_entry(entry, catalog)]
