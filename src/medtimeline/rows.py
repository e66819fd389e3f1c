"""Group projected doses into one timeline row per medication."""

from __future__ import annotations

from collections.abc import Iterable

from .catalog import Catalog
from .models import ProcessedDose, TimelineRow


def sort_doses_descending(doses: Iterable[ProcessedDose]) -> tuple[ProcessedDose, ...]:
    """Most recent start first; ties keep their original order."""
    return tuple(sorted(doses, key=lambda dose: dose.start_time, reverse=True))


def build_timeline_rows(doses: Iterable[ProcessedDose], catalog: Catalog) -> list[TimelineRow]:
    """Configured rows in catalog order, then unconfigured rows in first-seen order."""
    all_doses = list(doses)
    rows: list[TimelineRow] = []

    configured: dict[str, list[ProcessedDose]] = {}
    for dose in all_doses:
        if dose.is_configured:
            configured.setdefault(dose.medication_id, []).append(dose)

    for entry in catalog:
        matching = configured.get(entry.id)
        if not matching:
            continue
        rows.append(
            TimelineRow(
                medication_id=entry.id,
                display_name=entry.display_name,
                theme=entry.theme,
                doses=sort_doses_descending(matching),
            )
        )

    # dicts keep insertion order, which is first-seen order here
    unconfigured: dict[str, list[ProcessedDose]] = {}
    for dose in all_doses:
        if not dose.is_configured:
            unconfigured.setdefault(dose.medication_id, []).append(dose)

    for medication_id, group in unconfigured.items():
        ordered = sort_doses_descending(group)
        rows.append(
            TimelineRow(
                medication_id=medication_id,
                display_name=ordered[0].display_name,
                theme=ordered[0].theme,
                doses=ordered,
            )
        )

    return rows
