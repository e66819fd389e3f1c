"""Rolling-window ingredient consumption for cumulative-dose safety limits."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .catalog import Catalog
from .limits import GlobalLimit, UserConfig
from .models import ConsumptionResult, LogEntry
from .resolver import parse_entry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LimitStatus:
    limit: GlobalLimit
    consumption: ConsumptionResult
    exceeded: bool
    remaining: float


def entries_in_window(entries: Sequence[LogEntry], window_hours: float, now: datetime) -> list[LogEntry]:
    """Entries with ``now - window_hours <= timestamp <= now``."""
    window_start = now - timedelta(hours=window_hours)
    return [entry for entry in entries if window_start <= entry.timestamp <= now]


def calculate_ingredient_consumption(
    entries: Sequence[LogEntry],
    catalog: Catalog,
    ingredient_name: str,
    window_hours: float,
    now: datetime | None = None,
) -> ConsumptionResult:
    """Sum ``ingredient_name`` over the doses logged in the last ``window_hours``.

    Each dose contributes ``amount_per_unit * dose.amount / first_standard_dose.amount``
    (the dose amount itself when the entry lists no standard doses). The
    reported unit is the one of the last contributing ingredient.
    """
    reference = now if now is not None else datetime.now(timezone.utc)
    total = 0.0
    unit = ""

    for entry in entries_in_window(entries, window_hours, reference):
        for dose in parse_entry(entry, catalog):
            if dose.amount is None:
                continue
            medication = catalog.get(dose.medication_id)
            if medication is None or not medication.ingredients:
                continue
            baseline = medication.standard_doses[0].amount if medication.standard_doses else dose.amount
            if not baseline:
                continue
            multiplier = dose.amount / baseline
            for ingredient in medication.ingredients:
                if ingredient.name != ingredient_name:
                    continue
                total += ingredient.amount_per_unit * multiplier
                if unit and unit != ingredient.unit:
                    logger.warning(
                        "Ingredient %s reported in %s and %s; keeping %s",
                        ingredient_name,
                        unit,
                        ingredient.unit,
                        ingredient.unit,
                        extra={"medtimeline_medication_id": medication.id},
                    )
                unit = ingredient.unit

    return ConsumptionResult(total=total, unit=unit)


def evaluate_global_limits(
    entries: Sequence[LogEntry],
    user_config: UserConfig,
    now: datetime | None = None,
) -> list[LimitStatus]:
    """Compare consumption against every configured global limit."""
    reference = now if now is not None else datetime.now(timezone.utc)
    statuses: list[LimitStatus] = []
    for limit in user_config.global_limits:
        consumption = calculate_ingredient_consumption(
            entries,
            user_config.visualized_medications,
            limit.ingredient_name,
            limit.window_hours,
            reference,
        )
        if consumption.unit and consumption.unit != limit.unit:
            logger.warning(
                "Limit for %s is in %s but consumption is in %s",
                limit.ingredient_name,
                limit.unit,
                consumption.unit,
            )
        statuses.append(
            LimitStatus(
                limit=limit,
                consumption=consumption,
                exceeded=consumption.total > limit.max_amount,
                remaining=max(limit.max_amount - consumption.total, 0.0),
            )
        )
    return statuses
