"""Human-readable strings for durations and doses."""

from __future__ import annotations

import math
from datetime import timedelta

from .models import ProcessedDose


def format_duration(delta: timedelta, compact: bool = False, always_show_sign: bool = False) -> str:
    """``45m``, ``2h 5m`` (``2h5m`` compact). Negative durations get a leading ``-``."""
    seconds = delta.total_seconds()
    if always_show_sign:
        sign = "-" if seconds <= 0 else "+"
    else:
        sign = "-" if seconds < 0 else ""

    minutes = math.floor(abs(seconds) / 60)
    if minutes < 60:
        return f"{sign}{minutes}m"
    separator = "" if compact else " "
    return f"{sign}{minutes // 60}h{separator}{minutes % 60}m"


def format_amount(amount: float) -> str:
    return f"{amount:g}"


def format_dose(dose: ProcessedDose) -> str:
    if dose.amount is None:
        return "?"
    return f"{format_amount(dose.amount)} {dose.unit}".strip()
