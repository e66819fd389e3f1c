"""Dose extraction strategies used by catalog entries.

Each strategy is an immutable callable ``(text) -> DoseAmount | None``.
Regex strategies read named groups:

- ``amount``: strength per unit (e.g. ``100`` in ``Celebrex 100mg``)
- ``count``: number of units taken (``2`` in ``(2 tablets)``, fractions like ``1/2`` allowed)

A missing ``amount`` group falls back to ``per_unit``; a missing ``count``
group counts as one unit.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .models import DoseAmount

DoseExtractor = Callable[[str], DoseAmount | None]


def compile_patterns(patterns: Iterable[str | re.Pattern[str]]) -> tuple[re.Pattern[str], ...]:
    """Compile string patterns case-insensitively; pre-compiled patterns pass through."""
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
        else:
            compiled.append(re.compile(pattern, re.IGNORECASE))
    return tuple(compiled)


def parse_count(raw: str | None) -> float | None:
    """Parse a unit count such as ``"2"``, ``"1.5"`` or ``"1/2"``."""
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    if "/" in text:
        numerator, _, denominator = text.partition("/")
        try:
            num = float(numerator)
            denom = float(denominator)
        except ValueError:
            return None
        if denom == 0:
            return None
        return num / denom
    try:
        return float(text)
    except ValueError:
        return None


def _group(match: re.Match[str], name: str) -> str | None:
    if name not in match.re.groupindex:
        return None
    return match.group(name)


@dataclass(frozen=True, init=False)
class PatternExtractor:
    """First matching pattern wins; amount = strength x count."""

    patterns: tuple[re.Pattern[str], ...]
    unit: str
    per_unit: float | None

    def __init__(
        self,
        patterns: Iterable[str | re.Pattern[str]],
        unit: str,
        per_unit: float | None = None,
    ) -> None:
        object.__setattr__(self, "patterns", compile_patterns(patterns))
        object.__setattr__(self, "unit", unit)
        object.__setattr__(self, "per_unit", per_unit)

    def __call__(self, text: str) -> DoseAmount | None:
        for pattern in self.patterns:
            match = pattern.search(text)
            if match is None:
                continue
            raw_amount = _group(match, "amount")
            strength = parse_count(raw_amount) if raw_amount is not None else self.per_unit
            if strength is None:
                continue
            count = parse_count(_group(match, "count"))
            return DoseAmount(amount=strength * (count if count is not None else 1.0), unit=self.unit)
        return None


@dataclass(frozen=True, init=False)
class FixedDoseExtractor:
    """Presence of any pattern means one fixed dose (vaccines, drinks, gels)."""

    patterns: tuple[re.Pattern[str], ...]
    amount: float
    unit: str

    def __init__(
        self,
        patterns: Iterable[str | re.Pattern[str]],
        amount: float,
        unit: str,
    ) -> None:
        object.__setattr__(self, "patterns", compile_patterns(patterns))
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "unit", unit)

    def __call__(self, text: str) -> DoseAmount | None:
        if any(pattern.search(text) for pattern in self.patterns):
            return DoseAmount(amount=self.amount, unit=self.unit)
        return None


@dataclass(frozen=True)
class FirstOf:
    """Try several extractors in order, return the first dose found."""

    extractors: tuple[DoseExtractor, ...]

    def __call__(self, text: str) -> DoseAmount | None:
        for extractor in self.extractors:
            dose = extractor(text)
            if dose is not None:
                return dose
        return None
