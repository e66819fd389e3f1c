"""Medication catalog: immutable registry of known medications.

Entries are consulted in declaration order; that order is the matching
precedence used by the resolver and the row order used by the timeline.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .extractors import DoseExtractor, compile_patterns
from .models import DEFAULT_THEME, DoseAmount

logger = logging.getLogger(__name__)

DEFAULT_MEDICATION_DURATION_HOURS = 6.0


@dataclass(frozen=True)
class ActiveDuration:
    """Hours a dose is considered pharmacologically active."""

    typical: float
    min: float | None = None
    max: float | None = None
    half_life: float | None = None
    notes: str | None = None
    citations: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.typical <= 0:
            raise ValueError(f"typical duration must be positive, got {self.typical!r}")


@dataclass(frozen=True)
class Ingredient:
    name: str
    amount_per_unit: float
    unit: str


@dataclass(frozen=True)
class StandardDose:
    amount: float
    unit: str
    label: str = ""


@dataclass(frozen=True, init=False)
class CatalogEntry:
    id: str
    display_name: str
    patterns: tuple[re.Pattern[str], ...]
    extractor: DoseExtractor
    active_duration: ActiveDuration | None
    ingredients: tuple[Ingredient, ...]
    standard_doses: tuple[StandardDose, ...]
    theme: str

    def __init__(
        self,
        id: str,
        display_name: str,
        patterns: Iterable[str | re.Pattern[str]],
        extractor: DoseExtractor,
        active_duration: ActiveDuration | None = None,
        ingredients: Iterable[Ingredient] = (),
        standard_doses: Iterable[StandardDose] = (),
        theme: str = DEFAULT_THEME,
    ) -> None:
        if not id or not id.strip():
            raise ValueError("catalog entry id must not be empty")
        compiled = compile_patterns(patterns)
        if not compiled:
            raise ValueError(f"catalog entry {id!r} must declare at least one pattern")
        object.__setattr__(self, "id", id)
        object.__setattr__(self, "display_name", display_name)
        object.__setattr__(self, "patterns", compiled)
        object.__setattr__(self, "extractor", extractor)
        object.__setattr__(self, "active_duration", active_duration)
        object.__setattr__(self, "ingredients", tuple(ingredients))
        object.__setattr__(self, "standard_doses", tuple(standard_doses))
        object.__setattr__(self, "theme", theme)

    def matches(self, text: str) -> bool:
        """True if any pattern matches, tested in declaration order."""
        return any(pattern.search(text) for pattern in self.patterns)

    def extract_dose(self, text: str) -> DoseAmount | None:
        return self.extractor(text)

    def ingredient(self, name: str) -> Ingredient | None:
        for ingredient in self.ingredients:
            if ingredient.name == name:
                return ingredient
        return None


def resolve_duration_hours(entry: CatalogEntry) -> float:
    """Typical active duration of an entry, or the default when it has none."""
    if entry.active_duration is None:
        return DEFAULT_MEDICATION_DURATION_HOURS
    return entry.active_duration.typical


class Catalog:
    """Ordered, read-only collection of catalog entries indexed by id."""

    __slots__ = ("_entries", "_by_id")

    def __init__(self, entries: Iterable[CatalogEntry]) -> None:
        ordered = tuple(entries)
        by_id: dict[str, CatalogEntry] = {}
        for entry in ordered:
            if entry.id in by_id:
                raise ValueError(f"Duplicate catalog entry id={entry.id!r}")
            by_id[entry.id] = entry
        self._entries = ordered
        self._by_id: Mapping[str, CatalogEntry] = MappingProxyType(by_id)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, medication_id: object) -> bool:
        return medication_id in self._by_id

    def __repr__(self) -> str:
        return f"Catalog({len(self._entries)} entries)"

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    @property
    def by_id(self) -> Mapping[str, CatalogEntry]:
        return self._by_id

    def get(self, medication_id: str) -> CatalogEntry | None:
        return self._by_id.get(medication_id)

    def ids(self) -> list[str]:
        return [entry.id for entry in self._entries]

    def subset(self, medication_ids: Iterable[str]) -> "Catalog":
        """New catalog restricted to the given ids, in the given order.

        Raises ValueError for ids that are not in this catalog.
        """
        selected: list[CatalogEntry] = []
        for medication_id in medication_ids:
            entry = self._by_id.get(medication_id)
            if entry is None:
                raise ValueError(f"Unknown medication id {medication_id!r}")
            selected.append(entry)
        return Catalog(selected)

    def match_text(self, text: str) -> tuple[CatalogEntry, DoseAmount | None] | None:
        """Return the first entry whose pattern matches ``text`` and its dose.

        Unlike the resolver this does not continue past a pattern hit whose
        extraction fails; the dose is simply ``None``.
        """
        for entry in self._entries:
            if entry.matches(text):
                return entry, entry.extract_dose(text)
        return None


_default_catalog: Catalog | None = None


def default_catalog() -> Catalog:
    """The shipped catalog, built once per process."""
    global _default_catalog
    if _default_catalog is None:
        from .medications import MEDICATIONS

        _default_catalog = Catalog(MEDICATIONS)
        logger.info("Loaded default catalog with %d medications", len(_default_catalog))
    return _default_catalog
