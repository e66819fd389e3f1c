"""Per-user medication configuration and global ingredient limits.

Limits come from user-editable JSON, so they are validated with Pydantic;
raises pydantic.ValidationError on invalid input.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from .catalog import Catalog, default_catalog

logger = logging.getLogger(__name__)


class GlobalLimit(BaseModel):
    """Maximum amount of one ingredient allowed within a rolling window.

    Example: acetaminophen, 4000 mg per 24 hours.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    ingredient_name: str
    max_amount: float
    unit: str
    window_hours: float

    @field_validator("ingredient_name")
    @classmethod
    def ingredient_name_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("ingredient_name must not be empty")
        return v

    @field_validator("max_amount", "window_hours")
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        if not math.isfinite(v) or v <= 0:
            raise ValueError("must be a positive finite number")
        return v


@dataclass(frozen=True)
class UserConfig:
    global_limits: tuple[GlobalLimit, ...]
    visualized_medications: Catalog

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], catalog: Catalog) -> "UserConfig":
        """Build from ``{"global_limits": [...], "visualized_medications": [ids]}``.

        Without ``visualized_medications`` the whole catalog is visualized.
        Raises ValueError for unknown medication ids.
        """
        raw_limits = data.get("global_limits", data.get("globalLimits")) or []
        limits = tuple(GlobalLimit.model_validate(item) for item in raw_limits)
        medication_ids = data.get("visualized_medications", data.get("visualizedMedications"))
        medications = catalog if medication_ids is None else catalog.subset(medication_ids)
        return cls(global_limits=limits, visualized_medications=medications)


DEFAULT_GLOBAL_LIMITS: tuple[GlobalLimit, ...] = (
    GlobalLimit(ingredient_name="acetaminophen", max_amount=4000, unit="mg", window_hours=24),
)

_user_configs: dict[str, UserConfig] | None = None


def default_user_configs() -> dict[str, UserConfig]:
    """Built-in users share one configuration over the full catalog."""
    global _user_configs
    if _user_configs is None:
        unified = UserConfig(global_limits=DEFAULT_GLOBAL_LIMITS, visualized_medications=default_catalog())
        _user_configs = {"justin": unified, "kesa": unified}
    return _user_configs


def load_user_configs(path: str | Path, catalog: Catalog) -> dict[str, UserConfig]:
    """Read ``{"users": {user_id: {...}}}`` from a JSON file."""
    with Path(path).open() as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    users = data.get("users", {})
    if not isinstance(users, dict):
        raise ValueError(f"'users' must be an object in {path}")
    configs = {user_id: UserConfig.from_dict(raw, catalog) for user_id, raw in users.items()}
    logger.info("Loaded %d user configs from %s", len(configs), path)
    return configs


def get_user_medication_config(
    user_id: str,
    configs: Mapping[str, UserConfig] | None = None,
) -> UserConfig | None:
    """Config for ``user_id`` or None when that user has none. Never raises."""
    source = default_user_configs() if configs is None else configs
    return source.get(user_id)
