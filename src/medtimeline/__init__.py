"""medtimeline: medication log parsing, dose lanes and ingredient limits."""

from .catalog import Catalog, CatalogEntry, default_catalog
from .consumption import calculate_ingredient_consumption, evaluate_global_limits
from .limits import GlobalLimit, UserConfig, get_user_medication_config
from .models import ConsumptionResult, LogEntry, PackedRow, ParsedDose, ProcessedDose, TimeRange, TimelineRow
from .packing import pack_lanes
from .timeline import TimelineProcessor, build_timeline

__all__ = [
    "Catalog",
    "CatalogEntry",
    "ConsumptionResult",
    "GlobalLimit",
    "LogEntry",
    "PackedRow",
    "ParsedDose",
    "ProcessedDose",
    "TimeRange",
    "TimelineProcessor",
    "TimelineRow",
    "UserConfig",
    "build_timeline",
    "calculate_ingredient_consumption",
    "default_catalog",
    "evaluate_global_limits",
    "get_user_medication_config",
    "pack_lanes",
]
