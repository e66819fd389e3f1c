import math
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .logging import LOG_LEVELS


@dataclass(frozen=True)
class Config:
    user_id: str = "justin"
    log_format: str = "text"
    log_level: str = "INFO"
    timezone: str = "America/Los_Angeles"
    range_start_offset_hours: float = -72.0
    range_end_offset_hours: float = 12.0
    tick_seconds: float = 1.0
    user_config_path: str | None = None

    @classmethod
    def from_env(cls) -> "Config":
        timezone_name = os.environ.get("MEDTIMELINE_TIMEZONE", "America/Los_Angeles")
        try:
            ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise RuntimeError(f"MEDTIMELINE_TIMEZONE is not a valid timezone: {timezone_name!r}")

        log_format = os.environ.get("MEDTIMELINE_LOG_FORMAT", "text")
        if log_format not in ("json", "text"):
            raise RuntimeError("MEDTIMELINE_LOG_FORMAT must be 'json' or 'text'")
        log_level = os.environ.get("MEDTIMELINE_LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise RuntimeError(f"MEDTIMELINE_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

        try:
            range_start = float(os.environ.get("MEDTIMELINE_RANGE_START_HOURS", "-72"))
            range_end = float(os.environ.get("MEDTIMELINE_RANGE_END_HOURS", "12"))
            tick_seconds = float(os.environ.get("MEDTIMELINE_TICK_SECONDS", "1.0"))
        except ValueError as exc:
            raise RuntimeError(f"Invalid numeric MEDTIMELINE_* setting: {exc}") from exc
        if not all(math.isfinite(v) for v in (range_start, range_end, tick_seconds)):
            raise RuntimeError("MEDTIMELINE_* numeric settings must be finite")
        if range_start >= range_end:
            raise RuntimeError("MEDTIMELINE_RANGE_START_HOURS must be before MEDTIMELINE_RANGE_END_HOURS")
        if tick_seconds <= 0:
            raise RuntimeError("MEDTIMELINE_TICK_SECONDS must be positive")

        return cls(
            user_id=os.environ.get("MEDTIMELINE_USER_ID", "justin"),
            log_format=log_format,
            log_level=log_level,
            timezone=timezone_name,
            range_start_offset_hours=range_start,
            range_end_offset_hours=range_end,
            tick_seconds=tick_seconds,
            user_config_path=os.environ.get("MEDTIMELINE_USER_CONFIG") or None,
        )
