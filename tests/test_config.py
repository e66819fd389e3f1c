from __future__ import annotations

import pytest

from medtimeline.config import Config

_ENV_VARS = (
    "MEDTIMELINE_USER_ID",
    "MEDTIMELINE_LOG_FORMAT",
    "MEDTIMELINE_LOG_LEVEL",
    "MEDTIMELINE_TIMEZONE",
    "MEDTIMELINE_RANGE_START_HOURS",
    "MEDTIMELINE_RANGE_END_HOURS",
    "MEDTIMELINE_TICK_SECONDS",
    "MEDTIMELINE_USER_CONFIG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_config_from_env_defaults() -> None:
    cfg = Config.from_env()
    assert cfg == Config()
    assert cfg.user_id == "justin"
    assert cfg.range_start_offset_hours == -72.0
    assert cfg.range_end_offset_hours == 12.0
    assert cfg.user_config_path is None


def test_config_from_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDTIMELINE_USER_ID", "kesa")
    monkeypatch.setenv("MEDTIMELINE_LOG_FORMAT", "json")
    monkeypatch.setenv("MEDTIMELINE_LOG_LEVEL", "debug")
    monkeypatch.setenv("MEDTIMELINE_TIMEZONE", "UTC")
    monkeypatch.setenv("MEDTIMELINE_RANGE_START_HOURS", "-12")
    monkeypatch.setenv("MEDTIMELINE_RANGE_END_HOURS", "3")
    monkeypatch.setenv("MEDTIMELINE_TICK_SECONDS", "0.5")
    monkeypatch.setenv("MEDTIMELINE_USER_CONFIG", "/etc/medtimeline/users.json")

    cfg = Config.from_env()
    assert cfg.user_id == "kesa"
    assert cfg.log_format == "json"
    assert cfg.log_level == "DEBUG"
    assert cfg.timezone == "UTC"
    assert (cfg.range_start_offset_hours, cfg.range_end_offset_hours) == (-12.0, 3.0)
    assert cfg.tick_seconds == 0.5
    assert cfg.user_config_path == "/etc/medtimeline/users.json"


def test_config_rejects_unknown_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDTIMELINE_TIMEZONE", "Mars/Olympus_Mons")
    with pytest.raises(RuntimeError, match="MEDTIMELINE_TIMEZONE"):
        Config.from_env()


def test_config_rejects_unknown_log_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDTIMELINE_LOG_FORMAT", "xml")
    with pytest.raises(RuntimeError, match="MEDTIMELINE_LOG_FORMAT"):
        Config.from_env()


def test_config_rejects_non_numeric_offsets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDTIMELINE_RANGE_START_HOURS", "three days")
    with pytest.raises(RuntimeError, match="numeric"):
        Config.from_env()


def test_config_rejects_inverted_range(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDTIMELINE_RANGE_START_HOURS", "5")
    monkeypatch.setenv("MEDTIMELINE_RANGE_END_HOURS", "-5")
    with pytest.raises(RuntimeError, match="before"):
        Config.from_env()


def test_config_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDTIMELINE_LOG_LEVEL", "verbose")
    with pytest.raises(RuntimeError, match="MEDTIMELINE_LOG_LEVEL"):
        Config.from_env()


def test_config_rejects_non_positive_tick(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDTIMELINE_TICK_SECONDS", "0")
    with pytest.raises(RuntimeError, match="MEDTIMELINE_TICK_SECONDS"):
        Config.from_env()


@pytest.mark.parametrize(
    "name,value",
    [
        ("MEDTIMELINE_TICK_SECONDS", "nan"),
        ("MEDTIMELINE_RANGE_START_HOURS", "nan"),
        ("MEDTIMELINE_RANGE_END_HOURS", "inf"),
    ],
)
def test_config_rejects_non_finite_numbers(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError, match="finite"):
        Config.from_env()
