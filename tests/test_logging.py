from __future__ import annotations

import json
import logging
import sys

import pytest

from medtimeline.logging import ContextTextFormatter, JSONFormatter, record_context, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="medtimeline.resolver",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Dose extractor for %s failed",
        args=("celebrex",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_record_context_strips_prefix() -> None:
    record = _record(medtimeline_medication_id="celebrex", medtimeline_dose_count=2, other="x")
    assert record_context(record) == {"medication_id": "celebrex", "dose_count": 2}


def test_json_formatter_nests_context() -> None:
    payload = json.loads(JSONFormatter().format(_record(medtimeline_medication_id="celebrex", other="x")))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "medtimeline.resolver"
    assert payload["message"] == "Dose extractor for celebrex failed"
    assert payload["context"] == {"medication_id": "celebrex"}
    assert "other" not in payload


def test_json_formatter_omits_empty_context() -> None:
    assert "context" not in json.loads(JSONFormatter().format(_record()))


def test_json_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()
    payload = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in payload["exception"]


def test_text_formatter_appends_sorted_context() -> None:
    line = ContextTextFormatter().format(_record(medtimeline_medication_id="celebrex", medtimeline_dose_count=2))
    assert line.endswith("medtimeline.resolver: Dose extractor for celebrex failed [dose_count=2 medication_id=celebrex]")


def test_text_formatter_without_context() -> None:
    assert ContextTextFormatter().format(_record()).endswith("Dose extractor for celebrex failed")


@pytest.fixture
def _restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.parametrize("log_format,formatter_type", [("json", JSONFormatter), ("text", ContextTextFormatter)])
def test_setup_logging_installs_single_handler(_restore_root_logger, log_format, formatter_type) -> None:
    setup_logging(log_format, "DEBUG")
    setup_logging(log_format, "DEBUG")
    root = _restore_root_logger
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, formatter_type)
    assert root.level == logging.DEBUG
