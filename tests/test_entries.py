"""Tests for adapting exported rows into log entries."""

import json
from datetime import datetime, timezone

import pytest

from medtimeline.entries import entries_from_rows, load_entries, parse_timestamp


class TestParseTimestamp:
    def test_iso_with_z(self):
        assert parse_timestamp("2025-03-01T12:00:00Z") == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)

    def test_iso_with_offset(self):
        assert parse_timestamp("2025-03-01T04:00:00-08:00") == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)

    def test_naive_uses_local_timezone(self):
        # PST is UTC-8 in March before the DST switch
        assert parse_timestamp("03/01/2025 04:00:00") == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)
        assert parse_timestamp("3/1/2025 4:00") == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)

    def test_naive_with_dst(self):
        assert parse_timestamp("2025-07-01 05:00:00") == datetime(2025, 7, 1, 12, tzinfo=timezone.utc)

    def test_explicit_timezone(self):
        assert parse_timestamp("2025-03-01 12:00:00", "UTC") == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)

    def test_epoch_seconds_and_millis(self):
        expected = datetime(2025, 3, 1, 12, tzinfo=timezone.utc)
        seconds = expected.timestamp()
        assert parse_timestamp(seconds) == expected
        assert parse_timestamp(int(seconds * 1000)) == expected

    def test_datetime_passthrough(self):
        aware = datetime(2025, 3, 1, 12, tzinfo=timezone.utc)
        assert parse_timestamp(aware) == aware

    @pytest.mark.parametrize("value", [None, "", "   ", "yesterday", True, [], {}])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None


class TestEntriesFromRows:
    def test_spreadsheet_columns(self):
        rows = [
            {"Timestamp (Calculated)": "2025-03-01T12:00:00Z", "💊💊 Medicine Taken:": "Celebrex 200mg"},
            {"timestamp": "2025-03-01T13:00:00Z", "text": "Xanax 0.25mg", "id": "row-2"},
        ]
        entries = entries_from_rows(rows)
        assert [e.raw_text for e in entries] == ["Celebrex 200mg", "Xanax 0.25mg"]
        assert entries[0].id == "2025-03-01T12:00:00+00:00"
        assert entries[1].id == "row-2"

    def test_rows_without_timestamp_skipped(self):
        rows = [{"text": "Celebrex 200mg"}, {"timestamp": "garbage", "text": "Xanax"}]
        assert entries_from_rows(rows) == []

    def test_missing_text_kept_as_none(self):
        (entry,) = entries_from_rows([{"timestamp": "2025-03-01T12:00:00Z"}])
        assert entry.raw_text is None


class TestLoadEntries:
    def test_reads_json_list(self, tmp_path):
        path = tmp_path / "log.json"
        path.write_text(json.dumps([{"timestamp": "2025-03-01T12:00:00Z", "text": "Aleve"}]))
        (entry,) = load_entries(path)
        assert entry.raw_text == "Aleve"

    def test_rejects_non_list(self, tmp_path):
        path = tmp_path / "log.json"
        path.write_text(json.dumps({"rows": []}))
        with pytest.raises(ValueError):
            load_entries(path)


class TestOutOfRangeEpochs:
    @pytest.mark.parametrize("value", [1e20, 10**19, 10**400, float("nan"), float("inf"), float("-inf")])
    def test_unrepresentable_numbers_are_unparseable(self, value):
        assert parse_timestamp(value) is None

    def test_row_with_unrepresentable_epoch_skipped(self):
        rows = [
            {"timestamp": 1e20, "text": "Celebrex 200mg"},
            {"timestamp": "2025-03-01T12:00:00Z", "text": "Xanax 0.25mg"},
        ]
        (entry,) = entries_from_rows(rows)
        assert entry.raw_text == "Xanax 0.25mg"
