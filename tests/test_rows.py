"""Tests for grouping doses into timeline rows."""

from datetime import timedelta

from medtimeline.models import LogEntry
from medtimeline.projection import project_entries
from medtimeline.rows import build_timeline_rows, sort_doses_descending


def _entry(t0, hours, text, id=None):
    return LogEntry(id=id or f"e{hours}", timestamp=t0 + timedelta(hours=hours), raw_text=text)


class TestBuildTimelineRows:
    def test_configured_rows_follow_catalog_order(self, catalog, t0):
        entries = [
            _entry(t0, 0, "Celebrex 200mg"),
            _entry(t0, 1, "Percocet 5-325 (1 tablet)"),
            _entry(t0, 2, "Acetaminophen 8hr (1 tablet)"),
        ]
        rows = build_timeline_rows(project_entries(entries, catalog), catalog)
        assert [row.medication_id for row in rows] == ["acetaminophen_8hr", "percocet_5_325", "celebrex"]

    def test_unconfigured_rows_after_configured_in_first_seen_order(self, catalog, t0):
        entries = [
            _entry(t0, 0, "Zinc"),
            _entry(t0, 1, "Vitamin C, Celebrex 200mg"),
            _entry(t0, 2, "Zinc"),
        ]
        rows = build_timeline_rows(project_entries(entries, catalog), catalog)
        assert [row.medication_id for row in rows] == ["celebrex", "unconfigured_zinc", "unconfigured_vitamin_c"]
        assert len(rows[1].doses) == 2
        assert rows[1].display_name == "Zinc"

    def test_doses_most_recent_first(self, catalog, t0):
        entries = [_entry(t0, h, "Celebrex 200mg") for h in (0, 5, 2)]
        (row,) = build_timeline_rows(project_entries(entries, catalog), catalog)
        assert [d.start_time for d in row.doses] == [t0 + timedelta(hours=h) for h in (5, 2, 0)]

    def test_empty_input(self, catalog):
        assert build_timeline_rows([], catalog) == []

    def test_configured_row_uses_catalog_presentation(self, catalog, t0):
        (row,) = build_timeline_rows(project_entries([_entry(t0, 0, "Aleve")], catalog), catalog)
        assert row.display_name == "Aleve"
        assert row.theme == catalog.get("naproxen").theme


class TestSortDosesDescending:
    def test_ties_keep_input_order(self, catalog, t0):
        doses = project_entries([_entry(t0, 0, "Zinc, Iron")], catalog)
        assert [d.medication_id for d in sort_doses_descending(doses)] == ["unconfigured_zinc", "unconfigured_iron"]
