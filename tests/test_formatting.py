"""Tests for duration and dose display strings."""

from datetime import datetime, timedelta, timezone

from medtimeline.formatting import format_amount, format_dose, format_duration
from medtimeline.models import ProcessedDose


def _dose(amount, unit):
    start = datetime(2025, 3, 1, tzinfo=timezone.utc)
    return ProcessedDose(
        medication_id="med",
        display_name="Med",
        start_time=start,
        end_time=start + timedelta(hours=1),
        amount=amount,
        unit=unit,
        is_configured=amount is not None,
        theme="jade",
    )


class TestFormatDuration:
    def test_minutes_only(self):
        assert format_duration(timedelta(minutes=45)) == "45m"

    def test_hours_and_minutes(self):
        assert format_duration(timedelta(hours=2, minutes=5)) == "2h 5m"
        assert format_duration(timedelta(hours=2, minutes=5), compact=True) == "2h5m"

    def test_negative(self):
        assert format_duration(-timedelta(hours=3)) == "-3h 0m"

    def test_always_show_sign(self):
        assert format_duration(timedelta(minutes=10), always_show_sign=True) == "+10m"
        assert format_duration(timedelta(0), always_show_sign=True) == "-0m"

    def test_partial_minutes_floor(self):
        assert format_duration(timedelta(minutes=59, seconds=59)) == "59m"


class TestFormatDose:
    def test_amount_and_unit(self):
        assert format_dose(_dose(5.0, "mg oxy")) == "5 mg oxy"
        assert format_dose(_dose(0.25, "mg")) == "0.25 mg"

    def test_unknown_amount(self):
        assert format_dose(_dose(None, "")) == "?"

    def test_format_amount(self):
        assert format_amount(1950.0) == "1950"
