"""Tests for datetime parsing utilities."""
from datetime import datetime
from zoneinfo import ZoneInfo

from intake.core.time_utils import parse_datetime_string, to_iso_instant, PACIFIC


class TestToIsoInstant:
    def test_utc_with_milliseconds(self):
        value = datetime(2026, 3, 15, 19, 0, 0, 123456, tzinfo=ZoneInfo("UTC"))
        assert to_iso_instant(value) == "2026-03-15T19:00:00.123Z"

    def test_converts_to_utc(self):
        value = datetime(2026, 7, 4, 12, 0, tzinfo=PACIFIC)  # PDT, UTC-7
        assert to_iso_instant(value) == "2026-07-04T19:00:00.000Z"


class TestParseDatetimeString:
    def test_canonical_form_unchanged(self):
        assert parse_datetime_string("2026-03-16T02:00:00.000Z") == "2026-03-16T02:00:00.000Z"

    def test_naive_defaults_to_pacific(self):
        # January is PST, UTC-8
        assert parse_datetime_string("2026-01-20T18:30:00") == "2026-01-21T02:30:00.000Z"

    def test_explicit_timezone(self):
        result = parse_datetime_string("2026-01-20T18:30:00", default_tz="Europe/London")
        assert result == "2026-01-20T18:30:00.000Z"

    def test_human_readable_date(self):
        result = parse_datetime_string("March 15, 2026 7:00 PM", default_tz="UTC")
        assert result == "2026-03-15T19:00:00.000Z"

    def test_invalid_month(self):
        assert parse_datetime_string("2024-13-40") is None

    def test_invalid_day(self):
        assert parse_datetime_string("2025-02-30") is None

    def test_garbage(self):
        assert parse_datetime_string("TBD, check back soon!!") is None

    def test_missing(self):
        assert parse_datetime_string(None) is None
        assert parse_datetime_string("") is None
        assert parse_datetime_string("   ") is None

    def test_non_string(self):
        assert parse_datetime_string(20260315) is None
        assert parse_datetime_string({"date": "2026-03-15"}) is None

    def test_time_only_rejected(self):
        assert parse_datetime_string("8pm", default_tz="UTC") is None
        assert parse_datetime_string("19:30") is None

    def test_weekday_only_rejected(self):
        assert parse_datetime_string("Friday", default_tz="UTC") is None

    def test_day_number_only_rejected(self):
        assert parse_datetime_string("5", default_tz="UTC") is None

    def test_month_without_day_rejected(self):
        assert parse_datetime_string("March 2026") is None

    def test_weekday_with_full_date_accepted(self):
        result = parse_datetime_string("Friday, March 13, 2026 8pm", default_tz="UTC")
        assert result == "2026-03-13T20:00:00.000Z"

    def test_date_without_time_is_midnight(self):
        assert parse_datetime_string("2026-03-15", default_tz="UTC") == "2026-03-15T00:00:00.000Z"
