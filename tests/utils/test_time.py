"""
Tests for time utilities.

Verifies UTC timestamp creation, persisted timestamp parsing, and the
local-day helpers used for "trades today".
"""

import re
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from journal_app.utils.time import (
    format_time_label,
    format_timestamp,
    is_same_day,
    local_date,
    parse_timestamp,
    utc_now,
)


class TestUtcNow:
    """Test utc_now function."""

    def test_uses_wall_clock_in_utc(self):
        with patch('journal_app.utils.time.datetime') as mock_datetime:
            mock_now = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
            mock_datetime.now.return_value = mock_now

            assert utc_now() == mock_now
            mock_datetime.now.assert_called_once_with(timezone.utc)

    def test_is_timezone_aware(self):
        assert utc_now().tzinfo is not None


class TestTimestampFormatting:
    """Test format_timestamp and parse_timestamp."""

    def test_format_is_iso(self):
        ts = datetime(2024, 5, 1, 10, 30, 0, tzinfo=timezone.utc)
        assert format_timestamp(ts) == "2024-05-01T10:30:00+00:00"

    def test_parse_accepts_z_suffix(self):
        """Timestamps written by browsers end in Z."""
        ts = parse_timestamp("2024-05-01T10:30:00.123Z")
        assert ts == datetime(2024, 5, 1, 10, 30, 0, 123000, tzinfo=timezone.utc)

    def test_parse_naive_as_utc(self):
        ts = parse_timestamp("2024-05-01T10:30:00")
        assert ts.tzinfo == timezone.utc

    def test_parse_keeps_offset(self):
        ts = parse_timestamp("2024-05-01T12:30:00+02:00")
        assert ts == datetime(2024, 5, 1, 10, 30, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["yesterday", "", 12345, None])
    def test_parse_rejects_garbage(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)


class TestLocalDay:
    """Test local_date and is_same_day."""

    def test_same_instant_is_same_day(self):
        ts = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
        assert is_same_day(ts, ts) is True

    def test_days_apart(self):
        ts = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
        assert is_same_day(ts, ts + timedelta(days=2)) is False

    def test_defaults_to_now(self):
        assert is_same_day(utc_now()) is True

    def test_local_date_matches_astimezone(self):
        ts = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
        assert local_date(ts) == ts.astimezone().date()


class TestFormatTimeLabel:
    """Test format_time_label."""

    def test_hh_mm(self):
        label = format_time_label(datetime(2024, 5, 1, 9, 5, 0, tzinfo=timezone.utc))
        assert re.fullmatch(r"\d{2}:\d{2}", label)
