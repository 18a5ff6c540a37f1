"""Unit tests for push.timestamps module."""

import pytest
from datetime import date, datetime, timedelta, timezone, UTC

from src.push.timestamps import TimestampParser, utc_now


class TestTimestampParser:
    """Test cases for TimestampParser."""

    @pytest.mark.parametrize("value, expected", [
        ("2024-01-15T10:30:00Z", datetime(2024, 1, 15, 10, 30, tzinfo=UTC)),
        ("2024-01-15T10:30:00.123Z", datetime(2024, 1, 15, 10, 30, 0, 123000, tzinfo=UTC)),
        ("2024-01-15T10:30:00+00:00", datetime(2024, 1, 15, 10, 30, tzinfo=UTC)),
        ("2024-01-15 10:30:00", datetime(2024, 1, 15, 10, 30, tzinfo=UTC)),
    ])
    def test_parses_iso_formats(self, value, expected):
        assert TimestampParser()(value) == expected

    def test_keeps_offsets(self):
        parsed = TimestampParser()("2024-01-15T12:30:00+02:00")

        assert parsed == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_naive_values_use_default_timezone(self):
        cet = timezone(timedelta(hours=1))

        parsed = TimestampParser(default_tz=cet)("2024-01-15T10:30:00")

        assert parsed.tzinfo is cet

    def test_accepts_datetimes(self):
        parse = TimestampParser()
        aware = datetime(2024, 1, 15, tzinfo=UTC)

        assert parse(aware) is aware
        assert parse(datetime(2024, 1, 15)).tzinfo is UTC

    def test_accepts_dates(self):
        """YAML loads bare dates as date objects."""
        assert TimestampParser()(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=UTC)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_absent_values_return_none(self, value):
        assert TimestampParser()(value) is None

    def test_garbage_raises_value_error(self):
        with pytest.raises(ValueError):
            TimestampParser()("last tuesday")


def test_utc_now_is_aware():
    assert utc_now().tzinfo is UTC
