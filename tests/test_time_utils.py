"""Unit tests for duration and day-boundary helpers."""

from datetime import datetime, timedelta, timezone
from app.utils.time_utils import duration_minutes, format_duration, hhmm, start_of_day


class TestDuration:
    def test_whole_minutes_rounded_down(self):
        t0 = datetime(2026, 10, 19, 10, 0, 0)
        assert duration_minutes(t0, t0 + timedelta(minutes=45, seconds=59)) == 45

    def test_same_instant_is_zero(self):
        t0 = datetime(2026, 10, 19, 10, 0, 0)
        assert duration_minutes(t0, t0) == 0

    def test_under_a_minute_is_zero(self):
        t0 = datetime(2026, 10, 19, 10, 0, 0)
        assert duration_minutes(t0, t0 + timedelta(seconds=59, microseconds=999)) == 0

    def test_aware_and_naive_mix(self):
        start = datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)
        end = datetime(2026, 10, 19, 11, 30)
        assert duration_minutes(start, end) == 90

    def test_format(self):
        assert format_duration(45) == "45 mins"


class TestDayHelpers:
    def test_start_of_day(self):
        assert start_of_day(datetime(2026, 10, 19, 17, 42, 3)) == datetime(2026, 10, 19)

    def test_hhmm(self):
        assert hhmm(datetime(2026, 10, 19, 7, 5, 59)) == "07:05"
