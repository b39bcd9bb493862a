"""
tests/test_durations.py
Duration strings, sentinels and timeline timestamps.
Run with: pytest tests/ -v
"""
import sys
from datetime import datetime
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from timeline.durations import (
    format_duration,
    format_hours,
    is_instantaneous,
    is_open_ended,
    minutes_between,
    parse_duration,
    parse_event_time,
)


class TestParseDuration:

    @pytest.mark.parametrize("text,minutes", [
        ("3d 09h 30m", 4890),
        ("21h 39m", 1299),
        ("15m", 15),
        ("50h 15m", 3015),
        ("110h 30m", 6630),
        ("4d 00h 45m", 5805),
        ("7d 15h 50m", 11030),
        ("2d", 2880),
        ("  4h 05m ", 245),
    ])
    def test_well_formed(self, text, minutes):
        assert parse_duration(text) == minutes

    @pytest.mark.parametrize("text", ["ongoing", "0m", "", None, 42, "abc", "5m 3h", "-4h", "1.5h"])
    def test_lenient_zero(self, text):
        assert parse_duration(text) == 0

    def test_sentinels(self):
        assert is_open_ended("ongoing")
        assert is_open_ended(" Ongoing ")
        assert not is_open_ended("0m")
        assert is_instantaneous("0m")
        assert not is_instantaneous("ongoing")
        assert not is_instantaneous(None)


class TestFormatDuration:

    @pytest.mark.parametrize("minutes,text", [
        (0, "0m"),
        (15, "15m"),
        (60, "1h"),
        (1299, "21h 39m"),
        (1440, "1d"),
        (4890, "3d 9h 30m"),
        (1441, "1d 1m"),
    ])
    def test_canonical(self, minutes, text):
        assert format_duration(minutes) == text

    def test_rounds_fractional_minutes(self):
        assert format_duration(1299.18) == "21h 39m"
        assert format_duration(59.6) == "1h"

    def test_negative_keeps_sign(self):
        assert format_duration(-90) == "-1h 30m"

    def test_never_empty(self):
        assert format_duration(0.2) == "0m"

    @pytest.mark.parametrize("value", [
        float("nan"), float("inf"), float("-inf"), None, "abc", "90", [], True,
    ])
    def test_malformed_input_renders_zero(self, value):
        assert format_duration(value) == "0m"
        assert format_hours(value) == "0m"

    def test_round_trip_minutes(self):
        for m in (0, 1, 59, 60, 61, 1439, 1440, 1441, 5805, 10_000, 123_457):
            assert parse_duration(format_duration(m)) == m

    def test_round_trip_text_normalises(self):
        assert format_duration(parse_duration("3d 09h 30m")) == "3d 9h 30m"
        assert format_duration(parse_duration("00h 45m")) == "45m"

    def test_format_hours(self):
        assert format_hours(50.25) == "2d 2h 15m"
        assert format_hours(21.65) == "21h 39m"


class TestEventTime:

    def test_parse(self):
        assert parse_event_time("12 May 05:45", 2024) == datetime(2024, 5, 12, 5, 45)
        assert parse_event_time("6 may 9:20", 2024) == datetime(2024, 5, 6, 9, 20)

    @pytest.mark.parametrize("text", ["", None, "12 Foo 05:45", "31 Feb 10:00", "12 May", "May 12 05:45"])
    def test_unparsable_is_none(self, text):
        assert parse_event_time(text, 2024) is None

    def test_minutes_between(self):
        assert minutes_between("12 May 11:45", "16 May 12:30", 2024) == 5805
        assert minutes_between("16 May 12:30", "12 May 11:45", 2024) == -5805
        assert minutes_between("28 Feb 23:00", "1 Mar 01:00", 2024) == 1560  # leap year
        assert minutes_between("garbage", "12 May 11:45", 2024) is None
