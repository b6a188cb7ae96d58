"""
Tests for duration string parsing
"""
from datetime import timedelta

import pytest

from envget.core.durations import HOUR, MAX_NANOSECONDS, parse_duration, parse_duration_ns
from envget.core.exceptions import ConversionError


@pytest.mark.parametrize("raw,expected", [
    ("0", timedelta(0)),
    ("+0", timedelta(0)),
    ("-0", timedelta(0)),
    ("5s", timedelta(seconds=5)),
    ("300ms", timedelta(milliseconds=300)),
    ("2h45m", timedelta(hours=2, minutes=45)),
    ("1h30m", timedelta(minutes=90)),
    ("-1.5h", timedelta(minutes=-90)),
    (".5s", timedelta(milliseconds=500)),
    ("1.s", timedelta(seconds=1)),
    ("1.004s", timedelta(seconds=1, milliseconds=4)),
    ("10us", timedelta(microseconds=10)),
    ("10µs", timedelta(microseconds=10)),
    ("10μs", timedelta(microseconds=10)),
    ("1500ns", timedelta(microseconds=1)),
    ("1h1m1s1ms1us", timedelta(hours=1, minutes=1, seconds=1, milliseconds=1, microseconds=1)),
    ("3m3m", timedelta(minutes=6)),
])
def test_valid(raw, expected):
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", [
    "", "+", "-", "1", "s", ".s", ".", "1d", "1h30", "banana", "1 h", "1h 30m", "--1s", "1.5.5s",
])
def test_invalid(raw):
    with pytest.raises(ConversionError):
        parse_duration(raw)


def test_nanoseconds_are_kept_in_ns_form():
    assert parse_duration_ns("1500ns") == 1500
    assert parse_duration_ns("1.5h") == 3 * HOUR // 2


def test_negative_truncates_toward_zero():
    assert parse_duration("-1500ns") == timedelta(microseconds=-1)


def test_largest_values():
    assert parse_duration_ns("9223372036854775807ns") == MAX_NANOSECONDS
    assert parse_duration_ns("-9223372036854775808ns") == -MAX_NANOSECONDS - 1


@pytest.mark.parametrize("raw", ["9223372036854775808ns", "3000000h", "-9223372036854775809ns"])
def test_overflow(raw):
    with pytest.raises(ConversionError):
        parse_duration_ns(raw)
