"""
Duration strings such as "300ms", "-1.5h" or "2h45m"
"""
from datetime import timedelta
from typing import Dict, Tuple

from envget.core.exceptions import ConversionError

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

UNITS: Dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

# Largest magnitude of a signed 64-bit nanosecond count
MAX_NANOSECONDS = (1 << 63) - 1

_DIGITS = "0123456789"


def _fail(raw: str, reason: str) -> ConversionError:
    return ConversionError("duration", raw, reason)


def _scan_digits(s: str, pos: int) -> Tuple[str, int]:
    start = pos
    while pos < len(s) and s[pos] in _DIGITS:
        pos += 1
    return s[start:pos], pos


def parse_duration_ns(raw: str) -> int:
    """Parse a duration string into a signed count of nanoseconds.

    Raises:
        ConversionError: on malformed input, unknown units or overflow
    """
    s = raw
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]

    if s == "0":
        return 0
    if not s:
        raise _fail(raw, "empty duration")

    total = 0
    pos = 0
    while pos < len(s):
        whole, pos = _scan_digits(s, pos)
        frac = ""
        has_frac = False
        if pos < len(s) and s[pos] == ".":
            frac, pos = _scan_digits(s, pos + 1)
            has_frac = frac != ""
        if not whole and not has_frac:
            raise _fail(raw, "missing number")

        unit_start = pos
        while pos < len(s) and s[pos] != "." and s[pos] not in _DIGITS:
            pos += 1
        unit_name = s[unit_start:pos]
        if not unit_name:
            raise _fail(raw, "missing unit")
        unit = UNITS.get(unit_name)
        if unit is None:
            raise _fail(raw, f"unknown unit {unit_name!r}")

        value = int(whole or "0") * unit
        if has_frac:
            # truncated toward zero, below one nanosecond is dropped
            value += int(frac) * unit // (10 ** len(frac))
        total += value
        if total > MAX_NANOSECONDS + 1:
            raise _fail(raw, "overflow")

    if negative:
        return -total
    if total > MAX_NANOSECONDS:
        raise _fail(raw, "overflow")
    return total


def parse_duration(raw: str) -> timedelta:
    """Parse a duration string into a ``timedelta``.

    Accepts a sequence of decimal numbers with unit suffixes, optionally
    signed: "300ms", "-1.5h", "2h45m". Valid units are "ns", "us"
    (or "µs"), "ms", "s", "m", "h". A bare "0" is allowed.

    Sub-microsecond parts are truncated toward zero.
    """
    ns = parse_duration_ns(raw)
    micros = abs(ns) // MICROSECOND
    return timedelta(microseconds=-micros if ns < 0 else micros)


def format_duration_seconds(value: timedelta) -> float:
    """Duration in seconds, for JSON output"""
    return value.total_seconds()
