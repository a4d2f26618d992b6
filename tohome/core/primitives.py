"""
Money and Time Primitives

Amounts are integer minor units (cents). Times of day are zero-padded
"HH:MM:SS" strings, so lexicographic comparison equals chronological
comparison. No floating point is involved anywhere.
"""

import re
from datetime import date, time
from typing import Union

_TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")


def normalize_time(value: Union[str, time]) -> str:
    """
    Normalize a time of day to "HH:MM:SS".

    Accepts "HH:MM", "HH:MM:SS" or a datetime.time (microseconds dropped).

    Raises:
        ValueError: If the value is not a valid time of day
    """
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    if not isinstance(value, str):
        raise ValueError(f"Invalid time of day: {value!r}")

    match = _TIME_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time of day: {value!r}")

    hours, minutes, seconds = match.group(1), match.group(2), match.group(3) or "00"
    if int(hours) > 23 or int(minutes) > 59 or int(seconds) > 59:
        raise ValueError(f"Invalid time of day: {value!r}")
    return f"{hours}:{minutes}:{seconds}"


def time_to_seconds(value: str) -> int:
    """Seconds since midnight for a normalized time of day."""
    hours, minutes, seconds = normalize_time(value).split(":")
    return int(hours) * 3600 + int(minutes) * 60 + int(seconds)


def day_of_week(day: date) -> int:
    """Day of week with 0=Sunday..6=Saturday."""
    return (day.weekday() + 1) % 7


def ensure_cents(value: object, field: str = "amount") -> int:
    """
    Check that a value is an integer amount of cents.

    Floats and bools are rejected even when integral.

    Raises:
        TypeError: If the value is not an int
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field} must be an integer number of cents, got {value!r}")
    return value


def format_cents(cents: int, symbol: str = "€") -> str:
    """
    Format a cent amount for display.

    Example:
        >>> format_cents(1250)
        '€12.50'
        >>> format_cents(-5)
        '-€0.05'
    """
    ensure_cents(cents)
    sign = "-" if cents < 0 else ""
    units, rest = divmod(abs(cents), 100)
    return f"{sign}{symbol}{units}.{rest:02d}"
