"""
Generic, format-agnostic parsing utilities.

Everything here is best-effort: malformed input degrades to a default
instead of raising.
"""

from __future__ import annotations


def parse_int(value: str | int | float | None) -> int | None:
    """Parse a value to an integer, handling common edge cases.

    Accepts strings, ints, floats, or None. Returns None for empty strings, "-",
    and values with no integer form ("nan", "inf", "1e999").
    """
    if value in (None, "", "-"):
        return None
    try:
        return int(float(value))
    except (ValueError, TypeError, OverflowError):
        return None


def parse_int_or_zero(value: str | int | float | None) -> int:
    """Like parse_int, but missing or malformed values become 0."""
    parsed = parse_int(value)
    return parsed if parsed is not None else 0


def parse_toi_seconds(toi: str | None) -> int:
    """Parse a time-on-ice string (e.g., '12:34') to whole seconds (754).

    Splits on the first colon only. A missing colon yields 0; a non-numeric
    minutes or seconds part counts as 0 on its own.
    """
    if not toi or ":" not in toi:
        return 0
    minutes, seconds = toi.split(":", 1)
    return _strict_int(minutes) * 60 + _strict_int(seconds)


def _strict_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0
