"""Duration conversion utilities.

Durations are stored as decimal hours (``1.5`` is one hour thirty minutes).
These helpers convert between that form and the encodings people type or read.
None of them raise: bad or partial input degrades to ``0`` / ``"0m"``.
"""
import math
import re
from typing import Any

_TIME_STRING_RE = re.compile(r"^(\d{1,2}):([0-5]\d)$")
_SHORTHAND_STRIP_RE = re.compile(r"[^0-9,]")


def as_hours(value: Any) -> float:
    """Coerce a stored duration to a non-negative float, or 0."""
    if isinstance(value, bool) or not value:
        return 0.0
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(hours) or math.isinf(hours) or hours < 0:
        return 0.0
    return hours


def decimal_to_hours_minutes(decimal_hours: Any) -> tuple[int, int]:
    """
    Split decimal hours into whole hours and minutes.

    Minutes are rounded half up to the nearest whole minute. A rounded 60
    carries into the hour, so minutes are always in ``[0, 59]``.

    Examples:
        >>> decimal_to_hours_minutes(1.5)
        (1, 30)
        >>> decimal_to_hours_minutes(1.999)
        (2, 0)
    """
    hours_value = as_hours(decimal_hours)
    hours = math.floor(hours_value)
    minutes = math.floor((hours_value - hours) * 60 + 0.5)

    if minutes >= 60:
        hours += 1
        minutes = 0

    return int(hours), int(minutes)


def hours_minutes_to_decimal(hours: int, minutes: int) -> float:
    """
    Combine hour and minute fields into decimal hours.

    Examples:
        >>> hours_minutes_to_decimal(1, 30)
        1.5
    """
    return hours + minutes / 60


def format_english(decimal_hours: Any) -> str:
    """
    Render a duration for display.

    Examples:
        >>> format_english(0)
        '0m'
        >>> format_english(2)
        '2h'
        >>> format_english(0.25)
        '15m'
        >>> format_english(1.5)
        '1h 30m'
    """
    hours, minutes = decimal_to_hours_minutes(decimal_hours)

    if hours == 0 and minutes == 0:
        return "0m"
    if hours == 0:
        return f"{minutes}m"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"


def format_comma_shorthand(text: Any) -> str:
    """
    Normalise live-typed "H,MM" input for display.

    Anything other than digits and commas is dropped. Without a comma, one or
    two digits are hours, three digits read as ``H,MM`` and four or more as
    ``HH,MM``. Minutes are cut to two digits.

    Examples:
        >>> format_comma_shorthand("130")
        '1,30'
        >>> format_comma_shorthand("12345")
        '12,34'
        >>> format_comma_shorthand(",5")
        '0,5'
    """
    if not isinstance(text, str):
        return ""

    cleaned = _SHORTHAND_STRIP_RE.sub("", text)

    if "," in cleaned:
        parts = cleaned.split(",")
        hours = parts[0] or "0"
        minutes = parts[1][:2]
        return f"{hours},{minutes}"

    if len(cleaned) <= 2:
        return cleaned
    if len(cleaned) == 3:
        return f"{cleaned[0]},{cleaned[1:]}"
    return f"{cleaned[:2]},{cleaned[2:4]}"


def parse_comma_shorthand(text: Any) -> float:
    """
    Parse "H,MM" shorthand into decimal hours.

    Forgiving of partial input: ``"1,"`` is 1 hour, ``"1,3"`` is 1 hour 3
    minutes, ``"2"`` is 2 hours and an empty string is 0.

    Examples:
        >>> parse_comma_shorthand("1,30")
        1.5
        >>> parse_comma_shorthand("abc")
        0.0
    """
    formatted = format_comma_shorthand(text)

    if not formatted:
        return 0.0

    hours, _, minutes = formatted.partition(",")
    try:
        return hours_minutes_to_decimal(int(hours or "0"), int(minutes or "0"))
    except (ValueError, OverflowError):
        # More hour digits than int() or float can take
        return 0.0


def decimal_to_comma_shorthand(decimal_hours: Any) -> str:
    """
    Render decimal hours in "H,MM" shorthand.

    Examples:
        >>> decimal_to_comma_shorthand(1.5)
        '1,30'
    """
    hours, minutes = decimal_to_hours_minutes(decimal_hours)
    return f"{hours},{minutes:02d}"


def time_string_to_decimal(time_string: Any) -> float:
    """Convert "H:MM" to decimal hours, or 0 when it can't be read."""
    if not isinstance(time_string, str) or ":" not in time_string:
        return 0.0

    hours_text, _, minutes_text = time_string.partition(":")
    try:
        return hours_minutes_to_decimal(int(hours_text), int(minutes_text))
    except (ValueError, OverflowError):
        return 0.0


def decimal_to_time_string(decimal_hours: Any) -> str:
    """
    Convert decimal hours to "H:MM".

    Examples:
        >>> decimal_to_time_string(2.5)
        '2:30'
        >>> decimal_to_time_string(0)
        '0:00'
    """
    hours, minutes = decimal_to_hours_minutes(decimal_hours)
    return f"{hours}:{minutes:02d}"


def is_valid_time_format(time_string: Any) -> bool:
    """Check for a wall-clock "H:MM" value (hours 0-23)."""
    if not isinstance(time_string, str):
        return False

    match = _TIME_STRING_RE.match(time_string)
    if not match:
        return False

    return int(match.group(1)) <= 23
