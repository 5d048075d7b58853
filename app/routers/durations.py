"""Duration endpoints - render and parse durations the way the app does."""
from fastapi import APIRouter, Query

from app.utils.duration import (
    as_hours,
    decimal_to_comma_shorthand,
    decimal_to_hours_minutes,
    format_english,
    parse_comma_shorthand,
)


router = APIRouter(prefix="/durations", tags=["durations"])


@router.get("/format")
async def format_duration(hours: float = Query(0.0)):
    """
    Render decimal hours in every display form.

    Unusable input (negative, nan, inf) is echoed back as 0.
    """
    hours = as_hours(hours)
    hours_part, minutes_part = decimal_to_hours_minutes(hours)
    return {
        "hours": hours,
        "display": format_english(hours),
        "hours_part": hours_part,
        "minutes_part": minutes_part,
        "shorthand": decimal_to_comma_shorthand(hours),
    }


@router.get("/parse")
async def parse_duration(text: str = Query("")):
    """Parse "H,MM" shorthand, tolerating partial input."""
    hours = parse_comma_shorthand(text)
    return {
        "text": text,
        "hours": hours,
        "display": format_english(hours),
    }
