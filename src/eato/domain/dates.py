"""Day-granularity date helpers shared by the calculators."""

import math
from datetime import date, datetime

from eato.domain.errors import InvalidInputError


def to_day(value: date | datetime) -> date:
    """Normalize a date or datetime to a calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidInputError(f"Expected a date, got {type(value).__name__}")


def days_between(later: date | datetime, earlier: date | datetime) -> int:
    """Return the number of calendar days from earlier to later."""
    return (to_day(later) - to_day(earlier)).days


def is_different_month(last: date | datetime, today: date | datetime) -> bool:
    """Return True when two dates fall in different calendar months."""
    last_day = to_day(last)
    current = to_day(today)
    return (last_day.year, last_day.month) != (current.year, current.month)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to the given digits with halves going up."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def require_finite(value: float, name: str) -> float:
    """Reject NaN and infinite numbers."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidInputError(f"{name} must be a number")
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite")
    return value
