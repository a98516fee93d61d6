"""Row parsing helpers shared by the Supabase repositories."""

from collections.abc import Iterable
from datetime import date, datetime


def parse_date(value: object) -> date | None:
    """Parse an ISO date or timestamp column into a calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        return date.fromisoformat(value[:10])
    return None


def parse_dates(values: object) -> list[date]:
    """Parse an array column of ISO dates, skipping empty entries."""
    if not isinstance(values, list):
        return []
    parsed = [parse_date(value) for value in values]
    return [day for day in parsed if day is not None]


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO timestamp column."""
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def format_dates(days: Iterable[date]) -> list[str]:
    """Serialize days for an array column in ascending order."""
    return [day.isoformat() for day in sorted(days)]
