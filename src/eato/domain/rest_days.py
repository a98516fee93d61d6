"""Planned rest days with a monthly allowance."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime

from eato.domain.dates import is_different_month, to_day
from eato.domain.errors import InvalidInputError, RuleViolationError

MAX_REST_DAYS_PER_MONTH = 6


@dataclass(frozen=True)
class RestDayState:
    """Declared rest days and the remaining monthly allowance."""

    last_rest_day_reset: date
    rest_day_dates: frozenset[date] = field(default_factory=frozenset)
    rest_days_remaining: int = MAX_REST_DAYS_PER_MONTH

    def __post_init__(self) -> None:
        if not 0 <= self.rest_days_remaining <= MAX_REST_DAYS_PER_MONTH:
            raise InvalidInputError(
                f"rest_days_remaining must be between 0 and {MAX_REST_DAYS_PER_MONTH}"
            )


def should_reset_rest_days(last_reset: date | datetime, today: date | datetime) -> bool:
    """Return True when the allowance belongs to an earlier month."""
    return is_different_month(last_reset, today)


def reset_rest_days_if_needed(
    state: RestDayState, today: date | datetime
) -> RestDayState:
    """Refill the allowance when a new month has started."""
    if not should_reset_rest_days(state.last_rest_day_reset, today):
        return state
    return replace(
        state,
        rest_days_remaining=MAX_REST_DAYS_PER_MONTH,
        last_rest_day_reset=to_day(today).replace(day=1),
    )


def declare_rest_day(
    state: RestDayState, day: date | datetime, today: date | datetime
) -> RestDayState:
    """Declare ``day`` as a rest day and spend one allowance."""
    current = reset_rest_days_if_needed(state, today)
    requested = to_day(day)
    if current.rest_days_remaining <= 0:
        raise RuleViolationError("No rest days remaining this month")
    if requested < to_day(today):
        raise RuleViolationError("Cannot declare past dates as rest days")
    if requested in current.rest_day_dates:
        raise RuleViolationError("This date is already declared as a rest day")
    return replace(
        current,
        rest_day_dates=current.rest_day_dates | {requested},
        rest_days_remaining=current.rest_days_remaining - 1,
    )


def remove_rest_day(state: RestDayState, day: date | datetime) -> RestDayState:
    """Remove a declared rest day and return its allowance."""
    requested = to_day(day)
    if requested not in state.rest_day_dates:
        raise RuleViolationError("This date is not declared as a rest day")
    return replace(
        state,
        rest_day_dates=state.rest_day_dates - {requested},
        rest_days_remaining=min(
            state.rest_days_remaining + 1, MAX_REST_DAYS_PER_MONTH
        ),
    )


def is_rest_day(state: RestDayState, day: date | datetime) -> bool:
    """Return True when ``day`` is a declared rest day."""
    return to_day(day) in state.rest_day_dates
