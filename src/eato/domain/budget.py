"""Weekly calorie budget projection."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from eato.domain.dates import require_finite, round_half_up, to_day
from eato.domain.energy import EnergyBalanceLevel, get_energy_balance
from eato.domain.errors import InvalidInputError

DAYS_IN_WEEK = 7
DEFAULT_MINIMUM_DAILY_BUDGET = 1200


@dataclass(frozen=True)
class WeekBounds:
    """First and last day of a week, both inclusive."""

    start: date
    end: date


@dataclass(frozen=True)
class WeeklyBudgetStatus:
    """Weekly budget position for a given day."""

    weekly_budget: float
    weekly_consumed: float
    weekly_remaining: float
    weekly_percentage: float
    weekly_balance: EnergyBalanceLevel
    daily_consumed: float
    daily_goal: float
    daily_balance: EnergyBalanceLevel
    days_logged: int
    days_in_week: int
    days_remaining: int
    week_start_date: date
    week_end_date: date
    suggested_daily_budget: int


def validate_week_start_day(week_start_day: int) -> int:
    """Ensure the week start is 0 (Sunday) through 6 (Saturday)."""
    if (
        isinstance(week_start_day, bool)
        or not isinstance(week_start_day, int)
        or not 0 <= week_start_day < DAYS_IN_WEEK
    ):
        raise InvalidInputError("week_start_day must be an integer from 0 to 6")
    return week_start_day


def get_week_bounds(day: date | datetime, week_start_day: int = 0) -> WeekBounds:
    """Return the week containing ``day``; 0 is Sunday, 6 is Saturday."""
    validate_week_start_day(week_start_day)
    current = to_day(day)
    sunday_based = (current.weekday() + 1) % DAYS_IN_WEEK
    offset = (sunday_based - week_start_day) % DAYS_IN_WEEK
    start = current - timedelta(days=offset)
    return WeekBounds(start=start, end=start + timedelta(days=DAYS_IN_WEEK - 1))


def get_days_remaining_in_week(day: date | datetime, week_start_day: int = 0) -> int:
    """Return the number of days left in the week after ``day``."""
    bounds = get_week_bounds(day, week_start_day)
    return max(0, (bounds.end - to_day(day)).days)


def get_suggested_daily_budget(
    weekly_remaining: float,
    days_remaining: int,
    minimum_daily: int = DEFAULT_MINIMUM_DAILY_BUDGET,
) -> int:
    """Spread the remaining budget over the remaining days, never below the floor."""
    if days_remaining <= 0:
        return minimum_daily
    suggested = int(round_half_up(weekly_remaining / days_remaining))
    return max(suggested, minimum_daily)


def get_effective_weekly_budget(
    daily_goal: float, weekly_calorie_budget: float | None
) -> float:
    """Return the explicit weekly budget or seven times the daily goal."""
    if weekly_calorie_budget is not None:
        return weekly_calorie_budget
    return daily_goal * DAYS_IN_WEEK


def calculate_weekly_budget_status(  # noqa: PLR0913
    *,
    day: date | datetime,
    daily_consumed: float,
    daily_goal: float,
    weekly_consumed: float,
    weekly_calorie_budget: float | None,
    days_logged: int,
    week_start_day: int = 0,
    minimum_daily: int = DEFAULT_MINIMUM_DAILY_BUDGET,
) -> WeeklyBudgetStatus:
    """Compute the weekly budget position for ``day``."""
    for name, value in (
        ("daily_consumed", daily_consumed),
        ("daily_goal", daily_goal),
        ("weekly_consumed", weekly_consumed),
    ):
        require_finite(value, name)
        if value < 0:
            raise InvalidInputError(f"{name} must not be negative")
    if weekly_calorie_budget is not None:
        require_finite(weekly_calorie_budget, "weekly_calorie_budget")

    bounds = get_week_bounds(day, week_start_day)
    weekly_budget = get_effective_weekly_budget(daily_goal, weekly_calorie_budget)
    weekly_remaining = max(0, weekly_budget - weekly_consumed)
    days_remaining = get_days_remaining_in_week(day, week_start_day)
    if weekly_budget > 0:
        weekly_percentage = weekly_consumed / weekly_budget * 100
    else:
        weekly_percentage = 0.0

    return WeeklyBudgetStatus(
        weekly_budget=weekly_budget,
        weekly_consumed=weekly_consumed,
        weekly_remaining=weekly_remaining,
        weekly_percentage=weekly_percentage,
        weekly_balance=get_energy_balance(weekly_consumed, weekly_budget),
        daily_consumed=daily_consumed,
        daily_goal=daily_goal,
        daily_balance=get_energy_balance(daily_consumed, daily_goal),
        days_logged=days_logged,
        days_in_week=DAYS_IN_WEEK,
        days_remaining=days_remaining,
        week_start_date=bounds.start,
        week_end_date=bounds.end,
        # Today still counts toward the spread.
        suggested_daily_budget=get_suggested_daily_budget(
            weekly_remaining, days_remaining + 1, minimum_daily
        ),
    )


def get_week_dates(day: date | datetime, week_start_day: int = 0) -> list[date]:
    """Return the seven days of the week containing ``day``."""
    start = get_week_bounds(day, week_start_day).start
    return [start + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]


def format_week_range(start: date, end: date) -> str:
    """Format a week range such as ``Jan 5 - Jan 11``."""
    return f"{start:%b} {start.day} - {end:%b} {end.day}"
