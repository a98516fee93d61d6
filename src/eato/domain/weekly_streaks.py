"""Weekly streaks based on qualifying weeks.

A week qualifies when food was logged on at least five distinct days of the
seven-day window. Consecutive qualifying weeks build the weekly streak.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta

from eato.domain.budget import DAYS_IN_WEEK, get_week_bounds
from eato.domain.dates import round_half_up, to_day
from eato.domain.errors import InvalidInputError

QUALIFYING_DAYS_PER_WEEK = 5
WEEKLY_MILESTONES = (4, 8, 12, 26, 52)


@dataclass(frozen=True)
class WeeklyStreakState:
    """Persisted weekly streak counters for one user."""

    weekly_streak: int = 0
    longest_weekly_streak: int = 0
    current_week_days: int = 0
    week_start_date: date | None = None
    logged_days: frozenset[date] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.weekly_streak < 0 or self.longest_weekly_streak < 0:
            raise InvalidInputError("weekly streak counters must not be negative")
        if not 0 <= self.current_week_days <= DAYS_IN_WEEK:
            raise InvalidInputError("current_week_days must be between 0 and 7")


@dataclass(frozen=True)
class WeeklyStreakUpdate:
    """Outcome of applying a log to the weekly streak."""

    state: WeeklyStreakState
    week_completed: bool
    week_qualified: bool | None
    milestone_crossed: int | None


def calculate_weekly_streak_update(
    state: WeeklyStreakState,
    log_date: date | datetime,
    week_start_day: int = 0,
) -> WeeklyStreakUpdate:
    """Apply a food log on ``log_date`` to the weekly streak."""
    day = to_day(log_date)

    if state.week_start_date is None:
        start = get_week_bounds(day, week_start_day).start
        opened = replace(
            state,
            week_start_date=start,
            logged_days=frozenset({day}),
            current_week_days=1,
        )
        return WeeklyStreakUpdate(
            state=opened,
            week_completed=False,
            week_qualified=None,
            milestone_crossed=None,
        )

    window_start = to_day(state.week_start_date)
    if day < window_start:
        return WeeklyStreakUpdate(
            state=state,
            week_completed=False,
            week_qualified=None,
            milestone_crossed=None,
        )

    windows_elapsed = (day - window_start).days // DAYS_IN_WEEK
    if windows_elapsed == 0:
        window_days = _window_days(state)
        # Rows stored before day sets existed carry only the counter.
        carried = _window_count(state) - len(window_days)
        logged_days = window_days | {day}
        updated = replace(
            state,
            logged_days=logged_days,
            current_week_days=min(DAYS_IN_WEEK, carried + len(logged_days)),
        )
        return WeeklyStreakUpdate(
            state=updated,
            week_completed=False,
            week_qualified=None,
            milestone_crossed=None,
        )

    qualified = _window_count(state) >= QUALIFYING_DAYS_PER_WEEK
    ended_week_streak = state.weekly_streak + 1 if qualified else 0
    milestone_crossed = (
        ended_week_streak
        if qualified and ended_week_streak in WEEKLY_MILESTONES
        else None
    )
    # A whole window without any log breaks the streak again.
    weekly_streak = ended_week_streak if windows_elapsed == 1 else 0

    new_state = WeeklyStreakState(
        weekly_streak=weekly_streak,
        longest_weekly_streak=max(state.longest_weekly_streak, ended_week_streak),
        current_week_days=1,
        week_start_date=window_start
        + timedelta(days=windows_elapsed * DAYS_IN_WEEK),
        logged_days=frozenset({day}),
    )
    return WeeklyStreakUpdate(
        state=new_state,
        week_completed=True,
        week_qualified=qualified,
        milestone_crossed=milestone_crossed,
    )


def get_weekly_progress(current_week_days: int) -> int:
    """Return progress toward a qualifying week (0-100)."""
    progress = current_week_days / QUALIFYING_DAYS_PER_WEEK * 100
    return min(100, int(round_half_up(progress)))


def get_next_weekly_milestone(weekly_streak: int) -> int | None:
    """Return the next weekly milestone above the streak, if any."""
    for milestone in WEEKLY_MILESTONES:
        if milestone > weekly_streak:
            return milestone
    return None


def _window_days(state: WeeklyStreakState) -> frozenset[date]:
    """Return the distinct logged days that fall inside the open window."""
    if state.week_start_date is None:
        return frozenset()
    start = to_day(state.week_start_date)
    end = start + timedelta(days=DAYS_IN_WEEK)
    return frozenset(day for day in state.logged_days if start <= day < end)


def _window_count(state: WeeklyStreakState) -> int:
    return max(state.current_week_days, len(_window_days(state)))
