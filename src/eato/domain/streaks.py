"""Daily logging streaks, streak freezes and goal streaks.

A streak grows by one for each calendar day with a food log. Missing exactly one
day is forgiven when a freeze is available; freezes are earned every seven
streak days and capped at two. Days covered by a partner shield or a declared
rest day bridge the gap between two logs without adding to the count.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import StrEnum

from eato.domain.dates import days_between, round_half_up, to_day
from eato.domain.errors import InvalidInputError

STREAK_MILESTONES = (7, 14, 30, 60, 90, 180, 365)
MAX_STREAK_FREEZES = 2
FREEZE_EARN_THRESHOLD = 7
STREAK_REMINDER_HOUR = 20


class FlameSize(StrEnum):
    """Visual size of the streak flame."""

    NONE = "none"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EPIC = "epic"


@dataclass(frozen=True)
class StreakState:
    """Persisted streak counters for one user."""

    current_streak: int = 0
    longest_streak: int = 0
    goal_streak: int = 0
    longest_goal_streak: int = 0
    last_log_date: date | None = None
    streak_freezes: int = 0

    def __post_init__(self) -> None:
        for name in (
            "current_streak",
            "longest_streak",
            "goal_streak",
            "longest_goal_streak",
        ):
            if getattr(self, name) < 0:
                raise InvalidInputError(f"{name} must not be negative")
        if not 0 <= self.streak_freezes <= MAX_STREAK_FREEZES:
            raise InvalidInputError(
                f"streak_freezes must be between 0 and {MAX_STREAK_FREEZES}"
            )
        if self.last_log_date is not None:
            to_day(self.last_log_date)


@dataclass(frozen=True)
class StreakUpdateResult:
    """Outcome of logging food on a given day."""

    new_streak: int
    longest_streak: int
    streak_broken: bool
    freeze_used: bool
    freezes_remaining: int
    milestone_crossed: int | None
    freeze_earned: bool


@dataclass(frozen=True)
class GoalStreakResult:
    """Updated goal streak counters."""

    goal_streak: int
    longest_goal_streak: int


def calculate_streak_update(
    state: StreakState,
    log_date: date | datetime,
    covered_days: Iterable[date] = (),
) -> StreakUpdateResult:
    """Calculate the new streak when the user logs food on ``log_date``."""
    today = to_day(log_date)
    new_streak = state.current_streak
    streak_broken = False
    freeze_used = False
    freezes_remaining = state.streak_freezes

    if state.last_log_date is None:
        new_streak = 1
    else:
        last_log = _bridge_covered_days(
            to_day(state.last_log_date),
            today,
            frozenset(to_day(day) for day in covered_days),
        )
        days_since_last_log = days_between(today, last_log)
        if days_since_last_log <= 0:
            # Same day or back-dated: already part of the run.
            return StreakUpdateResult(
                new_streak=state.current_streak,
                longest_streak=state.longest_streak,
                streak_broken=False,
                freeze_used=False,
                freezes_remaining=freezes_remaining,
                milestone_crossed=None,
                freeze_earned=False,
            )
        if days_since_last_log == 1:
            new_streak = state.current_streak + 1
        elif days_since_last_log == 2 and freezes_remaining > 0:  # noqa: PLR2004
            freeze_used = True
            freezes_remaining -= 1
            new_streak = state.current_streak + 1
        else:
            streak_broken = True
            new_streak = 1

    longest_streak = max(state.longest_streak, new_streak)
    milestone_crossed = new_streak if new_streak in STREAK_MILESTONES else None

    freeze_earned = False
    if (
        new_streak > 0
        and new_streak % FREEZE_EARN_THRESHOLD == 0
        and freezes_remaining < MAX_STREAK_FREEZES
    ):
        freeze_earned = True
        freezes_remaining = min(freezes_remaining + 1, MAX_STREAK_FREEZES)

    return StreakUpdateResult(
        new_streak=new_streak,
        longest_streak=longest_streak,
        streak_broken=streak_broken,
        freeze_used=freeze_used,
        freezes_remaining=freezes_remaining,
        milestone_crossed=milestone_crossed,
        freeze_earned=freeze_earned,
    )


def calculate_goal_streak_update(
    current_goal_streak: int,
    longest_goal_streak: int,
    yesterday_on_goal: bool,
    today_on_goal: bool,
) -> GoalStreakResult:
    """Update the goal streak when a day closes."""
    if not today_on_goal:
        return GoalStreakResult(goal_streak=0, longest_goal_streak=longest_goal_streak)

    new_goal_streak = current_goal_streak + 1 if yesterday_on_goal else 1
    return GoalStreakResult(
        goal_streak=new_goal_streak,
        longest_goal_streak=max(new_goal_streak, longest_goal_streak),
    )


def is_streak_at_risk(
    last_log_date: date | datetime | None,
    current_streak: int,
    now: datetime,
    reminder_hour: int = STREAK_REMINDER_HOUR,
) -> bool:
    """Return True when yesterday was logged, today is not, and it is evening."""
    if current_streak == 0 or last_log_date is None:
        return False
    return days_between(now, last_log_date) == 1 and now.hour >= reminder_hour


def get_next_milestone(current_streak: int) -> int | None:
    """Return the next milestone above the streak, if any."""
    for milestone in STREAK_MILESTONES:
        if milestone > current_streak:
            return milestone
    return None


def get_milestone_progress(current_streak: int) -> int:
    """Return progress from the previous milestone to the next one (0-100)."""
    next_milestone = get_next_milestone(current_streak)
    if next_milestone is None:
        return 100

    previous_milestone = 0
    for milestone in STREAK_MILESTONES:
        if milestone >= next_milestone:
            break
        if milestone <= current_streak:
            previous_milestone = milestone

    span = next_milestone - previous_milestone
    progress = current_streak - previous_milestone
    return int(round_half_up(progress / span * 100))


def get_flame_size(current_streak: int) -> FlameSize:
    """Map a streak length to a flame size."""
    if current_streak <= 0:
        return FlameSize.NONE
    if current_streak < 7:  # noqa: PLR2004
        return FlameSize.SMALL
    if current_streak < 30:  # noqa: PLR2004
        return FlameSize.MEDIUM
    if current_streak < 90:  # noqa: PLR2004
        return FlameSize.LARGE
    return FlameSize.EPIC


def _bridge_covered_days(last_log: date, today: date, covered: frozenset[date]) -> date:
    """Advance the last log across covered days that directly follow it."""
    candidate = last_log
    while candidate + timedelta(days=1) < today and (
        candidate + timedelta(days=1) in covered
    ):
        candidate += timedelta(days=1)
    return candidate
