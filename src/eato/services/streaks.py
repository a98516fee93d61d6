"""Streak service: daily, goal and weekly streaks with badge unlocks."""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from eato.domain.badges import (
    get_goal_streak_badges_to_unlock,
    get_streak_badges_to_unlock,
)
from eato.domain.dates import to_day
from eato.domain.energy import get_energy_balance, is_on_track
from eato.domain.models import DailyIntake
from eato.domain.streaks import (
    STREAK_REMINDER_HOUR,
    FlameSize,
    GoalStreakResult,
    StreakState,
    StreakUpdateResult,
    calculate_goal_streak_update,
    calculate_streak_update,
    get_flame_size,
    get_milestone_progress,
    get_next_milestone,
    is_streak_at_risk,
)
from eato.domain.weekly_streaks import (
    WeeklyStreakState,
    WeeklyStreakUpdate,
    calculate_weekly_streak_update,
    get_next_weekly_milestone,
    get_weekly_progress,
)
from eato.services.profile import ProfileService
from eato.services.rest_days import RestDayRepository
from eato.services.shields import ShieldRepository

_logger = logging.getLogger(__name__)


class StreakRepository(Protocol):
    """Persistence interface for streak counters, day results and badges."""

    def get_streak_state(self, user_id: UUID) -> StreakState:
        """Return the daily and goal streak counters."""

    def save_streak_state(self, user_id: UUID, state: StreakState) -> None:
        """Persist the daily and goal streak counters."""

    def get_weekly_state(self, user_id: UUID) -> WeeklyStreakState:
        """Return the weekly streak counters."""

    def save_weekly_state(self, user_id: UUID, state: WeeklyStreakState) -> None:
        """Persist the weekly streak counters."""

    def get_daily_intake(self, user_id: UUID, day: date) -> DailyIntake | None:
        """Return the stored totals for a day, if any."""

    def set_goal_met(self, user_id: UUID, day: date, goal_met: bool) -> None:
        """Record whether a closed day was on goal."""

    def list_unlocked_badges(self, user_id: UUID) -> set[str]:
        """Return the ids of badges the user already holds."""

    def unlock_badges(self, user_id: UUID, badge_ids: list[str]) -> None:
        """Record newly unlocked badges."""


@dataclass(frozen=True)
class LogOutcome:
    """Result of recording a food log."""

    streak: StreakUpdateResult
    weekly: WeeklyStreakUpdate
    badges_unlocked: list[str]


@dataclass(frozen=True)
class DayCloseOutcome:
    """Result of closing a day against the calorie goal."""

    on_goal: bool
    goal_streak: GoalStreakResult
    badges_unlocked: list[str]


@dataclass(frozen=True)
class StreakSummary:
    """Display data for the streak screen."""

    current_streak: int
    longest_streak: int
    goal_streak: int
    longest_goal_streak: int
    streak_freezes: int
    flame_size: FlameSize
    next_milestone: int | None
    milestone_progress: int
    at_risk: bool
    weekly_streak: int
    longest_weekly_streak: int
    current_week_days: int
    weekly_progress: int
    next_weekly_milestone: int | None


@dataclass
class StreakService:
    """Service that applies food logs and closed days to a user's streaks."""

    repository: StreakRepository
    rest_day_repository: RestDayRepository
    shield_repository: ShieldRepository
    profile_service: ProfileService
    reminder_hour: int = STREAK_REMINDER_HOUR

    def record_log(self, user_id: UUID, log_day: date | datetime) -> LogOutcome:
        """Apply a food log on ``log_day`` to the daily and weekly streaks."""
        day = to_day(log_day)
        goals = self.profile_service.get_goals(user_id)
        state = self.repository.get_streak_state(user_id)

        update = calculate_streak_update(state, day, self._covered_days(user_id))
        last_log_date = (
            day if state.last_log_date is None else max(state.last_log_date, day)
        )
        new_state = replace(
            state,
            current_streak=update.new_streak,
            longest_streak=update.longest_streak,
            streak_freezes=update.freezes_remaining,
            last_log_date=last_log_date,
        )
        if new_state != state:
            self.repository.save_streak_state(user_id, new_state)

        weekly = calculate_weekly_streak_update(
            self.repository.get_weekly_state(user_id), day, goals.week_start_day
        )
        self.repository.save_weekly_state(user_id, weekly.state)

        badges = get_streak_badges_to_unlock(
            update.new_streak, self.repository.list_unlocked_badges(user_id)
        )
        if badges:
            self.repository.unlock_badges(user_id, badges)

        _log_streak_events(user_id, update, weekly, badges)
        return LogOutcome(streak=update, weekly=weekly, badges_unlocked=badges)

    def close_day(
        self, user_id: UUID, day: date | datetime, consumed: float, goal: float
    ) -> DayCloseOutcome:
        """Record whether ``day`` ended on goal and update the goal streak."""
        closed = to_day(day)
        state = self.repository.get_streak_state(user_id)
        stored = self.repository.get_daily_intake(user_id, closed)
        if stored is not None and stored.goal_met is not None:
            # A closed day is final; repeating the call changes nothing.
            _logger.info("Day already closed user_id=%s day=%s", user_id, closed)
            return DayCloseOutcome(
                on_goal=stored.goal_met,
                goal_streak=GoalStreakResult(
                    goal_streak=state.goal_streak,
                    longest_goal_streak=state.longest_goal_streak,
                ),
                badges_unlocked=[],
            )

        on_goal = consumed > 0 and is_on_track(get_energy_balance(consumed, goal))
        yesterday = self.repository.get_daily_intake(
            user_id, closed - timedelta(days=1)
        )
        yesterday_on_goal = bool(yesterday and yesterday.goal_met)

        result = calculate_goal_streak_update(
            state.goal_streak, state.longest_goal_streak, yesterday_on_goal, on_goal
        )
        self.repository.set_goal_met(user_id, closed, on_goal)
        self.repository.save_streak_state(
            user_id,
            replace(
                state,
                goal_streak=result.goal_streak,
                longest_goal_streak=result.longest_goal_streak,
            ),
        )

        badges = get_goal_streak_badges_to_unlock(
            result.goal_streak, self.repository.list_unlocked_badges(user_id)
        )
        if badges:
            self.repository.unlock_badges(user_id, badges)
            _logger.info("Goal badges unlocked user_id=%s badges=%s", user_id, badges)
        return DayCloseOutcome(
            on_goal=on_goal, goal_streak=result, badges_unlocked=badges
        )

    def get_summary(self, user_id: UUID, now: datetime | None = None) -> StreakSummary:
        """Return the streak screen data as of ``now`` in the user's timezone."""
        current = now or self.profile_service.local_now(user_id)
        state = self.repository.get_streak_state(user_id)
        weekly = self.repository.get_weekly_state(user_id)
        return StreakSummary(
            current_streak=state.current_streak,
            longest_streak=state.longest_streak,
            goal_streak=state.goal_streak,
            longest_goal_streak=state.longest_goal_streak,
            streak_freezes=state.streak_freezes,
            flame_size=get_flame_size(state.current_streak),
            next_milestone=get_next_milestone(state.current_streak),
            milestone_progress=get_milestone_progress(state.current_streak),
            at_risk=is_streak_at_risk(
                state.last_log_date,
                state.current_streak,
                current,
                self.reminder_hour,
            ),
            weekly_streak=weekly.weekly_streak,
            longest_weekly_streak=weekly.longest_weekly_streak,
            current_week_days=weekly.current_week_days,
            weekly_progress=get_weekly_progress(weekly.current_week_days),
            next_weekly_milestone=get_next_weekly_milestone(weekly.weekly_streak),
        )

    def _covered_days(self, user_id: UUID) -> set[date]:
        covered = set(self.shield_repository.list_shielded_dates(user_id))
        rest_days = self.rest_day_repository.get_rest_days(user_id)
        if rest_days is not None:
            covered |= rest_days.rest_day_dates
        return covered


def _log_streak_events(
    user_id: UUID,
    update: StreakUpdateResult,
    weekly: WeeklyStreakUpdate,
    badges: list[str],
) -> None:
    if update.streak_broken:
        _logger.info("Streak broken user_id=%s", user_id)
    if update.freeze_used:
        _logger.info(
            "Streak freeze used user_id=%s remaining=%s",
            user_id,
            update.freezes_remaining,
        )
    if update.freeze_earned:
        _logger.info("Streak freeze earned user_id=%s", user_id)
    if update.milestone_crossed:
        _logger.info(
            "Streak milestone user_id=%s days=%s", user_id, update.milestone_crossed
        )
    if weekly.milestone_crossed:
        _logger.info(
            "Weekly milestone user_id=%s weeks=%s", user_id, weekly.milestone_crossed
        )
    if badges:
        _logger.info("Badges unlocked user_id=%s badges=%s", user_id, badges)
