"""User profile service: calorie goals, calendar preferences and timezone."""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from eato.domain.bmr import BodyMetrics, EnergyTargets, calculate_energy_targets
from eato.domain.budget import validate_week_start_day
from eato.domain.errors import InvalidInputError
from eato.domain.models import UserGoals, UserRecord

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user row, if present."""

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return the stored goals, if any were saved."""

    def save_goals(self, user_id: UUID, goals: UserGoals) -> None:
        """Persist goals for a user."""


@dataclass
class ProfileService:
    """Service for per-user goals and calendar settings."""

    repository: ProfileRepository
    default_timezone: str = "UTC"
    default_daily_calorie_goal: int = 2000
    default_week_start_day: int = 0

    def get_goals(self, user_id: UUID) -> UserGoals:
        """Return the user's goals, falling back to configured defaults."""
        goals = self.repository.get_goals(user_id)
        if goals is not None:
            return goals
        return UserGoals(
            daily_calorie_goal=self.default_daily_calorie_goal,
            weekly_calorie_budget=None,
            week_start_day=self.default_week_start_day,
            timezone=self.default_timezone,
        )

    def set_daily_goal(self, user_id: UUID, daily_calorie_goal: int) -> UserGoals:
        """Persist a new daily calorie goal."""
        if daily_calorie_goal <= 0:
            raise InvalidInputError("daily_calorie_goal must be positive")
        goals = replace(self.get_goals(user_id), daily_calorie_goal=daily_calorie_goal)
        self.repository.save_goals(user_id, goals)
        return goals

    def set_weekly_budget(
        self,
        user_id: UUID,
        weekly_calorie_budget: int | None,
        week_start_day: int | None = None,
    ) -> UserGoals:
        """Persist the weekly budget override and optionally the week start."""
        if weekly_calorie_budget is not None and weekly_calorie_budget < 0:
            raise InvalidInputError("weekly_calorie_budget must not be negative")
        goals = self.get_goals(user_id)
        goals = replace(
            goals,
            weekly_calorie_budget=weekly_calorie_budget,
            week_start_day=validate_week_start_day(
                goals.week_start_day if week_start_day is None else week_start_day
            ),
        )
        self.repository.save_goals(user_id, goals)
        return goals

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or the configured default."""
        return self.get_goals(user_id).timezone

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Persist a user's timezone after checking it exists."""
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise InvalidInputError(f"Unknown timezone: {timezone}") from exc
        goals = replace(self.get_goals(user_id), timezone=timezone)
        self.repository.save_goals(user_id, goals)

    def local_now(self, user_id: UUID) -> datetime:
        """Return the current time in the user's timezone."""
        return datetime.now(tz=ZoneInfo(self.get_timezone(user_id)))

    def local_today(self, user_id: UUID) -> date:
        """Return today's date in the user's timezone."""
        return self.local_now(user_id).date()

    def get_partner_id(self, user_id: UUID) -> UUID | None:
        """Return the linked partner, if any."""
        user = self.repository.get_user(user_id)
        return user.partner_id if user else None

    def compute_targets(self, user_id: UUID, metrics: BodyMetrics) -> EnergyTargets:
        """Compute energy targets and store the resulting calorie goal."""
        targets = calculate_energy_targets(metrics)
        self.set_daily_goal(user_id, targets.calorie_goal)
        _logger.info(
            "Calorie goal updated user_id=%s goal=%s", user_id, targets.calorie_goal
        )
        return targets
