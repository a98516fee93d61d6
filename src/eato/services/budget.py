"""Weekly budget service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from eato.domain.budget import (
    DEFAULT_MINIMUM_DAILY_BUDGET,
    WeeklyBudgetStatus,
    calculate_weekly_budget_status,
    get_week_bounds,
)
from eato.domain.models import DailyIntake
from eato.services.profile import ProfileService


class BudgetRepository(Protocol):
    """Persistence interface for daily energy totals."""

    def list_daily_intake(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyIntake]:
        """Return daily totals between start and end, both inclusive."""


@dataclass
class BudgetService:
    """Service for the weekly calorie budget view."""

    repository: BudgetRepository
    profile_service: ProfileService
    minimum_daily_budget: int = DEFAULT_MINIMUM_DAILY_BUDGET

    def get_weekly_status(
        self, user_id: UUID, day: date | None = None
    ) -> WeeklyBudgetStatus:
        """Return the weekly budget position for ``day`` (default: local today)."""
        current = day or self.profile_service.local_today(user_id)
        goals = self.profile_service.get_goals(user_id)
        bounds = get_week_bounds(current, goals.week_start_day)
        intake = self.repository.list_daily_intake(user_id, bounds.start, bounds.end)

        weekly_consumed = 0.0
        daily_consumed = 0.0
        logged_days: set[date] = set()
        for row in intake:
            if row.day > current:
                continue
            weekly_consumed += row.calories
            if row.calories > 0:
                logged_days.add(row.day)
            if row.day == current:
                daily_consumed += row.calories

        return calculate_weekly_budget_status(
            day=current,
            daily_consumed=daily_consumed,
            daily_goal=goals.daily_calorie_goal,
            weekly_consumed=weekly_consumed,
            weekly_calorie_budget=goals.weekly_calorie_budget,
            days_logged=len(logged_days),
            week_start_day=goals.week_start_day,
            minimum_daily=self.minimum_daily_budget,
        )
