"""Domain models for the Eato rules engine."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str | None
    partner_id: UUID | None


@dataclass(frozen=True)
class UserGoals:
    """Calorie goals and calendar preferences for a user."""

    daily_calorie_goal: int
    weekly_calorie_budget: int | None
    week_start_day: int
    timezone: str


@dataclass(frozen=True)
class DailyIntake:
    """Energy logged on one day."""

    day: date
    calories: float
    goal_met: bool | None = None
