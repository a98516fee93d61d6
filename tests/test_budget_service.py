"""Tests for the weekly budget service."""

from datetime import date
from uuid import uuid4

from eato.domain.energy import EnergyBalanceLevel
from eato.domain.models import UserGoals
from eato.services.budget import BudgetService
from eato.services.profile import ProfileService
from tests.conftest import InMemoryBudgetRepository, InMemoryProfileRepository

WEDNESDAY = date(2024, 1, 10)


def test_weekly_status_from_daily_totals(profile_service: ProfileService) -> None:
    user_id = uuid4()
    repository = InMemoryBudgetRepository()
    repository.add(user_id, date(2024, 1, 7), 2000)
    repository.add(user_id, date(2024, 1, 8), 2100)
    repository.add(user_id, date(2024, 1, 9), 1900)
    repository.add(user_id, WEDNESDAY, 800)
    repository.add(user_id, date(2024, 1, 6), 5000)
    repository.add(uuid4(), WEDNESDAY, 3000)
    service = BudgetService(repository, profile_service)

    status = service.get_weekly_status(user_id, WEDNESDAY)

    assert status.weekly_budget == 14000
    assert status.weekly_consumed == 6800
    assert status.daily_consumed == 800
    assert status.days_logged == 4
    assert status.days_remaining == 3
    assert status.suggested_daily_budget == 1800
    assert status.daily_balance == EnergyBalanceLevel.LIGHT


def test_weekly_status_uses_stored_goals(
    profile_repository: InMemoryProfileRepository, profile_service: ProfileService
) -> None:
    user_id = uuid4()
    profile_repository.goals[user_id] = UserGoals(
        daily_calorie_goal=1800,
        weekly_calorie_budget=11900,
        week_start_day=1,
        timezone="UTC",
    )
    service = BudgetService(
        InMemoryBudgetRepository(), profile_service, minimum_daily_budget=1000
    )

    status = service.get_weekly_status(user_id, WEDNESDAY)

    assert status.weekly_budget == 11900
    assert status.week_start_date == date(2024, 1, 8)
    assert status.days_logged == 0
    assert status.suggested_daily_budget == 2380


def test_future_rows_are_ignored(profile_service: ProfileService) -> None:
    user_id = uuid4()
    repository = InMemoryBudgetRepository()
    repository.add(user_id, date(2024, 1, 12), 2500)
    service = BudgetService(repository, profile_service)

    status = service.get_weekly_status(user_id, WEDNESDAY)

    assert status.weekly_consumed == 0
