"""Tests for the weekly budget projector."""

import math
from datetime import date

import pytest

from eato.domain.budget import (
    calculate_weekly_budget_status,
    format_week_range,
    get_days_remaining_in_week,
    get_effective_weekly_budget,
    get_suggested_daily_budget,
    get_week_bounds,
    get_week_dates,
)
from eato.domain.energy import EnergyBalanceLevel
from eato.domain.errors import InvalidInputError

WEDNESDAY = date(2024, 1, 10)


@pytest.mark.parametrize(
    ("week_start_day", "start", "end"),
    [
        (0, date(2024, 1, 7), date(2024, 1, 13)),
        (1, date(2024, 1, 8), date(2024, 1, 14)),
        (3, date(2024, 1, 10), date(2024, 1, 16)),
        (6, date(2024, 1, 6), date(2024, 1, 12)),
    ],
)
def test_week_bounds(week_start_day: int, start: date, end: date) -> None:
    bounds = get_week_bounds(WEDNESDAY, week_start_day)

    assert bounds.start == start
    assert bounds.end == end


@pytest.mark.parametrize("week_start_day", [-1, 7, True, 1.5])
def test_week_bounds_rejects_bad_start(week_start_day: object) -> None:
    with pytest.raises(InvalidInputError):
        get_week_bounds(WEDNESDAY, week_start_day)  # type: ignore[arg-type]


def test_days_remaining() -> None:
    assert get_days_remaining_in_week(WEDNESDAY) == 3
    assert get_days_remaining_in_week(date(2024, 1, 13)) == 0
    assert get_days_remaining_in_week(date(2024, 1, 7)) == 6


def test_suggested_budget_respects_floor() -> None:
    assert get_suggested_daily_budget(8000, 4) == 2000
    assert get_suggested_daily_budget(1000, 4) == 1200
    assert get_suggested_daily_budget(5000, 0) == 1200
    assert get_suggested_daily_budget(1000, 4, minimum_daily=100) == 250


def test_effective_budget() -> None:
    assert get_effective_weekly_budget(2000, None) == 14000
    assert get_effective_weekly_budget(2000, 12000) == 12000


def test_weekly_status_on_track() -> None:
    status = calculate_weekly_budget_status(
        day=WEDNESDAY,
        daily_consumed=1500,
        daily_goal=2000,
        weekly_consumed=6000,
        weekly_calorie_budget=None,
        days_logged=4,
    )

    assert status.weekly_budget == 14000
    assert status.weekly_remaining == 8000
    assert status.days_remaining == 3
    assert status.suggested_daily_budget == 2000
    assert status.weekly_percentage == pytest.approx(6000 / 14000 * 100)
    assert status.daily_balance == EnergyBalanceLevel.LIGHT
    assert status.weekly_balance == EnergyBalanceLevel.LIGHT
    assert status.week_start_date == date(2024, 1, 7)
    assert status.week_end_date == date(2024, 1, 13)
    assert status.days_in_week == 7


def test_weekly_status_over_budget() -> None:
    status = calculate_weekly_budget_status(
        day=WEDNESDAY,
        daily_consumed=2500,
        daily_goal=2000,
        weekly_consumed=15000,
        weekly_calorie_budget=None,
        days_logged=4,
    )

    assert status.weekly_remaining == 0
    assert status.suggested_daily_budget == 1200
    assert status.weekly_balance == EnergyBalanceLevel.FULL
    assert status.daily_balance == EnergyBalanceLevel.FULL


def test_weekly_status_with_explicit_budget() -> None:
    status = calculate_weekly_budget_status(
        day=WEDNESDAY,
        daily_consumed=0,
        daily_goal=2000,
        weekly_consumed=0,
        weekly_calorie_budget=10000,
        days_logged=0,
        week_start_day=1,
    )

    assert status.weekly_budget == 10000
    assert status.days_remaining == 4
    assert status.suggested_daily_budget == 2000


def test_weekly_status_on_first_day_of_week() -> None:
    status = calculate_weekly_budget_status(
        day=date(2024, 1, 7),
        daily_consumed=0,
        daily_goal=2000,
        weekly_consumed=0,
        weekly_calorie_budget=None,
        days_logged=0,
    )

    assert status.weekly_budget == 14000
    assert status.weekly_remaining == 14000
    assert status.days_remaining == 6
    assert status.suggested_daily_budget == max(
        round(14000 / (status.days_remaining + 1)), 1200
    )
    assert status.suggested_daily_budget == 2000


def test_weekly_status_zero_goal() -> None:
    status = calculate_weekly_budget_status(
        day=WEDNESDAY,
        daily_consumed=500,
        daily_goal=0,
        weekly_consumed=500,
        weekly_calorie_budget=None,
        days_logged=1,
    )

    assert status.weekly_percentage == 0
    assert status.weekly_balance == EnergyBalanceLevel.BALANCED


@pytest.mark.parametrize("value", [-1, math.nan, math.inf])
def test_weekly_status_rejects_bad_consumption(value: float) -> None:
    with pytest.raises(InvalidInputError):
        calculate_weekly_budget_status(
            day=WEDNESDAY,
            daily_consumed=0,
            daily_goal=2000,
            weekly_consumed=value,
            weekly_calorie_budget=None,
            days_logged=0,
        )


def test_week_dates_and_label() -> None:
    dates = get_week_dates(WEDNESDAY)

    assert dates[0] == date(2024, 1, 7)
    assert dates[-1] == date(2024, 1, 13)
    assert len(dates) == 7
    assert format_week_range(date(2024, 1, 28), date(2024, 2, 3)) == "Jan 28 - Feb 3"
