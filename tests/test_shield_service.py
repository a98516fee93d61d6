"""Tests for the shield service."""

from datetime import date
from uuid import uuid4

import pytest

from eato.domain.errors import RuleViolationError
from eato.domain.shields import ShieldState
from eato.domain.streaks import StreakState
from eato.services.shields import ShieldService
from eato.services.streaks import StreakService
from tests.conftest import (
    InMemoryProfileRepository,
    InMemoryShieldRepository,
    InMemoryStreakRepository,
)

TODAY = date(2024, 1, 15)


def test_use_shield_protects_partner_streak(
    shield_service: ShieldService,
    streak_service: StreakService,
    profile_repository: InMemoryProfileRepository,
    streak_repository: InMemoryStreakRepository,
    shield_repository: InMemoryShieldRepository,
) -> None:
    user_id, partner_id = profile_repository.link_partners()
    streak_repository.states[partner_id] = StreakState(
        current_streak=10, longest_streak=10, last_log_date=date(2024, 1, 13)
    )

    record = shield_service.use_shield(user_id, today=TODAY)

    assert record.to_user_id == partner_id
    assert record.shielded_date == date(2024, 1, 14)
    assert shield_repository.states[user_id].partner_shields == 1

    outcome = streak_service.record_log(partner_id, TODAY)
    assert outcome.streak.new_streak == 11
    assert outcome.streak.streak_broken is False


def test_use_shield_without_partner(shield_service: ShieldService) -> None:
    with pytest.raises(RuleViolationError, match="No partner"):
        shield_service.use_shield(uuid4(), today=TODAY)


def test_use_shield_when_partner_logged_yesterday(
    shield_service: ShieldService,
    profile_repository: InMemoryProfileRepository,
    streak_repository: InMemoryStreakRepository,
) -> None:
    user_id, partner_id = profile_repository.link_partners()
    streak_repository.states[partner_id] = StreakState(
        current_streak=3, longest_streak=3, last_log_date=date(2024, 1, 14)
    )

    with pytest.raises(RuleViolationError, match="today or yesterday"):
        shield_service.use_shield(user_id, today=TODAY)


def test_same_day_cannot_be_shielded_twice(
    shield_service: ShieldService,
    profile_repository: InMemoryProfileRepository,
    streak_repository: InMemoryStreakRepository,
) -> None:
    user_id, partner_id = profile_repository.link_partners()
    streak_repository.states[partner_id] = StreakState(
        current_streak=3, longest_streak=3, last_log_date=date(2024, 1, 13)
    )
    shield_service.use_shield(user_id, today=TODAY)

    with pytest.raises(RuleViolationError, match="already shielded"):
        shield_service.use_shield(user_id, today=TODAY)


def test_no_shields_left(
    shield_service: ShieldService,
    profile_repository: InMemoryProfileRepository,
    streak_repository: InMemoryStreakRepository,
    shield_repository: InMemoryShieldRepository,
) -> None:
    user_id, partner_id = profile_repository.link_partners()
    streak_repository.states[partner_id] = StreakState(
        current_streak=3, longest_streak=3, last_log_date=date(2024, 1, 13)
    )
    shield_repository.states[user_id] = ShieldState(
        last_shield_reset=date(2024, 1, 2), partner_shields=0
    )

    with pytest.raises(RuleViolationError, match="No shields remaining"):
        shield_service.use_shield(user_id, today=TODAY)


def test_status_reports_both_directions(
    shield_service: ShieldService,
    profile_repository: InMemoryProfileRepository,
    streak_repository: InMemoryStreakRepository,
    shield_repository: InMemoryShieldRepository,
) -> None:
    user_id, partner_id = profile_repository.link_partners()
    streak_repository.states[partner_id] = StreakState(
        current_streak=5, longest_streak=5, last_log_date=date(2024, 1, 13)
    )
    streak_repository.states[user_id] = StreakState(
        current_streak=2, longest_streak=2, last_log_date=TODAY
    )
    shield_repository.states[partner_id] = ShieldState(
        last_shield_reset=date(2023, 12, 1), partner_shields=0
    )

    status = shield_service.get_status(user_id, today=TODAY)

    assert status.partner_id == partner_id
    assert status.user_shields == 2
    assert status.partner_shields == 2
    assert status.user_can_shield.can_use_shield is True
    assert status.partner_can_shield.can_use_shield is False
    assert status.partner_can_shield.reason == "Partner logged today or yesterday"


def test_history_lists_both_directions(
    shield_service: ShieldService,
    profile_repository: InMemoryProfileRepository,
    streak_repository: InMemoryStreakRepository,
) -> None:
    user_id, partner_id = profile_repository.link_partners()
    streak_repository.states[partner_id] = StreakState(
        current_streak=3, longest_streak=3, last_log_date=date(2024, 1, 13)
    )
    shield_service.use_shield(user_id, today=TODAY)

    given = shield_service.get_history(user_id)
    received = shield_service.get_history(partner_id)

    assert len(given.given) == 1
    assert given.received == []
    assert len(received.received) == 1
