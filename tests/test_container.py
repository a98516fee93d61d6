"""Tests for container wiring."""

from eato.config import Settings
from eato.containers import AppContainer, build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.streak_service is not None
    assert container.shield_service.streak_repository is (
        container.streak_service.repository
    )
    assert container.budget_service.minimum_daily_budget == 1200
    assert container.profile_service.default_timezone == "UTC"


def test_fixture_container_shares_profile(container: AppContainer) -> None:
    assert container.budget_service.profile_service is container.profile_service
