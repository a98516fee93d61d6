"""Rest day service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from eato.domain.rest_days import (
    RestDayState,
    declare_rest_day,
    remove_rest_day,
    reset_rest_days_if_needed,
)
from eato.services.profile import ProfileService

_logger = logging.getLogger(__name__)


class RestDayRepository(Protocol):
    """Persistence interface for rest days."""

    def get_rest_days(self, user_id: UUID) -> RestDayState | None:
        """Return the stored rest day state, if any."""

    def save_rest_days(self, user_id: UUID, state: RestDayState) -> None:
        """Persist the rest day state."""


@dataclass
class RestDayService:
    """Service for declaring and removing planned rest days."""

    repository: RestDayRepository
    profile_service: ProfileService

    def get_status(self, user_id: UUID, today: date | None = None) -> RestDayState:
        """Return the rest day state with the monthly refill applied."""
        current = today or self.profile_service.local_today(user_id)
        return reset_rest_days_if_needed(self._load(user_id, current), current)

    def declare(
        self, user_id: UUID, day: date, today: date | None = None
    ) -> RestDayState:
        """Declare ``day`` as a rest day."""
        current = today or self.profile_service.local_today(user_id)
        state = declare_rest_day(self._load(user_id, current), day, current)
        self.repository.save_rest_days(user_id, state)
        _logger.info(
            "Rest day declared user_id=%s day=%s remaining=%s",
            user_id,
            day,
            state.rest_days_remaining,
        )
        return state

    def remove(
        self, user_id: UUID, day: date, today: date | None = None
    ) -> RestDayState:
        """Remove a declared rest day and give the allowance back."""
        current = today or self.profile_service.local_today(user_id)
        state = reset_rest_days_if_needed(self._load(user_id, current), current)
        state = remove_rest_day(state, day)
        self.repository.save_rest_days(user_id, state)
        _logger.info("Rest day removed user_id=%s day=%s", user_id, day)
        return state

    def list_rest_days(self, user_id: UUID) -> frozenset[date]:
        """Return every declared rest day."""
        state = self.repository.get_rest_days(user_id)
        return state.rest_day_dates if state else frozenset()

    def _load(self, user_id: UUID, today: date) -> RestDayState:
        state = self.repository.get_rest_days(user_id)
        if state is None:
            return RestDayState(last_rest_day_reset=today.replace(day=1))
        return state
