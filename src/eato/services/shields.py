"""Partner shield service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from eato.domain.errors import RuleViolationError
from eato.domain.shields import (
    ShieldEligibility,
    ShieldRecord,
    ShieldState,
    apply_shield,
    check_shield_eligibility,
    reset_shields_if_needed,
)
from eato.services.profile import ProfileService

if TYPE_CHECKING:
    from eato.services.streaks import StreakRepository

_logger = logging.getLogger(__name__)


class ShieldRepository(Protocol):
    """Persistence interface for shield allowances and the shield log."""

    def get_shield_state(self, user_id: UUID) -> ShieldState | None:
        """Return the stored shield allowance, if any."""

    def save_shield_state(self, user_id: UUID, state: ShieldState) -> None:
        """Persist a shield allowance."""

    def create_shield_record(self, record: ShieldRecord) -> None:
        """Append a record to the shield log."""

    def list_shielded_dates(self, user_id: UUID) -> list[date]:
        """Return the days shielded for ``user_id`` by their partner."""

    def list_shields_given(self, user_id: UUID, limit: int) -> list[ShieldRecord]:
        """Return the most recent shields spent by the user."""

    def list_shields_received(self, user_id: UUID, limit: int) -> list[ShieldRecord]:
        """Return the most recent shields received by the user."""


@dataclass(frozen=True)
class ShieldStatus:
    """Shield allowances and eligibility in both directions of a pair."""

    partner_id: UUID
    user_shields: int
    partner_shields: int
    user_can_shield: ShieldEligibility
    partner_can_shield: ShieldEligibility


@dataclass(frozen=True)
class ShieldHistory:
    """Recent shields given and received."""

    given: list[ShieldRecord]
    received: list[ShieldRecord]


@dataclass
class ShieldService:
    """Service for spending and inspecting partner shields."""

    repository: ShieldRepository
    streak_repository: "StreakRepository"
    profile_service: ProfileService

    def get_status(self, user_id: UUID, today: date | None = None) -> ShieldStatus:
        """Return whether each partner can currently shield the other."""
        partner_id = self._require_partner(user_id)
        current = today or self.profile_service.local_today(user_id)
        user_state = self._load(user_id, current)
        partner_state = self._load(partner_id, current)
        return ShieldStatus(
            partner_id=partner_id,
            user_shields=user_state.partner_shields,
            partner_shields=partner_state.partner_shields,
            user_can_shield=self._eligibility(partner_id, user_state, current),
            partner_can_shield=self._eligibility(user_id, partner_state, current),
        )

    def use_shield(self, user_id: UUID, today: date | None = None) -> ShieldRecord:
        """Spend one of the user's shields on the partner's missed day."""
        partner_id = self._require_partner(user_id)
        current = today or self.profile_service.local_today(user_id)
        state = self._load(user_id, current)
        eligibility = self._eligibility(partner_id, state, current)
        if not eligibility.can_use_shield or eligibility.target_date is None:
            raise RuleViolationError(eligibility.reason or "Shield cannot be used")

        updated, record = apply_shield(
            state, user_id, partner_id, eligibility.target_date, current
        )
        self.repository.create_shield_record(record)
        self.repository.save_shield_state(user_id, updated)
        _logger.info(
            "Shield applied from=%s to=%s day=%s remaining=%s",
            user_id,
            partner_id,
            record.shielded_date,
            updated.partner_shields,
        )
        return record

    def get_history(self, user_id: UUID, limit: int = 10) -> ShieldHistory:
        """Return the most recent shields in both directions."""
        return ShieldHistory(
            given=self.repository.list_shields_given(user_id, limit),
            received=self.repository.list_shields_received(user_id, limit),
        )

    def _require_partner(self, user_id: UUID) -> UUID:
        partner_id = self.profile_service.get_partner_id(user_id)
        if partner_id is None:
            raise RuleViolationError("No partner linked")
        return partner_id

    def _load(self, user_id: UUID, today: date) -> ShieldState:
        state = self.repository.get_shield_state(user_id)
        if state is None:
            return ShieldState(last_shield_reset=today)
        return reset_shields_if_needed(state, today)

    def _eligibility(
        self, target_user_id: UUID, shielder_state: ShieldState, today: date
    ) -> ShieldEligibility:
        target_streak = self.streak_repository.get_streak_state(target_user_id)
        eligibility = check_shield_eligibility(
            target_streak.last_log_date,
            target_streak.current_streak,
            shielder_state.partner_shields > 0,
            today,
        )
        if eligibility.target_date in self.repository.list_shielded_dates(
            target_user_id
        ):
            return ShieldEligibility(
                can_use_shield=False, reason="Partner is already shielded for that day"
            )
        return eligibility
