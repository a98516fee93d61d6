"""Partner shields.

A user may spend a shield to cover the day their partner missed yesterday, so
the partner's streak survives their next log. Each user gets two shields per
calendar month; the allowance is refilled lazily on access.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from uuid import UUID

from eato.domain.dates import days_between, is_different_month, to_day
from eato.domain.errors import InvalidInputError, RuleViolationError

MAX_SHIELDS_PER_MONTH = 2
SHIELDABLE_GAP_DAYS = 2


@dataclass(frozen=True)
class ShieldState:
    """A user's shield allowance for the current month."""

    last_shield_reset: date
    partner_shields: int = MAX_SHIELDS_PER_MONTH
    shields_used_this_month: tuple[date, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not 0 <= self.partner_shields <= MAX_SHIELDS_PER_MONTH:
            raise InvalidInputError(
                f"partner_shields must be between 0 and {MAX_SHIELDS_PER_MONTH}"
            )


@dataclass(frozen=True)
class ShieldEligibility:
    """Whether a shield can be used right now, and for which day."""

    can_use_shield: bool
    reason: str | None = None
    target_date: date | None = None


@dataclass(frozen=True)
class ShieldRecord:
    """Audit record of an applied shield."""

    from_user_id: UUID
    to_user_id: UUID
    shielded_date: date
    created_at: datetime | None = None


def should_reset_shields(
    last_reset_date: date | datetime, today: date | datetime | None = None
) -> bool:
    """Return True when the allowance belongs to an earlier month."""
    return is_different_month(last_reset_date, today or date.today())


def reset_shields_if_needed(state: ShieldState, today: date | datetime) -> ShieldState:
    """Refill shields and clear the usage log when a new month has started."""
    if not should_reset_shields(state.last_shield_reset, today):
        return state
    return ShieldState(
        last_shield_reset=to_day(today),
        partner_shields=MAX_SHIELDS_PER_MONTH,
        shields_used_this_month=(),
    )


def check_shield_eligibility(
    partner_last_log_date: date | datetime | None,
    partner_current_streak: int,
    shielder_has_shields: bool,
    today: date | datetime | None = None,
) -> ShieldEligibility:
    """Decide whether the partner's missed day can be shielded."""
    if not shielder_has_shields:
        return ShieldEligibility(
            can_use_shield=False, reason="No shields remaining this month"
        )
    if partner_last_log_date is None:
        return ShieldEligibility(
            can_use_shield=False, reason="Partner has no logging history"
        )
    if partner_current_streak == 0:
        return ShieldEligibility(
            can_use_shield=False, reason="Partner has no active streak to protect"
        )

    current = to_day(today or date.today())
    days_since_log = days_between(current, partner_last_log_date)
    if days_since_log < SHIELDABLE_GAP_DAYS:
        return ShieldEligibility(
            can_use_shield=False, reason="Partner logged today or yesterday"
        )
    if days_since_log > SHIELDABLE_GAP_DAYS:
        return ShieldEligibility(
            can_use_shield=False, reason="Too many days have passed"
        )
    return ShieldEligibility(
        can_use_shield=True, target_date=current - timedelta(days=1)
    )


def apply_shield(
    state: ShieldState,
    from_user_id: UUID,
    to_user_id: UUID,
    shielded_date: date | datetime,
    today: date | datetime,
) -> tuple[ShieldState, ShieldRecord]:
    """Spend one shield and return the new state with its audit record."""
    current = reset_shields_if_needed(state, today)
    if current.partner_shields <= 0:
        raise RuleViolationError("No shields remaining this month")
    updated = ShieldState(
        last_shield_reset=current.last_shield_reset,
        partner_shields=current.partner_shields - 1,
        shields_used_this_month=(*current.shields_used_this_month, to_day(today)),
    )
    record = ShieldRecord(
        from_user_id=from_user_id,
        to_user_id=to_user_id,
        shielded_date=to_day(shielded_date),
    )
    return updated, record
