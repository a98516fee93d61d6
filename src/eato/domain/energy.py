"""Energy balance classification and energy unit helpers.

Consumption is bucketed into three qualitative levels instead of exact numbers:

- LIGHT: below 90% of the goal
- BALANCED: 90% to 100% of the goal, inclusive
- FULL: above 100% of the goal
"""

from dataclasses import dataclass
from enum import StrEnum

from eato.domain.dates import require_finite, round_half_up
from eato.domain.errors import InvalidInputError

KCAL_TO_KJ = 4.184


class EnergyBalanceLevel(StrEnum):
    """Qualitative consumption level relative to a goal."""

    LIGHT = "LIGHT"
    BALANCED = "BALANCED"
    FULL = "FULL"


class EnergyUnit(StrEnum):
    """Display unit for energy values."""

    KCAL = "KCAL"
    KJ = "KJ"


@dataclass(frozen=True)
class EnergyBalanceThresholds:
    """Ratio boundaries for the balance levels."""

    light_max: float = 0.9
    balanced_max: float = 1.0


DEFAULT_THRESHOLDS = EnergyBalanceThresholds()

BALANCE_LABELS: dict[EnergyBalanceLevel, str] = {
    EnergyBalanceLevel.LIGHT: "Light",
    EnergyBalanceLevel.BALANCED: "Balanced",
    EnergyBalanceLevel.FULL: "Full",
}


def get_energy_balance(
    consumed: float,
    goal: float,
    thresholds: EnergyBalanceThresholds = DEFAULT_THRESHOLDS,
) -> EnergyBalanceLevel:
    """Classify consumed energy against a goal."""
    require_finite(consumed, "consumed")
    require_finite(goal, "goal")
    if goal <= 0:
        # No goal set.
        return EnergyBalanceLevel.BALANCED

    ratio = consumed / goal
    if ratio < thresholds.light_max:
        return EnergyBalanceLevel.LIGHT
    if ratio <= thresholds.balanced_max:
        return EnergyBalanceLevel.BALANCED
    return EnergyBalanceLevel.FULL


def is_on_track(level: EnergyBalanceLevel) -> bool:
    """Return True for LIGHT or BALANCED."""
    return level in {EnergyBalanceLevel.LIGHT, EnergyBalanceLevel.BALANCED}


def get_energy_balance_label(level: EnergyBalanceLevel) -> str:
    """Return the human-readable label for a level."""
    return BALANCE_LABELS[level]


def get_weekly_status_message(
    daily_balance: EnergyBalanceLevel, weekly_balance: EnergyBalanceLevel
) -> str:
    """Combine daily and weekly balance into a status line."""
    if weekly_balance == EnergyBalanceLevel.FULL:
        weekly_status = "Over budget this week"
    else:
        weekly_status = "On track this week"
    return f"{BALANCE_LABELS[daily_balance]} today, {weekly_status}"


def convert_energy(kcal: float, unit: EnergyUnit) -> int:
    """Convert a kcal value to the display unit, rounded to an integer."""
    require_finite(kcal, "kcal")
    if unit == EnergyUnit.KJ:
        return int(round_half_up(kcal * KCAL_TO_KJ))
    if unit == EnergyUnit.KCAL:
        return int(round_half_up(kcal))
    raise InvalidInputError(f"Unknown energy unit: {unit}")


def format_energy(kcal: float, unit: EnergyUnit) -> str:
    """Format a kcal value with its display unit."""
    label = "kJ" if unit == EnergyUnit.KJ else "kcal"
    return f"{convert_energy(kcal, unit)} {label}"
