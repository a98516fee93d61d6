"""Basal metabolic rate and daily energy targets.

Mifflin-St Jeor:

    male:   10 * weight_kg + 6.25 * height_cm - 5 * age + 5
    female: 10 * weight_kg + 6.25 * height_cm - 5 * age - 161
"""

from dataclasses import dataclass
from enum import StrEnum

from eato.domain.dates import require_finite, round_half_up
from eato.domain.errors import InvalidInputError

MIN_CALORIE_GOAL = 1200
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


class Gender(StrEnum):
    """Gender used by the BMR formula."""

    MALE = "MALE"
    FEMALE = "FEMALE"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "SEDENTARY"
    LIGHTLY_ACTIVE = "LIGHTLY_ACTIVE"
    MODERATELY_ACTIVE = "MODERATELY_ACTIVE"
    ACTIVE = "ACTIVE"
    VERY_ACTIVE = "VERY_ACTIVE"


class GoalType(StrEnum):
    """Weight goal direction."""

    MAINTAIN = "maintain"
    LOSE = "lose"
    GAIN = "gain"


class GoalIntensity(StrEnum):
    """How aggressively to move toward the weight goal."""

    MILD = "mild"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

ACTIVITY_LABELS: dict[ActivityLevel, str] = {
    ActivityLevel.SEDENTARY: "Sedentary (little or no exercise)",
    ActivityLevel.LIGHTLY_ACTIVE: "Lightly active (1-3 days/week)",
    ActivityLevel.MODERATELY_ACTIVE: "Moderately active (3-5 days/week)",
    ActivityLevel.ACTIVE: "Active (6-7 days/week)",
    ActivityLevel.VERY_ACTIVE: "Very active (hard exercise daily)",
}

_INTENSITY_ADJUSTMENTS: dict[GoalIntensity, int] = {
    GoalIntensity.MILD: 250,
    GoalIntensity.MODERATE: 500,
    GoalIntensity.AGGRESSIVE: 750,
}


@dataclass(frozen=True)
class BodyMetrics:
    """Inputs for the energy target calculation."""

    weight_kg: float
    height_cm: float
    age_years: int
    gender: Gender
    activity_level: ActivityLevel
    goal_type: GoalType = GoalType.MAINTAIN
    intensity: GoalIntensity = GoalIntensity.MODERATE


@dataclass(frozen=True)
class MacroTargets:
    """Daily macro targets in grams."""

    protein_g: int
    carbs_g: int
    fat_g: int


def calculate_bmr(
    weight_kg: float, height_cm: float, age_years: int, gender: Gender
) -> int:
    """Calculate BMR with the Mifflin-St Jeor equation."""
    for name, value in (
        ("weight_kg", weight_kg),
        ("height_cm", height_cm),
        ("age_years", age_years),
    ):
        require_finite(value, name)
        if value <= 0:
            raise InvalidInputError(f"{name} must be positive")
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    adjusted = base + 5 if gender == Gender.MALE else base - 161
    return int(round_half_up(adjusted))


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> int:
    """Calculate total daily energy expenditure from BMR."""
    require_finite(bmr, "bmr")
    return int(round_half_up(bmr * ACTIVITY_MULTIPLIERS[activity_level]))


def calculate_calorie_goal(
    tdee: int,
    goal_type: GoalType = GoalType.MAINTAIN,
    intensity: GoalIntensity = GoalIntensity.MODERATE,
) -> int:
    """Adjust TDEE for a weight goal."""
    adjustment = _INTENSITY_ADJUSTMENTS[intensity]
    if goal_type == GoalType.LOSE:
        return max(MIN_CALORIE_GOAL, tdee - adjustment)
    if goal_type == GoalType.GAIN:
        return tdee + adjustment
    return tdee


def calculate_macro_targets(
    calorie_goal: int,
    protein_percent: int = 30,
    carb_percent: int = 40,
    fat_percent: int = 30,
) -> MacroTargets:
    """Split a calorie goal into macro grams (4/4/9 kcal per gram)."""
    if protein_percent + carb_percent + fat_percent != 100:  # noqa: PLR2004
        raise InvalidInputError("Macro percentages must add up to 100")
    return MacroTargets(
        protein_g=int(
            round_half_up(calorie_goal * protein_percent / 100 / KCAL_PER_GRAM_PROTEIN)
        ),
        carbs_g=int(
            round_half_up(calorie_goal * carb_percent / 100 / KCAL_PER_GRAM_CARBS)
        ),
        fat_g=int(round_half_up(calorie_goal * fat_percent / 100 / KCAL_PER_GRAM_FAT)),
    )


@dataclass(frozen=True)
class EnergyTargets:
    """Full chain of daily energy targets for a user."""

    bmr: int
    tdee: int
    calorie_goal: int
    macros: MacroTargets


def calculate_energy_targets(metrics: BodyMetrics) -> EnergyTargets:
    """Run BMR, TDEE, calorie goal and macro split for ``metrics``."""
    bmr = calculate_bmr(
        metrics.weight_kg, metrics.height_cm, metrics.age_years, metrics.gender
    )
    tdee = calculate_tdee(bmr, metrics.activity_level)
    calorie_goal = calculate_calorie_goal(tdee, metrics.goal_type, metrics.intensity)
    return EnergyTargets(
        bmr=bmr,
        tdee=tdee,
        calorie_goal=calorie_goal,
        macros=calculate_macro_targets(calorie_goal),
    )
