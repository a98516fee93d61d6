"""Badge catalogue and unlock rules."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum


class BadgeCategory(StrEnum):
    """Badge grouping shown on the achievements screen."""

    CONSISTENCY = "consistency"
    LOGGING = "logging"
    GOALS = "goals"
    PARTNER = "partner"


class BadgeRarity(StrEnum):
    """How hard a badge is to earn."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


@dataclass(frozen=True)
class BadgeDefinition:
    """Static badge metadata."""

    id: str
    name: str
    description: str
    category: BadgeCategory
    icon: str
    requirement: str
    rarity: BadgeRarity
    order: int


_CATALOGUE = (
    BadgeDefinition(
        id="first_log",
        name="First Bite",
        description="Logged your first food entry",
        category=BadgeCategory.CONSISTENCY,
        icon="utensils",
        requirement="Log 1 food entry",
        rarity=BadgeRarity.COMMON,
        order=1,
    ),
    BadgeDefinition(
        id="week_warrior",
        name="Week Warrior",
        description="Maintained a 7-day logging streak",
        category=BadgeCategory.CONSISTENCY,
        icon="flame",
        requirement="7-day streak",
        rarity=BadgeRarity.COMMON,
        order=2,
    ),
    BadgeDefinition(
        id="fortnight_fighter",
        name="Fortnight Fighter",
        description="Maintained a 14-day logging streak",
        category=BadgeCategory.CONSISTENCY,
        icon="fire",
        requirement="14-day streak",
        rarity=BadgeRarity.UNCOMMON,
        order=3,
    ),
    BadgeDefinition(
        id="monthly_master",
        name="Monthly Master",
        description="Maintained a 30-day logging streak",
        category=BadgeCategory.CONSISTENCY,
        icon="calendar",
        requirement="30-day streak",
        rarity=BadgeRarity.RARE,
        order=4,
    ),
    BadgeDefinition(
        id="sixty_day_sage",
        name="60-Day Sage",
        description="Maintained a 60-day logging streak",
        category=BadgeCategory.CONSISTENCY,
        icon="star",
        requirement="60-day streak",
        rarity=BadgeRarity.EPIC,
        order=5,
    ),
    BadgeDefinition(
        id="century_club",
        name="Century Club",
        description="Maintained a 100-day logging streak",
        category=BadgeCategory.CONSISTENCY,
        icon="trophy",
        requirement="100-day streak",
        rarity=BadgeRarity.LEGENDARY,
        order=6,
    ),
    BadgeDefinition(
        id="half_year_hero",
        name="Half-Year Hero",
        description="Maintained a 180-day logging streak",
        category=BadgeCategory.CONSISTENCY,
        icon="crown",
        requirement="180-day streak",
        rarity=BadgeRarity.LEGENDARY,
        order=7,
    ),
    BadgeDefinition(
        id="year_legend",
        name="Year Legend",
        description="Maintained a 365-day logging streak",
        category=BadgeCategory.CONSISTENCY,
        icon="medal",
        requirement="365-day streak",
        rarity=BadgeRarity.LEGENDARY,
        order=8,
    ),
    BadgeDefinition(
        id="meal_prepper",
        name="Meal Prepper",
        description="Logged all 4 meals in a single day",
        category=BadgeCategory.LOGGING,
        icon="list-check",
        requirement="Log breakfast, lunch, dinner, and snack in one day",
        rarity=BadgeRarity.COMMON,
        order=1,
    ),
    BadgeDefinition(
        id="food_explorer",
        name="Food Explorer",
        description="Logged 50 unique foods",
        category=BadgeCategory.LOGGING,
        icon="compass",
        requirement="Log 50 different food items",
        rarity=BadgeRarity.UNCOMMON,
        order=2,
    ),
    BadgeDefinition(
        id="food_connoisseur",
        name="Food Connoisseur",
        description="Logged 100 unique foods",
        category=BadgeCategory.LOGGING,
        icon="award",
        requirement="Log 100 different food items",
        rarity=BadgeRarity.RARE,
        order=3,
    ),
    BadgeDefinition(
        id="barcode_scanner",
        name="Barcode Scanner",
        description="Logged 10 foods using barcode scan",
        category=BadgeCategory.LOGGING,
        icon="scan",
        requirement="Scan 10 barcodes",
        rarity=BadgeRarity.COMMON,
        order=4,
    ),
    BadgeDefinition(
        id="early_bird",
        name="Early Bird",
        description="Logged breakfast before 9 AM for 7 days",
        category=BadgeCategory.LOGGING,
        icon="sun",
        requirement="Log breakfast before 9 AM, 7 days in a row",
        rarity=BadgeRarity.UNCOMMON,
        order=5,
    ),
    BadgeDefinition(
        id="goal_getter",
        name="Goal Getter",
        description="Stayed on calorie goal for 7 days",
        category=BadgeCategory.GOALS,
        icon="target",
        requirement="7-day goal streak",
        rarity=BadgeRarity.COMMON,
        order=1,
    ),
    BadgeDefinition(
        id="perfect_week",
        name="Perfect Week",
        description="Hit calorie goal all 7 days of the week",
        category=BadgeCategory.GOALS,
        icon="check-circle",
        requirement="7/7 days on goal in one week",
        rarity=BadgeRarity.UNCOMMON,
        order=2,
    ),
    BadgeDefinition(
        id="macro_master",
        name="Macro Master",
        description="Hit all macro targets in a day (within 10%)",
        category=BadgeCategory.GOALS,
        icon="pie-chart",
        requirement="Hit protein, carbs, and fat targets in one day",
        rarity=BadgeRarity.UNCOMMON,
        order=3,
    ),
    BadgeDefinition(
        id="monthly_goal_crusher",
        name="Monthly Goal Crusher",
        description="Stayed on calorie goal for 30 days",
        category=BadgeCategory.GOALS,
        icon="zap",
        requirement="30-day goal streak",
        rarity=BadgeRarity.RARE,
        order=4,
    ),
    BadgeDefinition(
        id="consistency_king",
        name="Consistency Champion",
        description="Stayed on calorie goal for 60 days",
        category=BadgeCategory.GOALS,
        icon="crown",
        requirement="60-day goal streak",
        rarity=BadgeRarity.EPIC,
        order=5,
    ),
    BadgeDefinition(
        id="better_together",
        name="Better Together",
        description="Linked with a partner",
        category=BadgeCategory.PARTNER,
        icon="heart",
        requirement="Link with a partner",
        rarity=BadgeRarity.COMMON,
        order=1,
    ),
    BadgeDefinition(
        id="accountability_buddy",
        name="Accountability Buddy",
        description="Both you and partner maintained 7-day streaks",
        category=BadgeCategory.PARTNER,
        icon="users",
        requirement="7-day mutual streak with partner",
        rarity=BadgeRarity.UNCOMMON,
        order=2,
    ),
    BadgeDefinition(
        id="power_couple",
        name="Power Couple",
        description="Both you and partner maintained 30-day streaks",
        category=BadgeCategory.PARTNER,
        icon="zap",
        requirement="30-day mutual streak with partner",
        rarity=BadgeRarity.RARE,
        order=3,
    ),
    BadgeDefinition(
        id="nudge_master",
        name="Nudge Master",
        description="Sent 10 nudges to your partner",
        category=BadgeCategory.PARTNER,
        icon="bell",
        requirement="Send 10 nudges",
        rarity=BadgeRarity.COMMON,
        order=4,
    ),
    BadgeDefinition(
        id="supportive_partner",
        name="Supportive Partner",
        description="Logged 5 meals for your partner",
        category=BadgeCategory.PARTNER,
        icon="gift",
        requirement="Log 5 meals on partner's behalf",
        rarity=BadgeRarity.UNCOMMON,
        order=5,
    ),
)

BADGES: dict[str, BadgeDefinition] = {badge.id: badge for badge in _CATALOGUE}

STREAK_BADGE_THRESHOLDS: dict[int, str] = {
    1: "first_log",
    7: "week_warrior",
    14: "fortnight_fighter",
    30: "monthly_master",
    60: "sixty_day_sage",
    100: "century_club",
    180: "half_year_hero",
    365: "year_legend",
}

GOAL_STREAK_BADGE_THRESHOLDS: dict[int, str] = {
    7: "goal_getter",
    30: "monthly_goal_crusher",
    60: "consistency_king",
}

AVATAR_FRAME_THRESHOLDS: dict[str, int] = {
    "none": 0,
    "bronze": 5,
    "silver": 15,
    "gold": 30,
    "diamond": len(BADGES),
}

THEME_UNLOCK_THRESHOLDS: dict[str, int] = {
    "default": 0,
    "midnight": 7,
    "ocean": 30,
    "forest": 60,
    "sunset": 90,
}


def get_badges_by_category(category: BadgeCategory) -> list[BadgeDefinition]:
    """Return the badges of a category in display order."""
    badges = [badge for badge in BADGES.values() if badge.category == category]
    return sorted(badges, key=lambda badge: badge.order)


def get_total_badge_count() -> int:
    """Return the number of badges in the catalogue."""
    return len(BADGES)


def get_streak_badges_to_unlock(
    current_streak: int, unlocked_badge_ids: Iterable[str]
) -> list[str]:
    """Return streak badges reached by ``current_streak`` and not yet unlocked."""
    return _badges_to_unlock(
        current_streak, STREAK_BADGE_THRESHOLDS, unlocked_badge_ids
    )


def get_goal_streak_badges_to_unlock(
    goal_streak: int, unlocked_badge_ids: Iterable[str]
) -> list[str]:
    """Return goal badges reached by ``goal_streak`` and not yet unlocked."""
    return _badges_to_unlock(
        goal_streak, GOAL_STREAK_BADGE_THRESHOLDS, unlocked_badge_ids
    )


def get_avatar_frame(badge_count: int) -> str:
    """Return the best avatar frame for a badge count."""
    for frame in ("diamond", "gold", "silver", "bronze"):
        if badge_count >= AVATAR_FRAME_THRESHOLDS[frame]:
            return frame
    return "none"


def get_unlocked_themes(longest_streak: int) -> list[str]:
    """Return the themes unlocked by the longest streak."""
    return [
        theme
        for theme, threshold in THEME_UNLOCK_THRESHOLDS.items()
        if longest_streak >= threshold
    ]


def _badges_to_unlock(
    value: int, thresholds: dict[int, str], unlocked_badge_ids: Iterable[str]
) -> list[str]:
    unlocked = set(unlocked_badge_ids)
    return [
        badge_id
        for threshold, badge_id in thresholds.items()
        if value >= threshold and badge_id not in unlocked
    ]
