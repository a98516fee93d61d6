"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest

from eato.config import Settings
from eato.containers import AppContainer
from eato.domain.models import DailyIntake, UserGoals, UserRecord
from eato.domain.recipes import NutritionPer100g, RecipeRecord, ResolvedIngredient
from eato.domain.rest_days import RestDayState
from eato.domain.shields import ShieldRecord, ShieldState
from eato.domain.streaks import StreakState
from eato.domain.weekly_streaks import WeeklyStreakState
from eato.services.budget import BudgetRepository, BudgetService
from eato.services.profile import ProfileRepository, ProfileService
from eato.services.recipes import RecipeRepository, RecipeService
from eato.services.rest_days import RestDayRepository, RestDayService
from eato.services.shields import ShieldRepository, ShieldService
from eato.services.streaks import StreakRepository, StreakService


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)
    goals: dict[UUID, UserGoals] = field(default_factory=dict)

    def add_user(self, partner_id: UUID | None = None) -> UserRecord:
        user = UserRecord(id=uuid4(), name=None, partner_id=partner_id)
        self.users[user.id] = user
        return user

    def link_partners(self) -> tuple[UUID, UUID]:
        first = uuid4()
        second = uuid4()
        self.users[first] = UserRecord(id=first, name="Ana", partner_id=second)
        self.users[second] = UserRecord(id=second, name="Ben", partner_id=first)
        return first, second

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        return self.goals.get(user_id)

    def save_goals(self, user_id: UUID, goals: UserGoals) -> None:
        self.goals[user_id] = goals


@dataclass
class InMemoryStreakRepository(StreakRepository):
    """In-memory streak repository for tests."""

    states: dict[UUID, StreakState] = field(default_factory=dict)
    weekly: dict[UUID, WeeklyStreakState] = field(default_factory=dict)
    intake: dict[tuple[UUID, date], DailyIntake] = field(default_factory=dict)
    badges: dict[UUID, set[str]] = field(default_factory=dict)
    saves: int = 0

    def get_streak_state(self, user_id: UUID) -> StreakState:
        return self.states.get(user_id, StreakState())

    def save_streak_state(self, user_id: UUID, state: StreakState) -> None:
        self.saves += 1
        self.states[user_id] = state

    def get_weekly_state(self, user_id: UUID) -> WeeklyStreakState:
        return self.weekly.get(user_id, WeeklyStreakState())

    def save_weekly_state(self, user_id: UUID, state: WeeklyStreakState) -> None:
        self.weekly[user_id] = state

    def get_daily_intake(self, user_id: UUID, day: date) -> DailyIntake | None:
        return self.intake.get((user_id, day))

    def set_goal_met(self, user_id: UUID, day: date, goal_met: bool) -> None:
        current = self.intake.get((user_id, day))
        calories = current.calories if current else 0.0
        self.intake[(user_id, day)] = DailyIntake(
            day=day, calories=calories, goal_met=goal_met
        )

    def list_unlocked_badges(self, user_id: UUID) -> set[str]:
        return set(self.badges.get(user_id, set()))

    def unlock_badges(self, user_id: UUID, badge_ids: list[str]) -> None:
        self.badges.setdefault(user_id, set()).update(badge_ids)


@dataclass
class InMemoryRestDayRepository(RestDayRepository):
    """In-memory rest day repository for tests."""

    states: dict[UUID, RestDayState] = field(default_factory=dict)

    def get_rest_days(self, user_id: UUID) -> RestDayState | None:
        return self.states.get(user_id)

    def save_rest_days(self, user_id: UUID, state: RestDayState) -> None:
        self.states[user_id] = state


@dataclass
class InMemoryShieldRepository(ShieldRepository):
    """In-memory shield repository for tests."""

    states: dict[UUID, ShieldState] = field(default_factory=dict)
    records: list[ShieldRecord] = field(default_factory=list)

    def get_shield_state(self, user_id: UUID) -> ShieldState | None:
        return self.states.get(user_id)

    def save_shield_state(self, user_id: UUID, state: ShieldState) -> None:
        self.states[user_id] = state

    def create_shield_record(self, record: ShieldRecord) -> None:
        self.records.append(record)

    def list_shielded_dates(self, user_id: UUID) -> list[date]:
        return [
            record.shielded_date
            for record in self.records
            if record.to_user_id == user_id
        ]

    def list_shields_given(self, user_id: UUID, limit: int) -> list[ShieldRecord]:
        given = [record for record in self.records if record.from_user_id == user_id]
        return list(reversed(given))[:limit]

    def list_shields_received(self, user_id: UUID, limit: int) -> list[ShieldRecord]:
        received = [record for record in self.records if record.to_user_id == user_id]
        return list(reversed(received))[:limit]


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[UUID, RecipeRecord] = field(default_factory=dict)
    ingredients: dict[UUID, list[ResolvedIngredient]] = field(default_factory=dict)

    def create_recipe(
        self,
        user_id: UUID,
        name: str,
        yield_weight: float,
        nutrition: NutritionPer100g,
    ) -> UUID:
        recipe_id = uuid4()
        self.recipes[recipe_id] = RecipeRecord(
            id=recipe_id,
            user_id=user_id,
            name=name,
            yield_weight=yield_weight,
            nutrition=nutrition,
        )
        return recipe_id

    def create_recipe_ingredients(
        self, recipe_id: UUID, ingredients: list[ResolvedIngredient]
    ) -> None:
        self.ingredients[recipe_id] = list(ingredients)

    def get_recipe(self, recipe_id: UUID) -> RecipeRecord | None:
        return self.recipes.get(recipe_id)


@dataclass
class InMemoryBudgetRepository(BudgetRepository):
    """In-memory daily totals for tests."""

    intake: list[tuple[UUID, DailyIntake]] = field(default_factory=list)

    def add(self, user_id: UUID, day: date, calories: float) -> None:
        self.intake.append((user_id, DailyIntake(day=day, calories=calories)))

    def list_daily_intake(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyIntake]:
        return [
            row
            for owner, row in self.intake
            if owner == user_id and start <= row.day <= end
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def streak_repository() -> InMemoryStreakRepository:
    return InMemoryStreakRepository()


@pytest.fixture
def rest_day_repository() -> InMemoryRestDayRepository:
    return InMemoryRestDayRepository()


@pytest.fixture
def shield_repository() -> InMemoryShieldRepository:
    return InMemoryShieldRepository()


@pytest.fixture
def profile_service(
    settings: Settings, profile_repository: InMemoryProfileRepository
) -> ProfileService:
    return ProfileService(
        repository=profile_repository,
        default_timezone=settings.default_timezone,
        default_daily_calorie_goal=settings.default_daily_calorie_goal,
        default_week_start_day=settings.default_week_start_day,
    )


@pytest.fixture
def streak_service(
    streak_repository: InMemoryStreakRepository,
    rest_day_repository: InMemoryRestDayRepository,
    shield_repository: InMemoryShieldRepository,
    profile_service: ProfileService,
) -> StreakService:
    return StreakService(
        repository=streak_repository,
        rest_day_repository=rest_day_repository,
        shield_repository=shield_repository,
        profile_service=profile_service,
    )


@pytest.fixture
def rest_day_service(
    rest_day_repository: InMemoryRestDayRepository, profile_service: ProfileService
) -> RestDayService:
    return RestDayService(rest_day_repository, profile_service)


@pytest.fixture
def shield_service(
    shield_repository: InMemoryShieldRepository,
    streak_repository: InMemoryStreakRepository,
    profile_service: ProfileService,
) -> ShieldService:
    return ShieldService(
        repository=shield_repository,
        streak_repository=streak_repository,
        profile_service=profile_service,
    )


@pytest.fixture
def container(
    settings: Settings,
    profile_service: ProfileService,
    streak_service: StreakService,
    rest_day_service: RestDayService,
    shield_service: ShieldService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        streak_service=streak_service,
        rest_day_service=rest_day_service,
        shield_service=shield_service,
        recipe_service=RecipeService(InMemoryRecipeRepository()),
        budget_service=BudgetService(
            repository=InMemoryBudgetRepository(),
            profile_service=profile_service,
            minimum_daily_budget=settings.minimum_daily_budget,
        ),
    )
