"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from eato.adapters.supabase_budget_repository import SupabaseBudgetRepository
from eato.adapters.supabase_profile_repository import SupabaseProfileRepository
from eato.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from eato.adapters.supabase_rest_day_repository import SupabaseRestDayRepository
from eato.adapters.supabase_shield_repository import SupabaseShieldRepository
from eato.adapters.supabase_streak_repository import SupabaseStreakRepository
from eato.app_logging import configure_logging
from eato.config import Settings
from eato.services.budget import BudgetService
from eato.services.profile import ProfileService
from eato.services.recipes import RecipeService
from eato.services.rest_days import RestDayService
from eato.services.shields import ShieldService
from eato.services.streaks import StreakService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    streak_service: StreakService
    rest_day_service: RestDayService
    shield_service: ShieldService
    recipe_service: RecipeService
    budget_service: BudgetService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    streak_repository = SupabaseStreakRepository(supabase_client)
    rest_day_repository = SupabaseRestDayRepository(supabase_client)
    shield_repository = SupabaseShieldRepository(supabase_client)
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    budget_repository = SupabaseBudgetRepository(supabase_client)

    profile_service = ProfileService(
        repository=profile_repository,
        default_timezone=resolved_settings.default_timezone,
        default_daily_calorie_goal=resolved_settings.default_daily_calorie_goal,
        default_week_start_day=resolved_settings.default_week_start_day,
    )
    streak_service = StreakService(
        repository=streak_repository,
        rest_day_repository=rest_day_repository,
        shield_repository=shield_repository,
        profile_service=profile_service,
        reminder_hour=resolved_settings.streak_reminder_hour,
    )
    rest_day_service = RestDayService(rest_day_repository, profile_service)
    shield_service = ShieldService(
        repository=shield_repository,
        streak_repository=streak_repository,
        profile_service=profile_service,
    )
    recipe_service = RecipeService(recipe_repository)
    budget_service = BudgetService(
        repository=budget_repository,
        profile_service=profile_service,
        minimum_daily_budget=resolved_settings.minimum_daily_budget,
    )

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        streak_service=streak_service,
        rest_day_service=rest_day_service,
        shield_service=shield_service,
        recipe_service=recipe_service,
        budget_service=budget_service,
    )
