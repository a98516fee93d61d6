"""Supabase repository for user profiles and goals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from eato.domain.models import UserGoals, UserRecord
from eato.services.profile import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user row, if present."""
        response = (
            self.client.table("users")
            .select("id, name, partner_id")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        partner_id = row.get("partner_id")
        return UserRecord(
            id=UUID(row["id"]),
            name=row.get("name"),
            partner_id=UUID(partner_id) if partner_id else None,
        )

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return the stored goals; None until a daily goal has been set."""
        response = (
            self.client.table("users")
            .select(
                "daily_calorie_goal, weekly_calorie_budget, week_start_day, timezone"
            )
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if row.get("daily_calorie_goal") is None:
            return None
        weekly_budget = row.get("weekly_calorie_budget")
        return UserGoals(
            daily_calorie_goal=int(row["daily_calorie_goal"]),
            weekly_calorie_budget=int(weekly_budget)
            if weekly_budget is not None
            else None,
            week_start_day=int(row.get("week_start_day") or 0),
            timezone=row.get("timezone") or "UTC",
        )

    def save_goals(self, user_id: UUID, goals: UserGoals) -> None:
        """Update the goal columns of a user."""
        self.client.table("users").update(
            {
                "daily_calorie_goal": goals.daily_calorie_goal,
                "weekly_calorie_budget": goals.weekly_calorie_budget,
                "week_start_day": goals.week_start_day,
                "timezone": goals.timezone,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(user_id)).execute()
