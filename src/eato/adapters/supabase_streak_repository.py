"""Supabase repository for streak counters, daily results and badges."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from eato.adapters.supabase_rows import format_dates, parse_date, parse_dates
from eato.domain.models import DailyIntake
from eato.domain.streaks import StreakState
from eato.domain.weekly_streaks import WeeklyStreakState
from eato.services.streaks import StreakRepository

_STREAK_COLUMNS = (
    "current_streak, longest_streak, goal_streak, longest_goal_streak, "
    "last_log_date, streak_freezes"
)
_WEEKLY_COLUMNS = (
    "weekly_streak, longest_weekly_streak, current_week_days, week_start_date, "
    "week_logged_days"
)


@dataclass
class SupabaseStreakRepository(StreakRepository):
    """Supabase implementation for streak persistence."""

    client: Client

    def get_streak_state(self, user_id: UUID) -> StreakState:
        """Return the streak counters, zeroed for unknown users."""
        row = self._user_row(user_id, _STREAK_COLUMNS)
        if row is None:
            return StreakState()
        return StreakState(
            current_streak=int(row.get("current_streak") or 0),
            longest_streak=int(row.get("longest_streak") or 0),
            goal_streak=int(row.get("goal_streak") or 0),
            longest_goal_streak=int(row.get("longest_goal_streak") or 0),
            last_log_date=parse_date(row.get("last_log_date")),
            streak_freezes=int(row.get("streak_freezes") or 0),
        )

    def save_streak_state(self, user_id: UUID, state: StreakState) -> None:
        """Update the streak counters of a user."""
        self.client.table("users").update(
            {
                "current_streak": state.current_streak,
                "longest_streak": state.longest_streak,
                "goal_streak": state.goal_streak,
                "longest_goal_streak": state.longest_goal_streak,
                "last_log_date": state.last_log_date.isoformat()
                if state.last_log_date
                else None,
                "streak_freezes": state.streak_freezes,
            }
        ).eq("id", str(user_id)).execute()

    def get_weekly_state(self, user_id: UUID) -> WeeklyStreakState:
        """Return the weekly streak counters, zeroed for unknown users."""
        row = self._user_row(user_id, _WEEKLY_COLUMNS)
        if row is None:
            return WeeklyStreakState()
        return WeeklyStreakState(
            weekly_streak=int(row.get("weekly_streak") or 0),
            longest_weekly_streak=int(row.get("longest_weekly_streak") or 0),
            current_week_days=int(row.get("current_week_days") or 0),
            week_start_date=parse_date(row.get("week_start_date")),
            logged_days=frozenset(parse_dates(row.get("week_logged_days"))),
        )

    def save_weekly_state(self, user_id: UUID, state: WeeklyStreakState) -> None:
        """Update the weekly streak counters of a user."""
        self.client.table("users").update(
            {
                "weekly_streak": state.weekly_streak,
                "longest_weekly_streak": state.longest_weekly_streak,
                "current_week_days": state.current_week_days,
                "week_start_date": state.week_start_date.isoformat()
                if state.week_start_date
                else None,
                "week_logged_days": format_dates(state.logged_days),
            }
        ).eq("id", str(user_id)).execute()

    def get_daily_intake(self, user_id: UUID, day: date) -> DailyIntake | None:
        """Return the daily log row for a day."""
        response = (
            self.client.table("daily_logs")
            .select("date, total_calories, goal_met")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return DailyIntake(
            day=parse_date(row.get("date")) or day,
            calories=float(row.get("total_calories") or 0.0),
            goal_met=row.get("goal_met"),
        )

    def set_goal_met(self, user_id: UUID, day: date, goal_met: bool) -> None:
        """Record the on-goal result of a closed day."""
        self.client.table("daily_logs").upsert(
            {"user_id": str(user_id), "date": day.isoformat(), "goal_met": goal_met},
            on_conflict="user_id,date",
        ).execute()

    def list_unlocked_badges(self, user_id: UUID) -> set[str]:
        """Return the ids of badges the user holds."""
        response = (
            self.client.table("user_badges")
            .select("badge_id")
            .eq("user_id", str(user_id))
            .execute()
        )
        return {row["badge_id"] for row in response.data or []}

    def unlock_badges(self, user_id: UUID, badge_ids: list[str]) -> None:
        """Insert newly unlocked badges."""
        unlocked_at = datetime.now(tz=UTC).isoformat()
        payload = [
            {"user_id": str(user_id), "badge_id": badge_id, "unlocked_at": unlocked_at}
            for badge_id in badge_ids
        ]
        if payload:
            self.client.table("user_badges").insert(payload).execute()

    def _user_row(self, user_id: UUID, columns: str) -> dict[str, object] | None:
        response = (
            self.client.table("users")
            .select(columns)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]
