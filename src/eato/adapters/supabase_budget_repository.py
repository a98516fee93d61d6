"""Supabase repository for daily energy totals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from eato.adapters.supabase_rows import parse_date
from eato.domain.models import DailyIntake
from eato.services.budget import BudgetRepository


@dataclass
class SupabaseBudgetRepository(BudgetRepository):
    """Supabase implementation for daily totals."""

    client: Client

    def list_daily_intake(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyIntake]:
        """Return daily log rows between start and end, both inclusive."""
        response = (
            self.client.table("daily_logs")
            .select("date, total_calories, goal_met")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        intake = []
        for row in response.data or []:
            day = parse_date(row.get("date"))
            if day is None:
                continue
            intake.append(
                DailyIntake(
                    day=day,
                    calories=float(row.get("total_calories") or 0.0),
                    goal_met=row.get("goal_met"),
                )
            )
        return intake
