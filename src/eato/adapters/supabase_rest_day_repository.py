"""Supabase repository for rest days."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from eato.adapters.supabase_rows import format_dates, parse_date, parse_dates
from eato.domain.rest_days import MAX_REST_DAYS_PER_MONTH, RestDayState
from eato.services.rest_days import RestDayRepository


@dataclass
class SupabaseRestDayRepository(RestDayRepository):
    """Supabase implementation for rest day persistence."""

    client: Client

    def get_rest_days(self, user_id: UUID) -> RestDayState | None:
        """Return the rest day columns; None before the first reset."""
        response = (
            self.client.table("users")
            .select("rest_day_dates, rest_days_remaining, last_rest_day_reset")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        last_reset = parse_date(row.get("last_rest_day_reset"))
        if last_reset is None:
            return None
        remaining = row.get("rest_days_remaining")
        return RestDayState(
            last_rest_day_reset=last_reset,
            rest_day_dates=frozenset(parse_dates(row.get("rest_day_dates"))),
            rest_days_remaining=MAX_REST_DAYS_PER_MONTH
            if remaining is None
            else int(remaining),
        )

    def save_rest_days(self, user_id: UUID, state: RestDayState) -> None:
        """Update the rest day columns of a user."""
        self.client.table("users").update(
            {
                "rest_day_dates": format_dates(state.rest_day_dates),
                "rest_days_remaining": state.rest_days_remaining,
                "last_rest_day_reset": state.last_rest_day_reset.isoformat(),
            }
        ).eq("id", str(user_id)).execute()
