"""Supabase repository for partner shields."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from eato.adapters.supabase_rows import parse_date, parse_dates, parse_timestamp
from eato.domain.shields import MAX_SHIELDS_PER_MONTH, ShieldRecord, ShieldState
from eato.services.shields import ShieldRepository

_RECORD_COLUMNS = "from_user_id, to_user_id, shielded_date, created_at"


@dataclass
class SupabaseShieldRepository(ShieldRepository):
    """Supabase implementation for shield allowances and the shield log."""

    client: Client

    def get_shield_state(self, user_id: UUID) -> ShieldState | None:
        """Return the shield columns; None before the first reset."""
        response = (
            self.client.table("users")
            .select("partner_shields, shields_used_this_month, last_shield_reset")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        last_reset = parse_date(row.get("last_shield_reset"))
        if last_reset is None:
            return None
        shields = row.get("partner_shields")
        return ShieldState(
            last_shield_reset=last_reset,
            partner_shields=MAX_SHIELDS_PER_MONTH if shields is None else int(shields),
            shields_used_this_month=tuple(
                parse_dates(row.get("shields_used_this_month"))
            ),
        )

    def save_shield_state(self, user_id: UUID, state: ShieldState) -> None:
        """Update the shield columns of a user."""
        self.client.table("users").update(
            {
                "partner_shields": state.partner_shields,
                "shields_used_this_month": [
                    day.isoformat() for day in state.shields_used_this_month
                ],
                "last_shield_reset": state.last_shield_reset.isoformat(),
            }
        ).eq("id", str(user_id)).execute()

    def create_shield_record(self, record: ShieldRecord) -> None:
        """Insert a row into the shield log."""
        response = (
            self.client.table("partner_shields")
            .insert(
                {
                    "from_user_id": str(record.from_user_id),
                    "to_user_id": str(record.to_user_id),
                    "shielded_date": record.shielded_date.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create shield record")

    def list_shielded_dates(self, user_id: UUID) -> list[date]:
        """Return the days shielded for a user."""
        response = (
            self.client.table("partner_shields")
            .select("shielded_date")
            .eq("to_user_id", str(user_id))
            .execute()
        )
        return parse_dates([row.get("shielded_date") for row in response.data or []])

    def list_shields_given(self, user_id: UUID, limit: int) -> list[ShieldRecord]:
        """Return the most recent shields spent by a user."""
        return self._list_records("from_user_id", user_id, limit)

    def list_shields_received(self, user_id: UUID, limit: int) -> list[ShieldRecord]:
        """Return the most recent shields received by a user."""
        return self._list_records("to_user_id", user_id, limit)

    def _list_records(
        self, column: str, user_id: UUID, limit: int
    ) -> list[ShieldRecord]:
        response = (
            self.client.table("partner_shields")
            .select(_RECORD_COLUMNS)
            .eq(column, str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]


def _parse_record(row: dict[str, object]) -> ShieldRecord:
    shielded_date = parse_date(row.get("shielded_date"))
    if shielded_date is None:
        raise RuntimeError("Shield record without a shielded date")
    return ShieldRecord(
        from_user_id=UUID(str(row["from_user_id"])),
        to_user_id=UUID(str(row["to_user_id"])),
        shielded_date=shielded_date,
        created_at=parse_timestamp(row.get("created_at")),
    )
