"""Supabase repository for dietary entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from diet_balance.domain.entries import DietaryEntry, MealType
from diet_balance.services.entries import EntryRepository

_COLUMNS = "id, user_id, food_item_id, portion_g, portion_servings, meal_type, consumed_at"


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for reading logged entries."""

    client: Client

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[DietaryEntry]:
        """Return entries consumed in the time range."""
        response = (
            self.client.table("dietary_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("consumed_at", start.isoformat())
            .lt("consumed_at", end.isoformat())
            .order("consumed_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> DietaryEntry:
    return DietaryEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food_item_id=UUID(str(row["food_item_id"])),
        meal_type=MealType(str(row.get("meal_type") or MealType.SNACK.value).upper()),
        consumed_at=datetime.fromisoformat(str(row["consumed_at"])),
        portion_g=_optional_float(row.get("portion_g")),
        portion_servings=_optional_float(row.get("portion_servings")),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
