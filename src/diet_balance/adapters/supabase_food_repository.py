"""Supabase repository for the food catalog."""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_balance.domain.foods import FoodItem, Micronutrient, NutrientProfile
from diet_balance.services.entries import FoodRepository


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed catalog lookups with embedded nutrient profiles."""

    client: Client

    def get_foods(self, food_ids: Iterable[UUID]) -> dict[UUID, FoodItem]:
        """Return foods by id; ids missing from the catalog are omitted."""
        ids = sorted({str(food_id) for food_id in food_ids})
        if not ids:
            return {}
        response = (
            self.client.table("food_items")
            .select("id, name, category, nutrient_profiles(*)")
            .in_("id", ids)
            .execute()
        )
        foods = [_parse_food(row) for row in response.data or []]
        return {food.id: food for food in foods}


def _parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a food row with its embedded nutrient profile."""
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        category=str(row.get("category") or "OTHER"),
        nutrient_profile=_parse_profile(row.get("nutrient_profiles")),
    )


def _parse_profile(raw: object) -> NutrientProfile:
    # PostgREST embeds one-to-one relations as an object or a one-item list.
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    profile: dict[str, object] = raw if isinstance(raw, dict) else {}
    micronutrients_raw = profile.get("micronutrients") or {}
    micronutrients = {
        str(name): Micronutrient(
            amount=float(value.get("amount", 0.0)),
            unit=str(value.get("unit", "")),
        )
        for name, value in micronutrients_raw.items()
        if isinstance(value, dict)
    }
    serving_size = profile.get("serving_size_g")
    return NutrientProfile(
        calories_kcal=float(profile.get("calories_kcal") or 0.0),
        protein_g=float(profile.get("protein_g") or 0.0),
        carbs_g=float(profile.get("carbs_g") or 0.0),
        fat_g=float(profile.get("fat_g") or 0.0),
        fiber_g=float(profile.get("fiber_g") or 0.0),
        micronutrients=micronutrients,
        serving_size_g=float(serving_size) if serving_size is not None else None,
    )
