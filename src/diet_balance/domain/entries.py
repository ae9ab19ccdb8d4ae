"""Domain models for logged meals."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class MealType(str, Enum):
    """Meal slot an entry was logged under."""

    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    SNACK = "SNACK"


@dataclass(frozen=True)
class DietaryEntry:
    """One logged consumption of a catalog food.

    Exactly one of ``portion_g`` and ``portion_servings`` is expected.
    """

    id: UUID
    user_id: UUID
    food_item_id: UUID
    meal_type: MealType
    consumed_at: datetime
    portion_g: float | None = None
    portion_servings: float | None = None
