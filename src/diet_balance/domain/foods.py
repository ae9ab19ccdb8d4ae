"""Domain models for catalog foods."""

from dataclasses import dataclass, field
from uuid import UUID

DEFAULT_SERVING_SIZE_G = 100.0


@dataclass(frozen=True)
class Micronutrient:
    """Amount of a micronutrient with its unit."""

    amount: float
    unit: str


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient content of a food per declared serving size."""

    calories_kcal: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float = 0.0
    micronutrients: dict[str, Micronutrient] = field(default_factory=dict)
    serving_size_g: float | None = DEFAULT_SERVING_SIZE_G


@dataclass(frozen=True)
class FoodItem:
    """Catalog food with its nutrient profile."""

    id: UUID
    name: str
    category: str
    nutrient_profile: NutrientProfile
