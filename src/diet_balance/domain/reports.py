"""Domain models for aggregated intake, reports and recommendations."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from diet_balance.domain.entries import MealType

CALORIES = "calories"
MACRONUTRIENTS = ("protein", "carbs", "fat", "fiber")


class WarningKind(str, Enum):
    """Recoverable data inconsistencies found while aggregating."""

    UNKNOWN_FOOD = "UNKNOWN_FOOD"
    INVALID_SERVING_SIZE = "INVALID_SERVING_SIZE"
    UNIT_MISMATCH = "UNIT_MISMATCH"


@dataclass(frozen=True)
class AggregationWarning:
    """Warning attached to aggregated totals."""

    kind: WarningKind
    message: str
    entry_id: UUID | None = None


@dataclass(frozen=True)
class NutrientTotals:
    """Accumulated nutrient amounts for a set of entries."""

    calories_kcal: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    micronutrients: dict[str, float] = field(default_factory=dict)
    micronutrient_units: dict[str, str] = field(default_factory=dict)
    entry_count: int = 0
    first_consumed_at: datetime | None = None
    last_consumed_at: datetime | None = None
    warnings: list[AggregationWarning] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Return True when no entry contributed to the totals."""
        return self.entry_count == 0

    def amount(self, name: str) -> float:
        """Return the accumulated amount for a nutrient name."""
        if name == CALORIES:
            return self.calories_kcal
        macros = {
            "protein": self.protein_g,
            "carbs": self.carbs_g,
            "fat": self.fat_g,
            "fiber": self.fiber_g,
        }
        if name in macros:
            return macros[name]
        return self.micronutrients.get(name, 0.0)


class NutrientStatus(str, Enum):
    """Adequacy band for a nutrient's percentage of goal."""

    DEFICIENT = "DEFICIENT"
    LOW = "LOW"
    ADEQUATE = "ADEQUATE"
    SUFFICIENT = "SUFFICIENT"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class NutrientAssessment:
    """Consumption of one nutrient compared with its goal."""

    name: str
    consumed_amount: float
    recommended_amount: float | None
    unit: str
    percentage: float | None
    display_percentage: float | None
    status: NutrientStatus


@dataclass(frozen=True)
class NutrientReport:
    """Scored comparison of totals against goals."""

    calories: NutrientAssessment
    nutrients: list[NutrientAssessment]
    overall_score: int | None
    entry_count: int

    def get(self, name: str) -> NutrientAssessment | None:
        """Return the assessment for a nutrient name, if tracked."""
        if name == CALORIES:
            return self.calories
        for nutrient in self.nutrients:
            if nutrient.name == name:
                return nutrient
        return None


class Priority(str, Enum):
    """Urgency of a recommendation."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class Recommendation:
    """Suggested dietary adjustment for one nutrient."""

    nutrient_name: str
    priority: Priority
    message: str
    example_foods: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NutritionAnalysis:
    """Pipeline output for a period."""

    period: str
    start_day: date
    days: int
    totals: NutrientTotals
    report: NutrientReport
    recommendations: list[Recommendation]


@dataclass(frozen=True)
class EntryNutrition:
    """A logged entry with the nutrition it contributed."""

    entry_id: UUID
    food_name: str
    meal_type: MealType
    consumed_at: datetime
    portion_g: float
    calories_kcal: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float


@dataclass(frozen=True)
class DayHistory:
    """Entries and totals for one local day."""

    day: date
    totals: NutrientTotals
    entries: list[EntryNutrition]
