"""Domain models for chart data."""

from dataclasses import dataclass
from datetime import date

from diet_balance.domain.entries import MealType


@dataclass(frozen=True)
class DailyTrendPoint:
    """Macro totals for one day of a chart window."""

    day: date
    calories_kcal: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class MacroSplit:
    """Total macro grams over a chart window."""

    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class MealTypeSlice:
    """Calories logged under one meal type."""

    meal_type: MealType
    calories_kcal: float
    entry_count: int


@dataclass(frozen=True)
class TopFood:
    """Frequently logged food."""

    name: str
    times_logged: int
    total_calories_kcal: float


@dataclass(frozen=True)
class RadarPoint:
    """Capped percentage of goal for one nutrient."""

    nutrient: str
    percentage: float


@dataclass(frozen=True)
class ChartData:
    """All chart series for a window of days."""

    start_day: date
    days: int
    daily_trend: list[DailyTrendPoint]
    macro_split: MacroSplit
    meal_type_breakdown: list[MealTypeSlice]
    top_foods: list[TopFood]
    nutrient_radar: list[RadarPoint]
