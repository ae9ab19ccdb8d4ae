"""Prioritized dietary recommendations from a nutrient report."""

from collections.abc import Mapping, Sequence

from diet_balance.domain.errors import InvalidInputError
from diet_balance.domain.reports import (
    NutrientAssessment,
    NutrientReport,
    NutrientStatus,
    Priority,
    Recommendation,
)

DEFAULT_LIMIT = 5
ESCALATE_BELOW = 30.0

FOOD_SUGGESTIONS: dict[str, tuple[str, ...]] = {
    "protein": ("Chicken Breast", "Egg", "Salmon", "Dal Tadka", "Palak Paneer"),
    "carbs": ("Brown Rice", "Chapati", "Banana", "Rajma"),
    "fat": ("Almonds", "Salmon", "Milk"),
    "fiber": ("Chole", "Rajma", "Broccoli", "Apple", "Dal Makhani"),
    "vitamin_a": ("Spinach", "Broccoli", "Palak Paneer"),
    "vitamin_c": ("Broccoli", "Apple", "Dal Palak"),
    "vitamin_d": ("Salmon", "Milk", "Egg"),
    "vitamin_e": ("Almonds", "Spinach"),
    "vitamin_k": ("Spinach", "Broccoli", "Dal Palak"),
    "vitamin_b12": ("Milk", "Egg", "Salmon"),
    "calcium": ("Milk", "Palak Paneer", "Paneer Butter Masala"),
    "iron": ("Spinach", "Chole", "Rajma", "Dal Palak"),
    "magnesium": ("Almonds", "Brown Rice", "Spinach"),
    "zinc": ("Chole", "Almonds", "Dal Makhani"),
    "potassium": ("Banana", "Broccoli", "Rajma"),
}

_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
_BAND_PRIORITY = {
    NutrientStatus.DEFICIENT: Priority.HIGH,
    NutrientStatus.LOW: Priority.MEDIUM,
}
_UNDEREATING = {NutrientStatus.DEFICIENT, NutrientStatus.LOW}


def recommend(
    report: NutrientReport,
    food_suggestions: Mapping[str, Sequence[str]] | None = None,
    limit: int = DEFAULT_LIMIT,
) -> list[Recommendation]:
    """Return recommendations for deficient and low nutrients.

    ``food_suggestions`` overrides or extends the built-in nutrient to food
    table. The list is ordered by priority, then by ascending percentage,
    and truncated to ``limit`` items.
    """
    if limit < 0:
        raise InvalidInputError(f"limit must not be negative, got {limit}")
    suggestions: dict[str, Sequence[str]] = dict(FOOD_SUGGESTIONS)
    if food_suggestions:
        suggestions.update(food_suggestions)
    calorie_deficient = report.calories.status in _UNDEREATING

    ranked: list[tuple[int, float, str, Recommendation]] = []
    for nutrient in report.nutrients:
        priority = _priority_for(nutrient, calorie_deficient)
        if priority is None:
            continue
        recommendation = Recommendation(
            nutrient_name=nutrient.name,
            priority=priority,
            message=_message_for(nutrient),
            example_foods=list(suggestions.get(nutrient.name, ())),
        )
        ranked.append(
            (_PRIORITY_RANK[priority], nutrient.percentage, nutrient.name, recommendation)
        )

    ranked.sort(key=lambda item: item[:3])
    return [item[3] for item in ranked[:limit]]


def nutrient_label(name: str) -> str:
    """Return a readable label for a nutrient key."""
    words = name.split("_")
    if words[0] == "vitamin" and len(words) > 1:
        return "vitamin " + " ".join(word.upper() for word in words[1:])
    if name == "carbs":
        return "carbohydrate"
    return " ".join(words)


def _priority_for(
    nutrient: NutrientAssessment, calorie_deficient: bool
) -> Priority | None:
    priority = _BAND_PRIORITY.get(nutrient.status)
    if priority is None:
        return None
    if (
        calorie_deficient
        and nutrient.percentage is not None
        and nutrient.percentage < ESCALATE_BELOW
    ):
        return Priority.HIGH
    return priority


def _message_for(nutrient: NutrientAssessment) -> str:
    label = nutrient_label(nutrient.name)
    amounts = (
        f"{nutrient.consumed_amount:.1f}{nutrient.unit} of "
        f"{nutrient.recommended_amount:g}{nutrient.unit}"
    )
    if nutrient.status is NutrientStatus.DEFICIENT:
        return (
            f"Your {label} intake is only {nutrient.percentage:.0f}% of your "
            f"daily goal ({amounts}). Add {label}-rich foods to your next meals."
        )
    return (
        f"Your {label} intake is at {nutrient.percentage:.0f}% of your daily "
        f"goal ({amounts}). A little more {label} would close the gap."
    )
