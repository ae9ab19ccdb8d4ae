"""Goal evaluation, BMI classification and goal derivation."""

import math

from diet_balance.domain.errors import InvalidInputError
from diet_balance.domain.foods import Micronutrient
from diet_balance.domain.goals import (
    DEFAULT_GOALS,
    GOAL_FIELDS,
    MICRONUTRIENT_GOALS_BY_AGE_GROUP,
    AgeGroup,
    BiometricProfile,
    BmiCategory,
    GoalSet,
    GoalSuggestion,
)
from diet_balance.domain.reports import (
    CALORIES,
    MACRONUTRIENTS,
    NutrientAssessment,
    NutrientReport,
    NutrientStatus,
    NutrientTotals,
)

UNDERWEIGHT_BELOW = 18.5
OVERWEIGHT_FROM = 25.0
OBESE_FROM = 30.0

SUFFICIENT_FROM = 100.0
ADEQUATE_FROM = 80.0
LOW_FROM = 50.0

DISPLAY_CAP = 100.0

_BMI_SUGGESTIONS: dict[BmiCategory, tuple[str, str, GoalSet]] = {
    BmiCategory.UNDERWEIGHT: (
        "Underweight focus",
        "Boost calories and protein to support healthy weight gain.",
        GoalSet(
            calorie_goal=2400, protein_goal=90, carbs_goal=320, fat_goal=80, fiber_goal=28
        ),
    ),
    BmiCategory.NORMAL: (
        "Maintenance focus",
        "Balanced macros to maintain weight and energy.",
        GoalSet(
            calorie_goal=2000, protein_goal=70, carbs_goal=260, fat_goal=65, fiber_goal=28
        ),
    ),
    BmiCategory.OVERWEIGHT: (
        "Fat-loss focus",
        "Slight calorie reduction with higher protein and fiber.",
        GoalSet(
            calorie_goal=1700, protein_goal=95, carbs_goal=190, fat_goal=55, fiber_goal=32
        ),
    ),
    BmiCategory.OBESE: (
        "Metabolic reset",
        "Lower carbs, higher protein and fiber for satiety.",
        GoalSet(
            calorie_goal=1500, protein_goal=110, carbs_goal=160, fat_goal=50, fiber_goal=35
        ),
    ),
}


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Return body mass index from weight in kg and height in cm."""
    _require_positive("weight_kg", weight_kg)
    _require_positive("height_cm", height_cm)
    height_m = height_cm / 100
    return weight_kg / (height_m**2)


def classify_bmi(bmi: float) -> BmiCategory:
    """Classify a BMI value; each band includes its lower bound."""
    _require_positive("bmi", bmi)
    if bmi < UNDERWEIGHT_BELOW:
        return BmiCategory.UNDERWEIGHT
    if bmi < OVERWEIGHT_FROM:
        return BmiCategory.NORMAL
    if bmi < OBESE_FROM:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def classify_age_group(age_years: int) -> AgeGroup:
    """Return the reference-intake band for an age in whole years."""
    if age_years < 1:
        raise InvalidInputError(f"age must be at least 1 year, got {age_years!r}")
    if age_years <= 3:
        return AgeGroup.AGE_1_3
    if age_years <= 8:
        return AgeGroup.AGE_4_8
    if age_years <= 13:
        return AgeGroup.AGE_9_13
    if age_years <= 18:
        return AgeGroup.AGE_14_18
    return AgeGroup.ADULT


def reference_micronutrient_goals(
    biometrics: BiometricProfile | None,
) -> dict[str, Micronutrient]:
    """Return the micronutrient intakes for a profile's age, adult when unknown."""
    if biometrics is None or biometrics.age_years is None:
        return dict(MICRONUTRIENT_GOALS_BY_AGE_GROUP[AgeGroup.ADULT])
    group = classify_age_group(biometrics.age_years)
    return dict(MICRONUTRIENT_GOALS_BY_AGE_GROUP[group])


def bmi_of(biometrics: BiometricProfile) -> float | None:
    """Return the BMI for a profile, or None when it is incomplete."""
    if biometrics.weight_kg is None or biometrics.height_cm is None:
        return None
    return calculate_bmi(biometrics.weight_kg, biometrics.height_cm)


def suggest_goals(biometrics: BiometricProfile) -> GoalSuggestion | None:
    """Return the BMI-based goal suggestion for a profile, if derivable."""
    bmi = bmi_of(biometrics)
    if bmi is None:
        return None
    category = classify_bmi(bmi)
    focus, note, goals = _BMI_SUGGESTIONS[category]
    return GoalSuggestion(
        bmi=round(bmi, 1),
        category=category,
        focus=focus,
        note=note,
        goals=goals,
    )


def derive_goals_from_biometrics(biometrics: BiometricProfile) -> GoalSet:
    """Return goals for a profile's BMI band, or the defaults without BMI."""
    suggestion = suggest_goals(biometrics)
    if suggestion is None:
        return DEFAULT_GOALS
    return suggestion.goals


def validate_goals(goals: GoalSet) -> None:
    """Ensure every goal value is a positive number."""
    for name in GOAL_FIELDS:
        _require_positive(name, getattr(goals, name))
    for name, target in goals.micronutrient_goals.items():
        _require_positive(f"{name} goal", target.amount)


def percentage_of(consumed: float, recommended: float | None) -> float | None:
    """Return consumption as an uncapped percentage of the recommendation."""
    if recommended is None or not math.isfinite(recommended) or recommended <= 0:
        return None
    return consumed * 100 / recommended


def classify_percentage(percentage: float | None) -> NutrientStatus:
    """Map an uncapped percentage of goal to a status band."""
    if percentage is None:
        return NutrientStatus.UNKNOWN
    if percentage >= SUFFICIENT_FROM:
        return NutrientStatus.SUFFICIENT
    if percentage >= ADEQUATE_FROM:
        return NutrientStatus.ADEQUATE
    if percentage >= LOW_FROM:
        return NutrientStatus.LOW
    return NutrientStatus.DEFICIENT


def evaluate(totals: NutrientTotals, goals: GoalSet) -> NutrientReport:
    """Compare totals with goals and score nutrient balance.

    Calories are assessed but left out of the overall score, which averages
    the percentages of the other nutrients capped at 100. With no
    contributing entries every status is UNKNOWN and the score is None.
    """
    validate_goals(goals)
    has_data = not totals.is_empty

    calories = _assess(CALORIES, totals.calories_kcal, goals.calorie_goal, "kcal", has_data)
    nutrients = [
        _assess(name, totals.amount(name), getattr(goals, f"{name}_goal"), "g", has_data)
        for name in MACRONUTRIENTS
    ]
    for name in sorted(set(goals.micronutrient_goals) | set(totals.micronutrients)):
        target = goals.micronutrient_goals.get(name)
        consumed_unit = totals.micronutrient_units.get(name)
        unit = target.unit if target is not None else consumed_unit or ""
        recommended = target.amount if target is not None else None
        comparable = consumed_unit is None or consumed_unit == unit
        nutrients.append(
            _assess(
                name,
                totals.amount(name),
                recommended,
                unit,
                has_data and comparable,
            )
        )

    overall_score = None
    if has_data:
        overall_score = _overall_score(
            [
                nutrient.display_percentage
                for nutrient in nutrients
                if nutrient.display_percentage is not None
            ]
        )
    return NutrientReport(
        calories=calories,
        nutrients=nutrients,
        overall_score=overall_score,
        entry_count=totals.entry_count,
    )


def _assess(
    name: str,
    consumed: float,
    recommended: float | None,
    unit: str,
    scorable: bool,
) -> NutrientAssessment:
    percentage = percentage_of(consumed, recommended) if scorable else None
    display = min(percentage, DISPLAY_CAP) if percentage is not None else None
    return NutrientAssessment(
        name=name,
        consumed_amount=consumed,
        recommended_amount=recommended,
        unit=unit,
        percentage=percentage,
        display_percentage=display,
        status=classify_percentage(percentage),
    )


def _overall_score(capped: list[float]) -> int | None:
    if not capped:
        return None
    mean = math.fsum(capped) / len(capped)
    return max(0, min(100, math.floor(mean + 0.5)))


def _require_positive(name: str, value: float | None) -> None:
    if value is None or not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"{name} must be a positive number, got {value!r}")
