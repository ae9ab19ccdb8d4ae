"""Domain models for nutrition goals and biometrics."""

from dataclasses import dataclass, field
from enum import Enum

from diet_balance.domain.foods import Micronutrient


@dataclass(frozen=True)
class GoalSet:
    """Daily nutrient targets for a user."""

    calorie_goal: float
    protein_goal: float
    carbs_goal: float
    fat_goal: float
    fiber_goal: float
    micronutrient_goals: dict[str, Micronutrient] = field(default_factory=dict)


@dataclass(frozen=True)
class GoalBound:
    """Editing bounds for a single goal field."""

    min: float
    max: float
    step: float
    unit: str


@dataclass(frozen=True)
class BiometricProfile:
    """Optional body measurements used to suggest goals."""

    weight_kg: float | None = None
    height_cm: float | None = None
    age_years: int | None = None


class AgeGroup(str, Enum):
    """Age bands with their own micronutrient reference intakes."""

    AGE_1_3 = "AGE_1_3"
    AGE_4_8 = "AGE_4_8"
    AGE_9_13 = "AGE_9_13"
    AGE_14_18 = "AGE_14_18"
    ADULT = "ADULT"


class BmiCategory(str, Enum):
    """BMI classification bands."""

    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


@dataclass(frozen=True)
class GoalSuggestion:
    """Goal set suggested from a user's BMI."""

    bmi: float
    category: BmiCategory
    focus: str
    note: str
    goals: GoalSet


@dataclass(frozen=True)
class GoalPreset:
    """Named goal set users can start from."""

    name: str
    description: str
    goals: GoalSet


GOAL_FIELDS = ("calorie_goal", "protein_goal", "carbs_goal", "fat_goal", "fiber_goal")

GOAL_BOUNDS: dict[str, GoalBound] = {
    "calorie_goal": GoalBound(min=800, max=5000, step=50, unit="kcal"),
    "protein_goal": GoalBound(min=10, max=200, step=5, unit="g"),
    "carbs_goal": GoalBound(min=50, max=500, step=10, unit="g"),
    "fat_goal": GoalBound(min=10, max=200, step=5, unit="g"),
    "fiber_goal": GoalBound(min=5, max=80, step=1, unit="g"),
}

DEFAULT_GOALS = GoalSet(
    calorie_goal=2000,
    protein_goal=50,
    carbs_goal=300,
    fat_goal=65,
    fiber_goal=25,
)

# Adult daily reference intakes, in the units the food catalog uses.
REFERENCE_MICRONUTRIENT_GOALS: dict[str, Micronutrient] = {
    "vitamin_a": Micronutrient(amount=900, unit="mcg"),
    "vitamin_c": Micronutrient(amount=90, unit="mg"),
    "vitamin_d": Micronutrient(amount=15, unit="mcg"),
    "vitamin_e": Micronutrient(amount=15, unit="mg"),
    "vitamin_k": Micronutrient(amount=120, unit="mcg"),
    "vitamin_b12": Micronutrient(amount=2.4, unit="mcg"),
    "calcium": Micronutrient(amount=1000, unit="mg"),
    "iron": Micronutrient(amount=18, unit="mg"),
    "magnesium": Micronutrient(amount=400, unit="mg"),
    "zinc": Micronutrient(amount=11, unit="mg"),
    "potassium": Micronutrient(amount=3400, unit="mg"),
}


def _intakes(**amounts: float) -> dict[str, Micronutrient]:
    return {
        name: Micronutrient(amount=amount, unit=REFERENCE_MICRONUTRIENT_GOALS[name].unit)
        for name, amount in amounts.items()
    }


# Youth bands use the higher of the two sex-specific values where they differ.
MICRONUTRIENT_GOALS_BY_AGE_GROUP: dict[AgeGroup, dict[str, Micronutrient]] = {
    AgeGroup.AGE_1_3: _intakes(
        vitamin_a=300,
        vitamin_c=15,
        vitamin_d=15,
        vitamin_e=6,
        vitamin_k=30,
        vitamin_b12=0.9,
        calcium=700,
        iron=7,
        magnesium=80,
        zinc=3,
        potassium=2000,
    ),
    AgeGroup.AGE_4_8: _intakes(
        vitamin_a=400,
        vitamin_c=25,
        vitamin_d=15,
        vitamin_e=7,
        vitamin_k=55,
        vitamin_b12=1.2,
        calcium=1000,
        iron=10,
        magnesium=130,
        zinc=5,
        potassium=2300,
    ),
    AgeGroup.AGE_9_13: _intakes(
        vitamin_a=600,
        vitamin_c=45,
        vitamin_d=15,
        vitamin_e=11,
        vitamin_k=60,
        vitamin_b12=1.8,
        calcium=1300,
        iron=8,
        magnesium=240,
        zinc=8,
        potassium=2500,
    ),
    AgeGroup.AGE_14_18: _intakes(
        vitamin_a=900,
        vitamin_c=75,
        vitamin_d=15,
        vitamin_e=15,
        vitamin_k=75,
        vitamin_b12=2.4,
        calcium=1300,
        iron=15,
        magnesium=410,
        zinc=11,
        potassium=3000,
    ),
    AgeGroup.ADULT: REFERENCE_MICRONUTRIENT_GOALS,
}

GOAL_PRESETS: tuple[GoalPreset, ...] = (
    GoalPreset(
        name="Weight Loss",
        description="Lower calories, moderate protein",
        goals=GoalSet(
            calorie_goal=1500, protein_goal=60, carbs_goal=180, fat_goal=45, fiber_goal=30
        ),
    ),
    GoalPreset(
        name="Maintenance",
        description="Balanced macro distribution",
        goals=GoalSet(
            calorie_goal=2000, protein_goal=50, carbs_goal=250, fat_goal=65, fiber_goal=25
        ),
    ),
    GoalPreset(
        name="Muscle Building",
        description="High protein, higher calories",
        goals=GoalSet(
            calorie_goal=2500, protein_goal=100, carbs_goal=300, fat_goal=80, fiber_goal=30
        ),
    ),
    GoalPreset(
        name="Balanced Indian",
        description="Traditional balanced Indian diet",
        goals=GoalSet(
            calorie_goal=2000, protein_goal=55, carbs_goal=270, fat_goal=60, fiber_goal=32
        ),
    ),
)
