"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from diet_balance.adapters.supabase_entry_repository import SupabaseEntryRepository
from diet_balance.adapters.supabase_food_repository import SupabaseFoodRepository
from diet_balance.adapters.supabase_goal_repository import SupabaseGoalRepository
from diet_balance.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_balance.domain.entries import MealType
from diet_balance.domain.foods import Micronutrient
from diet_balance.domain.goals import GoalSet


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    selected: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, columns: str = "*") -> "FakeTable":
        self._action = "select"
        self.selected.append(columns)
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}>=", value))
        return self

    def lt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}<", value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


GOAL_ROW = {
    "calorie_goal": 1800,
    "protein_goal": 90,
    "carbs_goal": 200,
    "fat_goal": 60,
    "fiber_goal": 30,
    "micronutrient_goals": {"iron": {"amount": 18, "unit": "mg"}},
}


def test_supabase_entry_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("dietary_entries")
    user_id = uuid4()
    food_id = uuid4()
    table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "food_item_id": str(food_id),
                "portion_g": 150,
                "portion_servings": None,
                "meal_type": "lunch",
                "consumed_at": "2024-03-10T12:30:00+00:00",
            }
        ],
    )
    start = datetime(2024, 3, 10, tzinfo=UTC)
    end = datetime(2024, 3, 11, tzinfo=UTC)

    entries = SupabaseEntryRepository(client).list_entries(user_id, start, end)

    assert len(entries) == 1
    assert entries[0].food_item_id == food_id
    assert entries[0].meal_type is MealType.LUNCH
    assert entries[0].portion_g == 150.0
    assert entries[0].portion_servings is None
    assert entries[0].consumed_at == datetime(2024, 3, 10, 12, 30, tzinfo=UTC)
    assert ("user_id", str(user_id)) in table.last_filters
    assert ("consumed_at>=", start.isoformat()) in table.last_filters
    assert ("consumed_at<", end.isoformat()) in table.last_filters


def test_supabase_entry_repository_defaults_null_meal_type_to_snack() -> None:
    client = FakeSupabaseClient()
    client.table("dietary_entries").queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(uuid4()),
                "food_item_id": str(uuid4()),
                "portion_g": 80,
                "portion_servings": None,
                "meal_type": None,
                "consumed_at": "2024-03-10T16:00:00+00:00",
            }
        ],
    )
    start = datetime(2024, 3, 10, tzinfo=UTC)

    entries = SupabaseEntryRepository(client).list_entries(
        uuid4(), start, datetime(2024, 3, 11, tzinfo=UTC)
    )

    assert entries[0].meal_type is MealType.SNACK

def test_supabase_food_repository_parses_embedded_profiles() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_items")
    listed_id = uuid4()
    object_id = uuid4()
    table.queue(
        "select",
        [
            {
                "id": str(listed_id),
                "name": "Palak Paneer",
                "category": "INDIAN",
                "nutrient_profiles": [
                    {
                        "calories_kcal": 180,
                        "protein_g": 9.5,
                        "carbs_g": 8,
                        "fat_g": 13,
                        "fiber_g": 2.5,
                        "serving_size_g": 150,
                        "micronutrients": {"iron": {"amount": 2.8, "unit": "mg"}},
                    }
                ],
            },
            {
                "id": str(object_id),
                "name": "Banana",
                "category": None,
                "nutrient_profiles": {"calories_kcal": 89, "protein_g": 1.1},
            },
        ],
    )

    foods = SupabaseFoodRepository(client).get_foods([listed_id, object_id])

    paneer = foods[listed_id].nutrient_profile
    assert paneer.serving_size_g == 150
    assert paneer.micronutrients == {"iron": Micronutrient(amount=2.8, unit="mg")}
    banana = foods[object_id]
    assert banana.category == "OTHER"
    assert banana.nutrient_profile.calories_kcal == 89
    assert banana.nutrient_profile.carbs_g == 0
    assert banana.nutrient_profile.serving_size_g is None


def test_supabase_food_repository_skips_empty_lookup() -> None:
    client = FakeSupabaseClient()

    assert SupabaseFoodRepository(client).get_foods([]) == {}
    assert "food_items" not in client.tables


def test_supabase_goal_repository_inserts_then_updates() -> None:
    client = FakeSupabaseClient()
    table = client.table("nutrition_goals")
    user_id = uuid4()
    goals = GoalSet(
        calorie_goal=1800,
        protein_goal=90,
        carbs_goal=200,
        fat_goal=60,
        fiber_goal=30,
        micronutrient_goals={"iron": Micronutrient(18, "mg")},
    )
    repository = SupabaseGoalRepository(client)

    table.queue("select", [])
    table.queue("insert", [GOAL_ROW])
    created = repository.save_goals(user_id, goals)

    assert created == goals
    assert table.last_payload["user_id"] == str(user_id)
    assert table.last_payload["protein_goal"] == 90
    assert table.last_payload["micronutrient_goals"] == {
        "iron": {"amount": 18, "unit": "mg"}
    }

    table.queue("select", [GOAL_ROW])
    table.queue("update", [GOAL_ROW])
    repository.save_goals(user_id, goals)

    assert "user_id" not in table.last_payload


def test_supabase_goal_repository_get_goals() -> None:
    client = FakeSupabaseClient()
    table = client.table("nutrition_goals")
    repository = SupabaseGoalRepository(client)

    assert repository.get_goals(uuid4()) is None

    table.queue("select", [GOAL_ROW])
    goals = repository.get_goals(uuid4())

    assert goals is not None
    assert goals.calorie_goal == 1800
    assert goals.micronutrient_goals["iron"].unit == "mg"


def test_supabase_goal_repository_raises_on_failed_save() -> None:
    client = FakeSupabaseClient()
    goals = GoalSet(
        calorie_goal=1800, protein_goal=90, carbs_goal=200, fat_goal=60, fiber_goal=30
    )

    with pytest.raises(RuntimeError):
        SupabaseGoalRepository(client).save_goals(uuid4(), goals)


def test_supabase_profile_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_profiles")
    table.queue("select", [{"weight_kg": 72.5, "height_cm": None}])
    table.queue("select", [{"timezone": "Asia/Kolkata"}])
    repository = SupabaseProfileRepository(client)

    biometrics = repository.get_biometrics(uuid4())

    assert biometrics is not None
    assert biometrics.weight_kg == 72.5
    assert biometrics.height_cm is None
    assert biometrics.age_years is None
    assert repository.get_timezone(uuid4()) == "Asia/Kolkata"
    assert repository.get_timezone(uuid4()) is None


def test_supabase_profile_repository_reads_age() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_profiles")
    table.queue("select", [{"weight_kg": 48, "height_cm": 160, "age": 12}])

    biometrics = SupabaseProfileRepository(client).get_biometrics(uuid4())

    assert biometrics is not None
    assert biometrics.age_years == 12
    assert biometrics.weight_kg == 48.0
    assert table.selected[-1] == "weight_kg, height_cm, age"
