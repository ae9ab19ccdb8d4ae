"""Tests for chart data."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from diet_balance.domain.entries import MealType
from diet_balance.domain.goals import DEFAULT_GOALS
from diet_balance.services.charts import build_chart_data
from diet_balance.services.entries import day_window
from tests.conftest import USER_ID, make_entry, make_food

START = date(2024, 3, 4)


def _at(day_offset: int, hour: int) -> datetime:
    return datetime(2024, 3, 4, hour, 0, tzinfo=UTC) + timedelta(days=day_offset)


def test_daily_trend_is_zero_filled() -> None:
    food = make_food(calories=200, protein=10, carbs=20, fat=5)
    entries = [make_entry(food, _at(0, 8)), make_entry(food, _at(2, 12), portion_g=50)]

    charts = build_chart_data(entries, {food.id: food}, DEFAULT_GOALS, START, 4)

    assert [point.day for point in charts.daily_trend] == [
        date(2024, 3, 4),
        date(2024, 3, 5),
        date(2024, 3, 6),
        date(2024, 3, 7),
    ]
    assert [point.calories_kcal for point in charts.daily_trend] == [200, 0, 100, 0]
    assert charts.daily_trend[2].protein_g == 5


def test_entries_outside_the_window_are_ignored() -> None:
    food = make_food(calories=100)
    entries = [make_entry(food, _at(-1, 12)), make_entry(food, _at(0, 12))]

    charts = build_chart_data(entries, {food.id: food}, DEFAULT_GOALS, START, 1)

    assert charts.daily_trend[0].calories_kcal == 100
    assert charts.macro_split.protein_g == 31


def test_meal_type_breakdown_lists_every_meal() -> None:
    food = make_food(calories=150)
    entries = [
        make_entry(food, _at(0, 19), meal_type=MealType.DINNER),
        make_entry(food, _at(0, 20), meal_type=MealType.DINNER),
        make_entry(food, _at(0, 8), meal_type=MealType.BREAKFAST),
    ]

    charts = build_chart_data(entries, {food.id: food}, DEFAULT_GOALS, START, 1)

    breakdown = {item.meal_type: item for item in charts.meal_type_breakdown}
    assert [item.meal_type for item in charts.meal_type_breakdown] == list(MealType)
    assert breakdown[MealType.DINNER].calories_kcal == 300
    assert breakdown[MealType.DINNER].entry_count == 2
    assert breakdown[MealType.SNACK].entry_count == 0


def test_top_foods_by_count_then_calories() -> None:
    foods = [
        make_food(name="Chapati", calories=120),
        make_food(name="Banana", calories=89),
        make_food(name="Almonds", calories=579),
        make_food(name="Milk", calories=42),
        make_food(name="Egg", calories=155),
        make_food(name="Rajma", calories=140),
    ]
    entries = [
        make_entry(foods[0], _at(0, 8)),
        make_entry(foods[0], _at(0, 13)),
        make_entry(foods[0], _at(1, 13)),
        make_entry(foods[1], _at(0, 10)),
        make_entry(foods[3], _at(0, 10)),
        make_entry(foods[3], _at(1, 10)),
        make_entry(foods[2], _at(0, 16), portion_g=30),
        make_entry(foods[4], _at(1, 7)),
        make_entry(foods[5], _at(1, 20)),
    ]

    charts = build_chart_data(
        entries, {food.id: food for food in foods}, DEFAULT_GOALS, START, 2
    )

    assert [food.name for food in charts.top_foods] == [
        "Chapati",
        "Milk",
        "Almonds",
        "Egg",
        "Rajma",
    ]
    assert charts.top_foods[0].times_logged == 3
    assert charts.top_foods[0].total_calories_kcal == 360


def test_nutrient_radar_uses_daily_average() -> None:
    food = make_food(calories=500, protein=50, carbs=150, fat=65, fiber=25)

    charts = build_chart_data(
        [make_entry(food, _at(0, 12))], {food.id: food}, DEFAULT_GOALS, START, 2
    )

    radar = {point.nutrient: point.percentage for point in charts.nutrient_radar}
    assert radar == {"protein": 50.0, "carbs": 25.0, "fat": 50.0, "fiber": 50.0}


def test_chart_service_clamps_days(
    chart_service, entry_repository, food_repository
) -> None:
    food = make_food(calories=100)
    food_repository.add(food)
    start, _ = day_window(ZoneInfo("UTC"), 1)
    entry_repository.entries.append(make_entry(food, start + timedelta(hours=12)))

    wide = chart_service.get_chart_data(USER_ID, days=365, timezone_name="UTC")
    narrow = chart_service.get_chart_data(USER_ID, days=0, timezone_name="UTC")

    assert wide.days == 90
    assert len(wide.daily_trend) == 90
    assert narrow.days == 1
    assert narrow.daily_trend[0].day == start.date()
    assert narrow.daily_trend[0].calories_kcal == 100
