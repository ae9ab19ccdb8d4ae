"""Chart data for a window of days."""

from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from diet_balance.domain.charts import (
    ChartData,
    DailyTrendPoint,
    MacroSplit,
    MealTypeSlice,
    RadarPoint,
    TopFood,
)
from diet_balance.domain.entries import DietaryEntry, MealType
from diet_balance.domain.foods import FoodItem
from diet_balance.domain.goals import GoalSet
from diet_balance.domain.reports import NutrientTotals
from diet_balance.services.entries import (
    EntryRepository,
    FoodRepository,
    clamp_days,
    day_window,
    load_entries_with_foods,
)
from diet_balance.services.evaluation import evaluate
from diet_balance.services.goals import GoalService
from diet_balance.services.intake import (
    GROUP_BY_DAY,
    GROUP_BY_MEAL_TYPE,
    aggregate,
    average_daily,
    local_day,
    resolve_timezone,
)

TOP_FOODS_LIMIT = 5


@dataclass
class ChartService:
    """Service that assembles chart series for a user."""

    entry_repository: EntryRepository
    food_repository: FoodRepository
    goal_service: GoalService

    def get_chart_data(
        self, user_id: UUID, days: int = 7, timezone_name: str | None = None
    ) -> ChartData:
        """Return chart data for the last ``days`` local days (1..90)."""
        window = clamp_days(days)
        tz_name = timezone_name or self.goal_service.get_timezone(user_id)
        start, end = day_window(resolve_timezone(tz_name), window)
        entries, foods = load_entries_with_foods(
            self.entry_repository, self.food_repository, user_id, start, end
        )
        goals = self.goal_service.get_goals(user_id)
        return build_chart_data(entries, foods, goals, start.date(), window, tz_name)


def build_chart_data(  # noqa: PLR0913
    entries: list[DietaryEntry],
    foods_by_id: Mapping[UUID, FoodItem],
    goals: GoalSet,
    start_day: date,
    days: int,
    timezone: str = "UTC",
) -> ChartData:
    """Build every chart series for entries inside the window."""
    tz = resolve_timezone(timezone)
    window_days = [start_day + timedelta(days=offset) for offset in range(days)]
    in_window = set(window_days)
    windowed = [
        entry for entry in entries if local_day(entry.consumed_at, tz) in in_window
    ]

    by_day = aggregate(windowed, foods_by_id, group_by=GROUP_BY_DAY, timezone=timezone)
    empty = NutrientTotals()
    daily_trend = [
        DailyTrendPoint(
            day=day,
            calories_kcal=by_day.get(day, empty).calories_kcal,
            protein_g=by_day.get(day, empty).protein_g,
            carbs_g=by_day.get(day, empty).carbs_g,
            fat_g=by_day.get(day, empty).fat_g,
        )
        for day in window_days
    ]

    overall = aggregate(windowed, foods_by_id)
    by_meal = aggregate(windowed, foods_by_id, group_by=GROUP_BY_MEAL_TYPE)
    meal_type_breakdown = [
        MealTypeSlice(
            meal_type=meal_type,
            calories_kcal=by_meal.get(meal_type, empty).calories_kcal,
            entry_count=by_meal.get(meal_type, empty).entry_count,
        )
        for meal_type in MealType
    ]

    report = evaluate(average_daily(overall, days), goals)
    nutrient_radar = [
        RadarPoint(nutrient=nutrient.name, percentage=round(nutrient.display_percentage, 1))
        for nutrient in report.nutrients
        if nutrient.display_percentage is not None
    ]

    return ChartData(
        start_day=start_day,
        days=days,
        daily_trend=daily_trend,
        macro_split=MacroSplit(
            protein_g=overall.protein_g,
            carbs_g=overall.carbs_g,
            fat_g=overall.fat_g,
        ),
        meal_type_breakdown=meal_type_breakdown,
        top_foods=_top_foods(windowed, foods_by_id),
        nutrient_radar=nutrient_radar,
    )


def _top_foods(
    entries: list[DietaryEntry], foods_by_id: Mapping[UUID, FoodItem]
) -> list[TopFood]:
    per_food: dict[UUID, list[DietaryEntry]] = defaultdict(list)
    for entry in entries:
        if entry.food_item_id not in foods_by_id:
            continue
        per_food[entry.food_item_id].append(entry)

    top = [
        TopFood(
            name=foods_by_id[food_id].name,
            times_logged=len(food_entries),
            total_calories_kcal=aggregate(food_entries, foods_by_id).calories_kcal,
        )
        for food_id, food_entries in per_food.items()
    ]
    top.sort(key=lambda food: (-food.times_logged, -food.total_calories_kcal, food.name))
    return top[:TOP_FOODS_LIMIT]
