"""Nutrition analysis service for a user's recent intake."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from uuid import UUID

from diet_balance.domain.entries import DietaryEntry
from diet_balance.domain.foods import FoodItem
from diet_balance.domain.reports import DayHistory, EntryNutrition, NutritionAnalysis
from diet_balance.services.cache import Cache, snapshot_key
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
    aggregate,
    as_utc,
    average_daily,
    local_day,
    portion_in_grams,
    resolve_timezone,
)
from diet_balance.services.recommendations import DEFAULT_LIMIT, recommend

_logger = logging.getLogger(__name__)

TODAY = "today"
WEEK = "week"
_PERIOD_DAYS = {TODAY: 1, WEEK: 7}


@dataclass
class AnalysisService:
    """Runs the aggregate, evaluate and recommend pipeline for a user."""

    entry_repository: EntryRepository
    food_repository: FoodRepository
    goal_service: GoalService
    cache: Cache
    recommendation_limit: int = DEFAULT_LIMIT
    cache_ttl_seconds: int = 60
    food_suggestions: Mapping[str, Sequence[str]] | None = None

    def analyze_today(
        self, user_id: UUID, timezone_name: str | None = None
    ) -> NutritionAnalysis:
        """Analyze intake since local midnight."""
        return self._analyze(user_id, TODAY, timezone_name)

    def analyze_week(
        self, user_id: UUID, timezone_name: str | None = None
    ) -> NutritionAnalysis:
        """Analyze the daily average over the last seven local days."""
        return self._analyze(user_id, WEEK, timezone_name)

    def history(
        self, user_id: UUID, timezone_name: str | None = None, days: int = 7
    ) -> list[DayHistory]:
        """Return entries grouped by local day, newest day first."""
        tz_name = timezone_name or self.goal_service.get_timezone(user_id)
        tz = resolve_timezone(tz_name)
        start, end = day_window(tz, clamp_days(days))
        entries, foods = load_entries_with_foods(
            self.entry_repository, self.food_repository, user_id, start, end
        )
        by_day = aggregate(entries, foods, group_by=GROUP_BY_DAY, timezone=tz_name)
        history = []
        for day in sorted(by_day, reverse=True):
            day_entries = sorted(
                (entry for entry in entries if local_day(entry.consumed_at, tz) == day),
                key=lambda entry: as_utc(entry.consumed_at),
                reverse=True,
            )
            history.append(
                DayHistory(
                    day=day,
                    totals=by_day[day],
                    entries=[
                        _entry_nutrition(entry, foods[entry.food_item_id])
                        for entry in day_entries
                        if entry.food_item_id in foods
                    ],
                )
            )
        return history

    def _analyze(
        self, user_id: UUID, period: str, timezone_name: str | None
    ) -> NutritionAnalysis:
        days = _PERIOD_DAYS[period]
        tz_name = timezone_name or self.goal_service.get_timezone(user_id)
        start, end = day_window(resolve_timezone(tz_name), days)
        entries, foods = load_entries_with_foods(
            self.entry_repository, self.food_repository, user_id, start, end
        )
        goals = self.goal_service.get_goals(user_id)

        cache_key = snapshot_key(
            f"analysis:{user_id}:{period}",
            start,
            sorted(entries, key=lambda entry: str(entry.id)),
            sorted(foods.values(), key=lambda food: str(food.id)),
            goals,
            self.recommendation_limit,
        )
        cached = self.cache.get(cache_key)
        if isinstance(cached, NutritionAnalysis):
            return cached

        totals = aggregate(entries, foods)
        daily = average_daily(totals, days)
        report = evaluate(daily, goals)
        recommendations = recommend(
            report, self.food_suggestions, limit=self.recommendation_limit
        )
        analysis = NutritionAnalysis(
            period=period,
            start_day=start.date(),
            days=days,
            totals=totals,
            report=report,
            recommendations=recommendations,
        )
        self.cache.set(cache_key, analysis, ttl_seconds=self.cache_ttl_seconds)
        _logger.info(
            "Analyzed %s for user %s: entries=%s score=%s",
            period,
            user_id,
            totals.entry_count,
            report.overall_score,
        )
        return analysis


def _entry_nutrition(entry: DietaryEntry, food: FoodItem) -> EntryNutrition:
    totals = aggregate([entry], {entry.food_item_id: food})
    return EntryNutrition(
        entry_id=entry.id,
        food_name=food.name,
        meal_type=entry.meal_type,
        consumed_at=entry.consumed_at,
        portion_g=portion_in_grams(entry, food.nutrient_profile),
        calories_kcal=totals.calories_kcal,
        protein_g=totals.protein_g,
        carbs_g=totals.carbs_g,
        fat_g=totals.fat_g,
        fiber_g=totals.fiber_g,
    )
