"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from diet_balance.adapters.supabase_entry_repository import SupabaseEntryRepository
from diet_balance.adapters.supabase_food_repository import SupabaseFoodRepository
from diet_balance.adapters.supabase_goal_repository import SupabaseGoalRepository
from diet_balance.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_balance.config import Settings, parse_food_suggestions
from diet_balance.services.analysis import AnalysisService
from diet_balance.services.cache import InMemoryCache
from diet_balance.services.charts import ChartService
from diet_balance.services.goals import GoalService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    goal_service: GoalService
    analysis_service: AnalysisService
    chart_service: ChartService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(supabase_client)
    food_repository = SupabaseFoodRepository(supabase_client)
    goal_service = GoalService(
        goal_repository=SupabaseGoalRepository(supabase_client),
        profile_repository=SupabaseProfileRepository(supabase_client),
        default_timezone=resolved_settings.default_timezone,
    )
    analysis_service = AnalysisService(
        entry_repository=entry_repository,
        food_repository=food_repository,
        goal_service=goal_service,
        cache=InMemoryCache(),
        recommendation_limit=resolved_settings.recommendation_limit,
        cache_ttl_seconds=resolved_settings.analysis_cache_ttl_seconds,
        food_suggestions=parse_food_suggestions(resolved_settings.food_suggestions),
    )
    chart_service = ChartService(
        entry_repository=entry_repository,
        food_repository=food_repository,
        goal_service=goal_service,
    )
    return AppContainer(
        settings=resolved_settings,
        goal_service=goal_service,
        analysis_service=analysis_service,
        chart_service=chart_service,
    )
