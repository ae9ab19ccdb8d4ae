"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    default_timezone: str = "UTC"
    recommendation_limit: int = 5
    analysis_cache_ttl_seconds: int = 60
    food_suggestions: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_food_suggestions(raw: str | None) -> dict[str, list[str]] | None:
    """Parse nutrient food overrides such as ``iron:Spinach|Lentils,zinc:Oats``."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    suggestions: dict[str, list[str]] = {}
    for chunk in cleaned.split(","):
        nutrient, sep, foods = chunk.partition(":")
        name = nutrient.strip().lower()
        if not sep or not name:
            continue
        suggestions[name] = [food.strip() for food in foods.split("|") if food.strip()]
    return suggestions or None
