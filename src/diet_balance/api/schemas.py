"""Request models for the HTTP API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from diet_balance.domain.goals import GOAL_BOUNDS


def _bounded(name: str) -> Any:
    bound = GOAL_BOUNDS[name]
    return Field(default=None, ge=bound.min, le=bound.max)


class GoalsUpdate(BaseModel):
    """Partial goal update; omitted fields keep their current value."""

    model_config = ConfigDict(extra="forbid")

    calorie_goal: float | None = _bounded("calorie_goal")
    protein_goal: float | None = _bounded("protein_goal")
    carbs_goal: float | None = _bounded("carbs_goal")
    fat_goal: float | None = _bounded("fat_goal")
    fiber_goal: float | None = _bounded("fiber_goal")
