"""Goal, preset and BMI endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request

from diet_balance.api.schemas import GoalsUpdate  # noqa: TC001
from diet_balance.domain.goals import GOAL_BOUNDS
from diet_balance.services.evaluation import calculate_bmi, classify_bmi

if TYPE_CHECKING:
    from diet_balance.containers import AppContainer

router = APIRouter(prefix="/api", tags=["goals"])


@router.get("/goals")
async def get_goals(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the goals a user is measured against."""
    container: AppContainer = request.app.state.container
    goals = container.goal_service.get_goals(user_id)
    return {
        "goals": asdict(goals),
        "bounds": {name: asdict(bound) for name, bound in GOAL_BOUNDS.items()},
    }


@router.put("/goals")
async def update_goals(
    user_id: UUID, update: GoalsUpdate, request: Request
) -> dict[str, object]:
    """Apply a partial goal update."""
    container: AppContainer = request.app.state.container
    goals = container.goal_service.save_goals(
        user_id, update.model_dump(exclude_none=True)
    )
    return {"goals": asdict(goals)}


@router.get("/goals/suggestion")
async def goal_suggestion(user_id: UUID, request: Request) -> dict[str, object]:
    """Return BMI-based goals, or null without a usable profile."""
    container: AppContainer = request.app.state.container
    suggestion = container.goal_service.suggest_goals(user_id)
    return {"suggestion": asdict(suggestion) if suggestion else None}


@router.get("/goals/presets")
async def goal_presets(request: Request) -> dict[str, object]:
    """Return the built-in goal presets."""
    container: AppContainer = request.app.state.container
    return {"presets": [asdict(preset) for preset in container.goal_service.presets()]}


@router.get("/bmi")
async def bmi(weight_kg: float, height_cm: float) -> dict[str, object]:
    """Compute BMI and its category."""
    value = calculate_bmi(weight_kg, height_cm)
    return {"bmi": round(value, 1), "category": classify_bmi(value)}
