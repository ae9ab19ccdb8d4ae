"""Analysis, history and chart endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request

if TYPE_CHECKING:
    from diet_balance.containers import AppContainer

router = APIRouter(prefix="/api", tags=["analysis"])


@router.get("/analysis/today")
async def analysis_today(
    user_id: UUID, request: Request, timezone: str | None = None
) -> dict[str, object]:
    """Return today's totals, nutrient report and recommendations."""
    container: AppContainer = request.app.state.container
    analysis = container.analysis_service.analyze_today(user_id, timezone)
    return {"analysis": asdict(analysis)}


@router.get("/analysis/week")
async def analysis_week(
    user_id: UUID, request: Request, timezone: str | None = None
) -> dict[str, object]:
    """Return the seven-day daily-average analysis."""
    container: AppContainer = request.app.state.container
    analysis = container.analysis_service.analyze_week(user_id, timezone)
    return {"analysis": asdict(analysis)}


@router.get("/history")
async def history(
    user_id: UUID, request: Request, days: int = 7, timezone: str | None = None
) -> dict[str, object]:
    """Return logged entries grouped by day, newest first."""
    container: AppContainer = request.app.state.container
    days_history = container.analysis_service.history(user_id, timezone, days)
    return {"days": [asdict(day) for day in days_history]}


@router.get("/charts")
async def charts(
    user_id: UUID, request: Request, days: int = 7, timezone: str | None = None
) -> dict[str, object]:
    """Return chart series for the last ``days`` days."""
    container: AppContainer = request.app.state.container
    data = container.chart_service.get_chart_data(user_id, days, timezone)
    return {"charts": asdict(data)}
