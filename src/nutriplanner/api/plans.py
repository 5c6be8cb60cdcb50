"""Daily plan and statistics endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from nutriplanner.api.auth import require_token
from nutriplanner.api.models import NutrientsPayload, PlannedItemPayload  # noqa: TC001
from nutriplanner.api.serializers import (
    daily_totals_to_dict,
    item_to_dict,
    period_to_dict,
    plan_to_dict,
)
from nutriplanner.domain.nutrients import NutrientVector
from nutriplanner.domain.planning import MealType, PlannedItem

if TYPE_CHECKING:
    from nutriplanner.containers import AppContainer

router = APIRouter(tags=["plans"], dependencies=[Depends(require_token)])

# One leap year of daily totals per request.
_MAX_STATS_DAYS = 366


@router.get("/plans/{day}")
async def get_plan(day: date, request: Request) -> dict[str, object]:
    """Return the plan for a day with freshly computed totals."""
    container: AppContainer = request.app.state.container
    return plan_to_dict(container.planner_service.get_daily_plan(day))


@router.post("/plans/{day}/meals/{meal_type}/items", status_code=201)
async def add_item(
    day: date, meal_type: MealType, payload: PlannedItemPayload, request: Request
) -> dict[str, object]:
    """Plan an ingredient or recipe for a meal."""
    container: AppContainer = request.app.state.container
    plan, item = container.planner_service.add_item(
        day,
        meal_type,
        payload.kind,
        payload.item_id,
        payload.quantity,
        custom_name=payload.custom_name,
    )
    return {"item": item_to_dict(item), "plan": plan_to_dict(plan)}


@router.put("/plans/{day}/meals/{meal_type}/items/{item_id}")
async def update_item(
    day: date,
    meal_type: MealType,
    item_id: str,
    payload: PlannedItemPayload,
    request: Request,
) -> dict[str, object]:
    """Replace a planned item."""
    container: AppContainer = request.app.state.container
    item = PlannedItem(
        id=item_id,
        kind=payload.kind,
        item_id=payload.item_id,
        quantity=payload.quantity,
        custom_name=payload.custom_name,
    )
    plan = container.planner_service.update_item(day, meal_type, item)
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return plan_to_dict(plan)


@router.delete("/plans/{day}/meals/{meal_type}/items/{item_id}")
async def remove_item(
    day: date, meal_type: MealType, item_id: str, request: Request
) -> dict[str, object]:
    """Remove a planned item."""
    container: AppContainer = request.app.state.container
    plan = container.planner_service.remove_item(day, meal_type, item_id)
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return plan_to_dict(plan)


@router.get("/stats/{day}")
async def day_stats(day: date, request: Request) -> dict[str, object]:
    """Return planned totals for one day."""
    container: AppContainer = request.app.state.container
    return daily_totals_to_dict(container.stats_service.get_day(day))


@router.get("/stats")
async def period_stats(start: date, end: date, request: Request) -> dict[str, object]:
    """Return daily totals, averages and target progress for a range."""
    if start > end:
        raise HTTPException(
            status_code=422,
            detail="start must not be after end",
        )
    if (end - start).days + 1 > _MAX_STATS_DAYS:
        raise HTTPException(
            status_code=422,
            detail=f"range must not exceed {_MAX_STATS_DAYS} days",
        )
    container: AppContainer = request.app.state.container
    return period_to_dict(container.stats_service.get_period(start, end))


@router.get("/targets")
async def get_target(request: Request) -> dict[str, float]:
    """Return the daily nutrient target used for progress."""
    container: AppContainer = request.app.state.container
    return container.stats_service.get_target().as_dict()


@router.put("/targets")
async def update_target(
    payload: NutrientsPayload, request: Request
) -> dict[str, float]:
    """Replace the daily nutrient target."""
    container: AppContainer = request.app.state.container
    target = container.stats_service.set_target(
        NutrientVector(**payload.model_dump())
    )
    return target.as_dict()
