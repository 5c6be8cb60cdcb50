"""Meal planning service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol
from uuid import uuid4

from nutriplanner.domain.planning import (
    DailyPlan,
    Meal,
    MealType,
    PlannedItem,
    PlannedItemKind,
)
from nutriplanner.services.catalog import CatalogService
from nutriplanner.services.rollup import empty_daily_plan, refresh_daily_plan

_logger = logging.getLogger(__name__)


class PlanRepository(Protocol):
    """Persistence interface for daily plans."""

    def get_plan(self, day: date) -> DailyPlan | None:
        """Return the stored plan for a day, if any."""

    def list_plans(self, start: date, end: date) -> list[DailyPlan]:
        """Return stored plans dated within ``[start, end]``."""

    def save_plan(self, plan: DailyPlan) -> DailyPlan:
        """Create or replace the plan for its day and return it."""


@dataclass
class PlannerService:
    """Service that edits daily plans and keeps their totals current."""

    repository: PlanRepository
    catalog_service: CatalogService
    debug: bool = False

    def get_daily_plan(self, day: date) -> DailyPlan:
        """Return the plan for a day, synthesizing an empty one if none is stored."""
        stored = self.repository.get_plan(day)
        if stored is None:
            return empty_daily_plan(day)
        return self._refresh(_with_all_meals(stored))

    def list_plans(self, start: date, end: date) -> list[DailyPlan]:
        """Return refreshed stored plans within the range, ordered by day."""
        plans = self.repository.list_plans(start, end)
        return sorted(
            (self._refresh(_with_all_meals(plan)) for plan in plans),
            key=lambda plan: plan.day,
        )

    def add_item(  # noqa: PLR0913
        self,
        day: date,
        meal_type: MealType,
        kind: PlannedItemKind,
        item_id: str,
        quantity: float,
        custom_name: str | None = None,
    ) -> tuple[DailyPlan, PlannedItem]:
        """Append an item to a meal and persist the recomputed plan."""
        item = PlannedItem(
            id=str(uuid4()),
            kind=kind,
            item_id=item_id,
            quantity=quantity,
            custom_name=custom_name,
        )
        plan = self.get_daily_plan(day)
        updated = _map_meal(plan, meal_type, lambda items: (*items, item))
        saved = self._save(updated)
        if self.debug:
            _logger.info(
                "Planner item added: day=%s meal=%s kind=%s item_id=%s",
                day,
                meal_type.value,
                kind.value,
                item_id,
            )
        return saved, item

    def update_item(
        self, day: date, meal_type: MealType, item: PlannedItem
    ) -> DailyPlan | None:
        """Replace an item with the same id; None when it is not planned."""
        plan = self.repository.get_plan(day)
        if plan is None or not _contains(plan, meal_type, item.id):
            return None
        updated = _map_meal(
            _with_all_meals(plan),
            meal_type,
            lambda items: tuple(item if entry.id == item.id else entry for entry in items),
        )
        return self._save(updated)

    def remove_item(
        self, day: date, meal_type: MealType, item_id: str
    ) -> DailyPlan | None:
        """Remove an item from a meal; None when it is not planned."""
        plan = self.repository.get_plan(day)
        if plan is None or not _contains(plan, meal_type, item_id):
            return None
        updated = _map_meal(
            _with_all_meals(plan),
            meal_type,
            lambda items: tuple(entry for entry in items if entry.id != item_id),
        )
        return self._save(updated)

    def _refresh(self, plan: DailyPlan) -> DailyPlan:
        return refresh_daily_plan(
            plan,
            self.catalog_service.get_ingredient,
            self.catalog_service.get_recipe,
        )

    def _save(self, plan: DailyPlan) -> DailyPlan:
        return self.repository.save_plan(self._refresh(plan))


def _with_all_meals(plan: DailyPlan) -> DailyPlan:
    """Ensure one meal per meal type, in display order."""
    meals = tuple(
        plan.meal(meal_type) or Meal(meal_type=meal_type) for meal_type in MealType
    )
    return replace(plan, meals=meals)


def _map_meal(
    plan: DailyPlan,
    meal_type: MealType,
    change: Callable[[tuple[PlannedItem, ...]], tuple[PlannedItem, ...]],
) -> DailyPlan:
    meals = tuple(
        replace(meal, items=change(meal.items)) if meal.meal_type == meal_type else meal
        for meal in plan.meals
    )
    return replace(plan, meals=meals)


def _contains(plan: DailyPlan, meal_type: MealType, item_id: str) -> bool:
    meal = plan.meal(meal_type)
    return meal is not None and any(item.id == item_id for item in meal.items)
