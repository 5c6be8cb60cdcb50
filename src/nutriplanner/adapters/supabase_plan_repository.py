"""Supabase repository for daily plans."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from nutriplanner.domain.nutrients import NutrientVector
from nutriplanner.domain.planning import (
    DailyPlan,
    Meal,
    MealType,
    PlannedItem,
    PlannedItemKind,
)
from nutriplanner.services.planner import PlanRepository


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for daily plans, one row per day."""

    client: Client

    def get_plan(self, day: date) -> DailyPlan | None:
        """Return the plan stored for a day."""
        response = (
            self.client.table("daily_plans")
            .select("*")
            .eq("day", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def list_plans(self, start: date, end: date) -> list[DailyPlan]:
        """Return plans with a day in the inclusive range."""
        response = (
            self.client.table("daily_plans")
            .select("*")
            .gte("day", start.isoformat())
            .lte("day", end.isoformat())
            .order("day", desc=False)
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def save_plan(self, plan: DailyPlan) -> DailyPlan:
        """Upsert the plan for its day."""
        response = (
            self.client.table("daily_plans")
            .upsert(_plan_payload(plan), on_conflict="day")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save daily plan")
        return _parse_plan(response.data[0])


def _plan_payload(plan: DailyPlan) -> dict[str, object]:
    return {
        "day": plan.day.isoformat(),
        "meals": [
            {
                "meal_type": meal.meal_type.value,
                "items": [
                    {
                        "id": item.id,
                        "kind": item.kind.value,
                        "item_id": item.item_id,
                        "quantity": item.quantity,
                        "custom_name": item.custom_name,
                    }
                    for item in meal.items
                ],
                "total_nutrients": meal.total_nutrients.as_dict(),
            }
            for meal in plan.meals
        ],
        "total_nutrients": plan.total_nutrients.as_dict(),
    }


def _parse_plan(row: dict[str, object]) -> DailyPlan:
    """Parse a daily plan row; unknown meal types and item kinds are dropped."""
    meals = []
    for raw_meal in row.get("meals") or []:
        try:
            meal_type = MealType(raw_meal.get("meal_type"))
        except ValueError:
            continue
        meals.append(
            Meal(
                meal_type=meal_type,
                items=tuple(
                    item
                    for item in (_parse_item(raw) for raw in raw_meal.get("items") or [])
                    if item is not None
                ),
                total_nutrients=NutrientVector.from_mapping(
                    raw_meal.get("total_nutrients")
                ),
            )
        )
    return DailyPlan(
        day=date.fromisoformat(str(row["day"])[:10]),
        meals=tuple(meals),
        total_nutrients=NutrientVector.from_mapping(row.get("total_nutrients")),
    )


def _parse_item(raw: dict[str, object]) -> PlannedItem | None:
    try:
        kind = PlannedItemKind(raw.get("kind"))
    except ValueError:
        return None
    quantity = raw.get("quantity")
    return PlannedItem(
        id=str(raw.get("id", "")),
        kind=kind,
        item_id=str(raw.get("item_id", "")),
        quantity=float(quantity) if isinstance(quantity, int | float) else 0.0,
        custom_name=raw.get("custom_name"),
    )
