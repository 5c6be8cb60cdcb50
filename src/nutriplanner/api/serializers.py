"""Plain-dict views of domain objects for JSON responses."""

from nutriplanner.domain.catalog import Ingredient, Recipe, UserUnitConversion
from nutriplanner.domain.planning import DailyPlan, PlannedItem, ShoppingListLine
from nutriplanner.domain.stats import DailyTotals
from nutriplanner.services.conversions import ConversionResult
from nutriplanner.services.stats import PeriodSummary


def plan_to_dict(plan: DailyPlan) -> dict[str, object]:
    return {
        "day": plan.day.isoformat(),
        "meals": [
            {
                "meal_type": meal.meal_type.value,
                "items": [item_to_dict(item) for item in meal.items],
                "total_nutrients": meal.total_nutrients.as_dict(),
            }
            for meal in plan.meals
        ],
        "total_nutrients": plan.total_nutrients.as_dict(),
    }


def item_to_dict(item: PlannedItem) -> dict[str, object]:
    return {
        "id": item.id,
        "kind": item.kind.value,
        "item_id": item.item_id,
        "quantity": item.quantity,
        "custom_name": item.custom_name,
    }


def line_to_dict(line: ShoppingListLine) -> dict[str, object]:
    return {
        "ingredient_id": line.ingredient_id,
        "ingredient_name": line.ingredient_name,
        "total_quantity": line.total_quantity,
        "unit": line.unit,
        "category": line.category,
        "purchased": line.purchased,
    }


def conversion_to_dict(conversion: UserUnitConversion) -> dict[str, object]:
    return {
        "id": conversion.id,
        "ingredient_id": conversion.ingredient_id,
        "unit_a": conversion.unit_a,
        "quantity_a": conversion.quantity_a,
        "unit_b": conversion.unit_b,
        "quantity_b": conversion.quantity_b,
    }


def conversion_result_to_dict(result: ConversionResult) -> dict[str, object]:
    return {"quantity": result.quantity, "unit": result.unit, "success": result.success}


def daily_totals_to_dict(totals: DailyTotals) -> dict[str, object]:
    return {"day": totals.day.isoformat(), **totals.nutrients.as_dict()}


def period_to_dict(summary: PeriodSummary) -> dict[str, object]:
    return {
        "daily": [daily_totals_to_dict(entry) for entry in summary.daily],
        "average": summary.average.as_dict(),
        "target": summary.target.as_dict(),
        "progress": summary.progress,
    }


def ingredient_to_dict(ingredient: Ingredient) -> dict[str, object]:
    return {
        "id": ingredient.id,
        "name": ingredient.name,
        "unit": ingredient.unit,
        "nutrients": ingredient.nutrients.as_dict(),
        "category": ingredient.category,
        "brand": ingredient.brand,
        "average_price": ingredient.average_price,
        "purchase_location": ingredient.purchase_location,
    }


def recipe_to_dict(recipe: Recipe) -> dict[str, object]:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "servings": recipe.servings,
        "ingredients": [
            {"ingredient_id": line.ingredient_id, "quantity": line.quantity}
            for line in recipe.ingredients
        ],
        "instructions": recipe.instructions,
        "total_nutrients": recipe.total_nutrients.as_dict()
        if recipe.total_nutrients
        else None,
        "per_serving": recipe.per_serving.as_dict() if recipe.per_serving else None,
    }
