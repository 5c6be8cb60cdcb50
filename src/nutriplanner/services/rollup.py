"""Nutrient roll-up from ingredients to recipes, meals and daily plans.

Every function here is pure: lookups are read-only callables returning
``None`` for unknown ids, and a missing reference contributes zero rather
than raising. Cached totals are returned on new instances; storing them is
up to the caller.
"""

from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date

from nutriplanner.domain.catalog import Ingredient, Recipe, RecipeIngredientLine
from nutriplanner.domain.nutrients import (
    NutrientVector,
    divide,
    scale,
    sum_nutrients,
    zero,
)
from nutriplanner.domain.planning import (
    MEAL_TYPES_ORDERED,
    DailyPlan,
    Meal,
    PlannedItem,
    PlannedItemKind,
)
from nutriplanner.domain.units import multiplier_for

IngredientLookup = Callable[[str], Ingredient | None]
RecipeLookup = Callable[[str], Recipe | None]


def ingredient_nutrients(ingredient: Ingredient, quantity: float) -> NutrientVector:
    """Return nutrients for ``quantity`` of an ingredient in its own unit."""
    return scale(ingredient.nutrients, multiplier_for(ingredient.unit, quantity))


def recipe_total_nutrients(
    lines: Iterable[RecipeIngredientLine], lookup_ingredient: IngredientLookup
) -> NutrientVector:
    """Sum the nutrients of every line whose ingredient still exists."""
    contributions = []
    for line in lines:
        ingredient = lookup_ingredient(line.ingredient_id)
        if ingredient is None:
            continue
        contributions.append(ingredient_nutrients(ingredient, line.quantity))
    return sum_nutrients(contributions)


def recipe_per_serving(
    recipe: Recipe, lookup_ingredient: IngredientLookup
) -> NutrientVector:
    """Return nutrients for one serving, or zero when servings is not positive."""
    if recipe.servings <= 0:
        return zero()
    total = recipe_total_nutrients(recipe.ingredients, lookup_ingredient)
    return divide(total, recipe.servings)


def planned_item_nutrients(
    item: PlannedItem,
    lookup_ingredient: IngredientLookup,
    lookup_recipe: RecipeLookup,
) -> NutrientVector:
    """Return nutrients contributed by a planned ingredient or recipe item.

    Recipe items read the recipe's cached total, so the recipe must have been
    refreshed after its last change.
    """
    if item.kind is PlannedItemKind.INGREDIENT:
        ingredient = lookup_ingredient(item.item_id)
        if ingredient is None:
            return zero()
        return ingredient_nutrients(ingredient, item.quantity)

    recipe = lookup_recipe(item.item_id)
    if recipe is None or recipe.servings <= 0 or recipe.total_nutrients is None:
        return zero()
    per_serving = divide(recipe.total_nutrients, recipe.servings)
    return scale(per_serving, item.quantity)


def meal_nutrients(
    meal: Meal, lookup_ingredient: IngredientLookup, lookup_recipe: RecipeLookup
) -> NutrientVector:
    """Sum the nutrients of every item in a meal."""
    return sum_nutrients(
        planned_item_nutrients(item, lookup_ingredient, lookup_recipe)
        for item in meal.items
    )


def daily_plan_nutrients(
    plan: DailyPlan, lookup_ingredient: IngredientLookup, lookup_recipe: RecipeLookup
) -> NutrientVector:
    """Sum the nutrients of every meal in a plan."""
    return sum_nutrients(
        meal_nutrients(meal, lookup_ingredient, lookup_recipe) for meal in plan.meals
    )


def refresh_recipe(recipe: Recipe, lookup_ingredient: IngredientLookup) -> Recipe:
    """Return the recipe with its total and per-serving caches recomputed."""
    total = recipe_total_nutrients(recipe.ingredients, lookup_ingredient)
    return replace(
        recipe,
        total_nutrients=total,
        per_serving=divide(total, recipe.servings),
    )


def refresh_meal(
    meal: Meal, lookup_ingredient: IngredientLookup, lookup_recipe: RecipeLookup
) -> Meal:
    """Return the meal with its cached total recomputed."""
    return replace(
        meal, total_nutrients=meal_nutrients(meal, lookup_ingredient, lookup_recipe)
    )


def refresh_daily_plan(
    plan: DailyPlan, lookup_ingredient: IngredientLookup, lookup_recipe: RecipeLookup
) -> DailyPlan:
    """Recompute meal totals first, then the plan total from the fresh meals."""
    meals = tuple(
        refresh_meal(meal, lookup_ingredient, lookup_recipe) for meal in plan.meals
    )
    total = sum_nutrients(meal.total_nutrients for meal in meals)
    return replace(plan, meals=meals, total_nutrients=total)


def empty_daily_plan(day: date) -> DailyPlan:
    """Return a plan for ``day`` with every meal slot present and empty."""
    return DailyPlan(
        day=day,
        meals=tuple(Meal(meal_type=meal_type) for meal_type in MEAL_TYPES_ORDERED),
    )
