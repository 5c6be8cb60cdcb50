"""Shopping list consolidation over planned meals."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, datetime

from nutriplanner.domain.catalog import UserUnitConversion
from nutriplanner.domain.planning import DailyPlan, PlannedItemKind, ShoppingListLine
from nutriplanner.domain.units import UnitKind, canonical_unit, classify
from nutriplanner.services.catalog import DEFAULT_CATEGORY, CatalogService
from nutriplanner.services.conversions import ConversionRepository, convert
from nutriplanner.services.planner import PlanRepository
from nutriplanner.services.rollup import IngredientLookup, RecipeLookup

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Contribution:
    ingredient_id: str
    quantity: float
    unit: str


def build_shopping_list(  # noqa: PLR0913
    daily_plans: Iterable[DailyPlan],
    start: date,
    end: date,
    lookup_ingredient: IngredientLookup,
    lookup_recipe: RecipeLookup,
    user_conversions: Iterable[UserUnitConversion],
    default_category: str = DEFAULT_CATEGORY,
) -> list[ShoppingListLine]:
    """Merge ingredient quantities planned in ``[start, end]`` into one list.

    Recipe items are expanded into per-serving ingredient amounts. Mass and
    volume quantities are normalized to g and ml when a conversion exists;
    anything that cannot be converted is kept in its own unit. Lines are
    keyed by ingredient and resolved unit.
    """
    first_day, last_day = _as_date(start), _as_date(end)
    conversions = list(user_conversions)
    included = [
        plan for plan in daily_plans if first_day <= _as_date(plan.day) <= last_day
    ]

    lines: dict[tuple[str, str], ShoppingListLine] = {}
    for contribution in _contributions(included, lookup_ingredient, lookup_recipe):
        ingredient = lookup_ingredient(contribution.ingredient_id)
        if ingredient is None:
            continue
        target = _target_unit(ingredient.unit, contribution.unit)
        result = convert(
            contribution.quantity,
            contribution.unit,
            target,
            ingredient.id,
            conversions,
        )
        key = (ingredient.id, result.unit)
        line = lines.get(key)
        if line is None:
            lines[key] = ShoppingListLine(
                ingredient_id=ingredient.id,
                ingredient_name=ingredient.name,
                total_quantity=result.quantity,
                unit=result.unit,
                category=ingredient.category or default_category,
            )
        else:
            line.total_quantity += result.quantity
    return list(lines.values())


def group_by_category(
    lines: Iterable[ShoppingListLine],
) -> dict[str, list[ShoppingListLine]]:
    """Group lines by category, sorted by category then ingredient name."""
    grouped: dict[str, list[ShoppingListLine]] = {}
    for line in sorted(lines, key=lambda line: (line.category, line.ingredient_name)):
        grouped.setdefault(line.category, []).append(line)
    return grouped


def _contributions(
    plans: Iterable[DailyPlan],
    lookup_ingredient: IngredientLookup,
    lookup_recipe: RecipeLookup,
) -> Iterator[_Contribution]:
    for plan in plans:
        for meal in plan.meals:
            for item in meal.items:
                if item.kind is PlannedItemKind.INGREDIENT:
                    ingredient = lookup_ingredient(item.item_id)
                    if ingredient is not None:
                        yield _Contribution(ingredient.id, item.quantity, ingredient.unit)
                    continue
                recipe = lookup_recipe(item.item_id)
                if recipe is None or recipe.servings <= 0:
                    continue
                for line in recipe.ingredients:
                    ingredient = lookup_ingredient(line.ingredient_id)
                    if ingredient is None:
                        continue
                    yield _Contribution(
                        ingredient.id,
                        (line.quantity / recipe.servings) * item.quantity,
                        ingredient.unit,
                    )


def _target_unit(ingredient_unit: str, current_unit: str) -> str:
    """Pick g or ml when either unit is mass or volume, else the nominal unit."""
    target = ingredient_unit
    for unit in (ingredient_unit, current_unit):
        kind = classify(unit)
        if kind in (UnitKind.MASS, UnitKind.VOLUME):
            target = canonical_unit(kind) or target
    return target


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass
class ShoppingListService:
    """Builds shopping lists from stored plans and conversions."""

    plan_repository: PlanRepository
    catalog_service: CatalogService
    conversion_repository: ConversionRepository
    default_category: str = DEFAULT_CATEGORY
    debug: bool = False

    def build(self, start: date, end: date) -> list[ShoppingListLine]:
        """Return the consolidated list for plans dated within ``[start, end]``."""
        first_day, last_day = _as_date(start), _as_date(end)
        plans = self.plan_repository.list_plans(first_day, last_day)
        lines = build_shopping_list(
            plans,
            first_day,
            last_day,
            self.catalog_service.get_ingredient,
            self.catalog_service.get_recipe,
            self.conversion_repository.list_conversions(),
            default_category=self.default_category,
        )
        if self.debug:
            _logger.info(
                "Shopping list built: start=%s end=%s plans=%s lines=%s",
                first_day,
                last_day,
                len(plans),
                len(lines),
            )
        return lines

    def build_grouped(
        self, start: date, end: date
    ) -> dict[str, list[ShoppingListLine]]:
        """Return the consolidated list grouped by category."""
        return group_by_category(self.build(start, end))
