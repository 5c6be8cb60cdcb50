"""Tests for shopping list consolidation."""

from dataclasses import replace
from datetime import date, datetime

import pytest

from nutriplanner.domain.catalog import Ingredient, UserUnitConversion
from nutriplanner.domain.planning import (
    DailyPlan,
    Meal,
    MealType,
    PlannedItem,
    PlannedItemKind,
)
from nutriplanner.services.catalog import CatalogService
from nutriplanner.services.rollup import empty_daily_plan
from nutriplanner.services.shopping import (
    ShoppingListService,
    build_shopping_list,
    group_by_category,
)
from tests.conftest import (
    InMemoryCatalogRepository,
    InMemoryConversionRepository,
    InMemoryPlanRepository,
)

START = date(2024, 5, 6)
END = date(2024, 5, 12)


def _plan(day: date, meal_type: MealType, *items: PlannedItem) -> DailyPlan:
    plan = empty_daily_plan(day)
    meals = tuple(
        Meal(meal_type=meal.meal_type, items=items)
        if meal.meal_type == meal_type
        else meal
        for meal in plan.meals
    )
    return replace(plan, meals=meals)


def _item(kind: PlannedItemKind, item_id: str, quantity: float) -> PlannedItem:
    return PlannedItem(
        id=f"{item_id}-{quantity}", kind=kind, item_id=item_id, quantity=quantity
    )


def _ingredient(item_id: str, quantity: float) -> PlannedItem:
    return _item(PlannedItemKind.INGREDIENT, item_id, quantity)


def _recipe(item_id: str, servings: float) -> PlannedItem:
    return _item(PlannedItemKind.RECIPE, item_id, servings)


def _build(plans, repository: InMemoryCatalogRepository, conversions=()):
    return build_shopping_list(
        plans,
        START,
        END,
        repository.get_ingredient,
        repository.get_recipe,
        conversions,
    )


def _by_key(lines):
    return {(line.ingredient_id, line.unit): line for line in lines}


def test_same_ingredient_and_unit_consolidates(catalog_repository) -> None:
    plans = [
        _plan(date(2024, 5, 6), MealType.LUNCH, _ingredient("flour", 150)),
        _plan(date(2024, 5, 7), MealType.DINNER, _ingredient("flour", 100)),
        _plan(date(2024, 5, 8), MealType.BREAKFAST, _ingredient("egg", 1)),
    ]

    lines = _by_key(_build(plans, catalog_repository))

    assert set(lines) == {("flour", "g"), ("egg", "unidade")}
    flour = lines[("flour", "g")]
    assert flour.total_quantity == 250
    assert flour.ingredient_name == "Farinha de trigo"
    assert flour.category == "Mercearia"
    assert not flour.purchased
    assert lines[("egg", "unidade")].category == "Outros"


def test_recipe_items_expand_to_per_serving_ingredients(catalog_repository) -> None:
    plans = [_plan(date(2024, 5, 9), MealType.LUNCH, _recipe("bread", 2))]

    lines = _by_key(_build(plans, catalog_repository))

    assert lines[("flour", "g")].total_quantity == 100
    assert lines[("egg", "unidade")].total_quantity == 1


def test_recipe_and_direct_items_merge(catalog_repository) -> None:
    plans = [
        _plan(
            date(2024, 5, 9),
            MealType.LUNCH,
            _recipe("bread", 2),
            _ingredient("flour", 50),
        )
    ]

    lines = _by_key(_build(plans, catalog_repository))

    assert lines[("flour", "g")].total_quantity == 150


def test_degenerate_recipes_and_dangling_references_are_skipped(
    catalog_repository,
) -> None:
    catalog_repository.recipes["bread"] = replace(
        catalog_repository.recipes["bread"], servings=0
    )
    plans = [
        _plan(
            date(2024, 5, 9),
            MealType.LUNCH,
            _recipe("bread", 2),
            _recipe("ghost", 1),
            _ingredient("ghost", 3),
        )
    ]

    assert _build(plans, catalog_repository) == []


def test_date_range_is_inclusive(catalog_repository) -> None:
    plans = [
        _plan(date(2024, 5, 5), MealType.LUNCH, _ingredient("flour", 1)),
        _plan(START, MealType.LUNCH, _ingredient("flour", 10)),
        _plan(END, MealType.LUNCH, _ingredient("flour", 100)),
        _plan(date(2024, 5, 13), MealType.LUNCH, _ingredient("flour", 1000)),
    ]

    lines = _build(plans, catalog_repository)

    assert len(lines) == 1
    assert lines[0].total_quantity == 110


def test_datetime_bounds_are_normalized_to_dates(catalog_repository) -> None:
    plans = [_plan(END, MealType.LUNCH, _ingredient("flour", 100))]

    lines = build_shopping_list(
        plans,
        datetime(2024, 5, 6, 15, 30),
        datetime(2024, 5, 12, 8, 0),
        catalog_repository.get_ingredient,
        catalog_repository.get_recipe,
        [],
    )

    assert lines[0].total_quantity == 100


def test_plans_dated_with_a_time_compare_by_day(catalog_repository) -> None:
    plans = [
        _plan(datetime(2024, 5, 6, 12, 0), MealType.LUNCH, _ingredient("flour", 50)),
        _plan(datetime(2024, 5, 13, 0, 30), MealType.LUNCH, _ingredient("flour", 9)),
    ]

    lines = build_shopping_list(
        plans,
        START,
        START,
        catalog_repository.get_ingredient,
        catalog_repository.get_recipe,
        [],
    )

    assert [(line.ingredient_id, line.total_quantity) for line in lines] == [
        ("flour", 50)
    ]


def test_mass_units_normalize_to_grams(catalog_repository) -> None:
    catalog_repository.ingredients["rice"] = Ingredient(
        id="rice", name="Arroz", unit="kg", category="Grãos"
    )
    plans = [_plan(START, MealType.LUNCH, _ingredient("rice", 1.5))]

    lines = _by_key(_build(plans, catalog_repository))

    assert lines[("rice", "g")].total_quantity == 1500


def test_volume_and_hundred_units_normalize(catalog_repository) -> None:
    catalog_repository.ingredients["juice"] = Ingredient(
        id="juice", name="Suco", unit="l"
    )
    plans = [
        _plan(
            START,
            MealType.SNACK,
            _ingredient("juice", 0.5),
            _ingredient("milk", 200),
            _ingredient("oats", 80),
        )
    ]

    lines = _by_key(_build(plans, catalog_repository))

    assert lines[("juice", "ml")].total_quantity == 500
    assert lines[("milk", "ml")].total_quantity == 200
    assert lines[("oats", "g")].total_quantity == 80


def test_unconvertible_units_keep_their_own_line(catalog_repository) -> None:
    catalog_repository.ingredients["sugar"] = Ingredient(
        id="sugar", name="Açúcar", unit="xícara"
    )
    plans = [
        _plan(START, MealType.BREAKFAST, _ingredient("sugar", 2)),
        _plan(END, MealType.BREAKFAST, _ingredient("sugar", 0.5)),
    ]

    lines = _build(plans, catalog_repository)

    assert len(lines) == 1
    assert lines[0].unit == "xícara"
    assert lines[0].total_quantity == pytest.approx(2.5)


def test_count_units_stay_nominal_despite_user_conversions(catalog_repository) -> None:
    conversions = [
        UserUnitConversion(
            id="c1",
            ingredient_id="egg",
            unit_a="unidade",
            quantity_a=1,
            unit_b="g",
            quantity_b=50,
        )
    ]
    plans = [_plan(START, MealType.BREAKFAST, _ingredient("egg", 3))]

    lines = _by_key(_build(plans, catalog_repository, conversions))

    assert lines[("egg", "unidade")].total_quantity == 3


def test_group_by_category_sorts_lines(catalog_repository) -> None:
    plans = [
        _plan(
            START,
            MealType.LUNCH,
            _ingredient("milk", 200),
            _ingredient("flour", 100),
            _ingredient("egg", 2),
            _ingredient("oats", 50),
        )
    ]

    grouped = group_by_category(_build(plans, catalog_repository))

    assert list(grouped) == ["Grãos", "Laticínios", "Mercearia", "Outros"]
    assert grouped["Outros"][0].ingredient_id == "egg"


def test_service_reads_stored_plans_and_conversions(
    catalog_repository: InMemoryCatalogRepository,
) -> None:
    plan_repository = InMemoryPlanRepository()
    plan_repository.save_plan(_plan(START, MealType.LUNCH, _ingredient("flour", 1000)))
    plan_repository.save_plan(
        _plan(date(2024, 6, 1), MealType.LUNCH, _ingredient("flour", 5))
    )
    service = ShoppingListService(
        plan_repository=plan_repository,
        catalog_service=CatalogService(catalog_repository),
        conversion_repository=InMemoryConversionRepository(),
        default_category="Sem setor",
        debug=True,
    )

    lines = service.build(START, END)
    grouped = service.build_grouped(START, END)

    assert len(lines) == 1
    assert lines[0].total_quantity == 1000
    assert list(grouped) == ["Mercearia"]
