"""Tests for the planner service."""

from datetime import date

from nutriplanner.domain.planning import MealType, PlannedItem, PlannedItemKind
from nutriplanner.services.planner import PlannerService
from tests.conftest import InMemoryPlanRepository

DAY = date(2024, 5, 6)


def test_unknown_day_returns_unsaved_empty_plan(
    planner_service: PlannerService, plan_repository: InMemoryPlanRepository
) -> None:
    plan = planner_service.get_daily_plan(DAY)

    assert plan.day == DAY
    assert [meal.meal_type for meal in plan.meals] == list(MealType)
    assert plan.total_nutrients.energy_kcal == 0
    assert plan_repository.saved == []


def test_add_item_persists_recomputed_totals(
    planner_service: PlannerService, plan_repository: InMemoryPlanRepository
) -> None:
    plan, item = planner_service.add_item(
        DAY, MealType.BREAKFAST, PlannedItemKind.INGREDIENT, "egg", 2
    )
    plan, _ = planner_service.add_item(
        DAY, MealType.LUNCH, PlannedItemKind.RECIPE, "porridge", 0.5, "Meio mingau"
    )

    breakfast = plan.meal(MealType.BREAKFAST)
    lunch = plan.meal(MealType.LUNCH)
    assert breakfast is not None
    assert lunch is not None
    assert breakfast.items[0] == item
    assert breakfast.total_nutrients.energy_kcal == 144
    assert lunch.items[0].custom_name == "Meio mingau"
    assert lunch.total_nutrients.energy_kcal == 100
    assert plan.total_nutrients.energy_kcal == 244
    assert plan_repository.plans[DAY] == plan
    assert plan_repository.saved == [DAY, DAY]


def test_update_item_replaces_quantity(planner_service: PlannerService) -> None:
    _, item = planner_service.add_item(
        DAY, MealType.DINNER, PlannedItemKind.INGREDIENT, "flour", 100
    )

    plan = planner_service.update_item(
        DAY,
        MealType.DINNER,
        PlannedItem(
            id=item.id,
            kind=PlannedItemKind.INGREDIENT,
            item_id="flour",
            quantity=200,
        ),
    )

    assert plan is not None
    assert plan.total_nutrients.energy_kcal == 728


def test_remove_item_recomputes_totals(planner_service: PlannerService) -> None:
    _, egg = planner_service.add_item(
        DAY, MealType.SNACK, PlannedItemKind.INGREDIENT, "egg", 1
    )
    planner_service.add_item(DAY, MealType.SNACK, PlannedItemKind.INGREDIENT, "egg", 2)

    plan = planner_service.remove_item(DAY, MealType.SNACK, egg.id)

    assert plan is not None
    snack = plan.meal(MealType.SNACK)
    assert snack is not None
    assert len(snack.items) == 1
    assert plan.total_nutrients.energy_kcal == 144


def test_update_and_remove_unknown_items_return_none(
    planner_service: PlannerService,
) -> None:
    missing = PlannedItem(
        id="missing", kind=PlannedItemKind.INGREDIENT, item_id="egg", quantity=1
    )

    assert planner_service.update_item(DAY, MealType.LUNCH, missing) is None
    assert planner_service.remove_item(DAY, MealType.LUNCH, "missing") is None

    _, item = planner_service.add_item(
        DAY, MealType.LUNCH, PlannedItemKind.INGREDIENT, "egg", 1
    )
    assert planner_service.remove_item(DAY, MealType.DINNER, item.id) is None


def test_dangling_references_read_as_zero(
    planner_service: PlannerService, catalog_repository
) -> None:
    planner_service.add_item(DAY, MealType.LUNCH, PlannedItemKind.INGREDIENT, "egg", 2)
    catalog_repository.ingredients.pop("egg")

    plan = planner_service.get_daily_plan(DAY)

    assert plan.total_nutrients.energy_kcal == 0


def test_list_plans_orders_by_day(planner_service: PlannerService) -> None:
    later = date(2024, 5, 8)
    planner_service.add_item(later, MealType.LUNCH, PlannedItemKind.INGREDIENT, "egg", 1)
    planner_service.add_item(DAY, MealType.LUNCH, PlannedItemKind.INGREDIENT, "egg", 1)

    plans = planner_service.list_plans(DAY, later)

    assert [plan.day for plan in plans] == [DAY, later]
