"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from nutriplanner.config import Settings
from nutriplanner.containers import AppContainer, wire_services
from nutriplanner.domain.catalog import (
    Ingredient,
    Recipe,
    RecipeIngredientLine,
    UserUnitConversion,
)
from nutriplanner.domain.nutrients import NutrientVector
from nutriplanner.domain.planning import DailyPlan
from nutriplanner.services.catalog import CatalogRepository, CatalogService
from nutriplanner.services.conversions import ConversionRepository
from nutriplanner.services.planner import PlannerService, PlanRepository
from nutriplanner.services.stats import TargetRepository


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog repository for tests."""

    ingredients: dict[str, Ingredient] = field(default_factory=dict)
    recipes: dict[str, Recipe] = field(default_factory=dict)

    def get_ingredient(self, ingredient_id: str) -> Ingredient | None:
        return self.ingredients.get(ingredient_id)

    def list_ingredients(self) -> list[Ingredient]:
        return list(self.ingredients.values())

    def save_ingredient(self, ingredient: Ingredient) -> Ingredient:
        self.ingredients[ingredient.id] = ingredient
        return ingredient

    def delete_ingredient(self, ingredient_id: str) -> None:
        self.ingredients.pop(ingredient_id, None)

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        return self.recipes.get(recipe_id)

    def list_recipes(self) -> list[Recipe]:
        return list(self.recipes.values())

    def save_recipe(self, recipe: Recipe) -> Recipe:
        self.recipes[recipe.id] = recipe
        return recipe

    def delete_recipe(self, recipe_id: str) -> None:
        self.recipes.pop(recipe_id, None)


@dataclass
class InMemoryPlanRepository(PlanRepository):
    """In-memory plan repository for tests."""

    plans: dict[date, DailyPlan] = field(default_factory=dict)
    saved: list[date] = field(default_factory=list)

    def get_plan(self, day: date) -> DailyPlan | None:
        return self.plans.get(day)

    def list_plans(self, start: date, end: date) -> list[DailyPlan]:
        return [plan for day, plan in self.plans.items() if start <= day <= end]

    def save_plan(self, plan: DailyPlan) -> DailyPlan:
        self.plans[plan.day] = plan
        self.saved.append(plan.day)
        return plan


@dataclass
class InMemoryConversionRepository(ConversionRepository):
    """In-memory conversion repository for tests."""

    conversions: dict[str, UserUnitConversion] = field(default_factory=dict)

    def list_conversions(
        self, ingredient_id: str | None = None
    ) -> list[UserUnitConversion]:
        return [
            conversion
            for conversion in self.conversions.values()
            if ingredient_id is None or conversion.ingredient_id == ingredient_id
        ]

    def get_conversion(self, conversion_id: str) -> UserUnitConversion | None:
        return self.conversions.get(conversion_id)

    def save_conversion(self, conversion: UserUnitConversion) -> UserUnitConversion:
        self.conversions[conversion.id] = conversion
        return conversion

    def delete_conversion(self, conversion_id: str) -> None:
        self.conversions.pop(conversion_id, None)


@dataclass
class InMemoryTargetRepository(TargetRepository):
    """In-memory daily target repository for tests."""

    target: NutrientVector | None = None

    def get_target(self) -> NutrientVector | None:
        return self.target

    def save_target(self, target: NutrientVector) -> NutrientVector:
        self.target = target
        return target


FLOUR = Ingredient(
    id="flour",
    name="Farinha de trigo",
    unit="g",
    nutrients=NutrientVector(
        energy_kcal=364, protein_g=10, carbohydrate_g=76, fat_g=1, fiber_g=2.7
    ),
    category="Mercearia",
)
EGG = Ingredient(
    id="egg",
    name="Ovo",
    unit="unidade",
    nutrients=NutrientVector(
        energy_kcal=72, protein_g=6.3, fat_g=4.8, cholesterol_mg=186
    ),
)
MILK = Ingredient(
    id="milk",
    name="Leite",
    unit="ml",
    nutrients=NutrientVector(energy_kcal=42, protein_g=3.4, carbohydrate_g=5, fat_g=1),
    category="Laticínios",
)
OATS = Ingredient(
    id="oats",
    name="Aveia",
    unit="100g",
    nutrients=NutrientVector(energy_kcal=400, protein_g=16, carbohydrate_g=60, fat_g=8),
    category="Grãos",
)
PORRIDGE = Recipe(
    id="porridge",
    name="Mingau",
    servings=4,
    ingredients=(RecipeIngredientLine("oats", 200),),
    total_nutrients=NutrientVector(
        energy_kcal=800, protein_g=32, carbohydrate_g=120, fat_g=16
    ),
)
BREAD = Recipe(
    id="bread",
    name="Pão",
    servings=4,
    ingredients=(RecipeIngredientLine("flour", 200), RecipeIngredientLine("egg", 2)),
)


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository(
        ingredients={item.id: item for item in (FLOUR, EGG, MILK, OATS)},
        recipes={item.id: item for item in (PORRIDGE, BREAD)},
    )


@pytest.fixture
def catalog_service(catalog_repository: InMemoryCatalogRepository) -> CatalogService:
    return CatalogService(catalog_repository)


@pytest.fixture
def plan_repository() -> InMemoryPlanRepository:
    return InMemoryPlanRepository()


@pytest.fixture
def conversion_repository() -> InMemoryConversionRepository:
    return InMemoryConversionRepository()


@pytest.fixture
def target_repository() -> InMemoryTargetRepository:
    return InMemoryTargetRepository()


@pytest.fixture
def planner_service(
    plan_repository: InMemoryPlanRepository, catalog_service: CatalogService
) -> PlannerService:
    return PlannerService(repository=plan_repository, catalog_service=catalog_service)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
    )


@pytest.fixture
def container(
    settings: Settings,
    catalog_repository: InMemoryCatalogRepository,
    plan_repository: InMemoryPlanRepository,
    conversion_repository: InMemoryConversionRepository,
    target_repository: InMemoryTargetRepository,
) -> AppContainer:
    return wire_services(
        settings,
        catalog_repository,
        plan_repository,
        conversion_repository,
        target_repository=target_repository,
    )
