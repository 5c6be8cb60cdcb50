"""Domain models for meal planning and shopping lists."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from nutriplanner.domain.nutrients import NutrientVector


class MealType(Enum):
    """Meal slots of a day, in display order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


MEAL_TYPES_ORDERED: tuple[MealType, ...] = tuple(MealType)


class PlannedItemKind(Enum):
    """Catalog a planned item refers to."""

    INGREDIENT = "ingredient"
    RECIPE = "recipe"


@dataclass(frozen=True)
class PlannedItem:
    """Ingredient quantity or recipe servings planned for a meal.

    For ingredient items ``quantity`` is in the ingredient's unit; for recipe
    items it is the number of servings consumed and may be fractional.
    """

    id: str
    kind: PlannedItemKind
    item_id: str
    quantity: float
    custom_name: str | None = None


@dataclass(frozen=True)
class Meal:
    """Items planned for one meal slot plus their cached nutrient total."""

    meal_type: MealType
    items: tuple[PlannedItem, ...] = ()
    total_nutrients: NutrientVector = field(default_factory=NutrientVector)


@dataclass(frozen=True)
class DailyPlan:
    """All meals planned for a calendar day."""

    day: date
    meals: tuple[Meal, ...]
    total_nutrients: NutrientVector = field(default_factory=NutrientVector)

    def meal(self, meal_type: MealType) -> Meal | None:
        """Return the meal for ``meal_type``, if present."""
        for meal in self.meals:
            if meal.meal_type == meal_type:
                return meal
        return None

    @property
    def has_items(self) -> bool:
        """Whether any meal holds at least one item."""
        return any(meal.items for meal in self.meals)


@dataclass
class ShoppingListLine:
    """Consolidated quantity of one ingredient in one unit."""

    ingredient_id: str
    ingredient_name: str
    total_quantity: float
    unit: str
    category: str
    purchased: bool = False
