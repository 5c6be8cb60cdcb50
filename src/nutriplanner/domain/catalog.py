"""Domain models for the ingredient and recipe catalog."""

from dataclasses import dataclass, field

from nutriplanner.domain.nutrients import NutrientVector


@dataclass(frozen=True)
class Ingredient:
    """Catalog ingredient with nutrients stated relative to its unit."""

    id: str
    name: str
    unit: str
    nutrients: NutrientVector = field(default_factory=NutrientVector)
    category: str | None = None
    brand: str | None = None
    average_price: float | None = None
    purchase_location: str | None = None


@dataclass(frozen=True)
class RecipeIngredientLine:
    """Quantity of an ingredient, in the ingredient's own unit."""

    ingredient_id: str
    quantity: float


@dataclass(frozen=True)
class Recipe:
    """Recipe with derived nutrient caches for the whole yield and one serving."""

    id: str
    name: str
    servings: int
    ingredients: tuple[RecipeIngredientLine, ...] = ()
    instructions: str = ""
    total_nutrients: NutrientVector | None = None
    per_serving: NutrientVector | None = None


@dataclass(frozen=True)
class UserUnitConversion:
    """States that ``quantity_a`` of ``unit_a`` equals ``quantity_b`` of ``unit_b``."""

    id: str
    ingredient_id: str
    unit_a: str
    quantity_a: float
    unit_b: str
    quantity_b: float
