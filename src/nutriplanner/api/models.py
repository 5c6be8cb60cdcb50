"""Request models for the HTTP API."""

from pydantic import BaseModel, Field

from nutriplanner.domain.planning import PlannedItemKind


class PlannedItemPayload(BaseModel):
    kind: PlannedItemKind
    item_id: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    custom_name: str | None = None


class ConvertRequest(BaseModel):
    quantity: float
    from_unit: str
    to_unit: str
    ingredient_id: str


class ConversionCreate(BaseModel):
    ingredient_id: str = Field(min_length=1)
    unit_a: str = Field(min_length=1)
    quantity_a: float
    unit_b: str = Field(min_length=1)
    quantity_b: float


class ConversionUpdate(BaseModel):
    unit_a: str | None = Field(default=None, min_length=1)
    quantity_a: float | None = None
    unit_b: str | None = Field(default=None, min_length=1)
    quantity_b: float | None = None


class NutrientsPayload(BaseModel):
    energy_kcal: float = Field(default=0.0, ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    carbohydrate_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    cholesterol_mg: float = Field(default=0.0, ge=0)
    fiber_g: float = Field(default=0.0, ge=0)


class IngredientPayload(BaseModel):
    name: str = Field(min_length=1)
    unit: str = Field(min_length=1)
    nutrients: NutrientsPayload = Field(default_factory=NutrientsPayload)
    category: str | None = None
    brand: str | None = None
    average_price: float | None = Field(default=None, ge=0)
    purchase_location: str | None = None


class RecipeLinePayload(BaseModel):
    ingredient_id: str = Field(min_length=1)
    quantity: float = Field(ge=0)


class RecipePayload(BaseModel):
    name: str = Field(min_length=1)
    servings: int = Field(ge=1)
    ingredients: list[RecipeLinePayload] = Field(default_factory=list)
    instructions: str = ""
