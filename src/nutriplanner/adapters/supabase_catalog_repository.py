"""Supabase implementation for the ingredient and recipe catalog."""

from dataclasses import dataclass

from supabase import Client

from nutriplanner.domain.catalog import Ingredient, Recipe, RecipeIngredientLine
from nutriplanner.domain.nutrients import NutrientVector
from nutriplanner.services.catalog import CatalogRepository


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed repository for ingredients and recipes."""

    client: Client

    def get_ingredient(self, ingredient_id: str) -> Ingredient | None:
        """Return an ingredient by id, if present."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .eq("id", ingredient_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_ingredient(response.data[0])

    def list_ingredients(self) -> list[Ingredient]:
        """Return every ingredient."""
        response = self.client.table("ingredients").select("*").execute()
        return [_parse_ingredient(row) for row in response.data or []]

    def save_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """Upsert an ingredient and return the stored row."""
        response = (
            self.client.table("ingredients")
            .upsert(_ingredient_payload(ingredient), on_conflict="id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save ingredient")
        return _parse_ingredient(response.data[0])

    def delete_ingredient(self, ingredient_id: str) -> None:
        """Delete an ingredient by id."""
        self.client.table("ingredients").delete().eq("id", ingredient_id).execute()

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def list_recipes(self) -> list[Recipe]:
        """Return every recipe."""
        response = self.client.table("recipes").select("*").execute()
        return [_parse_recipe(row) for row in response.data or []]

    def save_recipe(self, recipe: Recipe) -> Recipe:
        """Upsert a recipe and return the stored row."""
        response = (
            self.client.table("recipes")
            .upsert(_recipe_payload(recipe), on_conflict="id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save recipe")
        return _parse_recipe(response.data[0])

    def delete_recipe(self, recipe_id: str) -> None:
        """Delete a recipe by id."""
        self.client.table("recipes").delete().eq("id", recipe_id).execute()


def _ingredient_payload(ingredient: Ingredient) -> dict[str, object]:
    return {
        "id": ingredient.id,
        "name": ingredient.name,
        "unit": ingredient.unit,
        "category": ingredient.category,
        "brand": ingredient.brand,
        "average_price": ingredient.average_price,
        "purchase_location": ingredient.purchase_location,
        **ingredient.nutrients.as_dict(),
    }


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse an ingredient row into a domain model."""
    price = row.get("average_price")
    return Ingredient(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        unit=str(row.get("unit", "")),
        nutrients=NutrientVector.from_mapping(row),
        category=row.get("category"),
        brand=row.get("brand"),
        average_price=float(price) if isinstance(price, int | float) else None,
        purchase_location=row.get("purchase_location"),
    )


def _recipe_payload(recipe: Recipe) -> dict[str, object]:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "instructions": recipe.instructions,
        "servings": recipe.servings,
        "ingredients": [
            {"ingredient_id": line.ingredient_id, "quantity": line.quantity}
            for line in recipe.ingredients
        ],
        "total_nutrients": recipe.total_nutrients.as_dict()
        if recipe.total_nutrients
        else None,
        "per_serving": recipe.per_serving.as_dict() if recipe.per_serving else None,
    }


def _parse_recipe(row: dict[str, object]) -> Recipe:
    """Parse a recipe row into a domain model."""
    raw_lines = row.get("ingredients") or []
    lines = tuple(
        RecipeIngredientLine(
            ingredient_id=str(line["ingredient_id"]),
            quantity=float(line.get("quantity", 0.0)),
        )
        for line in raw_lines
        if isinstance(line, dict) and line.get("ingredient_id")
    )
    total = row.get("total_nutrients")
    per_serving = row.get("per_serving")
    return Recipe(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        servings=int(row.get("servings") or 0),
        ingredients=lines,
        instructions=str(row.get("instructions") or ""),
        total_nutrients=NutrientVector.from_mapping(total)
        if isinstance(total, dict)
        else None,
        per_serving=NutrientVector.from_mapping(per_serving)
        if isinstance(per_serving, dict)
        else None,
    )
