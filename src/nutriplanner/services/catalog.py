"""Services for the ingredient and recipe catalog."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from nutriplanner.domain.catalog import Ingredient, Recipe
from nutriplanner.services.rollup import refresh_recipe

DEFAULT_CATEGORY = "Outros"

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Persistence interface for ingredients and recipes."""

    def get_ingredient(self, ingredient_id: str) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def list_ingredients(self) -> list[Ingredient]:
        """Return every ingredient."""

    def save_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """Create or replace an ingredient and return it."""

    def delete_ingredient(self, ingredient_id: str) -> None:
        """Delete an ingredient by id."""

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""

    def list_recipes(self) -> list[Recipe]:
        """Return every recipe."""

    def save_recipe(self, recipe: Recipe) -> Recipe:
        """Create or replace a recipe and return it."""

    def delete_recipe(self, recipe_id: str) -> None:
        """Delete a recipe by id."""


@dataclass
class CatalogService:
    """Catalog access that keeps recipe nutrient caches current."""

    repository: CatalogRepository
    default_category: str = DEFAULT_CATEGORY
    debug: bool = False

    def get_ingredient(self, ingredient_id: str) -> Ingredient | None:
        """Return an ingredient, or None for a dangling id."""
        return self.repository.get_ingredient(ingredient_id)

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe, or None for a dangling id."""
        return self.repository.get_recipe(recipe_id)

    def list_ingredients(self) -> list[Ingredient]:
        """Return ingredients sorted by name."""
        return sorted(self.repository.list_ingredients(), key=lambda item: item.name)

    def list_recipes(self) -> list[Recipe]:
        """Return recipes sorted by name."""
        return sorted(self.repository.list_recipes(), key=lambda item: item.name)

    def save_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """Persist an ingredient and refresh every recipe that uses it."""
        if not ingredient.category:
            ingredient = replace(ingredient, category=self.default_category)
        saved = self.repository.save_ingredient(ingredient)
        refreshed = self._refresh_recipes_using(saved.id)
        if self.debug:
            _logger.info(
                "Catalog ingredient saved: id=%s recipes_refreshed=%s",
                saved.id,
                refreshed,
            )
        return saved

    def save_recipe(self, recipe: Recipe) -> Recipe:
        """Recompute the recipe's nutrient caches and persist it."""
        return self.repository.save_recipe(refresh_recipe(recipe, self.get_ingredient))

    def delete_ingredient(self, ingredient_id: str) -> None:
        """Delete an ingredient; recipes and plans referencing it keep the id."""
        self.repository.delete_ingredient(ingredient_id)
        self._refresh_recipes_using(ingredient_id)

    def delete_recipe(self, recipe_id: str) -> None:
        """Delete a recipe; planned items referencing it keep the id."""
        self.repository.delete_recipe(recipe_id)

    def _refresh_recipes_using(self, ingredient_id: str) -> int:
        """Recompute caches of recipes with a line for ``ingredient_id``."""
        refreshed = 0
        for recipe in self.repository.list_recipes():
            if any(line.ingredient_id == ingredient_id for line in recipe.ingredients):
                self.repository.save_recipe(refresh_recipe(recipe, self.get_ingredient))
                refreshed += 1
        return refreshed
