"""Ingredient and recipe catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Request, status

from nutriplanner.api.auth import require_token
from nutriplanner.api.models import IngredientPayload, RecipePayload  # noqa: TC001
from nutriplanner.api.serializers import ingredient_to_dict, recipe_to_dict
from nutriplanner.domain.catalog import Ingredient, Recipe, RecipeIngredientLine
from nutriplanner.domain.nutrients import NutrientVector

if TYPE_CHECKING:
    from nutriplanner.containers import AppContainer
    from nutriplanner.services.catalog import CatalogService

router = APIRouter(tags=["catalog"], dependencies=[Depends(require_token)])


def _catalog(request: Request) -> CatalogService:
    container: AppContainer = request.app.state.container
    return container.catalog_service


def _ingredient(ingredient_id: str, payload: IngredientPayload) -> Ingredient:
    return Ingredient(
        id=ingredient_id,
        name=payload.name,
        unit=payload.unit,
        nutrients=NutrientVector(**payload.nutrients.model_dump()),
        category=payload.category,
        brand=payload.brand,
        average_price=payload.average_price,
        purchase_location=payload.purchase_location,
    )


def _recipe(recipe_id: str, payload: RecipePayload) -> Recipe:
    return Recipe(
        id=recipe_id,
        name=payload.name,
        servings=payload.servings,
        ingredients=tuple(
            RecipeIngredientLine(line.ingredient_id, line.quantity)
            for line in payload.ingredients
        ),
        instructions=payload.instructions,
    )


@router.get("/ingredients")
async def list_ingredients(request: Request) -> dict[str, object]:
    """Return every ingredient, sorted by name."""
    ingredients = _catalog(request).list_ingredients()
    return {"ingredients": [ingredient_to_dict(item) for item in ingredients]}


@router.get("/ingredients/{ingredient_id}")
async def get_ingredient(ingredient_id: str, request: Request) -> dict[str, object]:
    ingredient = _catalog(request).get_ingredient(ingredient_id)
    if ingredient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return ingredient_to_dict(ingredient)


@router.post("/ingredients", status_code=201)
async def create_ingredient(
    payload: IngredientPayload, request: Request
) -> dict[str, object]:
    """Add an ingredient to the catalog."""
    saved = _catalog(request).save_ingredient(_ingredient(str(uuid4()), payload))
    return ingredient_to_dict(saved)


@router.put("/ingredients/{ingredient_id}")
async def update_ingredient(
    ingredient_id: str, payload: IngredientPayload, request: Request
) -> dict[str, object]:
    """Replace an ingredient; recipes using it get fresh nutrient totals."""
    catalog = _catalog(request)
    if catalog.get_ingredient(ingredient_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return ingredient_to_dict(
        catalog.save_ingredient(_ingredient(ingredient_id, payload))
    )


@router.delete("/ingredients/{ingredient_id}")
async def delete_ingredient(ingredient_id: str, request: Request) -> dict[str, str]:
    catalog = _catalog(request)
    if catalog.get_ingredient(ingredient_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    catalog.delete_ingredient(ingredient_id)
    return {"status": "deleted"}


@router.get("/recipes")
async def list_recipes(request: Request) -> dict[str, object]:
    """Return every recipe with its cached nutrient totals."""
    recipes = _catalog(request).list_recipes()
    return {"recipes": [recipe_to_dict(item) for item in recipes]}


@router.get("/recipes/{recipe_id}")
async def get_recipe(recipe_id: str, request: Request) -> dict[str, object]:
    recipe = _catalog(request).get_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return recipe_to_dict(recipe)


@router.post("/recipes", status_code=201)
async def create_recipe(payload: RecipePayload, request: Request) -> dict[str, object]:
    """Add a recipe; its totals are computed from the current catalog."""
    saved = _catalog(request).save_recipe(_recipe(str(uuid4()), payload))
    return recipe_to_dict(saved)


@router.put("/recipes/{recipe_id}")
async def update_recipe(
    recipe_id: str, payload: RecipePayload, request: Request
) -> dict[str, object]:
    catalog = _catalog(request)
    if catalog.get_recipe(recipe_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return recipe_to_dict(catalog.save_recipe(_recipe(recipe_id, payload)))


@router.delete("/recipes/{recipe_id}")
async def delete_recipe(recipe_id: str, request: Request) -> dict[str, str]:
    catalog = _catalog(request)
    if catalog.get_recipe(recipe_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    catalog.delete_recipe(recipe_id)
    return {"status": "deleted"}
