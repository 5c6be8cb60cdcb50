"""Shopping list, unit conversion and conversion record endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from nutriplanner.api.auth import require_token
from nutriplanner.api.models import (  # noqa: TC001
    ConversionCreate,
    ConversionUpdate,
    ConvertRequest,
)
from nutriplanner.api.serializers import (
    conversion_result_to_dict,
    conversion_to_dict,
    line_to_dict,
)

if TYPE_CHECKING:
    from nutriplanner.containers import AppContainer

router = APIRouter(tags=["shopping"], dependencies=[Depends(require_token)])


@router.get("/shopping-list")
async def shopping_list(
    start: date, end: date, request: Request, grouped: bool = False
) -> dict[str, object]:
    """Return the consolidated shopping list for plans in a date range."""
    if start > end:
        raise HTTPException(
            status_code=422,
            detail="start must not be after end",
        )
    container: AppContainer = request.app.state.container
    service = container.shopping_list_service
    if grouped:
        return {
            "categories": {
                category: [line_to_dict(line) for line in lines]
                for category, lines in service.build_grouped(start, end).items()
            }
        }
    return {"items": [line_to_dict(line) for line in service.build(start, end)]}


@router.post("/units/convert")
async def convert_units(payload: ConvertRequest, request: Request) -> dict[str, object]:
    """Convert a quantity using built-in rules and the ingredient's conversions."""
    container: AppContainer = request.app.state.container
    result = container.conversion_service.convert(
        payload.quantity, payload.from_unit, payload.to_unit, payload.ingredient_id
    )
    return conversion_result_to_dict(result)


@router.get("/conversions")
async def list_conversions(
    request: Request, ingredient_id: str | None = None
) -> dict[str, object]:
    """Return stored conversions, optionally for one ingredient."""
    container: AppContainer = request.app.state.container
    service = container.conversion_service
    conversions = (
        service.list_for_ingredient(ingredient_id)
        if ingredient_id
        else service.list_all()
    )
    return {"conversions": [conversion_to_dict(item) for item in conversions]}


@router.post("/conversions", status_code=201)
async def create_conversion(
    payload: ConversionCreate, request: Request
) -> dict[str, object]:
    """Store a conversion for an ingredient."""
    container: AppContainer = request.app.state.container
    conversion = container.conversion_service.add_conversion(
        payload.ingredient_id,
        payload.unit_a,
        payload.quantity_a,
        payload.unit_b,
        payload.quantity_b,
    )
    return conversion_to_dict(conversion)


@router.patch("/conversions/{conversion_id}")
async def update_conversion(
    conversion_id: str, payload: ConversionUpdate, request: Request
) -> dict[str, object]:
    """Change the units or quantities of a stored conversion."""
    container: AppContainer = request.app.state.container
    conversion = container.conversion_service.update_conversion(
        conversion_id, payload.model_dump(exclude_none=True)
    )
    if conversion is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return conversion_to_dict(conversion)


@router.delete("/conversions/{conversion_id}")
async def delete_conversion(conversion_id: str, request: Request) -> dict[str, str]:
    """Delete a stored conversion."""
    container: AppContainer = request.app.state.container
    if not container.conversion_service.delete_conversion(conversion_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"status": "deleted"}
