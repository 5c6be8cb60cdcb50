"""Unit conversion with built-in rules and per-ingredient user conversions."""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import uuid4

from nutriplanner.domain.catalog import UserUnitConversion
from nutriplanner.domain.units import (
    GRAM,
    HUNDRED_GRAMS,
    HUNDRED_MILLILITERS,
    KILOGRAM,
    LITER,
    MILLILITER,
)

# (from, to) -> (multiplier, divisor); 100g and g differ only in nutrient
# basis, never in amount.
_BUILT_IN_RULES: dict[tuple[str, str], tuple[float, float]] = {
    (GRAM, KILOGRAM): (1, 1000),
    (KILOGRAM, GRAM): (1000, 1),
    (MILLILITER, LITER): (1, 1000),
    (LITER, MILLILITER): (1000, 1),
    (HUNDRED_GRAMS, GRAM): (1, 1),
    (GRAM, HUNDRED_GRAMS): (1, 1),
    (HUNDRED_MILLILITERS, MILLILITER): (1, 1),
    (MILLILITER, HUNDRED_MILLILITERS): (1, 1),
}


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a conversion; on failure the input quantity and unit are kept."""

    quantity: float
    unit: str
    success: bool


def convert(
    quantity: float,
    from_unit: str,
    to_unit: str,
    ingredient_id: str,
    user_conversions: Iterable[UserUnitConversion],
) -> ConversionResult:
    """Convert a quantity, trying built-in rules before user conversions."""
    if from_unit == to_unit:
        return ConversionResult(quantity, to_unit, success=True)

    rule = _BUILT_IN_RULES.get((from_unit, to_unit))
    if rule is not None:
        multiplier, divisor = rule
        return ConversionResult(quantity * multiplier / divisor, to_unit, success=True)

    for conversion in user_conversions:
        if conversion.ingredient_id != ingredient_id:
            continue
        if (
            conversion.unit_a == from_unit
            and conversion.unit_b == to_unit
            and conversion.quantity_a != 0
        ):
            return ConversionResult(
                quantity * (conversion.quantity_b / conversion.quantity_a),
                to_unit,
                success=True,
            )
        if (
            conversion.unit_b == from_unit
            and conversion.unit_a == to_unit
            and conversion.quantity_b != 0
        ):
            return ConversionResult(
                quantity * (conversion.quantity_a / conversion.quantity_b),
                to_unit,
                success=True,
            )

    return ConversionResult(quantity, from_unit, success=False)


class ConversionRepository(Protocol):
    """Persistence interface for user unit conversions."""

    def list_conversions(
        self, ingredient_id: str | None = None
    ) -> list[UserUnitConversion]:
        """Return conversions, optionally only those for one ingredient."""

    def get_conversion(self, conversion_id: str) -> UserUnitConversion | None:
        """Return a conversion by id, if present."""

    def save_conversion(self, conversion: UserUnitConversion) -> UserUnitConversion:
        """Create or replace a conversion and return it."""

    def delete_conversion(self, conversion_id: str) -> None:
        """Delete a conversion by id."""


@dataclass
class ConversionService:
    """Application service for user conversions and ad hoc unit conversion."""

    repository: ConversionRepository

    def add_conversion(  # noqa: PLR0913
        self,
        ingredient_id: str,
        unit_a: str,
        quantity_a: float,
        unit_b: str,
        quantity_b: float,
    ) -> UserUnitConversion:
        """Store a new conversion for an ingredient."""
        conversion = UserUnitConversion(
            id=str(uuid4()),
            ingredient_id=ingredient_id,
            unit_a=unit_a,
            quantity_a=quantity_a,
            unit_b=unit_b,
            quantity_b=quantity_b,
        )
        return self.repository.save_conversion(conversion)

    def update_conversion(
        self, conversion_id: str, changes: dict[str, object]
    ) -> UserUnitConversion | None:
        """Apply field changes to an existing conversion."""
        current = self.repository.get_conversion(conversion_id)
        if current is None:
            return None
        allowed = {"unit_a", "quantity_a", "unit_b", "quantity_b"}
        updated = replace(
            current, **{key: value for key, value in changes.items() if key in allowed}
        )
        return self.repository.save_conversion(updated)

    def delete_conversion(self, conversion_id: str) -> bool:
        """Delete a conversion; return False when it does not exist."""
        if self.repository.get_conversion(conversion_id) is None:
            return False
        self.repository.delete_conversion(conversion_id)
        return True

    def list_for_ingredient(self, ingredient_id: str) -> list[UserUnitConversion]:
        """Return the conversions recorded for one ingredient."""
        return self.repository.list_conversions(ingredient_id)

    def list_all(self) -> list[UserUnitConversion]:
        """Return every stored conversion."""
        return self.repository.list_conversions()

    def convert(
        self, quantity: float, from_unit: str, to_unit: str, ingredient_id: str
    ) -> ConversionResult:
        """Convert using the stored conversions of ``ingredient_id``."""
        return convert(
            quantity,
            from_unit,
            to_unit,
            ingredient_id,
            self.repository.list_conversions(ingredient_id),
        )
