"""Nutrient vector model and arithmetic."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields


@dataclass(frozen=True)
class NutrientVector:
    """Energy, macronutrients, cholesterol and fiber for some amount of food."""

    energy_kcal: float = 0.0
    protein_g: float = 0.0
    carbohydrate_g: float = 0.0
    fat_g: float = 0.0
    cholesterol_mg: float = 0.0
    fiber_g: float = 0.0

    def as_dict(self) -> dict[str, float]:
        """Return the vector as a plain mapping."""
        return {field.name: getattr(self, field.name) for field in fields(self)}

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> "NutrientVector":
        """Build a vector from a mapping, treating missing keys as zero."""
        if not data:
            return cls()
        values: dict[str, float] = {}
        for field in fields(cls):
            raw = data.get(field.name)
            values[field.name] = float(raw) if isinstance(raw, int | float) else 0.0
        return cls(**values)


NUTRIENT_FIELDS = tuple(field.name for field in fields(NutrientVector))


def zero() -> NutrientVector:
    """Return a vector with every field at zero."""
    return NutrientVector()


def sum_nutrients(vectors: Iterable[NutrientVector | None]) -> NutrientVector:
    """Add vectors field by field; absent vectors and fields count as zero."""
    totals = dict.fromkeys(NUTRIENT_FIELDS, 0.0)
    for vector in vectors:
        if vector is None:
            continue
        for name in NUTRIENT_FIELDS:
            totals[name] += getattr(vector, name, 0.0) or 0.0
    return NutrientVector(**totals)


def scale(vector: NutrientVector, factor: float) -> NutrientVector:
    """Multiply every field by ``factor``."""
    return NutrientVector(
        **{name: getattr(vector, name) * factor for name in NUTRIENT_FIELDS}
    )


def divide(vector: NutrientVector, divisor: float) -> NutrientVector:
    """Divide every field by ``divisor``; a non-positive divisor yields zero."""
    if divisor <= 0:
        return zero()
    return NutrientVector(
        **{name: getattr(vector, name) / divisor for name in NUTRIENT_FIELDS}
    )
