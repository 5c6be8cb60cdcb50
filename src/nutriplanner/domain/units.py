"""Unit table, unit classification and nutrient basis rules."""

from enum import Enum

GRAM = "g"
KILOGRAM = "kg"
MILLILITER = "ml"
LITER = "l"
HUNDRED_GRAMS = "100g"
HUNDRED_MILLILITERS = "100ml"

UNITS_OF_MEASUREMENT: dict[str, str] = {
    GRAM: "Gramas (g)",
    KILOGRAM: "Quilogramas (kg)",
    MILLILITER: "Mililitros (ml)",
    LITER: "Litros (l)",
    "unidade": "Unidade(s)",
    "xícara": "Xícara(s)",
    "colher de sopa": "Colher(es) de Sopa",
    "colher de chá": "Colher(es) de Chá",
    "fatia": "Fatia(s)",
    "pedaço": "Pedaço(s)",
    "a gosto": "A gosto",
    HUNDRED_GRAMS: "100 Gramas (100g)",
    HUNDRED_MILLILITERS: "100 Mililitros (100ml)",
}


class UnitKind(Enum):
    """Physical family of a unit label."""

    MASS = "mass"
    VOLUME = "volume"
    COUNT = "count"
    OTHER = "other"


class NutrientBasis(Enum):
    """Amount of food an ingredient's nutrient values refer to."""

    PER_UNIT = "per_unit"
    PER_HUNDRED = "per_hundred"


_KINDS: dict[str, UnitKind] = {
    GRAM: UnitKind.MASS,
    KILOGRAM: UnitKind.MASS,
    HUNDRED_GRAMS: UnitKind.MASS,
    MILLILITER: UnitKind.VOLUME,
    LITER: UnitKind.VOLUME,
    HUNDRED_MILLILITERS: UnitKind.VOLUME,
    "unidade": UnitKind.COUNT,
    "fatia": UnitKind.COUNT,
    "pedaço": UnitKind.COUNT,
}

# kg and l are stated per one unit even though they are mass/volume units.
_PER_HUNDRED_UNITS = frozenset({GRAM, MILLILITER, HUNDRED_GRAMS, HUNDRED_MILLILITERS})

_CANONICAL_UNITS = {UnitKind.MASS: GRAM, UnitKind.VOLUME: MILLILITER}


def classify(unit: str) -> UnitKind:
    """Return the family of ``unit``; unknown labels are OTHER."""
    return _KINDS.get(unit, UnitKind.OTHER)


def canonical_unit(kind: UnitKind) -> str | None:
    """Return the purchase unit mass and volume quantities are normalized to."""
    return _CANONICAL_UNITS.get(kind)


def basis_for(unit: str) -> NutrientBasis:
    """Return the basis an ingredient declared in ``unit`` states nutrients in."""
    if unit in _PER_HUNDRED_UNITS:
        return NutrientBasis.PER_HUNDRED
    return NutrientBasis.PER_UNIT


def multiplier_for(unit: str, quantity: float) -> float:
    """Return the factor that turns declared nutrients into ``quantity`` worth."""
    if basis_for(unit) is NutrientBasis.PER_HUNDRED:
        return quantity / 100
    return quantity
