"""Quantity and unit conversion to grams."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from recipe_nutrition.services.text import normalize

# Grams per unit. Volumes assume water density; piece units (stuk, clove)
# have no entry and convert to 0.
DEFAULT_GRAMS_PER_UNIT = MappingProxyType(
    {
        "g": 1.0,
        "gr": 1.0,
        "gram": 1.0,
        "grams": 1.0,
        "grammen": 1.0,
        "kg": 1000.0,
        "kilo": 1000.0,
        "kilogram": 1000.0,
        "mg": 0.001,
        "ml": 1.0,
        "milliliter": 1.0,
        "cl": 10.0,
        "dl": 100.0,
        "deciliter": 100.0,
        "l": 1000.0,
        "liter": 1000.0,
        "litre": 1000.0,
        "el": 15.0,
        "eetlepel": 15.0,
        "eetlepels": 15.0,
        "tbsp": 15.0,
        "tbs": 15.0,
        "tbl": 15.0,
        "tablespoon": 15.0,
        "tablespoons": 15.0,
        "tl": 5.0,
        "theelepel": 5.0,
        "theelepels": 5.0,
        "tsp": 5.0,
        "teaspoon": 5.0,
        "teaspoons": 5.0,
        "cup": 240.0,
        "cups": 240.0,
        "kopje": 240.0,
        "kopjes": 240.0,
        "oz": 28.35,
        "ounce": 28.35,
        "ounces": 28.35,
        "lb": 453.6,
        "lbs": 453.6,
        "pound": 453.6,
        "pond": 500.0,
        "mespunt": 1.0,
        "snuf": 0.5,
        "pinch": 0.5,
    }
)


class UnitConverter(Protocol):
    """Converts a recipe quantity and unit to grams."""

    def to_grams(self, quantity: float, unit: str) -> float:
        """Return grams, or 0 when the unit cannot be converted."""


@dataclass
class TableUnitConverter(UnitConverter):
    """Table-driven converter for common Dutch and English units."""

    grams_per_unit: Mapping[str, float] = field(
        default_factory=lambda: DEFAULT_GRAMS_PER_UNIT
    )

    def to_grams(self, quantity: float, unit: str) -> float:
        """Convert ``quantity`` of ``unit`` to grams; unknown units give 0."""
        if not math.isfinite(quantity) or quantity <= 0:
            return 0.0
        key = normalize(unit or "").rstrip(".")
        factor = self.grams_per_unit.get(key)
        if factor is None:
            return 0.0
        return quantity * factor
