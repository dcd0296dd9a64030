"""Nutrition domain models."""

import math
from dataclasses import dataclass, fields
from enum import StrEnum

from recipe_nutrition.domain.errors import ValidationError


@dataclass(frozen=True)
class NutritionalProfile:
    """Nutrient amounts describing ``quantity_g`` grams of food."""

    quantity_g: float
    energy_kcal: float = 0.0
    energy_kj: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    saturated_fat_g: float = 0.0
    carbs_g: float = 0.0
    sugar_g: float = 0.0
    fiber_g: float = 0.0
    sodium_mg: float = 0.0

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if not math.isfinite(value) or value < 0:
                raise ValidationError(f"{item.name} must be finite and >= 0")

    def nutrients(self) -> dict[str, float]:
        """Return nutrient fields only, without the quantity."""
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}


NUTRIENT_FIELDS: tuple[str, ...] = tuple(
    item.name for item in fields(NutritionalProfile) if item.name != "quantity_g"
)


class NutriScoreGrade(StrEnum):
    """Nutri-Score grade; A is best, E is worst."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
