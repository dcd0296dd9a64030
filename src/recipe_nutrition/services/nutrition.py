"""Nutrition scaling and aggregation over catalog foods."""

import logging
import math
from dataclasses import dataclass

from recipe_nutrition.domain.errors import ValidationError
from recipe_nutrition.domain.foods import FoodReference
from recipe_nutrition.domain.nutrition import NUTRIENT_FIELDS, NutritionalProfile
from recipe_nutrition.services.catalogs import Catalogs
from recipe_nutrition.services.units import UnitConverter

_logger = logging.getLogger(__name__)


@dataclass
class NutritionCalculator:
    """Compute nutrition for catalog references and recipes."""

    catalogs: Catalogs
    debug: bool = False

    def compute_for_reference(
        self, reference: FoodReference, amount_g: float
    ) -> NutritionalProfile | None:
        """Scale the referenced food's per-100g values to ``amount_g`` grams."""
        if not is_positive_amount(amount_g):
            return None
        food = self.catalogs.get_food(reference)
        if food is None:
            _logger.warning("No catalog row for %s; match is dangling", reference.key)
            return None
        return scale_profile(food.per_100g, amount_g / 100.0)

    def aggregate_recipe(
        self, entries: list[tuple[FoodReference, float]]
    ) -> tuple[NutritionalProfile, float]:
        """Sum nutrients and grams over entries with a positive amount."""
        total, total_g, _missing = self.aggregate_entries(entries)
        return total, total_g

    def aggregate_entries(
        self, entries: list[tuple[FoodReference, float]]
    ) -> tuple[NutritionalProfile, float, list[FoodReference]]:
        """Like ``aggregate_recipe`` but also return dangling references.

        Entries whose catalog row is gone add neither nutrients nor grams.
        """
        sums = dict.fromkeys(NUTRIENT_FIELDS, 0.0)
        total_g = 0.0
        missing: list[FoodReference] = []
        for reference, amount_g in entries:
            if not is_positive_amount(amount_g):
                continue
            profile = self.compute_for_reference(reference, amount_g)
            if profile is None:
                missing.append(reference)
                continue
            for name, value in profile.nutrients().items():
                sums[name] += value
            total_g += amount_g

        if self.debug:
            _logger.info(
                "Aggregated recipe: entries=%s total_g=%s missing=%s",
                len(entries),
                total_g,
                len(missing),
            )
        return NutritionalProfile(quantity_g=total_g, **sums), total_g, missing


def scale_profile(profile: NutritionalProfile, factor: float) -> NutritionalProfile:
    """Multiply every field, including the quantity, by ``factor``."""
    if not math.isfinite(factor) or factor < 0:
        raise ValidationError("scale factor must be finite and >= 0")
    return NutritionalProfile(
        quantity_g=profile.quantity_g * factor,
        **{name: value * factor for name, value in profile.nutrients().items()},
    )


def per_100g(profile: NutritionalProfile) -> NutritionalProfile:
    """Normalize an aggregate to 100 grams."""
    if profile.quantity_g <= 0:
        raise ValidationError("cannot normalize a profile without quantity")
    return scale_profile(profile, 100.0 / profile.quantity_g)


def resolve_amount_g(
    converter: UnitConverter,
    quantity_g: float | None = None,
    quantity: float | None = None,
    unit: str | None = None,
) -> float:
    """Pick explicit grams, else convert quantity and unit, else 0.

    A quantity without a unit is read as grams.
    """
    if quantity_g is not None and is_positive_amount(quantity_g):
        return float(quantity_g)
    if quantity is not None and is_positive_amount(quantity):
        grams = converter.to_grams(float(quantity), (unit or "").strip() or "g")
        if is_positive_amount(grams):
            return grams
    return 0.0


def is_positive_amount(value: object) -> bool:
    """True for finite numbers above zero."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value) and value > 0
