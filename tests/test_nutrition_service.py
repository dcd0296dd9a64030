"""Tests for nutrition scaling and aggregation."""

import math

import pytest

from recipe_nutrition.domain.errors import ValidationError
from recipe_nutrition.domain.foods import FoodReference
from recipe_nutrition.domain.nutrition import NutritionalProfile
from recipe_nutrition.services.catalogs import Catalogs
from recipe_nutrition.services.nutrition import (
    NutritionCalculator,
    per_100g,
    resolve_amount_g,
    scale_profile,
)
from recipe_nutrition.services.units import TableUnitConverter


def test_compute_for_reference_scales_per_100g(catalogs: Catalogs) -> None:
    calculator = NutritionCalculator(catalogs)

    profile = calculator.compute_for_reference(FoodReference.nevo(1), 150)

    assert profile is not None
    assert profile.quantity_g == pytest.approx(150)
    assert profile.energy_kcal == pytest.approx(165)
    assert profile.protein_g == pytest.approx(36)
    assert profile.sodium_mg == pytest.approx(90)


def test_compute_for_reference_invalid_amount(catalogs: Catalogs) -> None:
    calculator = NutritionCalculator(catalogs)

    for amount in [0, -5, math.nan, math.inf]:
        assert calculator.compute_for_reference(FoodReference.nevo(1), amount) is None


def test_compute_for_reference_dangling(catalogs: Catalogs) -> None:
    calculator = NutritionCalculator(catalogs)

    assert calculator.compute_for_reference(FoodReference.custom("gone"), 100) is None


def test_aggregate_recipe_skips_zero_gram_entries(catalogs: Catalogs) -> None:
    calculator = NutritionCalculator(catalogs)

    total, total_g = calculator.aggregate_recipe(
        [(FoodReference.nevo(1), 100), (FoodReference.nevo(3), 0)]
    )

    assert total_g == 100
    assert total.protein_g == pytest.approx(24)
    assert total.fat_g == pytest.approx(1.5)


def test_aggregate_entries_reports_missing_rows(catalogs: Catalogs) -> None:
    calculator = NutritionCalculator(catalogs)

    total, total_g, missing = calculator.aggregate_entries(
        [(FoodReference.nevo(1), 100), (FoodReference.nevo(999), 50)]
    )

    assert total_g == 100
    assert total.quantity_g == 100
    assert missing == [FoodReference.nevo(999)]


def test_per_100g_matches_sum_over_grams(catalogs: Catalogs) -> None:
    calculator = NutritionCalculator(catalogs)
    total, total_g = calculator.aggregate_recipe(
        [(FoodReference.nevo(1), 100), (FoodReference.nevo(3), 50)]
    )

    normalized = per_100g(total)

    assert total_g == 150
    assert normalized.quantity_g == pytest.approx(100)
    assert normalized.energy_kcal == pytest.approx((110 + 450) * 100 / 150)


def test_per_100g_requires_quantity() -> None:
    with pytest.raises(ValidationError):
        per_100g(NutritionalProfile(quantity_g=0))


def test_scale_profile_multiplies_every_field() -> None:
    profile = NutritionalProfile(quantity_g=100, energy_kcal=50, fiber_g=2)

    scaled = scale_profile(profile, 2.5)

    assert scaled.quantity_g == 250
    assert scaled.energy_kcal == 125
    assert scaled.fiber_g == 5
    assert scaled.fat_g == 0


def test_scale_profile_rejects_bad_factor() -> None:
    profile = NutritionalProfile(quantity_g=100)

    with pytest.raises(ValidationError):
        scale_profile(profile, -1)
    with pytest.raises(ValidationError):
        scale_profile(profile, math.inf)


def test_profile_rejects_negative_values() -> None:
    with pytest.raises(ValidationError):
        NutritionalProfile(quantity_g=100, protein_g=-1)


def test_resolve_amount_precedence() -> None:
    converter = TableUnitConverter()

    assert resolve_amount_g(converter, quantity_g=80, quantity=2, unit="el") == 80
    assert resolve_amount_g(converter, quantity=2, unit="el") == 30
    assert resolve_amount_g(converter, quantity_g=0, quantity=1, unit="kg") == 1000
    assert resolve_amount_g(converter, quantity=3, unit="stuk") == 0
    assert resolve_amount_g(converter) == 0


def test_quantity_without_unit_is_grams() -> None:
    converter = TableUnitConverter()

    assert resolve_amount_g(converter, quantity=200.0, unit=None) == 200
    assert resolve_amount_g(converter, quantity=150, unit="  ") == 150
    assert resolve_amount_g(converter, quantity=0, unit=None) == 0
