"""Recipe-level nutrition summaries built from matched ingredients."""

import logging
from dataclasses import dataclass

from recipe_nutrition.domain.foods import FoodReference
from recipe_nutrition.domain.recipes import RecipeIngredient, RecipeNutritionSummary
from recipe_nutrition.services.matches import MatchService
from recipe_nutrition.services.nutriscore import compute_grade
from recipe_nutrition.services.nutrition import (
    NutritionCalculator,
    per_100g,
    resolve_amount_g,
    scale_profile,
)
from recipe_nutrition.services.text import line_variants
from recipe_nutrition.services.units import UnitConverter

_logger = logging.getLogger(__name__)


@dataclass
class RecipeNutritionService:
    """Compute totals, a per-100g profile and a Nutri-Score for a recipe."""

    match_service: MatchService
    calculator: NutritionCalculator
    unit_converter: UnitConverter
    debug: bool = False

    def summarize(
        self, ingredients: list[RecipeIngredient], servings: int | None = None
    ) -> RecipeNutritionSummary | None:
        """Summarize a recipe; ``None`` when no ingredient contributes.

        Ingredients without an explicit reference are resolved through stored
        matches, trying the full line before its search kernel.
        """
        references = self._resolve_references(ingredients)
        entries: list[tuple[FoodReference, float]] = []
        unmatched: list[str] = []
        skipped: list[str] = []
        for ingredient, reference in zip(ingredients, references, strict=True):
            if reference is None:
                unmatched.append(ingredient.label)
                continue
            line = ingredient.line
            amount_g = resolve_amount_g(
                self.unit_converter,
                quantity_g=ingredient.quantity_g,
                quantity=line.quantity if line else None,
                unit=line.unit if line else None,
            )
            if amount_g <= 0:
                skipped.append(ingredient.label)
                continue
            entries.append((reference, amount_g))

        if not entries:
            return None
        total, total_g, missing = self.calculator.aggregate_entries(entries)
        if total_g <= 0:
            return None

        per_100 = per_100g(total)
        resolved_servings = servings if servings and servings > 0 else None
        summary = RecipeNutritionSummary(
            total=total,
            total_g=total_g,
            per_100g=per_100,
            grade=compute_grade(per_100),
            servings=resolved_servings,
            per_serving=(
                scale_profile(total, 1 / resolved_servings)
                if resolved_servings
                else None
            ),
            unmatched_lines=unmatched,
            missing_references=missing,
            skipped_quantities=skipped,
        )
        if self.debug:
            _logger.info(
                "Recipe summary: ingredients=%s used=%s grade=%s",
                len(ingredients),
                len(entries) - len(missing),
                summary.grade,
            )
        return summary

    def _resolve_references(
        self, ingredients: list[RecipeIngredient]
    ) -> list[FoodReference | None]:
        pending = [
            index
            for index, ingredient in enumerate(ingredients)
            if ingredient.reference is None and ingredient.line is not None
        ]
        references = [ingredient.reference for ingredient in ingredients]
        if not pending:
            return references
        matches = self.match_service.get_matches_for_lines(
            [line_variants(ingredients[index].line.text) for index in pending]
        )
        for index, match in zip(pending, matches, strict=True):
            if match is not None:
                references[index] = match.reference
        return references
