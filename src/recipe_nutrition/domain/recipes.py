"""Domain models for recipe ingredients and nutrition summaries."""

from dataclasses import dataclass, field

from recipe_nutrition.domain.foods import FoodReference
from recipe_nutrition.domain.nutrition import NutriScoreGrade, NutritionalProfile


@dataclass(frozen=True)
class IngredientLine:
    """An ingredient as written in a recipe."""

    text: str
    quantity: float | None = None
    unit: str | None = None
    note: str | None = None


@dataclass(frozen=True)
class RecipeIngredient:
    """A recipe ingredient with an explicit reference or a line to match."""

    line: IngredientLine | None = None
    reference: FoodReference | None = None
    quantity_g: float | None = None

    @property
    def label(self) -> str:
        if self.line is not None:
            return self.line.text
        if self.reference is not None:
            return self.reference.key
        return ""


@dataclass(frozen=True)
class RecipeNutritionSummary:
    """Totals, per-100g profile and grade for a recipe."""

    total: NutritionalProfile
    total_g: float
    per_100g: NutritionalProfile
    grade: NutriScoreGrade | None
    servings: int | None = None
    per_serving: NutritionalProfile | None = None
    unmatched_lines: list[str] = field(default_factory=list)
    missing_references: list[FoodReference] = field(default_factory=list)
    skipped_quantities: list[str] = field(default_factory=list)
