"""Pydantic request models for the HTTP API."""

from pydantic import BaseModel, Field

from recipe_nutrition.domain.foods import FoodReference, FoodSource
from recipe_nutrition.domain.nutrition import NutritionalProfile
from recipe_nutrition.domain.recipes import IngredientLine, RecipeIngredient


class FoodReferencePayload(BaseModel):
    """Reference to a NEVO or custom food."""

    source: FoodSource
    nevo_code: int | None = None
    custom_food_id: str | None = None

    def to_domain(self) -> FoodReference:
        return FoodReference(
            source=self.source,
            nevo_code=self.nevo_code,
            custom_food_id=self.custom_food_id,
        )


class ProfilePayload(BaseModel):
    """Nutrient amounts per 100 grams."""

    energy_kcal: float = Field(default=0.0, ge=0)
    energy_kj: float = Field(default=0.0, ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    saturated_fat_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    sugar_g: float = Field(default=0.0, ge=0)
    fiber_g: float = Field(default=0.0, ge=0)
    sodium_mg: float = Field(default=0.0, ge=0)

    def to_domain(self) -> NutritionalProfile:
        return NutritionalProfile(quantity_g=100.0, **self.model_dump())


class SaveMatchRequest(BaseModel):
    """Confirm which food an ingredient text refers to."""

    normalized_text: str = Field(min_length=1)
    reference: FoodReferencePayload
    created_by: str | None = None


class MatchLookupRequest(BaseModel):
    """Ingredient lines to resolve against stored matches."""

    lines: list[str] = Field(default_factory=list)


class IngredientNutritionRequest(BaseModel):
    """Nutrition for an amount of one referenced food."""

    reference: FoodReferencePayload
    quantity_g: float | None = None
    quantity: float | None = None
    unit: str | None = None


class RecipeIngredientPayload(BaseModel):
    """One recipe ingredient: a line to match, a reference, or both."""

    text: str | None = None
    quantity: float | None = None
    unit: str | None = None
    note: str | None = None
    reference: FoodReferencePayload | None = None
    quantity_g: float | None = None

    def to_domain(self) -> RecipeIngredient:
        line = None
        if self.text and self.text.strip():
            line = IngredientLine(
                text=self.text,
                quantity=self.quantity,
                unit=self.unit,
                note=self.note,
            )
        return RecipeIngredient(
            line=line,
            reference=self.reference.to_domain() if self.reference else None,
            quantity_g=self.quantity_g,
        )


class RecipeNutritionRequest(BaseModel):
    """Ingredients of a recipe and an optional number of servings."""

    ingredients: list[RecipeIngredientPayload] = Field(default_factory=list)
    servings: int | None = Field(default=None, gt=0)


class NutriScoreRequest(BaseModel):
    """Grade either a catalog food or an explicit per-100g profile."""

    reference: FoodReferencePayload | None = None
    per_100g: ProfilePayload | None = None
