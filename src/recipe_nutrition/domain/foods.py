"""Food catalog domain models."""

from dataclasses import dataclass
from enum import StrEnum

from recipe_nutrition.domain.errors import ValidationError
from recipe_nutrition.domain.nutrition import NutritionalProfile


class FoodSource(StrEnum):
    """Catalog a food record lives in."""

    NEVO = "nevo"
    CUSTOM = "custom"


@dataclass(frozen=True)
class FoodReference:
    """Pointer to exactly one row in exactly one catalog."""

    source: FoodSource
    nevo_code: int | None = None
    custom_food_id: str | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "source", FoodSource(self.source))
        except ValueError as exc:
            raise ValidationError(f"unknown food source: {self.source}") from exc
        if self.source is FoodSource.NEVO:
            if self.nevo_code is None or self.custom_food_id is not None:
                raise ValidationError("nevo references need nevo_code only")
        elif not self.custom_food_id or self.nevo_code is not None:
            raise ValidationError("custom references need custom_food_id only")

    @classmethod
    def nevo(cls, nevo_code: int) -> "FoodReference":
        """Reference a NEVO row by its numeric code."""
        return cls(source=FoodSource.NEVO, nevo_code=int(nevo_code))

    @classmethod
    def custom(cls, custom_food_id: str) -> "FoodReference":
        """Reference a custom food row by its id."""
        return cls(source=FoodSource.CUSTOM, custom_food_id=str(custom_food_id))

    @property
    def food_id(self) -> int | str:
        """Return whichever id is populated."""
        if self.source is FoodSource.NEVO:
            return self.nevo_code  # type: ignore[return-value]
        return self.custom_food_id  # type: ignore[return-value]

    @property
    def key(self) -> str:
        """Deduplication key, e.g. ``nevo:1234``."""
        return f"{self.source.value}:{self.food_id}"


@dataclass(frozen=True)
class CatalogFood:
    """A catalog row with its per-100g nutrients."""

    reference: FoodReference
    name: str
    name_en: str | None
    food_group: str | None
    per_100g: NutritionalProfile
    synonym: str | None = None


@dataclass(frozen=True)
class FoodCandidate:
    """A search hit with the relevance score it was ranked by."""

    food: CatalogFood
    score: int

    @property
    def reference(self) -> FoodReference:
        return self.food.reference

    @property
    def name(self) -> str:
        return self.food.name
