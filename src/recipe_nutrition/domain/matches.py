"""Domain models for stored ingredient matches."""

from dataclasses import dataclass
from datetime import datetime

from recipe_nutrition.domain.foods import FoodReference


@dataclass(frozen=True)
class MatchRecord:
    """A confirmed mapping from normalized ingredient text to a catalog food."""

    normalized_text: str
    reference: FoodReference
    display_name: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
