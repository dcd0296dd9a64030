"""Persisted ingredient-text to catalog-food matches."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from recipe_nutrition.domain.errors import ValidationError
from recipe_nutrition.domain.foods import FoodReference
from recipe_nutrition.domain.matches import MatchRecord
from recipe_nutrition.services.catalogs import Catalogs
from recipe_nutrition.services.text import normalize

_logger = logging.getLogger(__name__)


class MatchRepository(Protocol):
    """Persistence interface for ingredient matches keyed by normalized text."""

    def get_match(self, normalized_text: str) -> MatchRecord | None:
        """Return the match stored for one normalized text, if present."""

    def list_matches(self, normalized_texts: list[str]) -> list[MatchRecord]:
        """Return all stored matches for a set of normalized texts."""

    def upsert_match(
        self,
        normalized_text: str,
        reference: FoodReference,
        created_by: str | None,
    ) -> None:
        """Insert or overwrite the match for a normalized text."""


@dataclass
class MatchService:
    """Reuse confirmed matches across recipes."""

    repository: MatchRepository
    catalogs: Catalogs
    debug: bool = False

    def get_match(self, normalized_text: str) -> MatchRecord | None:
        """Look up one match, with the food's current display name."""
        norm = normalize(normalized_text)
        if not norm:
            return None
        record = self.repository.get_match(norm)
        if record is None:
            return None
        return self._with_current_names([record])[0]

    def get_matches_for_lines(
        self, variants_per_ingredient: list[list[str]]
    ) -> list[MatchRecord | None]:
        """Return the first stored match per ingredient.

        Each inner list is a priority order, e.g. ``line_variants(line)``:
        the full line first, then its kernel. All variants are fetched in a
        single query.
        """
        norms_per_ingredient = [
            [norm for norm in (normalize(str(v or "")) for v in variants) if norm]
            for variants in variants_per_ingredient
        ]
        unique_norms = list(
            dict.fromkeys(norm for norms in norms_per_ingredient for norm in norms)
        )
        if not unique_norms:
            return [None for _ in variants_per_ingredient]

        records = self._with_current_names(self.repository.list_matches(unique_norms))
        by_text = {record.normalized_text: record for record in records}
        return [
            next((by_text[norm] for norm in norms if norm in by_text), None)
            for norms in norms_per_ingredient
        ]

    def save_match(
        self,
        normalized_text: str,
        reference: FoodReference,
        created_by: str | None = None,
    ) -> None:
        """Store a confirmed match, overwriting any earlier one for the text."""
        norm = normalize(normalized_text)
        if not norm:
            raise ValidationError("normalized_text must not be empty")
        self.repository.upsert_match(norm, reference, created_by)
        if self.debug:
            _logger.info("Saved match: text=%s reference=%s", norm, reference.key)

    def _with_current_names(self, records: list[MatchRecord]) -> list[MatchRecord]:
        if not records:
            return []
        names = self.catalogs.current_names(record.reference for record in records)
        return [
            replace(record, display_name=names.get(record.reference.key))
            for record in records
        ]
