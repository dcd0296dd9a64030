"""Catalog ports shared by search, match lookup and nutrition."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from recipe_nutrition.domain.foods import CatalogFood, FoodReference, FoodSource


class FoodCatalog(Protocol):
    """Read interface for one food catalog."""

    source: FoodSource

    def search(self, term: str, limit: int) -> list[CatalogFood]:
        """Return up to ``limit`` foods whose names contain ``term``."""

    def get_food(self, food_id: int | str) -> CatalogFood | None:
        """Return a food by id, if present."""

    def get_names(self, food_ids: list[int | str]) -> dict[int | str, str]:
        """Return current display names keyed by id; unknown ids are omitted."""


@dataclass
class Catalogs:
    """The NEVO and custom catalogs addressed by food reference."""

    nevo: FoodCatalog
    custom: FoodCatalog

    def for_source(self, source: FoodSource) -> FoodCatalog:
        if source is FoodSource.NEVO:
            return self.nevo
        return self.custom

    def get_food(self, reference: FoodReference) -> CatalogFood | None:
        """Read the catalog row a reference points to."""
        return self.for_source(reference.source).get_food(reference.food_id)

    def current_names(self, references: Iterable[FoodReference]) -> dict[str, str]:
        """Return current names keyed by ``FoodReference.key``, one query per source."""
        ids_by_source: dict[FoodSource, list[int | str]] = {}
        for reference in references:
            ids = ids_by_source.setdefault(reference.source, [])
            if reference.food_id not in ids:
                ids.append(reference.food_id)

        names: dict[str, str] = {}
        for source, ids in ids_by_source.items():
            for food_id, name in self.for_source(source).get_names(ids).items():
                names[f"{source.value}:{food_id}"] = name
        return names
