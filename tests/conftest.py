"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from recipe_nutrition.config import Settings
from recipe_nutrition.containers import AppContainer
from recipe_nutrition.domain.errors import DataSourceError
from recipe_nutrition.domain.foods import CatalogFood, FoodReference, FoodSource
from recipe_nutrition.domain.matches import MatchRecord
from recipe_nutrition.domain.nutrition import NutritionalProfile
from recipe_nutrition.services.catalogs import Catalogs, FoodCatalog
from recipe_nutrition.services.matches import MatchRepository, MatchService
from recipe_nutrition.services.nutrition import NutritionCalculator
from recipe_nutrition.services.recipes import RecipeNutritionService
from recipe_nutrition.services.search import CandidateSearchService
from recipe_nutrition.services.units import TableUnitConverter


def make_food(
    food_id: int | str,
    name: str,
    food_group: str | None = None,
    synonym: str | None = None,
    **per_100g: float,
) -> CatalogFood:
    """Build a catalog food; integer ids are NEVO codes, strings custom ids."""
    reference = (
        FoodReference.nevo(food_id)
        if isinstance(food_id, int)
        else FoodReference.custom(food_id)
    )
    return CatalogFood(
        reference=reference,
        name=name,
        name_en=None,
        food_group=food_group,
        per_100g=NutritionalProfile(quantity_g=100.0, **per_100g),
        synonym=synonym,
    )


@dataclass
class InMemoryCatalog(FoodCatalog):
    """In-memory catalog matching names and synonyms by substring."""

    source: FoodSource
    foods: list[CatalogFood] = field(default_factory=list)
    searches: list[tuple[str, int]] = field(default_factory=list)
    name_lookups: list[list[int | str]] = field(default_factory=list)
    failing_terms: set[str] = field(default_factory=set)

    def add(self, food: CatalogFood) -> CatalogFood:
        self.foods.append(food)
        return food

    def search(self, term: str, limit: int) -> list[CatalogFood]:
        self.searches.append((term, limit))
        if term in self.failing_terms:
            raise DataSourceError(f"search {self.source.value}", "boom")
        needle = term.lower()
        hits = [
            food
            for food in self.foods
            if needle in food.name.lower() or needle in (food.synonym or "").lower()
        ]
        return hits[:limit]

    def get_food(self, food_id: int | str) -> CatalogFood | None:
        return next(
            (food for food in self.foods if food.reference.food_id == food_id), None
        )

    def get_names(self, food_ids: list[int | str]) -> dict[int | str, str]:
        self.name_lookups.append(list(food_ids))
        return {
            food.reference.food_id: food.name
            for food in self.foods
            if food.reference.food_id in food_ids
        }


@dataclass
class InMemoryMatchRepository(MatchRepository):
    """In-memory match store keyed by normalized text."""

    records: dict[str, MatchRecord] = field(default_factory=dict)
    list_calls: list[list[str]] = field(default_factory=list)

    def get_match(self, normalized_text: str) -> MatchRecord | None:
        return self.records.get(normalized_text)

    def list_matches(self, normalized_texts: list[str]) -> list[MatchRecord]:
        self.list_calls.append(list(normalized_texts))
        return [
            self.records[text] for text in normalized_texts if text in self.records
        ]

    def upsert_match(
        self,
        normalized_text: str,
        reference: FoodReference,
        created_by: str | None,
    ) -> None:
        now = datetime.now(tz=UTC)
        existing = self.records.get(normalized_text)
        self.records[normalized_text] = MatchRecord(
            normalized_text=normalized_text,
            reference=reference,
            display_name="stale name",
            created_by=created_by,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service-key.signature",
    )


@pytest.fixture
def nevo_catalog() -> InMemoryCatalog:
    catalog = InMemoryCatalog(source=FoodSource.NEVO)
    catalog.add(
        make_food(
            1,
            "Chicken breast",
            food_group="Vlees",
            energy_kcal=110,
            energy_kj=465,
            protein_g=24,
            fat_g=1.5,
            saturated_fat_g=0.4,
            sodium_mg=60,
        )
    )
    catalog.add(
        make_food(2, "Chicken", food_group="Vlees", energy_kcal=200, protein_g=20)
    )
    catalog.add(
        make_food(
            3,
            "Olive oil",
            food_group="Oliën",
            energy_kcal=900,
            energy_kj=3700,
            fat_g=100,
            saturated_fat_g=14,
        )
    )
    catalog.add(make_food(4, "Oil", energy_kcal=900, fat_g=100))
    catalog.add(
        make_food(
            5,
            "Tomato",
            food_group="Groente",
            energy_kcal=20,
            energy_kj=84,
            sugar_g=2.6,
            fiber_g=1.2,
            protein_g=0.9,
            sodium_mg=5,
        )
    )
    return catalog


@pytest.fixture
def custom_catalog() -> InMemoryCatalog:
    catalog = InMemoryCatalog(source=FoodSource.CUSTOM)
    catalog.add(
        make_food(
            "abc",
            "Homemade hummus",
            synonym="chickpea dip",
            energy_kcal=250,
            protein_g=8,
            fat_g=18,
        )
    )
    return catalog


@pytest.fixture
def catalogs(
    nevo_catalog: InMemoryCatalog, custom_catalog: InMemoryCatalog
) -> Catalogs:
    return Catalogs(nevo=nevo_catalog, custom=custom_catalog)


@pytest.fixture
def match_repository() -> InMemoryMatchRepository:
    return InMemoryMatchRepository()


@pytest.fixture
def container(
    settings: Settings,
    catalogs: Catalogs,
    match_repository: InMemoryMatchRepository,
) -> AppContainer:
    unit_converter = TableUnitConverter()
    match_service = MatchService(match_repository, catalogs)
    nutrition_calculator = NutritionCalculator(catalogs)
    return AppContainer(
        settings=settings,
        catalogs=catalogs,
        search_service=CandidateSearchService(
            catalogs, default_limit=settings.search_limit
        ),
        match_service=match_service,
        nutrition_calculator=nutrition_calculator,
        unit_converter=unit_converter,
        recipe_service=RecipeNutritionService(
            match_service=match_service,
            calculator=nutrition_calculator,
            unit_converter=unit_converter,
        ),
    )
