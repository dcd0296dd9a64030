"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from recipe_nutrition.adapters.supabase_catalog_repository import (
    SupabaseCustomCatalog,
    SupabaseNevoCatalog,
)
from recipe_nutrition.adapters.supabase_match_repository import (
    SupabaseMatchRepository,
)
from recipe_nutrition.config import Settings
from recipe_nutrition.services.catalogs import Catalogs
from recipe_nutrition.services.matches import MatchService
from recipe_nutrition.services.nutrition import NutritionCalculator
from recipe_nutrition.services.recipes import RecipeNutritionService
from recipe_nutrition.services.search import CandidateSearchService
from recipe_nutrition.services.units import TableUnitConverter, UnitConverter


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalogs: Catalogs
    search_service: CandidateSearchService
    match_service: MatchService
    nutrition_calculator: NutritionCalculator
    unit_converter: UnitConverter
    recipe_service: RecipeNutritionService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    debug = resolved_settings.debug
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalogs = Catalogs(
        nevo=SupabaseNevoCatalog(supabase_client, table=resolved_settings.nevo_table),
        custom=SupabaseCustomCatalog(
            supabase_client, table=resolved_settings.custom_foods_table
        ),
    )
    match_repository = SupabaseMatchRepository(
        supabase_client, table=resolved_settings.matches_table
    )
    unit_converter = TableUnitConverter()
    search_service = CandidateSearchService(
        catalogs, default_limit=resolved_settings.search_limit, debug=debug
    )
    match_service = MatchService(match_repository, catalogs, debug=debug)
    nutrition_calculator = NutritionCalculator(catalogs, debug=debug)
    recipe_service = RecipeNutritionService(
        match_service=match_service,
        calculator=nutrition_calculator,
        unit_converter=unit_converter,
        debug=debug,
    )
    return AppContainer(
        settings=resolved_settings,
        catalogs=catalogs,
        search_service=search_service,
        match_service=match_service,
        nutrition_calculator=nutrition_calculator,
        unit_converter=unit_converter,
        recipe_service=recipe_service,
    )
