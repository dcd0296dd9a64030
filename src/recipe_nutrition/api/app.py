"""FastAPI application factory."""

import logging
from dataclasses import asdict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from recipe_nutrition.api.models import (
    IngredientNutritionRequest,
    MatchLookupRequest,
    NutriScoreRequest,
    RecipeNutritionRequest,
    SaveMatchRequest,
)
from recipe_nutrition.app_logging import configure_logging
from recipe_nutrition.containers import AppContainer
from recipe_nutrition.domain.errors import (
    DataSourceError,
    RecipeNutritionError,
    ValidationError,
)
from recipe_nutrition.domain.foods import FoodCandidate, FoodReference
from recipe_nutrition.domain.matches import MatchRecord
from recipe_nutrition.domain.nutrition import NutritionalProfile
from recipe_nutrition.domain.recipes import RecipeNutritionSummary
from recipe_nutrition.services.nutriscore import compute_grade, grade_food
from recipe_nutrition.services.nutrition import resolve_amount_g
from recipe_nutrition.services.text import line_variants

_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.debug)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Recipe nutrition")
    app.state.container = container

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return _error_response(_UNPROCESSABLE, exc.code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return _error_response(_UNPROCESSABLE, ValidationError.code, message)

    @app.exception_handler(DataSourceError)
    async def data_source_error_handler(
        request: Request, exc: DataSourceError
    ) -> JSONResponse:
        logger.error("Data source failure during %s: %s", exc.action, exc.message)
        return _error_response(status.HTTP_502_BAD_GATEWAY, exc.code, str(exc))

    @app.exception_handler(RecipeNutritionError)
    async def internal_error_handler(
        request: Request, exc: RecipeNutritionError
    ) -> JSONResponse:
        logger.error("Unhandled error: %s", exc, exc_info=exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, exc.code, str(exc)
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/ingredients/search")
    async def search_ingredients(
        request: Request, q: str = "", limit: int | None = None
    ) -> dict[str, object]:
        """Return ranked catalog candidates for an ingredient line."""
        state_container: AppContainer = request.app.state.container
        candidates = state_container.search_service.search(q, limit)
        return {"candidates": [_candidate_payload(c) for c in candidates]}

    @app.get("/matches")
    async def get_match(request: Request, text: str = "") -> dict[str, object]:
        """Return the stored match for one ingredient text."""
        state_container: AppContainer = request.app.state.container
        record = state_container.match_service.get_match(text)
        return {"match": _match_payload(record) if record else None}

    @app.post("/matches/lookup")
    async def lookup_matches(
        payload: MatchLookupRequest, request: Request
    ) -> dict[str, object]:
        """Resolve many lines at once, trying each full line before its kernel."""
        state_container: AppContainer = request.app.state.container
        records = state_container.match_service.get_matches_for_lines(
            [line_variants(line) for line in payload.lines]
        )
        return {
            "matches": [
                {"line": line, "match": _match_payload(record) if record else None}
                for line, record in zip(payload.lines, records, strict=True)
            ]
        }

    @app.put("/matches")
    async def save_match(payload: SaveMatchRequest, request: Request) -> dict[str, str]:
        """Store a confirmed ingredient match."""
        state_container: AppContainer = request.app.state.container
        state_container.match_service.save_match(
            payload.normalized_text,
            payload.reference.to_domain(),
            created_by=payload.created_by,
        )
        return {"status": "ok"}

    @app.post("/nutrition/ingredient")
    async def ingredient_nutrition(
        payload: IngredientNutritionRequest, request: Request
    ) -> dict[str, object]:
        """Scale a referenced food to the requested amount."""
        state_container: AppContainer = request.app.state.container
        reference = payload.reference.to_domain()
        amount_g = resolve_amount_g(
            state_container.unit_converter,
            quantity_g=payload.quantity_g,
            quantity=payload.quantity,
            unit=payload.unit,
        )
        profile = state_container.nutrition_calculator.compute_for_reference(
            reference, amount_g
        )
        return {
            "reference": _reference_payload(reference),
            "amount_g": amount_g,
            "nutrition": _profile_payload(profile),
        }

    @app.post("/nutrition/recipe")
    async def recipe_nutrition(
        payload: RecipeNutritionRequest, request: Request
    ) -> dict[str, object]:
        """Summarize nutrition and Nutri-Score for a whole recipe."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.recipe_service.summarize(
            [ingredient.to_domain() for ingredient in payload.ingredients],
            servings=payload.servings,
        )
        return {"summary": _summary_payload(summary) if summary else None}

    @app.post("/nutriscore")
    async def nutriscore(
        payload: NutriScoreRequest, request: Request
    ) -> dict[str, object]:
        """Grade a catalog food or an explicit per-100g profile."""
        state_container: AppContainer = request.app.state.container
        if payload.reference is not None:
            food = state_container.catalogs.get_food(payload.reference.to_domain())
            grade = grade_food(food)
        elif payload.per_100g is not None:
            grade = compute_grade(payload.per_100g.to_domain())
        else:
            raise ValidationError("either reference or per_100g is required")
        return {"grade": grade.value if grade else None}

    return app


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def _reference_payload(reference: FoodReference) -> dict[str, object]:
    return {
        "source": reference.source.value,
        "nevo_code": reference.nevo_code,
        "custom_food_id": reference.custom_food_id,
        "key": reference.key,
    }


def _profile_payload(profile: NutritionalProfile | None) -> dict[str, float] | None:
    if profile is None:
        return None
    return {name: round(value, 4) for name, value in asdict(profile).items()}


def _candidate_payload(candidate: FoodCandidate) -> dict[str, object]:
    food = candidate.food
    return {
        "reference": _reference_payload(food.reference),
        "name": food.name,
        "name_en": food.name_en,
        "food_group": food.food_group,
        "score": candidate.score,
    }


def _match_payload(record: MatchRecord) -> dict[str, object]:
    return {
        "normalized_text": record.normalized_text,
        "reference": _reference_payload(record.reference),
        "display_name": record.display_name,
        "created_by": record.created_by,
        "updated_at": record.updated_at.isoformat() if record.updated_at else None,
    }


def _summary_payload(summary: RecipeNutritionSummary) -> dict[str, object]:
    return {
        "total": _profile_payload(summary.total),
        "total_g": summary.total_g,
        "per_100g": _profile_payload(summary.per_100g),
        "grade": summary.grade.value if summary.grade else None,
        "servings": summary.servings,
        "per_serving": _profile_payload(summary.per_serving),
        "unmatched_lines": summary.unmatched_lines,
        "missing_references": [
            _reference_payload(reference) for reference in summary.missing_references
        ],
        "skipped_quantities": summary.skipped_quantities,
    }
