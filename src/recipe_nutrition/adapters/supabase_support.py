"""Helpers shared by the Supabase adapters."""

import math
from typing import Any

from recipe_nutrition.domain.errors import DataSourceError
from recipe_nutrition.domain.nutrition import NUTRIENT_FIELDS, NutritionalProfile

# Characters that would break a PostgREST ``or`` filter expression.
_FILTER_BREAKING = str.maketrans({",": " ", "(": " ", ")": " "})


def execute(query: Any, action: str) -> Any:
    """Run a PostgREST query, surfacing any failure as ``DataSourceError``."""
    try:
        return query.execute()
    except Exception as exc:  # noqa: BLE001
        raise DataSourceError(action, str(exc)) from exc


def ilike_pattern(term: str, in_or_filter: bool = False) -> str:
    """Build a contains-pattern with LIKE wildcards in ``term`` escaped.

    Inside an ``or`` filter, commas and parentheses become spaces.
    """
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    if in_or_filter:
        escaped = escaped.translate(_FILTER_BREAKING)
    return f"%{escaped.strip()}%"


def profile_from_row(row: dict[str, object]) -> NutritionalProfile:
    """Parse per-100g nutrient columns; missing or invalid values become 0."""
    return NutritionalProfile(
        quantity_g=100.0,
        **{name: _nutrient_value(row.get(name)) for name in NUTRIENT_FIELDS},
    )


def _nutrient_value(value: object) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number
