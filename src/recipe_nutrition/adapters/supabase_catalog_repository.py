"""Supabase implementations of the NEVO and custom food catalogs."""

from dataclasses import dataclass
from typing import ClassVar

from supabase import Client

from recipe_nutrition.adapters.supabase_support import (
    execute,
    ilike_pattern,
    profile_from_row,
)
from recipe_nutrition.domain.foods import CatalogFood, FoodReference, FoodSource
from recipe_nutrition.services.catalogs import FoodCatalog


@dataclass
class SupabaseNevoCatalog(FoodCatalog):
    """Read-only access to the NEVO reference table."""

    client: Client
    table: str = "nevo_foods"
    source: ClassVar[FoodSource] = FoodSource.NEVO

    def search(self, term: str, limit: int) -> list[CatalogFood]:
        """Search Dutch and English names, deduplicated by NEVO code."""
        if limit <= 0 or not term.strip():
            return []
        pattern = ilike_pattern(term)
        seen: set[int] = set()
        foods: list[CatalogFood] = []
        for column in ("name_nl", "name_en"):
            response = execute(
                self.client.table(self.table)
                .select("*")
                .ilike(column, pattern)
                .limit(limit),
                f"search {self.table}.{column}",
            )
            for row in response.data or []:
                food = _parse_nevo_food(row)
                if food is None or food.reference.nevo_code in seen:
                    continue
                seen.add(food.reference.nevo_code)  # type: ignore[arg-type]
                foods.append(food)
        return foods[:limit]

    def get_food(self, food_id: int | str) -> CatalogFood | None:
        """Return a NEVO food by code, if present."""
        code = _as_nevo_code(food_id)
        if code is None:
            return None
        response = execute(
            self.client.table(self.table).select("*").eq("nevo_code", code).limit(1),
            f"get {self.table}",
        )
        if not response.data:
            return None
        return _parse_nevo_food(response.data[0])

    def get_names(self, food_ids: list[int | str]) -> dict[int | str, str]:
        """Return current Dutch names keyed by NEVO code."""
        codes = [code for code in map(_as_nevo_code, food_ids) if code is not None]
        if not codes:
            return {}
        response = execute(
            self.client.table(self.table)
            .select("nevo_code, name_nl")
            .in_("nevo_code", codes),
            f"names {self.table}",
        )
        names: dict[int | str, str] = {}
        for row in response.data or []:
            code = _as_nevo_code(row.get("nevo_code"))
            name = str(row.get("name_nl") or "").strip()
            if code is not None and name:
                names[code] = name
        return names


@dataclass
class SupabaseCustomCatalog(FoodCatalog):
    """Access to user-maintained custom foods."""

    client: Client
    table: str = "custom_foods"
    source: ClassVar[FoodSource] = FoodSource.CUSTOM

    def search(self, term: str, limit: int) -> list[CatalogFood]:
        """Search names and synonyms in one query."""
        if limit <= 0 or not term.strip():
            return []
        pattern = ilike_pattern(term, in_or_filter=True)
        response = execute(
            self.client.table(self.table)
            .select("*")
            .or_(
                f"name_nl.ilike.{pattern},"
                f"name_en.ilike.{pattern},"
                f"synonym.ilike.{pattern}"
            )
            .limit(limit),
            f"search {self.table}",
        )
        foods = (_parse_custom_food(row) for row in response.data or [])
        return [food for food in foods if food is not None][:limit]

    def get_food(self, food_id: int | str) -> CatalogFood | None:
        """Return a custom food by id, if present."""
        if not str(food_id).strip():
            return None
        response = execute(
            self.client.table(self.table).select("*").eq("id", str(food_id)).limit(1),
            f"get {self.table}",
        )
        if not response.data:
            return None
        return _parse_custom_food(response.data[0])

    def get_names(self, food_ids: list[int | str]) -> dict[int | str, str]:
        """Return current Dutch names keyed by custom food id."""
        ids = [str(food_id) for food_id in food_ids if str(food_id).strip()]
        if not ids:
            return {}
        response = execute(
            self.client.table(self.table).select("id, name_nl").in_("id", ids),
            f"names {self.table}",
        )
        names: dict[int | str, str] = {}
        for row in response.data or []:
            name = str(row.get("name_nl") or "").strip()
            if row.get("id") and name:
                names[str(row["id"])] = name
        return names


def _as_nevo_code(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def _parse_nevo_food(row: dict[str, object]) -> CatalogFood | None:
    """Parse a NEVO row; rows without a usable code are ignored."""
    code = _as_nevo_code(row.get("nevo_code"))
    if code is None:
        return None
    return _parse_food(row, FoodReference.nevo(code))


def _parse_custom_food(row: dict[str, object]) -> CatalogFood | None:
    food_id = str(row.get("id") or "").strip()
    if not food_id:
        return None
    return _parse_food(row, FoodReference.custom(food_id))


def _parse_food(row: dict[str, object], reference: FoodReference) -> CatalogFood:
    return CatalogFood(
        reference=reference,
        name=str(row.get("name_nl") or row.get("name_en") or "").strip(),
        name_en=_optional_text(row.get("name_en")),
        food_group=_optional_text(row.get("food_group_nl") or row.get("food_group_en")),
        per_100g=profile_from_row(row),
        synonym=_optional_text(row.get("synonym")),
    )


def _optional_text(value: object) -> str | None:
    text = str(value).strip() if value is not None else ""
    return text or None
