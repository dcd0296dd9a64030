"""Supabase implementation for stored ingredient matches."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from recipe_nutrition.adapters.supabase_support import execute
from recipe_nutrition.domain.errors import DataSourceError, ValidationError
from recipe_nutrition.domain.foods import FoodReference
from recipe_nutrition.domain.matches import MatchRecord
from recipe_nutrition.services.matches import MatchRepository


@dataclass
class SupabaseMatchRepository(MatchRepository):
    """Supabase-backed repository for ingredient matches."""

    client: Client
    table: str = "recipe_ingredient_matches"

    def get_match(self, normalized_text: str) -> MatchRecord | None:
        """Return the match for a normalized text, if present."""
        response = execute(
            self.client.table(self.table)
            .select("*")
            .eq("normalized_text", normalized_text)
            .limit(1),
            f"get {self.table}",
        )
        if not response.data:
            return None
        return _parse_match(response.data[0])

    def list_matches(self, normalized_texts: list[str]) -> list[MatchRecord]:
        """Return stored matches for a set of normalized texts."""
        if not normalized_texts:
            return []
        response = execute(
            self.client.table(self.table)
            .select("*")
            .in_("normalized_text", normalized_texts),
            f"list {self.table}",
        )
        return [_parse_match(row) for row in response.data or []]

    def upsert_match(
        self,
        normalized_text: str,
        reference: FoodReference,
        created_by: str | None,
    ) -> None:
        """Insert or overwrite the match keyed by normalized text."""
        payload: dict[str, object] = {
            "normalized_text": normalized_text,
            "source": reference.source.value,
            "nevo_code": reference.nevo_code,
            "custom_food_id": reference.custom_food_id,
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        if created_by:
            payload["created_by"] = created_by
        execute(
            self.client.table(self.table).upsert(
                payload, on_conflict="normalized_text"
            ),
            f"upsert {self.table}",
        )


def _parse_match(row: dict[str, object]) -> MatchRecord:
    """Parse a match row into a domain model."""
    try:
        reference = FoodReference(
            source=row.get("source"),  # type: ignore[arg-type]
            nevo_code=(
                int(row["nevo_code"]) if row.get("nevo_code") is not None else None
            ),
            custom_food_id=(
                str(row["custom_food_id"]) if row.get("custom_food_id") else None
            ),
        )
    except (TypeError, ValueError, ValidationError) as exc:
        raise DataSourceError("parse recipe_ingredient_matches", str(exc)) from exc
    return MatchRecord(
        normalized_text=str(row.get("normalized_text", "")),
        reference=reference,
        created_by=str(row["created_by"]) if row.get("created_by") else None,
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
