"""Ranked ingredient candidate search across the NEVO and custom catalogs."""

import logging
import re
from dataclasses import dataclass

from recipe_nutrition.domain.errors import DataSourceError, ValidationError
from recipe_nutrition.domain.foods import CatalogFood, FoodCandidate
from recipe_nutrition.services.catalogs import Catalogs, FoodCatalog
from recipe_nutrition.services.text import (
    expand_compound_terms,
    extract_search_kernel,
    normalize,
    plural_forms,
)

RAW_TERM_CHARS = 40
RAW_TERM_MIN_EXTRA_CHARS = 5
NO_SIGNAL_SCORE = 5

_NON_WORD_RE = re.compile(r"[\W_]+")

_logger = logging.getLogger(__name__)


@dataclass
class CandidateSearchService:
    """Search both catalogs term by term, then rank against the raw query."""

    catalogs: Catalogs
    default_limit: int = 15
    debug: bool = False

    def search(self, query: str, limit: int | None = None) -> list[FoodCandidate]:
        """Return up to ``limit`` distinct candidates, best match first."""
        raw = query.strip() if query else ""
        if not raw:
            return []
        resolved_limit = self.default_limit if limit is None else limit
        if resolved_limit <= 0:
            raise ValidationError("limit must be positive")

        seen: set[str] = set()
        merged: list[CatalogFood] = []
        for index, term in enumerate(build_search_terms(raw)):
            remaining = resolved_limit - len(merged)
            if remaining <= 0:
                break
            for catalog in (self.catalogs.nevo, self.catalogs.custom):
                for food in self._query(catalog, term, remaining, first=index == 0):
                    if food.reference.key in seen:
                        continue
                    seen.add(food.reference.key)
                    merged.append(food)

        ranked = rank_candidates(merged, raw)[:resolved_limit]
        if self.debug:
            _logger.info(
                "Candidate search: query=%s merged=%s returned=%s",
                raw,
                len(merged),
                len(ranked),
            )
        return ranked

    def _query(
        self, catalog: FoodCatalog, term: str, limit: int, *, first: bool
    ) -> list[CatalogFood]:
        try:
            return catalog.search(term, limit)
        except DataSourceError as exc:
            if first:
                raise
            _logger.warning(
                "Skipping %s search term %r after catalog failure: %s",
                catalog.source.value,
                term,
                exc,
            )
            return []


def build_search_terms(raw_query: str) -> list[str]:
    """Derive the ordered, unique search terms for a raw ingredient query."""
    kernel = extract_search_kernel(raw_query)
    terms: list[str] = []

    def add(term: str) -> None:
        if term and term not in terms:
            terms.append(term)

    add(kernel)
    if " " in kernel:
        add(kernel.split(" ")[0])
    for term in expand_compound_terms(kernel):
        add(term)
    raw = normalize(raw_query)
    if len(raw) > len(kernel) + RAW_TERM_MIN_EXTRA_CHARS:
        add(raw[:RAW_TERM_CHARS].strip())
    for term in plural_forms(kernel):
        add(term)
    return terms


def relevance_score(name: str, query: str) -> int:
    """Score a candidate name against a raw query; lower is better.

    0 exact, 1 the query contains the whole name (commas and spaces
    ignored) and the name covers the query's kernel, 2 prefix, 3 whole word,
    4 substring, 5 no signal.
    """
    q = normalize(query)
    n = normalize(name)
    if not q or not n:
        return NO_SIGNAL_SCORE
    if n == q:
        return 0

    n_flat = _flatten(n)
    q_flat = _flatten(q)
    kernel_flat = _flatten(extract_search_kernel(q))
    covers_kernel = bool(kernel_flat) and kernel_flat in n_flat
    if covers_kernel and (
        (len(n) >= 2 and n in q) or (len(n_flat) >= 2 and n_flat in q_flat)
    ):
        return 1
    if q.startswith(n) or n.startswith(q):
        return 2
    if _contains_word(q, n) or _contains_word(n, q):
        return 3
    if n in q or q in n:
        return 4
    return NO_SIGNAL_SCORE


def rank_candidates(foods: list[CatalogFood], query: str) -> list[FoodCandidate]:
    """Sort foods by relevance to ``query``, ties by name."""
    scored = [
        FoodCandidate(food=food, score=relevance_score(food.name, query))
        for food in foods
    ]
    return sorted(
        scored,
        key=lambda candidate: (
            candidate.score,
            candidate.food.name.lower(),
            candidate.food.name,
        ),
    )


def _flatten(text: str) -> str:
    return _NON_WORD_RE.sub("", text.lower())


def _contains_word(text: str, word: str) -> bool:
    return re.search(rf"\b{re.escape(word)}\b", text) is not None
