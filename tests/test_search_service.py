"""Tests for ranked candidate search."""

import pytest

from recipe_nutrition.domain.errors import DataSourceError, ValidationError
from recipe_nutrition.services.catalogs import Catalogs
from recipe_nutrition.services.search import (
    CandidateSearchService,
    build_search_terms,
    rank_candidates,
    relevance_score,
)
from recipe_nutrition.services.text import extract_search_kernel
from tests.conftest import InMemoryCatalog, make_food


def test_empty_query_issues_no_catalog_query(
    catalogs: Catalogs,
    nevo_catalog: InMemoryCatalog,
    custom_catalog: InMemoryCatalog,
) -> None:
    service = CandidateSearchService(catalogs)

    assert service.search("") == []
    assert service.search("   ") == []
    assert nevo_catalog.searches == []
    assert custom_catalog.searches == []


def test_non_positive_limit_rejected(catalogs: Catalogs) -> None:
    service = CandidateSearchService(catalogs)

    with pytest.raises(ValidationError):
        service.search("chicken", limit=0)


def test_search_ranks_exact_kernel_match_first(catalogs: Catalogs) -> None:
    line = "300 g Chicken breast boneless skinless 100g (or chicken thighs)"
    service = CandidateSearchService(catalogs)

    results = service.search(extract_search_kernel(line))

    assert [candidate.name for candidate in results] == ["Chicken breast", "Chicken"]
    assert results[0].score == 0
    assert results[1].score > results[0].score
    assert len({candidate.reference.key for candidate in results}) == len(results)


def test_search_terms_skip_leading_article_and_unit() -> None:
    assert build_search_terms("een snuf zout")[0] == "zout"
    assert build_search_terms("a pinch of salt")[0] == "salt"
    assert "een" not in build_search_terms("een snuf zout")
    assert "a" not in build_search_terms("a pinch of salt")


def test_search_with_article_queries_the_food_word(
    catalogs: Catalogs, nevo_catalog: InMemoryCatalog
) -> None:
    service = CandidateSearchService(catalogs)

    results = service.search("a tomato")

    assert [candidate.name for candidate in results] == ["Tomato"]
    assert nevo_catalog.searches[0][0] == "tomato"


def test_search_exact_name_beats_containing_name(catalogs: Catalogs) -> None:
    service = CandidateSearchService(catalogs)

    results = service.search("oil")

    assert [(c.name, c.score) for c in results] == [("Oil", 0), ("Olive oil", 3)]


def test_search_merges_both_catalogs(catalogs: Catalogs) -> None:
    service = CandidateSearchService(catalogs)

    results = service.search("chickpea dip")

    assert [candidate.reference.key for candidate in results] == ["custom:abc"]


def test_search_respects_limit_and_budget(
    catalogs: Catalogs, nevo_catalog: InMemoryCatalog
) -> None:
    service = CandidateSearchService(catalogs)

    results = service.search("chick", limit=1)

    assert len(results) == 1
    assert results[0].name == "Chicken breast"
    assert nevo_catalog.searches == [("chick", 1)]


def test_later_term_failure_is_skipped(
    catalogs: Catalogs, nevo_catalog: InMemoryCatalog
) -> None:
    nevo_catalog.failing_terms = {"chicken"}
    service = CandidateSearchService(catalogs)

    results = service.search("chicken breast")

    assert [candidate.name for candidate in results] == ["Chicken breast"]


def test_first_term_failure_propagates(
    catalogs: Catalogs, nevo_catalog: InMemoryCatalog
) -> None:
    nevo_catalog.failing_terms = {"chicken breast"}
    service = CandidateSearchService(catalogs)

    with pytest.raises(DataSourceError):
        service.search("chicken breast")


def test_build_search_terms_order() -> None:
    line = "300 g Chicken breast boneless skinless 100g (or chicken thighs)"

    assert build_search_terms("currypowder") == ["currypowder", "curry", "powder"]
    assert build_search_terms("ui") == ["ui", "uien", "uis"]
    assert build_search_terms(line) == [
        "chicken breast",
        "chicken",
        "300 g chicken breast boneless skinless 1",
    ]


def test_relevance_scale() -> None:
    query = "olive oil 2 tbsp"

    assert relevance_score("Olive Oil 2 TBSP", query) == 0
    assert relevance_score("Olive oil", query) == 1
    assert relevance_score("Olive, oil", query) == 1
    assert relevance_score("Chicken", "chicken breast") == 2
    assert relevance_score("Tomatoes canned", "tomato") == 2
    assert relevance_score("Oil", query) == 3
    assert relevance_score("Red pepper", "pepper") == 3
    assert relevance_score("Sweet peppers", "pepper") == 4
    assert relevance_score("Rice", "chicken") == 5
    assert relevance_score("", "chicken") == 5


def test_rank_olive_oil_before_oil() -> None:
    foods = [make_food(4, "Oil"), make_food(3, "Olive oil")]

    ranked = rank_candidates(foods, "olive oil 2 tbsp")

    assert [candidate.name for candidate in ranked] == ["Olive oil", "Oil"]


def test_rank_ties_break_on_name() -> None:
    foods = [make_food(1, "banana"), make_food(2, "Apple"), make_food(3, "apple")]

    ranked = rank_candidates(foods, "zzz")

    assert [candidate.name for candidate in ranked] == ["Apple", "apple", "banana"]
