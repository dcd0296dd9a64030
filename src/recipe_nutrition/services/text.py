"""Ingredient text normalization and search-term derivation."""

import re
from itertools import dropwhile

UNIT_WORDS = frozenset(
    {
        "g",
        "gr",
        "gram",
        "grams",
        "grammen",
        "kg",
        "kilo",
        "kilogram",
        "mg",
        "ml",
        "cl",
        "dl",
        "l",
        "liter",
        "litre",
        "el",
        "tl",
        "eetlepel",
        "eetlepels",
        "theelepel",
        "theelepels",
        "tbsp",
        "tbs",
        "tbl",
        "tablespoon",
        "tablespoons",
        "tsp",
        "teaspoon",
        "teaspoons",
        "cup",
        "cups",
        "kopje",
        "kopjes",
        "oz",
        "ounce",
        "ounces",
        "lb",
        "lbs",
        "pound",
        "pond",
        "st",
        "stuk",
        "stuks",
        "piece",
        "pieces",
        "mespunt",
        "snuf",
        "pinch",
        "teentje",
        "teentjes",
        "clove",
        "cloves",
        "takje",
        "takjes",
        "sprig",
        "sprigs",
        "plak",
        "plakken",
        "slice",
        "slices",
    }
)

CONNECTOR_WORDS = frozenset(
    {"per", "of", "or", "en", "and", "met", "with", "zonder", "without", "voor", "for"}
)

STOP_WORDS = UNIT_WORDS | CONNECTOR_WORDS

# Count words and determiners that open a quantity ("een snuf", "a pinch").
ARTICLE_WORDS = frozenset({"a", "an", "the", "een", "de", "het"})

# Preparation words that end a kernel; names in the catalogs rarely carry them.
DESCRIPTOR_WORDS = frozenset(
    {
        "boneless",
        "skinless",
        "chopped",
        "diced",
        "minced",
        "sliced",
        "grated",
        "peeled",
        "crushed",
        "finely",
        "roughly",
        "freshly",
        "gehakt",
        "gesneden",
        "geraspt",
        "fijngehakt",
        "geschild",
    }
)

# Checked in order; the first suffix leaving a stem of 2+ characters wins.
COMPOUND_SUFFIXES: tuple[str, ...] = (
    "poeder",
    "powder",
    "olie",
    "oil",
    "vet",
    "fat",
    "saus",
    "sauce",
    "kruiden",
    "herbs",
    "pasta",
    "paste",
    "puree",
    "sap",
    "juice",
    "melk",
    "milk",
    "room",
    "cream",
    "boter",
    "butter",
    "meel",
    "meal",
    "bloem",
    "flour",
    "azijn",
    "vinegar",
    "siroop",
    "syrup",
    "jam",
)

PLURAL_SUFFIXES: tuple[str, ...] = ("en", "s")

MAX_KERNEL_WORDS = 4
FALLBACK_KERNEL_CHARS = 50

# A kernel word ending in one of these closes the kernel.
_CLAUSE_PUNCTUATION = ",;:"

_WHITESPACE_RE = re.compile(r"\s+")
_NUMBER_RUN = r"[\d¼-¾⅐-⅞][\d\s\-–.,/¼-¾⅐-⅞]*"
# Article, then a number or range ("2 of 3", "1 to 2"), then a unit; all optional.
_LEADING_QUANTITY_RE = re.compile(
    r"^[\s\-–.,/]*"
    r"(?:(?:" + "|".join(sorted(ARTICLE_WORDS, key=len, reverse=True)) + r")\s+)?"
    r"(?:" + _NUMBER_RUN + r"(?:(?:of|or|tot|to)\s+" + _NUMBER_RUN + r")?)?"
    r"(?:(?:" + "|".join(sorted(map(re.escape, UNIT_WORDS), key=len, reverse=True))
    + r")\b\.?\s*(?:of\s+)?)?"
)
_TRAILING_GRAMS_RE = re.compile(r"\s*(?:per\s+)?\d+(?:[.,]\d+)?\s*g\s*$")
_TRAILING_PARENTHETICAL_RE = re.compile(r"\s*\([^)]*\)\s*$")
_NUMBER_TOKEN_RE = re.compile(r"^[\d¼-¾⅐-⅞.,/\-–]+[a-z]*\.?$")
_DIGITS_RE = re.compile(r"^\d+$")


def normalize(text: str) -> str:
    """Lowercase, trim and collapse whitespace runs to a single space."""
    return _WHITESPACE_RE.sub(" ", text.lower()).strip()


def extract_search_kernel(line: str) -> str:
    """Return a short catalog search term for a full ingredient line.

    ``"300 g Chicken breast boneless skinless 100g (or chicken thighs)"``
    becomes ``"chicken breast"``: the leading quantity and unit, the trailing
    parenthetical and ``100g`` marker are stripped, and at most four words are
    kept, stopping at the first number, unit, connector or preparation word
    and after a word ending a clause (``"knoflook, geperst"`` -> ``"knoflook"``).
    """
    normalized = normalize(line)
    if not normalized:
        return ""

    remaining = _LEADING_QUANTITY_RE.sub("", normalized).strip()
    previous = None
    while remaining and remaining != previous:
        previous = remaining
        remaining = _TRAILING_PARENTHETICAL_RE.sub("", remaining).strip()
        remaining = _TRAILING_GRAMS_RE.sub("", remaining).strip()
    if not remaining:
        return normalized[:FALLBACK_KERNEL_CHARS].strip()

    words = list(dropwhile(_is_filler, remaining.split(" ")))
    kernel: list[str] = []
    for word in words[:MAX_KERNEL_WORDS]:
        if kernel and _ends_kernel(word):
            break
        stripped = word.rstrip(_CLAUSE_PUNCTUATION)
        if stripped:
            kernel.append(stripped)
        if stripped != word:
            break
    return " ".join(kernel) or normalized[:FALLBACK_KERNEL_CHARS].strip()


def expand_compound_terms(term: str) -> list[str]:
    """Split compound words into stem and suffix search terms.

    ``"currypowder"`` yields ``["curry", "powder"]`` so that catalogs storing
    ``"Curry, powder"`` are still found.
    """
    terms: list[str] = []
    for word in normalize(term).split(" "):
        if len(word) < 2 or word in STOP_WORDS or _DIGITS_RE.match(word):
            continue
        for suffix in COMPOUND_SUFFIXES:
            if len(word) > len(suffix) and word.endswith(suffix):
                stem = word[: -len(suffix)]
                if len(stem) >= 2:
                    terms.extend([stem, suffix])
                    break
    return terms


def plural_forms(term: str) -> list[str]:
    """Naive plurals for short terms (``ui`` -> ``uien``, ``egg`` -> ``eggs``)."""
    normalized = normalize(term)
    if not 2 <= len(normalized) <= 5:
        return []
    return [
        normalized + suffix
        for suffix in PLURAL_SUFFIXES
        if not normalized.endswith(suffix)
    ]


def line_variants(line: str) -> list[str]:
    """Match-lookup keys for a line, most specific first."""
    variants: list[str] = []
    for candidate in (normalize(line), extract_search_kernel(line)):
        if candidate and candidate not in variants:
            variants.append(candidate)
    return variants


def _is_filler(word: str) -> bool:
    stripped = word.rstrip(_CLAUSE_PUNCTUATION)
    return stripped in STOP_WORDS or stripped in ARTICLE_WORDS


def _ends_kernel(word: str) -> bool:
    return (
        word in STOP_WORDS
        or word in DESCRIPTOR_WORDS
        or bool(_NUMBER_TOKEN_RE.match(word))
    )
