"""Nutri-Score grading for per-100g nutrition profiles.

The score follows the FSA nutrient profiling points: up to 10 negative points
each for energy, sugars, saturated fat and salt, and positive points for fiber
(up to 5), protein (up to 7) and fruit/vegetable/nut content (5, single foods
only). Protein only counts while the negative points stay below 11.
"""

from bisect import bisect_left, bisect_right

from recipe_nutrition.domain.foods import CatalogFood
from recipe_nutrition.domain.nutrition import NutriScoreGrade, NutritionalProfile

KJ_PER_KCAL = 4.184
SALT_PER_SODIUM = 2.5

# A value above the n-th bound earns n + 1 points.
ENERGY_KJ_BOUNDS = (335, 670, 1005, 1340, 1675, 2010, 2345, 2680, 3015, 3350)
SUGAR_G_BOUNDS = (4.5, 9, 13.5, 18, 22.5, 27, 31, 36, 40, 45)
SATURATED_FAT_G_BOUNDS = (1, 2, 3, 4, 5, 6, 7, 8, 9, 10)
SALT_G_BOUNDS = (0.3, 0.6, 0.9, 1.2, 1.5, 1.8, 2.1, 2.4, 2.7, 3.0)

# Reaching the n-th bound earns n + 1 points.
FIBER_G_BOUNDS = (0.9, 1.9, 2.8, 3.7, 4.7)
PROTEIN_G_BOUNDS = (0.8, 1.6, 2.4, 3.2, 4.8, 6.4, 8.0)

PROTEIN_NEGATIVE_CAP = 11
FRUIT_VEGETABLE_POINTS = 5
FRUIT_VEGETABLE_GROUP_MARKERS = (
    "fruit",
    "groente",
    "vegetable",
    "noten",
    "nuts",
    "zaden",
    "seeds",
)

# Highest final score for each grade, best grade first.
GRADE_CUTOFFS = (
    (-1, NutriScoreGrade.A),
    (2, NutriScoreGrade.B),
    (10, NutriScoreGrade.C),
    (18, NutriScoreGrade.D),
)


def compute_grade(profile: NutritionalProfile | None) -> NutriScoreGrade | None:
    """Grade a per-100g profile of a composite food such as a full recipe."""
    if profile is None:
        return None
    return grade_for_score(score_profile(profile))


def grade_food(food: CatalogFood | None) -> NutriScoreGrade | None:
    """Grade a single catalog food, crediting fruit and vegetable groups."""
    if food is None:
        return None
    bonus = FRUIT_VEGETABLE_POINTS if is_fruit_vegetable_group(food.food_group) else 0
    return grade_for_score(score_profile(food.per_100g, extra_positive=bonus))


def score_profile(profile: NutritionalProfile, extra_positive: int = 0) -> int:
    """Return negative minus positive points for a per-100g profile."""
    negative = negative_points(profile)
    positive = extra_positive + bisect_right(FIBER_G_BOUNDS, profile.fiber_g)
    if negative < PROTEIN_NEGATIVE_CAP:
        positive += bisect_right(PROTEIN_G_BOUNDS, profile.protein_g)
    return negative - positive


def negative_points(profile: NutritionalProfile) -> int:
    # Energy bounds are kJ; kcal values are converted, never compared directly.
    energy_kj = profile.energy_kj or profile.energy_kcal * KJ_PER_KCAL
    salt_g = profile.sodium_mg / 1000 * SALT_PER_SODIUM
    return (
        bisect_left(ENERGY_KJ_BOUNDS, energy_kj)
        + bisect_left(SUGAR_G_BOUNDS, profile.sugar_g)
        + bisect_left(SATURATED_FAT_G_BOUNDS, profile.saturated_fat_g)
        + bisect_left(SALT_G_BOUNDS, salt_g)
    )


def grade_for_score(score: int) -> NutriScoreGrade:
    for cutoff, grade in GRADE_CUTOFFS:
        if score <= cutoff:
            return grade
    return NutriScoreGrade.E


def is_fruit_vegetable_group(food_group: str | None) -> bool:
    group = (food_group or "").lower()
    return any(marker in group for marker in FRUIT_VEGETABLE_GROUP_MARKERS)
