"""Rating-tier × category bucketing of the filtered catalog."""
import math
from typing import Dict, Iterable, List

from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.utilities.constants import (
    DEFAULT_CATEGORY, DEFAULT_RATING, MEAL_CATEGORIES, RATING_TIERS
)

Pools = Dict[str, Dict[str, List[MealCatalogEntry]]]


def rating_tier(rating) -> str:
    stars = math.floor(DEFAULT_RATING if rating is None else rating)
    if stars >= 5:
        return "fiveStar"
    if stars >= 4:
        return "fourStar"
    if stars >= 3:
        return "threeStar"
    if stars >= 2:
        return "twoStar"
    return "oneStar"


def meal_category(meal: MealCatalogEntry) -> str:
    return (meal.category or DEFAULT_CATEGORY).strip().lower() or DEFAULT_CATEGORY


def categorize_meals_by_rating(meals: Iterable[MealCatalogEntry]) -> Pools:
    """Group meals into tier -> category -> list, keeping catalog order inside each bucket.

    Every tier carries the four canonical categories; any other category gets
    its own bucket on first use.
    """
    pools: Pools = {tier: {category: [] for category in MEAL_CATEGORIES} for tier in RATING_TIERS}
    for meal in meals:
        pools[rating_tier(meal.rating)].setdefault(meal_category(meal), []).append(meal)
    return pools


def pool_sizes(pools: Pools) -> Dict[str, Dict[str, int]]:
    return {tier: {category: len(items) for category, items in by_category.items()}
            for tier, by_category in pools.items()}


__all__ = ['Pools', 'categorize_meals_by_rating', 'meal_category', 'pool_sizes', 'rating_tier']
