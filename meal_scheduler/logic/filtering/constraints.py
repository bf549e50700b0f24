"""Allergy and dietary-plan filtering for the meal catalog.

Provides filter_meals_for_user(meals, allergies, dietary_plan). Both checks
are conjunctive; a meal must pass each to stay eligible.
"""
from typing import Iterable, List, Optional

from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.utilities.constants import ALLERGEN_VARIATIONS, DIETARY_PLAN_TAGS


def _normalize(text: str) -> str:
    return (text or '').strip().lower()


def has_allergy_conflict(meal: MealCatalogEntry, allergies: Iterable[str]) -> bool:
    """True if any ingredient matches an allergy directly or through its synonym table entry."""
    allergies_lower = [a for a in (_normalize(a) for a in allergies) if a]
    if not allergies_lower:
        return False
    for ingredient in meal.ingredients:
        ingredient_lower = _normalize(ingredient)
        if not ingredient_lower:
            continue
        for allergy in allergies_lower:
            if allergy in ingredient_lower or ingredient_lower in allergy:
                return True
            for variation in ALLERGEN_VARIATIONS.get(allergy, (allergy,)):
                if variation in ingredient_lower:
                    return True
    return False


def plan_target_tags(dietary_plan: Optional[str]) -> frozenset:
    """Tags a meal must intersect for the plan; empty when the plan is unmapped."""
    return DIETARY_PLAN_TAGS.get((dietary_plan or '').strip(), frozenset())


def matches_dietary_plan(meal: MealCatalogEntry, dietary_plan: Optional[str]) -> bool:
    targets = plan_target_tags(dietary_plan)
    if not targets:
        return True
    return bool(targets & meal.dietary_tags)


def filter_meals_for_user(meals: Iterable[MealCatalogEntry], allergies: Optional[List[str]],
                          dietary_plan: Optional[str]) -> List[MealCatalogEntry]:
    """Return a new list of the meals compatible with the user's allergies and plan.

    Args:
        meals: catalog entries (not modified).
        allergies: free-text allergies; an empty list skips the allergy check.
        dietary_plan: plan name; unmapped plans apply no tag filtering.
    """
    allergies = list(allergies or [])
    result: List[MealCatalogEntry] = []
    for meal in meals:
        if allergies and has_allergy_conflict(meal, allergies):
            continue
        if not matches_dietary_plan(meal, dietary_plan):
            continue
        result.append(meal)
    return result


__all__ = ['filter_meals_for_user', 'has_allergy_conflict', 'matches_dietary_plan', 'plan_target_tags']
