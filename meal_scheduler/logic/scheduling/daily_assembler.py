"""Fill one day's meal slots from the categorized pools.

Rules:
  - The user's meal types are shuffled per day, tiled end-to-end and cut to
    exactly meal_count entries.
  - At most one meal per category per day; tiled repeats of a category that is
    already filled are skipped, so meal_count is an upper bound capped by the
    number of distinct categories selected.
  - While the week still has premium budget, a slot draws from the five-star
    pool (four-star when that is empty). Otherwise it draws from the four- to
    one-star pools; five-star meals are held back for quota slots.
  - A meal id is used at most once per week (used_ids is shared by the days
    of one week). A slot with no candidate left stays absent.
"""
import random
from typing import Callable, Dict, List, Optional, Set, Tuple

from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.logic.scheduling.categorizer import Pools
from meal_scheduler.logic.scheduling.ranking import sort_meals_by_goal
from meal_scheduler.utilities.constants import REGULAR_TIERS, TOP_CANDIDATES


def slot_candidates(pools: Pools, category: str, wants_five_star: bool) -> List[MealCatalogEntry]:
    if wants_five_star:
        candidates = pools["fiveStar"].get(category, [])
        if not candidates:
            candidates = pools["fourStar"].get(category, [])
        return list(candidates)
    candidates: List[MealCatalogEntry] = []
    for tier in REGULAR_TIERS:
        candidates.extend(pools[tier].get(category, []))
    return candidates


def select_meal_for_slot(pools: Pools, category: str, wants_five_star: bool, goal: Optional[str],
                         used_ids: Set, rng: random.Random) -> Optional[MealCatalogEntry]:
    """Pick a meal for one slot, or None when every candidate is already used this week."""
    available = [m for m in slot_candidates(pools, category, wants_five_star) if m.id not in used_ids]
    if not available:
        return None
    top = sort_meals_by_goal(available, goal)[:TOP_CANDIDATES]
    return rng.choice(top)


def build_slot_order(meal_types: List[str], meal_count: int, rng: random.Random) -> List[str]:
    """Shuffled copy of meal_types repeated end-to-end and truncated to meal_count."""
    shuffled = list(meal_types)
    rng.shuffle(shuffled)
    if not shuffled or meal_count <= 0:
        return []
    repeats = -(-meal_count // len(shuffled))
    return (shuffled * repeats)[:meal_count]


def assemble_day(pools: Pools, meal_types: List[str], meal_count: int, five_star_budget: int,
                 goal: Optional[str], used_ids: Set, rng: random.Random,
                 on_unfilled: Optional[Callable[[str], None]] = None
                 ) -> Tuple[Dict[str, MealCatalogEntry], int, int]:
    """Assemble one day.

    Args:
        pools: output of categorize_meals_by_rating.
        meal_types: the user's categories (duplicates allowed).
        meal_count: requested meals per day.
        five_star_budget: premium slots still owed this week.
        goal: user goal used for ranking.
        used_ids: ids already placed this week; updated in place.
        rng: injected random source.
        on_unfilled: called once per category still empty when the day is done.

    Returns:
        (day map category -> meal, five-star meals placed, remaining budget)
    """
    day: Dict[str, MealCatalogEntry] = {}
    five_star_count = 0
    remaining = five_star_budget
    # First-failure order; a later tiled entry may still fill the category
    missed: List[str] = []
    for category in build_slot_order(meal_types, meal_count, rng):
        if category in day:
            continue
        meal = select_meal_for_slot(pools, category, remaining > 0, goal, used_ids, rng)
        if meal is None:
            if category not in missed:
                missed.append(category)
            continue
        used_ids.add(meal.id)
        if meal.is_five_star():
            five_star_count += 1
            if remaining > 0:
                remaining -= 1
        day[category] = meal
    if on_unfilled is not None:
        for category in missed:
            if category not in day:
                on_unfilled(category)
    return day, five_star_count, remaining


__all__ = ['assemble_day', 'build_slot_order', 'select_meal_for_slot', 'slot_candidates']
