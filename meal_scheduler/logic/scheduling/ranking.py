"""Goal-based ordering of candidate meals (tie-break before the random top-3 pick)."""
from typing import Callable, Dict, List, Optional, Tuple

from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.utilities.constants import (
    GOAL_EATING_HEALTHY, GOAL_KETO_DIET, GOAL_STAYING_FIT, GOAL_WEIGHT_GAIN, GOAL_WEIGHT_LOSS
)


def _num(value) -> float:
    return float(value or 0)


# goal -> (sort key, descending)
GOAL_ORDERING: Dict[str, Tuple[Callable[[MealCatalogEntry], float], bool]] = {
    GOAL_WEIGHT_LOSS: (lambda m: _num(m.calories), False),
    GOAL_WEIGHT_GAIN: (lambda m: _num(m.calories), True),
    GOAL_STAYING_FIT: (lambda m: _num(m.protein), True),
    GOAL_EATING_HEALTHY: (lambda m: _num(m.fiber), True),
    GOAL_KETO_DIET: (lambda m: _num(m.carbs), False),
}
DEFAULT_ORDERING = (lambda m: _num(m.protein), True)


def normalize_goal(goal: Optional[str]) -> str:
    return ''.join((goal or '').split()).lower()


def sort_meals_by_goal(meals: List[MealCatalogEntry], goal: Optional[str]) -> List[MealCatalogEntry]:
    """Return a new, stably sorted list; unknown goals rank by descending protein."""
    key, descending = GOAL_ORDERING.get(normalize_goal(goal), DEFAULT_ORDERING)
    # sorted() keeps equal keys in input order, reverse=True included
    return sorted(meals, key=key, reverse=descending)


__all__ = ['GOAL_ORDERING', 'normalize_goal', 'sort_meals_by_goal']
