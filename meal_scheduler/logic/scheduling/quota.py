"""Premium ("five-star") quota policy per subscription tier.

The cadence lives in SUBSCRIPTION_PLANS: the weekly tier earns a premium
slot in weeks 1 and 3 of every 4-week block, monthly and quarterly tiers in
every week. Unknown tiers use the monthly policy.
"""
import math
from typing import Any, Dict

from meal_scheduler.utilities.constants import DEFAULT_SUBSCRIPTION, SUBSCRIPTION_PLANS


def get_plan(tier: str) -> Dict[str, Any]:
    return SUBSCRIPTION_PLANS.get((tier or '').strip().lower(), SUBSCRIPTION_PLANS[DEFAULT_SUBSCRIPTION])


def should_have_five_star(week_number: int, tier: str) -> bool:
    """Whether the 1-based week of the generation horizon carries a premium budget."""
    plan = get_plan(tier)
    weeks = plan["five_star_weeks"]
    if weeks is None:
        return True
    return ((week_number - 1) % plan["cadence"]) in weeks


def five_star_budget(week_number: int, tier: str) -> int:
    if not should_have_five_star(week_number, tier):
        return 0
    return math.ceil(get_plan(tier)["weekly_five_star"])


__all__ = ['five_star_budget', 'get_plan', 'should_have_five_star']
