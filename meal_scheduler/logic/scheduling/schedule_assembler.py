"""Schedule generation entry point.

generate_schedule(profile, catalog, ...) runs the whole pipeline:
filter -> categorize -> per week quota decision -> per day slot filling ->
aggregated Schedule. It performs no I/O and keeps no state between calls;
randomness comes only from the rng (or seed) passed in.
"""
import logging
import random
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.domain.Schedule import Schedule, WeekSchedule
from meal_scheduler.domain.UserProfile import UserProfile
from meal_scheduler.events.Event_Bus import EventBus
from meal_scheduler.events.event_helpers import (
    publish_schedule_generated, publish_slot_unfilled, publish_week_generated
)
from meal_scheduler.logic.filtering.constraints import filter_meals_for_user
from meal_scheduler.logic.scheduling.categorizer import Pools, categorize_meals_by_rating
from meal_scheduler.logic.scheduling.daily_assembler import assemble_day
from meal_scheduler.logic.scheduling.quota import five_star_budget, get_plan
from meal_scheduler.utilities.config import DEFAULT_SCHEDULE_WEEKS
from meal_scheduler.utilities.constants import DAYS
from meal_scheduler.utilities.errors import InputError

logger = logging.getLogger(__name__)


def _validate(profile: Optional[UserProfile], catalog: Optional[Sequence[MealCatalogEntry]], weeks: int):
    if profile is None:
        raise InputError("User profile is required")
    if not catalog:
        raise InputError("No meals available for scheduling")
    if weeks < 1:
        raise InputError(f"Schedule horizon must be at least one week, got {weeks}")


def generate_week(week_number: int, pools: Pools, profile: UserProfile, rng: random.Random,
                  event_bus: Optional[EventBus] = None) -> WeekSchedule:
    """Assemble the seven days of one week with a fresh used-id set."""
    budget = five_star_budget(week_number, profile.subscription_tier)
    used_ids = set()
    days: Dict[str, Dict[str, MealCatalogEntry]] = {}
    total = five_star = 0
    remaining = budget
    for day_name in DAYS:
        def on_unfilled(category, day_name=day_name):
            publish_slot_unfilled(event_bus, profile.id, week_number, day_name, category)

        day, day_five_star, remaining = assemble_day(
            pools, profile.meal_types, profile.meal_count, remaining,
            profile.goal, used_ids, rng, on_unfilled=on_unfilled
        )
        days[day_name] = day
        total += len(day)
        five_star += day_five_star
    publish_week_generated(event_bus, profile.id, week_number, total, five_star, budget)
    return WeekSchedule(week_number, days, total_meals=total, five_star_meals=five_star)


def generate_schedule(profile: UserProfile, catalog: Sequence[MealCatalogEntry], *,
                      weeks: int = DEFAULT_SCHEDULE_WEEKS, rng: Optional[random.Random] = None,
                      seed: Optional[int] = None, event_bus: Optional[EventBus] = None,
                      now: Optional[datetime] = None) -> Schedule:
    """Generate a multi-week meal schedule for one user.

    Args:
        profile: decoded user profile (meal_types must already be non-empty).
        catalog: decoded catalog entries; neither list nor entries are modified.
        weeks: number of weeks in the horizon (week numbers are 1-based).
        rng: random source; when omitted one is created from ``seed``.
        seed: seed for the internal random source when ``rng`` is not given.
        event_bus: optional observability hook receiving schedule.* events.
        now: timestamp recorded as ``generated_at`` (UTC now by default).

    Raises:
        InputError: profile missing, catalog empty or weeks < 1.
    """
    try:
        _validate(profile, catalog, weeks)
    except InputError as e:
        logger.warning("Schedule generation rejected: %s", e)
        raise
    if rng is None:
        rng = random.Random(seed)
    plan = get_plan(profile.subscription_tier)
    logger.info("Generating %s-week schedule for user %s (%s, %s catalog meals)",
                weeks, profile.id, plan["name"], len(catalog))

    eligible = filter_meals_for_user(catalog, profile.allergies, profile.dietary_plan)
    pools = categorize_meals_by_rating(eligible)

    week_schedules: List[WeekSchedule] = []
    total_meals = five_star_meals = 0
    for week_number in range(1, weeks + 1):
        week = generate_week(week_number, pools, profile, rng, event_bus)
        week_schedules.append(week)
        total_meals += week.total_meals
        five_star_meals += week.five_star_meals

    publish_schedule_generated(event_bus, profile.id, weeks, total_meals, five_star_meals, len(eligible))
    logger.info("Schedule for user %s: %s meals, %s five-star, %s eligible after filtering",
                profile.id, total_meals, five_star_meals, len(eligible))
    return Schedule(
        profile.id,
        profile.subscription_tier,
        week_schedules,
        total_meals=total_meals,
        five_star_meals=five_star_meals,
        generated_at=now or datetime.now(timezone.utc),
        plan_name=plan["name"],
    )


__all__ = ['generate_schedule', 'generate_week']
