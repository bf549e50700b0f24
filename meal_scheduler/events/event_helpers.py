"""Event helper utilities.

Publish schedule-generation events onto an explicitly passed bus. Every
helper is a no-op when the bus is None, so the generator stays silent unless
a caller injects one.

Quick import:
    from meal_scheduler.events.event_helpers import (
        publish_slot_unfilled, publish_week_generated, publish_schedule_generated
    )
"""
from __future__ import annotations
from typing import Any, Optional
from .Event_Bus import (
    EventBus, SCHEDULE_SLOT_UNFILLED, SCHEDULE_WEEK_GENERATED, SCHEDULE_GENERATED
)

__all__ = [
    'publish_slot_unfilled', 'publish_week_generated', 'publish_schedule_generated',
    'SCHEDULE_SLOT_UNFILLED', 'SCHEDULE_WEEK_GENERATED', 'SCHEDULE_GENERATED'
]


def publish_slot_unfilled(bus: Optional[EventBus], user_id: Any, week: int, day: str, category: str):
    """Publish a schedule.slot_unfilled event (no eligible candidate left)."""
    if bus is None:
        return
    bus.publish(SCHEDULE_SLOT_UNFILLED, {
        'user_id': user_id,
        'week': week,
        'day': day,
        'category': category
    })


def publish_week_generated(bus: Optional[EventBus], user_id: Any, week: int, total_meals: int,
                           five_star_meals: int, five_star_budget: int):
    if bus is None:
        return
    bus.publish(SCHEDULE_WEEK_GENERATED, {
        'user_id': user_id,
        'week': week,
        'total_meals': total_meals,
        'five_star_meals': five_star_meals,
        'five_star_budget': five_star_budget
    })


def publish_schedule_generated(bus: Optional[EventBus], user_id: Any, weeks: int, total_meals: int,
                               five_star_meals: int, eligible_meals: int):
    """Publish a schedule.generated event once a full schedule is assembled.

    Payload structure:
        {
          'user_id': <id>, 'weeks': <int>, 'total_meals': <int>,
          'five_star_meals': <int>, 'eligible_meals': <int after filtering>
        }
    """
    if bus is None:
        return
    bus.publish(SCHEDULE_GENERATED, {
        'user_id': user_id,
        'weeks': weeks,
        'total_meals': total_meals,
        'five_star_meals': five_star_meals,
        'eligible_meals': eligible_meals
    })
