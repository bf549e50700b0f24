"""Delivery-side helpers operating on a serialized schedule (Schedule.to_dict()).

Provides build_meal_assignments(schedule, start_date) for flat per-meal rows
and swap_meals(schedule, source, target) for exchanging two slots.
"""
import copy
from datetime import date, timedelta
from typing import Any, Dict, List, Mapping

from meal_scheduler.utilities.constants import DATE_FORMAT, DAYS, FIVE_STAR_RATING, MEAL_CATEGORIES
from meal_scheduler.utilities.errors import SwapError

DEFAULT_PORTION_SIZE = 1


def _day_offset(day_key: str) -> int:
    try:
        return DAYS.index(day_key.lower())
    except ValueError:
        return -1


def build_meal_assignments(schedule: Mapping[str, Any], start_date: date) -> List[Dict[str, Any]]:
    """Flatten a schedule into (user, meal, date, category) rows for delivery tracking.

    Args:
        schedule: serialized schedule.
        start_date: date of the Monday of week 1.

    Returns:
        List of dicts: { user_id, meal_id, meal_date, meal_type, portion_size },
        ordered by date then slot order. Absent slots and unknown day keys produce no rows.
    """
    rows: List[Dict[str, Any]] = []
    user_id = schedule.get('user_id')
    for week_index, week in enumerate(schedule.get('weeks') or []):
        days = week.get('days') or {}
        for day_key in sorted(days, key=_day_offset):
            offset = _day_offset(day_key)
            if offset < 0:
                continue
            meal_date = start_date + timedelta(days=week_index * 7 + offset)
            for meal_type, meal in (days[day_key] or {}).items():
                if not meal or meal.get('id') is None:
                    continue
                rows.append({
                    'user_id': user_id,
                    'meal_id': meal['id'],
                    'meal_date': meal_date.strftime(DATE_FORMAT),
                    'meal_type': meal_type,
                    'portion_size': DEFAULT_PORTION_SIZE,
                })
    return rows


def _slot_day(schedule: Dict[str, Any], location: Mapping[str, Any], label: str) -> Dict[str, Any]:
    weeks = schedule.get('weeks') or []
    week_index = location.get('week_index')
    if not isinstance(week_index, int) or not 0 <= week_index < len(weeks):
        raise SwapError(f"{label} meal location not found in schedule: week {week_index}")
    days = weeks[week_index].get('days') or {}
    day_key = location.get('day_key')
    if day_key not in days:
        raise SwapError(f"{label} meal location not found in schedule: day {day_key}")
    if location.get('meal_key') not in MEAL_CATEGORIES:
        raise SwapError(f"{label} meal location has unknown meal type: {location.get('meal_key')}")
    return days[day_key]


def _week_meals(week: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [m for slots in (week.get('days') or {}).values() for m in (slots or {}).values() if m]


def _recount(week: Dict[str, Any]) -> None:
    meals = _week_meals(week)
    week['total_meals'] = len(meals)
    week['five_star_meals'] = sum(1 for m in meals if (m.get('rating') or 0) >= FIVE_STAR_RATING)


def _check_unique(week: Dict[str, Any], week_index: int) -> None:
    seen = set()
    for meal in _week_meals(week):
        if meal.get('id') in seen:
            raise SwapError(f"Swap would serve meal {meal.get('id')} twice in week {week_index + 1}")
        seen.add(meal.get('id'))


def swap_meals(schedule: Mapping[str, Any], source: Mapping[str, Any], target: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of the schedule with two slots exchanged.

    Locations are dicts { week_index (0-based), day_key, meal_key }. An absent
    slot swaps as absence. Week and schedule totals are recomputed.

    Raises:
        SwapError: a week, day or meal type of either location does not exist,
            or the swap would repeat a meal within one week.
    """
    result = copy.deepcopy(dict(schedule))
    source_day = _slot_day(result, source, 'Source')
    target_day = _slot_day(result, target, 'Target')
    source_key, target_key = source.get('meal_key'), target.get('meal_key')

    source_meal = source_day.pop(source_key, None)
    target_meal = target_day.pop(target_key, None)
    if target_meal is not None:
        source_day[source_key] = target_meal
    if source_meal is not None:
        target_day[target_key] = source_meal

    weeks = result.get('weeks') or []
    for week_index in {source['week_index'], target['week_index']}:
        _check_unique(weeks[week_index], week_index)
    for week in weeks:
        _recount(week)
    result['total_meals'] = sum(w['total_meals'] for w in weeks)
    result['five_star_meals'] = sum(w['five_star_meals'] for w in weeks)
    return result


__all__ = ['build_meal_assignments', 'swap_meals']
