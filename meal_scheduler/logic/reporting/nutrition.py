"""Nutrition aggregation for one generated week."""
from collections import defaultdict

from meal_scheduler.domain.Schedule import WeekSchedule
from meal_scheduler.utilities.constants import DAYS

NUTRIENTS = ('calories', 'protein', 'carbs', 'fat', 'fiber')


def _empty_totals():
    return {k: 0 for k in NUTRIENTS}


def compute_week_nutrition(week: WeekSchedule):
    """Aggregate nutrition stats for the given week.

    Returns structure:
    {
      'week': int,
      'days': {
         'monday': {'calories': .., 'protein': g, 'carbs': g, 'fat': g, 'fiber': g,
                    'meals': { 'breakfast': { 'id': .., 'name': str, 'calories': .., ... }, ... }},
         ...
      },
      'week_totals': { 'calories': .., 'protein': g, 'carbs': g, 'fat': g, 'fiber': g }
    }
    """
    if week is None:
        return {'week': None, 'days': {}, 'week_totals': _empty_totals()}

    days_result = {}
    totals = defaultdict(int)
    for day in DAYS:
        slots = week.days.get(day) or {}
        day_totals = _empty_totals()
        meal_details = {}
        for category, meal in slots.items():
            values = {k: getattr(meal, k, 0) or 0 for k in NUTRIENTS}
            meal_details[category] = {'id': meal.id, 'name': meal.name, **values}
            for k, v in values.items():
                day_totals[k] += v
        days_result[day] = {**day_totals, 'meals': meal_details}
        for k, v in day_totals.items():
            totals[k] += v

    return {
        'week': week.week_number,
        'days': days_result,
        'week_totals': {k: totals[k] for k in NUTRIENTS},
    }

__all__ = ["compute_week_nutrition"]
