from meal_scheduler.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
MEALS_FILE = DATA_DIR / 'meals.json'
SCHEDULES_FILE = DATA_DIR / 'schedules.json'

__all__ = ['DATA_DIR', 'MEALS_FILE', 'SCHEDULES_FILE']
