import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.infra.paths import MEALS_FILE
from meal_scheduler.utilities.validators import MealInput

logger = logging.getLogger(__name__)


def load_meal_rows(path: Optional[Path] = None) -> list:
    """Raw catalog rows as stored; [] when the file is missing or unreadable."""
    path = Path(path or MEALS_FILE)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            rows = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Meals file not found: {path}. Returning empty list.")
        return []
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in meals file: {e}")
        return []
    if not isinstance(rows, list):
        logger.error(f"Meals file {path} does not contain a list")
        return []
    return rows


def reading_from_meals(path: Optional[Path] = None) -> List[MealCatalogEntry]:
    """Read and decode the meal catalog; invalid rows are logged and skipped."""
    meals: List[MealCatalogEntry] = []
    for row in load_meal_rows(path):
        try:
            meals.append(MealInput.model_validate(row).to_domain())
        except ValidationError as e:
            logger.warning(f"Skipping invalid meal row {row.get('id') if isinstance(row, dict) else row!r}: {e}")
    return meals
