from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.infra.Meal_Repository import reading_from_meals

router = APIRouter(prefix="/api/meals", tags=["meals"])


def get_catalog() -> List[MealCatalogEntry]:
    return reading_from_meals()


@router.get("")
def list_meals(category: Optional[str] = None, dietary_tags: Optional[str] = None,
               limit: int = Query(default=8, ge=1, le=200), offset: int = Query(default=0, ge=0),
               catalog: List[MealCatalogEntry] = Depends(get_catalog)):
    """Catalog page, optionally narrowed to one category and/or one dietary tag."""
    meals = catalog
    if category:
        wanted = category.strip().lower()
        meals = [m for m in meals if (m.category or "").lower() == wanted]
    if dietary_tags:
        tag = dietary_tags.strip()
        meals = [m for m in meals if tag in m.dietary_tags]
    page = meals[offset:offset + limit]
    return {
        "success": True,
        "data": [m.to_dict() for m in page],
        "count": len(page),
        "total": len(meals),
    }
