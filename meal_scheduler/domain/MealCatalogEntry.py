"""Catalog meal entity: id, category, rating, nutrition facts, dietary tags, ingredients."""
from typing import Iterable, Optional, Union

from meal_scheduler.utilities.constants import FIVE_STAR_RATING


class MealCatalogEntry:
    def __init__(self, id: Union[str, int], name: str = "", category: Optional[str] = None,
                 rating: Optional[float] = None, calories: float = 0, protein: float = 0,
                 carbs: float = 0, fat: float = 0, fiber: float = 0,
                 dietary_tags: Optional[Iterable[str]] = None, ingredients: Optional[Iterable[str]] = None,
                 description: str = "", image_url: str = "", price: Optional[float] = None):
        self.id = id
        self.name = name
        self.category = category
        self.rating = rating
        self.calories = calories
        self.protein = protein
        self.carbs = carbs
        self.fat = fat
        self.fiber = fiber or 0
        # Copies, so the caller's lists are never shared with the entry
        self.dietary_tags = frozenset(dietary_tags or ())
        self.ingredients = tuple(ingredients or ())
        self.description = description
        self.image_url = image_url
        self.price = price

    def is_five_star(self) -> bool:
        return self.rating is not None and self.rating >= FIVE_STAR_RATING

    def __eq__(self, other):
        if not isinstance(other, MealCatalogEntry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(self.id)

    def __str__(self) -> str:
        rating = f"{self.rating:.1f}" if self.rating is not None else "n/a"
        return f"{self.name} ({self.category or '-'}) - Rating: {rating} - Kcal: {self.calories}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a MealCatalogEntry from an already-decoded dictionary. Ignores unknown keys.'''
        allowed = {"id", "name", "category", "rating", "calories", "protein", "carbs", "fat", "fiber",
                   "dietary_tags", "ingredients", "description", "image_url", "price"}
        filtered = {k: v for k, v in dict(data).items() if k in allowed}
        return MealCatalogEntry(**filtered)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "rating": self.rating,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
            "dietary_tags": sorted(self.dietary_tags),
            "ingredients": list(self.ingredients),
            "description": self.description,
            "image_url": self.image_url,
            "price": self.price,
        }
