"""
Input validation schemas using Pydantic for the records handed to the scheduler.

The hosted database returns loosely typed rows: list columns may arrive as
JSON-encoded text and profile fields under their legacy column names. These
schemas decode them into native values before the core ever sees them.
"""
import json
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional

from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.domain.UserProfile import UserProfile
from meal_scheduler.utilities.config import DEFAULT_SCHEDULE_WEEKS, MAX_SCHEDULE_WEEKS
from meal_scheduler.utilities.constants import DEFAULT_CATEGORY, DEFAULT_MEAL_TYPES, MEAL_CATEGORIES


def decode_string_list(value: Any) -> List[str]:
    """Accept a list, JSON-encoded list text or comma-separated text; drop blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            parsed = text.split(',')
        value = parsed if isinstance(parsed, list) else [parsed]
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ValueError('Expected a list of strings')
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


class MealInput(BaseModel):
    """Schema for a catalog meal row."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    category: str = DEFAULT_CATEGORY
    rating: Optional[float] = Field(None, ge=0, le=5)
    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    fiber: float = Field(0, ge=0)
    dietary_tags: List[str] = Field(default_factory=list)
    ingredients: List[str] = Field(default_factory=list)
    description: str = ""
    image_url: str = ""
    price: Optional[float] = Field(None, ge=0)

    @field_validator('id', mode='before')
    @classmethod
    def id_to_str(cls, v):
        """Numeric ids from the database become strings."""
        return str(v).strip() if v is not None else v

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        if not v.strip():
            raise ValueError('Meal name cannot be empty')
        return v.strip()

    @field_validator('category', mode='before')
    @classmethod
    def normalize_category(cls, v):
        if v is None or not str(v).strip():
            return DEFAULT_CATEGORY
        return str(v).strip().lower()

    @field_validator('fiber', 'calories', 'protein', 'carbs', 'fat', mode='before')
    @classmethod
    def null_to_zero(cls, v):
        return 0 if v is None else v

    @field_validator('description', 'image_url', mode='before')
    @classmethod
    def null_to_empty(cls, v):
        return '' if v is None else v

    @field_validator('dietary_tags', 'ingredients', mode='before')
    @classmethod
    def decode_lists(cls, v):
        return decode_string_list(v)

    def to_domain(self) -> MealCatalogEntry:
        return MealCatalogEntry(**self.model_dump())


class ProfileInput(BaseModel):
    """Schema for a user profile row (legacy column names accepted)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, validation_alias=AliasChoices('id', 'user_id', 'userId'))
    subscription_tier: str = Field('monthly', validation_alias=AliasChoices('subscription_tier', 'subscription'))
    dietary_plan: str = Field('', validation_alias=AliasChoices('dietary_plan', 'plan'))
    goal: Optional[str] = None
    meal_count: int = Field(3, ge=1, validation_alias=AliasChoices('meal_count', 'mealcount'))
    meal_types: List[str] = Field(default_factory=lambda: list(DEFAULT_MEAL_TYPES),
                                  validation_alias=AliasChoices('meal_types', 'mealtypes'))
    allergies: List[str] = Field(default_factory=list)

    @field_validator('id', mode='before')
    @classmethod
    def id_to_str(cls, v):
        return str(v).strip() if v is not None else v

    @field_validator('subscription_tier', 'dietary_plan', mode='before')
    @classmethod
    def strip_or_default(cls, v, info):
        if v is None or not str(v).strip():
            return 'monthly' if info.field_name == 'subscription_tier' else ''
        v = str(v).strip()
        return v.lower() if info.field_name == 'subscription_tier' else v

    @field_validator('meal_count', mode='before')
    @classmethod
    def default_meal_count(cls, v):
        return 3 if v is None or v == '' else v

    @field_validator('meal_types', mode='before')
    @classmethod
    def decode_meal_types(cls, v):
        """Missing, empty or unparsable meal types fall back to lunch and dinner.

        Order and duplicates are kept; values outside the known categories are dropped.
        """
        try:
            types = [t.lower() for t in decode_string_list(v)]
        except ValueError:
            types = []
        types = [t for t in types if t in MEAL_CATEGORIES]
        return types or list(DEFAULT_MEAL_TYPES)

    @field_validator('allergies', mode='before')
    @classmethod
    def decode_allergies(cls, v):
        return decode_string_list(v)

    def to_domain(self) -> UserProfile:
        return UserProfile(**self.model_dump())


class ScheduleRequest(BaseModel):
    """Schema for a schedule generation request."""
    profile: ProfileInput
    meals: Optional[List[MealInput]] = None
    weeks: int = Field(DEFAULT_SCHEDULE_WEEKS, ge=1, le=MAX_SCHEDULE_WEEKS)
    seed: Optional[int] = None


class MealLocation(BaseModel):
    """One slot in a stored schedule."""
    week_index: int = Field(..., ge=0)
    day_key: str = Field(..., pattern=r'^(monday|tuesday|wednesday|thursday|friday|saturday|sunday)$')
    meal_key: str = Field(..., pattern=r'^(breakfast|lunch|dinner|snacks)$')

    @field_validator('day_key', 'meal_key', mode='before')
    @classmethod
    def lower(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class SwapRequest(BaseModel):
    """Schema for swapping two meals of a user's latest schedule."""
    user_id: str = Field(..., min_length=1)
    source: MealLocation
    target: MealLocation

    @field_validator('user_id', mode='before')
    @classmethod
    def id_to_str(cls, v):
        return str(v).strip() if v is not None else v


__all__ = ['MealInput', 'MealLocation', 'ProfileInput', 'ScheduleRequest', 'SwapRequest',
           'decode_string_list']
