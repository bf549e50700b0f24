"""Schedule entities: a multi-week meal assignment and its weekly pages (week, days, totals)."""
from datetime import datetime
from typing import Dict, List, Optional

from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.utilities.constants import DAYS


class WeekSchedule:
    def __init__(self, week_number: int, days: Dict[str, Dict[str, MealCatalogEntry]],
                 total_meals: int = 0, five_star_meals: int = 0):
        self.week_number = week_number
        self.days = days
        self.total_meals = total_meals
        self.five_star_meals = five_star_meals

    def meals(self) -> List[MealCatalogEntry]:
        """All assigned meals in day order (absent slots are skipped)."""
        return [meal for day in DAYS for meal in self.days.get(day, {}).values()]

    def to_dict(self):
        return {
            "week": self.week_number,
            "days": {day: {category: meal.to_dict() for category, meal in slots.items()}
                     for day, slots in self.days.items()},
            "total_meals": self.total_meals,
            "five_star_meals": self.five_star_meals,
        }

    @staticmethod
    def from_dict(data):
        days = {day: {category: MealCatalogEntry.from_dict(meal) for category, meal in (slots or {}).items() if meal}
                for day, slots in (data.get("days") or {}).items()}
        return WeekSchedule(int(data.get("week", 1)), days,
                            total_meals=int(data.get("total_meals", 0)),
                            five_star_meals=int(data.get("five_star_meals", 0)))


class Schedule:
    def __init__(self, user_id, subscription_tier: str, weeks: List[WeekSchedule], total_meals: int = 0,
                 five_star_meals: int = 0, generated_at: Optional[datetime] = None, plan_name: str = ""):
        self.user_id = user_id
        self.subscription_tier = subscription_tier
        self.plan_name = plan_name
        self.weeks = weeks
        self.total_meals = total_meals
        self.five_star_meals = five_star_meals
        self.generated_at = generated_at

    def get_week(self, week_number: int) -> Optional[WeekSchedule]:
        for week in self.weeks:
            if week.week_number == week_number:
                return week
        return None

    def __str__(self) -> str:
        return (f"Schedule for {self.user_id} ({self.plan_name or self.subscription_tier}) - "
                f"{len(self.weeks)} weeks - {self.total_meals} meals - {self.five_star_meals} five-star")

    __repr__ = __str__

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "subscription_tier": self.subscription_tier,
            "plan_name": self.plan_name,
            "weeks": [week.to_dict() for week in self.weeks],
            "total_meals": self.total_meals,
            "five_star_meals": self.five_star_meals,
            "generated_at": self.generated_at.isoformat() if self.generated_at else None,
        }

    @staticmethod
    def from_dict(data):
        generated_at = data.get("generated_at")
        if isinstance(generated_at, str):
            generated_at = datetime.fromisoformat(generated_at)
        return Schedule(
            data.get("user_id"),
            data.get("subscription_tier", ""),
            [WeekSchedule.from_dict(w) for w in data.get("weeks", [])],
            total_meals=int(data.get("total_meals", 0)),
            five_star_meals=int(data.get("five_star_meals", 0)),
            generated_at=generated_at,
            plan_name=data.get("plan_name", ""),
        )
