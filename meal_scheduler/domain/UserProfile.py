"""User profile entity: subscription tier, dietary plan, goal, meal selection and allergies."""
from typing import List, Optional, Union


class UserProfile:
    def __init__(self, id: Union[str, int], subscription_tier: str = "monthly", dietary_plan: str = "",
                 goal: Optional[str] = None, meal_count: int = 3, meal_types: Optional[List[str]] = None,
                 allergies: Optional[List[str]] = None):
        self.id = id
        self.subscription_tier = subscription_tier
        self.dietary_plan = dietary_plan or ""
        self.goal = goal
        self.meal_count = meal_count
        self.meal_types = meal_types[:] if meal_types else []
        self.allergies = allergies[:] if allergies else []

    def __str__(self) -> str:
        return (f"User {self.id} - {self.subscription_tier} - Plan: {self.dietary_plan or '-'} - "
                f"Goal: {self.goal or '-'} - {self.meal_count} meals/day: {', '.join(self.meal_types)}")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        allowed = {"id", "subscription_tier", "dietary_plan", "goal", "meal_count", "meal_types", "allergies"}
        return UserProfile(**{k: v for k, v in dict(data).items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "subscription_tier": self.subscription_tier,
            "dietary_plan": self.dietary_plan,
            "goal": self.goal,
            "meal_count": self.meal_count,
            "meal_types": list(self.meal_types),
            "allergies": list(self.allergies),
        }
