from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"

# Canonical week order; day offset from Monday is the list index
DAYS: Final[tuple[str, ...]] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)
MEAL_CATEGORIES: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner", "snacks")
DEFAULT_CATEGORY: Final[str] = "lunch"
DEFAULT_MEAL_TYPES: Final[tuple[str, ...]] = ("lunch", "dinner")

# Rating tiers, best first
RATING_TIERS: Final[tuple[str, ...]] = ("fiveStar", "fourStar", "threeStar", "twoStar", "oneStar")
REGULAR_TIERS: Final[tuple[str, ...]] = ("fourStar", "threeStar", "twoStar", "oneStar")
DEFAULT_RATING: Final[float] = 3.0
FIVE_STAR_RATING: Final[float] = 5.0
TOP_CANDIDATES: Final[int] = 3

ALLERGEN_VARIATIONS: Final[dict[str, tuple[str, ...]]] = {
    "eggs": ("egg", "eggs", "egg white", "egg yolk", "scrambled", "fried egg", "boiled egg", "omelet", "omelette"),
    "dairy": ("milk", "cheese", "butter", "cream", "yogurt", "yoghurt", "dairy", "lactose"),
    "nuts": ("nuts", "almond", "walnut", "pecan", "cashew", "pistachio", "hazelnut", "macadamia"),
    "gluten": ("wheat", "gluten", "flour", "bread", "pasta", "barley", "rye"),
    "shellfish": ("shrimp", "crab", "lobster", "shellfish", "prawns", "scallops"),
    "soy": ("soy", "soya", "tofu", "soy sauce", "soybeans"),
}

DIETARY_PLAN_TAGS: Final[dict[str, frozenset[str]]] = {
    "Balanced": frozenset({"High Protein", "Gluten-Free"}),
    "Low Carb": frozenset({"Low Carb"}),
    "Protein Boost": frozenset({"High Protein"}),
    "Vegetarian Kitchen": frozenset({"Vegetarian"}),
    "Chef's Choice": frozenset({"High Protein", "Low Carb", "Keto"}),
    "Keto": frozenset({"Keto"}),
}

# Goal keys are compared after dropping case and whitespace ("Weight Loss" == "WeightLoss")
GOAL_WEIGHT_LOSS: Final[str] = "weightloss"
GOAL_WEIGHT_GAIN: Final[str] = "weightgain"
GOAL_STAYING_FIT: Final[str] = "stayingfit"
GOAL_EATING_HEALTHY: Final[str] = "eatinghealthy"
GOAL_KETO_DIET: Final[str] = "ketodiet"

# Subscription policy table used by the quota planner.
# five_star_weeks: positions (0-based) inside a repeating block of `cadence` weeks
# that carry a premium budget; None means every week does.
SUBSCRIPTION_PLANS: Final[dict[str, dict]] = {
    "weekly": {
        "name": "Weekly Plan",
        "duration": 1,
        "five_star_meals": 2,
        "weekly_five_star": 0.5,
        "cadence": 4,
        "five_star_weeks": (0, 2),
    },
    "monthly": {
        "name": "Monthly Plan",
        "duration": 4,
        "five_star_meals": 4,
        "weekly_five_star": 1,
        "cadence": 1,
        "five_star_weeks": None,
    },
    "quarterly": {
        "name": "3-Month Plan",
        "duration": 12,
        "five_star_meals": 12,
        "weekly_five_star": 1,
        "cadence": 1,
        "five_star_weeks": None,
    },
}
DEFAULT_SUBSCRIPTION: Final[str] = "monthly"
