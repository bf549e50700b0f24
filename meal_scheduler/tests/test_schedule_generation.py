import random
import unittest
from datetime import datetime, timezone
from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.domain.UserProfile import UserProfile
from meal_scheduler.events.Event_Bus import (
    EventBus, SCHEDULE_GENERATED, SCHEDULE_SLOT_UNFILLED, SCHEDULE_WEEK_GENERATED
)
from meal_scheduler.logic.filtering.constraints import has_allergy_conflict
from meal_scheduler.logic.scheduling.schedule_assembler import generate_schedule
from meal_scheduler.utilities.constants import DAYS, MEAL_CATEGORIES
from meal_scheduler.utilities.errors import InputError

NOW = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


def build_catalog():
    """Ten meals per category: one five-star, the rest spread over lower ratings."""
    catalog = []
    ratings = [5, 4.5, 4, 3.5, 3, 3, 2.5, 2, 1.5, None]
    for category in MEAL_CATEGORIES:
        for i, rating in enumerate(ratings):
            catalog.append(MealCatalogEntry(
                f"{category}-{i}", f"{category.title()} {i}", category, rating,
                calories=250 + 40 * i, protein=10 + 3 * i, carbs=20 + 5 * i, fat=8, fiber=i,
                dietary_tags=["High Protein"] if i % 2 else ["Vegetarian"],
                ingredients=["eggs", "spinach"] if i == 3 else ["rice", "vegetables"],
            ))
    return catalog


def build_profile(**overrides):
    values = dict(id="user-1", subscription_tier="monthly", dietary_plan="", goal="WeightLoss",
                  meal_count=4, meal_types=list(MEAL_CATEGORIES), allergies=[])
    values.update(overrides)
    return UserProfile(**values)


class TestScheduleGeneration(unittest.TestCase):

    def setUp(self):
        self.catalog = build_catalog()

    def test_same_seed_gives_same_schedule(self):
        first = generate_schedule(build_profile(), self.catalog, weeks=4, seed=42, now=NOW)
        second = generate_schedule(build_profile(), self.catalog, weeks=4, rng=random.Random(42), now=NOW)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_shape_and_totals(self):
        schedule = generate_schedule(build_profile(), self.catalog, weeks=3, seed=1, now=NOW)
        self.assertEqual([w.week_number for w in schedule.weeks], [1, 2, 3])
        self.assertEqual(schedule.plan_name, "Monthly Plan")
        self.assertEqual(schedule.generated_at, NOW)
        for week in schedule.weeks:
            self.assertEqual(list(week.days), list(DAYS))
            self.assertEqual(week.total_meals, len(week.meals()))
        self.assertEqual(schedule.total_meals, sum(w.total_meals for w in schedule.weeks))
        self.assertEqual(schedule.five_star_meals, sum(w.five_star_meals for w in schedule.weeks))

    def test_no_meal_repeats_within_a_week(self):
        schedule = generate_schedule(build_profile(), self.catalog, weeks=4, seed=5, now=NOW)
        for week in schedule.weeks:
            ids = [meal.id for meal in week.meals()]
            self.assertEqual(len(ids), len(set(ids)))

    def test_at_most_one_meal_per_category_per_day(self):
        profile = build_profile(meal_types=["lunch", "lunch", "dinner"], meal_count=6)
        schedule = generate_schedule(profile, self.catalog, weeks=1, seed=9, now=NOW)
        for slots in schedule.weeks[0].days.values():
            self.assertLessEqual(set(slots), {"lunch", "dinner"})
            for category, meal in slots.items():
                self.assertEqual(meal.category, category)

    def test_allergens_never_scheduled(self):
        profile = build_profile(allergies=["Eggs", "dairy"])
        catalog = self.catalog + [
            MealCatalogEntry("omelette", "Cheese Omelette", "breakfast", 5, ingredients=["cheddar", "omelette"]),
            MealCatalogEntry("latte", "Oat Latte", "snacks", 5, ingredients=["oat milk", "espresso"]),
        ]
        schedule = generate_schedule(profile, catalog, weeks=4, seed=3, now=NOW)
        placed = [meal for week in schedule.weeks for meal in week.meals()]
        self.assertTrue(placed)
        for meal in placed:
            self.assertFalse(has_allergy_conflict(meal, profile.allergies))
        self.assertNotIn("omelette", {m.id for m in placed})
        self.assertNotIn("latte", {m.id for m in placed})

    def test_dietary_plan_restricts_tags(self):
        profile = build_profile(dietary_plan="Protein Boost")
        schedule = generate_schedule(profile, self.catalog, weeks=2, seed=3, now=NOW)
        for week in schedule.weeks:
            for meal in week.meals():
                self.assertIn("High Protein", meal.dietary_tags)

    def test_weekly_tier_premium_cadence(self):
        profile = build_profile(subscription_tier="weekly")
        for seed in range(5):
            schedule = generate_schedule(profile, self.catalog, weeks=4, seed=seed, now=NOW)
            self.assertEqual([w.five_star_meals for w in schedule.weeks], [1, 0, 1, 0])
            self.assertEqual(schedule.plan_name, "Weekly Plan")

    def test_monthly_tier_one_premium_per_week(self):
        for tier in ("monthly", "quarterly", "unknown-tier"):
            schedule = generate_schedule(build_profile(subscription_tier=tier), self.catalog,
                                         weeks=4, seed=11, now=NOW)
            self.assertEqual([w.five_star_meals for w in schedule.weeks], [1, 1, 1, 1])

    def test_invalid_input_raises(self):
        with self.assertRaises(InputError):
            generate_schedule(None, self.catalog)
        with self.assertRaises(InputError):
            generate_schedule(build_profile(), [])
        with self.assertRaises(InputError):
            generate_schedule(build_profile(), self.catalog, weeks=0)

    def test_everything_filtered_out_gives_empty_weeks(self):
        profile = build_profile(dietary_plan="Keto")
        bus = EventBus()
        unfilled = []
        bus.subscribe(SCHEDULE_SLOT_UNFILLED, lambda name, payload: unfilled.append(payload))
        schedule = generate_schedule(profile, self.catalog, weeks=1, seed=0, event_bus=bus, now=NOW)
        self.assertEqual(schedule.total_meals, 0)
        self.assertTrue(all(day == {} for day in schedule.weeks[0].days.values()))
        self.assertEqual(len(unfilled), 7 * 4)

    def test_inputs_are_not_mutated(self):
        profile = build_profile(allergies=["dairy"], meal_types=["dinner", "breakfast"])
        profile_before = profile.to_dict()
        catalog_before = [m.to_dict() for m in self.catalog]
        generate_schedule(profile, self.catalog, weeks=2, seed=4, now=NOW)
        self.assertEqual(profile.to_dict(), profile_before)
        self.assertEqual([m.to_dict() for m in self.catalog], catalog_before)


class TestPremiumOnlyBreakfastScenario(unittest.TestCase):
    """Five-star breakfast plus a three-star lunch on the weekly tier."""

    def setUp(self):
        self.catalog = [
            MealCatalogEntry("oatmeal", "Oatmeal", "breakfast", 5),
            MealCatalogEntry("salad", "Salad", "lunch", 3),
        ]
        self.profile = UserProfile("user-7", subscription_tier="weekly", meal_count=2,
                                   meal_types=["breakfast", "lunch"])

    def _placed(self, week, category):
        return [slots[category].name for slots in week.days.values() if category in slots]

    def test_quota_week_and_regular_week(self):
        for seed in range(10):
            schedule = generate_schedule(self.profile, self.catalog, weeks=2, seed=seed, now=NOW)
            week_1, week_2 = schedule.weeks
            self.assertEqual(self._placed(week_1, "breakfast"), ["Oatmeal"])
            self.assertEqual(self._placed(week_1, "lunch"), ["Salad"])
            self.assertEqual(week_1.five_star_meals, 1)
            # Without a quota the five-star pool is closed, so breakfast stays absent
            self.assertEqual(self._placed(week_2, "breakfast"), [])
            self.assertEqual(self._placed(week_2, "lunch"), ["Salad"])
            self.assertEqual(week_2.five_star_meals, 0)

    def test_premium_meal_lands_on_monday(self):
        schedule = generate_schedule(self.profile, self.catalog, weeks=1, seed=3, now=NOW)
        self.assertEqual(schedule.weeks[0].days["monday"]["breakfast"].name, "Oatmeal")

    def test_unfilled_events_only_name_empty_slots(self):
        profile = UserProfile("user-7", subscription_tier="weekly", meal_count=4,
                              meal_types=["breakfast", "lunch"])
        for seed in range(20):
            bus = EventBus()
            unfilled = []
            bus.subscribe(SCHEDULE_SLOT_UNFILLED, lambda name, payload: unfilled.append(payload))
            schedule = generate_schedule(profile, self.catalog, weeks=2, seed=seed, event_bus=bus, now=NOW)
            for event in unfilled:
                day = schedule.get_week(event["week"]).days[event["day"]]
                self.assertNotIn(event["category"], day)
            # Exactly one event per empty (week, day, category)
            expected = sum(1 for week in schedule.weeks for slots in week.days.values()
                           for category in ("breakfast", "lunch") if category not in slots)
            self.assertEqual(len(unfilled), expected)

    def test_events_published(self):
        bus = EventBus()
        received = {SCHEDULE_SLOT_UNFILLED: [], SCHEDULE_WEEK_GENERATED: [], SCHEDULE_GENERATED: []}
        for name, items in received.items():
            bus.subscribe(name, lambda event_name, payload, items=items: items.append(payload))

        generate_schedule(self.profile, self.catalog, weeks=2, seed=8, event_bus=bus, now=NOW)

        unfilled = received[SCHEDULE_SLOT_UNFILLED]
        week_2_breakfast = [e for e in unfilled if e["week"] == 2 and e["category"] == "breakfast"]
        self.assertEqual(len(week_2_breakfast), 7)
        self.assertEqual({e["day"] for e in week_2_breakfast}, set(DAYS))
        week_1_lunch = [e for e in unfilled if e["week"] == 1 and e["category"] == "lunch"]
        self.assertEqual(len(week_1_lunch), 6)

        weeks = received[SCHEDULE_WEEK_GENERATED]
        self.assertEqual([(e["week"], e["five_star_budget"], e["five_star_meals"]) for e in weeks],
                         [(1, 1, 1), (2, 0, 0)])
        self.assertEqual(len(received[SCHEDULE_GENERATED]), 1)
        self.assertEqual(received[SCHEDULE_GENERATED][0]["total_meals"], 3)
        self.assertEqual(received[SCHEDULE_GENERATED][0]["eligible_meals"], 2)


if __name__ == '__main__':
    unittest.main()
