import unittest
from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.logic.filtering.constraints import (
    filter_meals_for_user, has_allergy_conflict, matches_dietary_plan
)


def _meal(id, ingredients=(), tags=()):
    return MealCatalogEntry(id, name=f"Meal {id}", category="lunch", rating=4,
                            ingredients=list(ingredients), dietary_tags=list(tags))


class TestAllergyCheck(unittest.TestCase):

    def test_synonym_variant_matches_ingredient_text(self):
        meal = _meal(1, ["Scrambled Eggs", "toast"])
        self.assertTrue(has_allergy_conflict(meal, ["Eggs"]))
        cheesy = _meal(2, ["Parmesan Cheese", "romaine"])
        self.assertTrue(has_allergy_conflict(cheesy, ["dairy"]))
        self.assertTrue(has_allergy_conflict(_meal(3, ["cashew cream"]), ["nuts"]))

    def test_allergy_without_synonyms_matches_itself(self):
        meal = _meal(1, ["toasted sesame oil", "noodles"])
        self.assertTrue(has_allergy_conflict(meal, ["Sesame"]))
        self.assertFalse(has_allergy_conflict(_meal(2, ["celery", "carrot"]), ["sesame"]))

    def test_ingredient_contained_in_allergy_text(self):
        meal = _meal(1, ["peanut"])
        self.assertTrue(has_allergy_conflict(meal, ["peanut butter"]))

    def test_no_conflict_for_unrelated_ingredients(self):
        meal = _meal(1, ["chicken breast", "broccoli", "coconut milk"])
        self.assertFalse(has_allergy_conflict(meal, ["nuts", "shellfish", "gluten"]))

    def test_meal_without_ingredients_never_conflicts(self):
        self.assertFalse(has_allergy_conflict(_meal(1), ["eggs"]))


class TestDietaryPlan(unittest.TestCase):

    def test_mapped_plan_requires_tag_intersection(self):
        self.assertTrue(matches_dietary_plan(_meal(1, tags=["Keto", "Vegetarian"]), "Keto"))
        self.assertFalse(matches_dietary_plan(_meal(2, tags=["Vegetarian"]), "Keto"))
        self.assertFalse(matches_dietary_plan(_meal(3), "Keto"))

    def test_chefs_choice_accepts_any_target_tag(self):
        self.assertTrue(matches_dietary_plan(_meal(1, tags=["Low Carb"]), "Chef's Choice"))
        self.assertTrue(matches_dietary_plan(_meal(2, tags=["High Protein"]), "Chef's Choice"))
        self.assertFalse(matches_dietary_plan(_meal(3, tags=["Vegetarian"]), "Chef's Choice"))

    def test_unmapped_or_empty_plan_keeps_everything(self):
        self.assertTrue(matches_dietary_plan(_meal(1), "Mediterranean"))
        self.assertTrue(matches_dietary_plan(_meal(2), ""))
        self.assertTrue(matches_dietary_plan(_meal(3), None))


class TestFilterMealsForUser(unittest.TestCase):

    def setUp(self):
        self.catalog = [
            _meal(1, ["eggs", "spinach"], ["Keto"]),
            _meal(2, ["salmon", "asparagus"], ["Keto", "High Protein"]),
            _meal(3, ["pasta", "tomato"], ["Vegetarian"]),
            _meal(4, ["tofu", "rice"], []),
        ]

    def test_both_checks_are_conjunctive(self):
        result = filter_meals_for_user(self.catalog, ["eggs"], "Keto")
        self.assertEqual([m.id for m in result], [2])

    def test_empty_allergies_is_a_no_op(self):
        result = filter_meals_for_user(self.catalog, [], "Mediterranean")
        self.assertEqual(result, self.catalog)
        self.assertIsNot(result, self.catalog)

    def test_allergy_free_output_differs_only_by_plan(self):
        by_plan_only = [m for m in self.catalog if matches_dietary_plan(m, "Keto")]
        self.assertEqual(filter_meals_for_user(self.catalog, [], "Keto"), by_plan_only)

    def test_input_catalog_is_not_modified(self):
        before = [m.to_dict() for m in self.catalog]
        filter_meals_for_user(self.catalog, ["soy", "gluten"], "Keto")
        self.assertEqual([m.to_dict() for m in self.catalog], before)
        self.assertEqual(len(self.catalog), 4)


if __name__ == '__main__':
    unittest.main()
