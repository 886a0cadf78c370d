import unittest

from pydantic import ValidationError

from kitchen.utilities.validators import (
    IngredientInput, MealPlanInput, PlannedMealInput, PrepPreferencesInput, RecipeInput, ShoppingListUpdateInput,
)


class TestRecipeInput(unittest.TestCase):

    def test_valid_recipe(self):
        recipe = RecipeInput.model_validate({
            "_id": 7, "title": "  Pancakes ", "servings": 0,
            "ingredients": [{"name": " flour ", "amount": "2 cups"}, {"name": "salt", "unit": None}],
        })
        self.assertEqual(recipe.id, "7")
        self.assertEqual(recipe.title, "Pancakes")
        self.assertEqual(recipe.servings, 1)
        self.assertEqual(recipe.ingredients[0].name, "flour")
        self.assertEqual(recipe.ingredients[1].unit, "")
        self.assertEqual(recipe.model_dump(by_alias=True)["_id"], "7")

    def test_invalid_recipe(self):
        for data in ({"title": "No id"}, {"_id": "1", "title": "   "}, {"_id": "1", "title": "x", "servings": 500},
                     {"_id": "1", "title": "x", "ingredients": [{"name": ""}]}):
            with self.subTest(data=data):
                with self.assertRaises(ValidationError):
                    RecipeInput.model_validate(data)

    def test_ingredient_amount_types(self):
        self.assertEqual(IngredientInput(name="egg", amount=2).amount, 2)
        self.assertEqual(IngredientInput(name="milk", amount="1 1/2 cups").amount, "1 1/2 cups")
        self.assertIsNone(IngredientInput(name="salt").amount)


class TestMealPlanInput(unittest.TestCase):

    def test_days_are_lowercased(self):
        plan = MealPlanInput.model_validate({"_id": "p", "meals": {"Monday": [{"recipeId": "a", "servings": 2}]}})
        self.assertEqual(list(plan.meals), ["monday"])
        self.assertEqual(plan.meals["monday"][0].recipe_id, "a")

    def test_unknown_day(self):
        with self.assertRaises(ValidationError):
            MealPlanInput.model_validate({"meals": {"funday": []}})

    def test_populated_recipe_reference(self):
        self.assertEqual(PlannedMealInput.model_validate({"recipeId": {"_id": 5, "title": "Soup"}}).recipe_id, "5")
        self.assertEqual(PlannedMealInput.model_validate({"recipeId": {"id": "x"}}).recipe_id, "x")
        self.assertIsNone(PlannedMealInput.model_validate({"recipeId": ""}).recipe_id)


class TestPrepPreferencesInput(unittest.TestCase):

    def test_defaults(self):
        prefs = PrepPreferencesInput()
        self.assertEqual(prefs.max_prep_time, 180)
        self.assertEqual(prefs.preferred_prep_days, ["sunday"])
        self.assertEqual(prefs.avoided_tasks, [])
        self.assertEqual(prefs.skill_level, "beginner")

    def test_days(self):
        prefs = PrepPreferencesInput.model_validate({"preferredPrepDays": ["Saturday", " SUNDAY "]})
        self.assertEqual(prefs.preferred_prep_days, ["saturday", "sunday"])
        self.assertEqual(PrepPreferencesInput.model_validate({"preferredPrepDays": []}).preferred_prep_days,
                         ["sunday"])
        with self.assertRaises(ValidationError):
            PrepPreferencesInput.model_validate({"preferredPrepDays": ["someday"]})

    def test_skill_and_time(self):
        with self.assertRaises(ValidationError):
            PrepPreferencesInput.model_validate({"skillLevel": "chef"})
        with self.assertRaises(ValidationError):
            PrepPreferencesInput.model_validate({"maxPrepTime": -5})


class TestShoppingListUpdateInput(unittest.TestCase):

    def test_fields(self):
        update = ShoppingListUpdateInput.model_validate({"ingredientName": "milk", "purchased": True, "note": "2%"})
        self.assertEqual(update.ingredient_name, "milk")
        self.assertEqual(update.fields(), {"purchased": True, "note": "2%"})

    def test_name_required(self):
        with self.assertRaises(ValidationError):
            ShoppingListUpdateInput.model_validate({"purchased": True})
