import json
import os
import tempfile
import unittest

from kitchen.main import main

RECIPES = [
    {"_id": "a", "title": "Grilled Chicken", "servings": 2,
     "ingredients": [{"name": "chicken breast", "amount": "2 lbs"}, {"name": "olive oil", "amount": "2 tbsp"}]},
    {"_id": "b", "title": "Chicken Stir Fry", "servings": 2,
     "ingredients": [{"name": "chicken breast", "amount": "1 lbs"}, {"name": "broccoli", "amount": "1 head"}]},
]
PLAN = {"_id": "plan-1", "name": "Week 10", "weekStartDate": "2024-03-04",
        "meals": {"Monday": [{"recipeId": "a", "mealType": "dinner"}],
                  "tuesday": [{"recipeId": "b", "mealType": "dinner"}]}}


class TestCommandLine(unittest.TestCase):

    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.dir = tmp.name
        self.recipes = self._write("recipes.json", RECIPES)
        self.plan = self._write("plan.json", PLAN)

    def _path(self, name):
        return os.path.join(self.dir, name)

    def _write(self, name, data):
        with open(self._path(name), "w", encoding="utf-8") as f:
            json.dump(data, f)
        return self._path(name)

    def _read(self, name):
        with open(self._path(name), encoding="utf-8") as f:
            return json.load(f)

    def test_shopping_list_for_meal_plan(self):
        inventory = self._write("inventory.json", [{"name": "olive oil", "quantity": 1}])
        code = main(["shopping-list", "--recipes", self.recipes, "--meal-plan", self.plan, "--inventory", inventory,
                     "--output", self._path("list.json"), "--text", self._path("list.txt"),
                     "--csv", self._path("list.csv"), "--pdf", self._path("list.pdf")])
        self.assertEqual(code, 0)

        result = self._read("list.json")
        self.assertTrue(result["success"])
        shopping_list = result["shoppingList"]
        self.assertEqual(shopping_list["metadata"]["mealPlanName"], "Week 10")
        self.assertEqual(shopping_list["summary"]["totalItems"], 3)
        self.assertEqual(shopping_list["summary"]["inInventory"], 1)
        poultry = shopping_list["items"]["Fresh Poultry"]
        self.assertEqual((poultry[0]["ingredient"], poultry[0]["amount"]), ("chicken breast", "3 lbs"))

        with open(self._path("list.txt"), encoding="utf-8") as f:
            self.assertTrue(f.read().startswith("Shopping List - Week 10"))
        with open(self._path("list.pdf"), "rb") as f:
            self.assertEqual(f.read(4), b"%PDF")
        self.assertTrue(os.path.exists(self._path("list.csv")))

    def test_shopping_list_for_recipes(self):
        code = main(["shopping-list", "--recipes", self.recipes, "--servings", "4", "--output", self._path("out.json")])
        self.assertEqual(code, 0)
        items = self._read("out.json")["shoppingList"]["items"]
        self.assertEqual(items["Fresh Poultry"][0]["amount"], "6 lbs")
        self.assertEqual(self._read("out.json")["shoppingList"]["metadata"]["targetServings"], 4)

    def test_missing_meal_plan(self):
        code = main(["shopping-list", "--recipes", self.recipes, "--meal-plan", self._path("nope.json"),
                     "--output", self._path("out.json")])
        self.assertEqual(code, 1)
        self.assertEqual(self._read("out.json")["message"], "Meal plan not found")

    def test_invalid_meal_plan(self):
        plan = self._write("bad.json", {"meals": {"funday": []}})
        self.assertEqual(main(["shopping-list", "--recipes", self.recipes, "--meal-plan", plan]), 2)

    def test_meal_prep(self):
        preferences = self._write("prefs.json", {"preferredPrepDays": ["Saturday"]})
        code = main(["meal-prep", "--meal-plan", self.plan, "--recipes", self.recipes, "--preferences", preferences,
                     "--output", self._path("prep.json"), "--pdf", self._path("prep.pdf")])
        self.assertEqual(code, 0)
        suggestion = self._read("prep.json")["suggestion"]
        self.assertEqual(suggestion["mealPlanId"], "plan-1")
        self.assertEqual([s["ingredient"] for s in suggestion["batchCookingSuggestions"]], ["chicken breast"])
        self.assertEqual(suggestion["prepSchedule"][0]["day"], "saturday")
        self.assertEqual(suggestion["metrics"]["totalPrepTime"], 23)
        with open(self._path("prep.pdf"), "rb") as f:
            self.assertEqual(f.read(4), b"%PDF")

    def test_meal_prep_bad_inputs(self):
        preferences = self._write("prefs.json", {"skillLevel": "chef"})
        self.assertEqual(main(["meal-prep", "--meal-plan", self.plan, "--preferences", preferences]), 2)
        self.assertEqual(main(["meal-prep", "--meal-plan", self.plan, "--knowledge", self._path("none.json")]), 2)
        self.assertEqual(main(["meal-prep", "--meal-plan", self._path("none.json"),
                               "--output", self._path("out.json")]), 1)

    def test_update_list(self):
        main(["shopping-list", "--recipes", self.recipes, "--meal-plan", self.plan, "--output", self._path("list.json")])
        updates = self._write("updates.json", [{"ingredientName": "broccoli", "purchased": True},
                                               {"ingredientName": "kale", "purchased": True},
                                               {"purchased": True}])
        code = main(["update-list", "--list", self._path("list.json"), "--updates", updates,
                     "--output", self._path("updated.json")])
        self.assertEqual(code, 0)
        result = self._read("updated.json")
        self.assertEqual(result["updated"], 1)
        self.assertEqual(result["shoppingList"]["summary"]["purchased"], 1)
        broccoli = result["shoppingList"]["items"]["Fresh Vegetables"][0]
        self.assertTrue(broccoli["purchased"])

    def test_update_missing_list(self):
        updates = self._write("updates.json", [])
        self.assertEqual(main(["update-list", "--list", self._path("none.json"), "--updates", updates]), 1)
