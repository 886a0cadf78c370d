import unittest

from kitchen.domain.MealPrep import UserPrepPreferences
from kitchen.domain.Plan import MealPlan
from kitchen.infra.Knowledge_Repository import reading_prep_knowledge
from kitchen.infra.paths import DEFAULT_KNOWLEDGE_FILE
from kitchen.logic.prep.analyzer import MealPrepAnalyzer, generate_meal_prep, quantity_multiplier
from kitchen.logic.prep.knowledge import PrepKnowledgeBase
from kitchen.utilities.errors import MissingRelationError

GRILLED_CHICKEN = {"_id": "a", "title": "Grilled Chicken", "servings": 2,
                   "ingredients": [{"name": "chicken breast", "amount": "2 lbs"}]}
STIR_FRY = {"_id": "b", "title": "Chicken Stir Fry", "servings": 2,
            "ingredients": [{"name": "Chicken Breast", "amount": "1 lbs"}, {"name": "broccoli", "amount": "1 head"}]}


def _plan(**days):
    return MealPlan.from_dict({"_id": "plan-1", "weekStartDate": "2024-03-04",
                               "meals": {day: [{"recipe": r} for r in recipes] for day, recipes in days.items()}})


class TestMealPrepAnalyzer(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.knowledge = reading_prep_knowledge(DEFAULT_KNOWLEDGE_FILE)

    def setUp(self):
        self.analyzer = MealPrepAnalyzer(self.knowledge)

    def test_chicken_twice_broccoli_once(self):
        suggestion = self.analyzer.analyze_meal_plan(_plan(monday=[GRILLED_CHICKEN], tuesday=[STIR_FRY]))

        self.assertEqual(len(suggestion.batch_cooking_suggestions), 1)
        chicken = suggestion.batch_cooking_suggestions[0]
        self.assertEqual(chicken.ingredient, "chicken breast")
        self.assertEqual(chicken.total_amount, "3 lbs")
        self.assertEqual(chicken.cooking_method, "oven_bake")
        self.assertEqual(chicken.estimated_prep_time, 23)  # ceil(15 * 1.5)
        self.assertEqual(chicken.difficulty, "easy")
        self.assertEqual(chicken.shelf_life, "3-4 days")
        self.assertEqual(chicken.recipes, ["Grilled Chicken", "Chicken Stir Fry"])
        self.assertEqual(suggestion.ingredient_prep_suggestions, [])

        self.assertEqual(len(suggestion.prep_schedule), 1)
        day = suggestion.prep_schedule[0]
        self.assertEqual(day.day, "sunday")
        self.assertEqual(len(day.tasks), 1)
        task = day.tasks[0]
        self.assertEqual(task.priority, "high")
        self.assertEqual(task.task_type, "batch_cook")
        self.assertEqual(task.description, "Batch cook 3 lbs chicken breast")
        self.assertEqual(task.equipment, ["baking sheet", "oven"])

        metrics = suggestion.metrics
        self.assertEqual(metrics.total_prep_time, 23)
        self.assertEqual(metrics.time_saved, 9)
        self.assertEqual(metrics.efficiency, 39)
        self.assertEqual(metrics.recipes_affected, 2)
        self.assertEqual(metrics.ingredients_consolidated, 1)

    def test_vegetable_prep_suggestion(self):
        soup = {"title": "Onion Soup", "ingredients": [{"name": "onion", "amount": "1"}]}
        tart = {"title": "Onion Tart", "ingredients": [{"name": "Onion, diced", "amount": "2"}]}
        suggestion = self.analyzer.analyze_meal_plan(_plan(monday=[soup], wednesday=[tart]))
        self.assertEqual(suggestion.batch_cooking_suggestions, [])
        self.assertEqual(len(suggestion.ingredient_prep_suggestions), 1)
        onion = suggestion.ingredient_prep_suggestions[0]
        self.assertEqual(onion.prep_type, "dice")
        self.assertEqual(onion.total_amount, "3")
        self.assertEqual(onion.estimated_prep_time, 3)  # ceil(2 * 1.5)
        self.assertEqual(onion.storage_method, "Airtight container in refrigerator")
        self.assertEqual(onion.prep_instructions, "Wash and peel if needed. Dice onion into uniform pieces.")
        task = suggestion.prep_schedule[0].tasks[0]
        self.assertEqual((task.priority, task.task_type), ("medium", "ingredient_prep"))
        self.assertEqual(task.equipment, ["cutting board", "knife"])

    def test_grains_batch_cook(self):
        bowl = {"title": "Burrito Bowl", "ingredients": [{"name": "rice", "amount": "2 cups"}]}
        curry = {"title": "Curry", "ingredients": [{"name": "Rice", "amount": "2 cups"}]}
        suggestion = self.analyzer.analyze_meal_plan(_plan(monday=[bowl], thursday=[curry]))
        rice = suggestion.batch_cooking_suggestions[0]
        self.assertEqual(rice.cooking_method, "rice_cooker")
        self.assertEqual(rice.difficulty, "easy")
        self.assertEqual(rice.estimated_prep_time, 8)  # ceil(5 * 1.5)
        self.assertEqual(suggestion.prep_schedule[0].tasks[0].equipment, ["rice cooker"])

    def test_same_recipe_twice_counts_twice(self):
        plan = _plan(monday=[GRILLED_CHICKEN], friday=[GRILLED_CHICKEN])
        usages = self.analyzer.analyze_ingredients(self.analyzer.extract_recipes_from_meal_plan(plan))
        self.assertEqual(len(usages), 1)
        self.assertEqual(usages[0].usage_count, 2)
        self.assertEqual(usages[0].recipes, ["Grilled Chicken", "Grilled Chicken"])
        self.assertEqual(usages[0].total_amount, "4 lbs")

    def test_batch_suggestions_sorted_by_recipes_touched(self):
        bowl = {"title": "Bowl", "ingredients": [{"name": "rice", "amount": "1 cup"}, {"name": "chicken breast"}]}
        curry = {"title": "Curry", "ingredients": [{"name": "rice", "amount": "1 cup"}, {"name": "chicken breast"}]}
        salad = {"title": "Salad", "ingredients": [{"name": "chicken breast"}]}
        suggestion = self.analyzer.analyze_meal_plan(_plan(monday=[bowl], tuesday=[curry], wednesday=[salad]))
        self.assertEqual([s.ingredient for s in suggestion.batch_cooking_suggestions], ["chicken breast", "rice"])

    def test_categorize_ingredient(self):
        self.assertEqual(self.analyzer.categorize_ingredient("Ground Beef"), "protein")
        self.assertEqual(self.analyzer.categorize_ingredient("salmon fillet"), "protein")
        self.assertEqual(self.analyzer.categorize_ingredient("cherry tomatoes"), "vegetable")
        self.assertEqual(self.analyzer.categorize_ingredient("garlic"), "vegetable")
        self.assertEqual(self.analyzer.categorize_ingredient("brown rice"), "grain")
        self.assertEqual(self.analyzer.categorize_ingredient("olive oil"), "other")

    def test_extract_recipes_servings_and_order(self):
        plan = MealPlan.from_dict({"meals": {
            "sunday": [{"recipe": {"title": "Roast", "servings": 6, "ingredients": []}}],
            "monday": [{"recipe": {"title": "Tacos", "servings": 0, "ingredients": []}, "mealType": "dinner"},
                       {"recipeId": "unresolved", "recipeName": "Mystery"}],
            "tuesday": [{"recipe": {"title": "Soup", "servings": 2, "ingredients": []}, "servings": 3}],
        }})
        planned = self.analyzer.extract_recipes_from_meal_plan(plan)
        self.assertEqual([(p.title, p.day, p.servings) for p in planned],
                         [("Tacos", "monday", 4), ("Soup", "tuesday", 3), ("Roast", "sunday", 6)])

    def test_empty_plan(self):
        suggestion = self.analyzer.analyze_meal_plan(MealPlan())
        self.assertEqual(suggestion.prep_schedule, [])
        self.assertEqual(suggestion.metrics.total_prep_time, 0)
        self.assertEqual(suggestion.metrics.efficiency, 0)

    def test_missing_plan(self):
        with self.assertRaises(MissingRelationError):
            self.analyzer.analyze_meal_plan(None)
        self.assertEqual(generate_meal_prep(None, knowledge_base=self.knowledge),
                         {"success": False, "message": "Meal plan not found"})

    def test_non_string_ingredient_names_are_skipped(self):
        odd = {"title": "Odd Stew", "ingredients": [{"name": ["x"]}, {"name": 123}, {"name": "chicken breast"}]}
        with self.assertLogs("kitchen.logic.prep.analyzer", level="WARNING"):
            result = generate_meal_prep(_plan(monday=[odd], tuesday=[GRILLED_CHICKEN]), knowledge_base=self.knowledge)
        self.assertTrue(result["success"])
        self.assertEqual([s["ingredient"] for s in result["suggestion"]["batchCookingSuggestions"]], ["chicken breast"])

    def test_generate_meal_prep_resolves_recipe_ids(self):
        plan = {"_id": "p", "meals": {"monday": [{"recipeId": "a"}], "tuesday": [{"recipeId": "b"}]}}
        result = generate_meal_prep(plan, {"preferredPrepDays": ["Saturday"]}, recipes=[GRILLED_CHICKEN, STIR_FRY],
                                    knowledge_base=self.knowledge)
        self.assertTrue(result["success"])
        document = result["suggestion"]
        self.assertEqual(document["mealPlanId"], "p")
        self.assertEqual(document["prepSchedule"][0]["day"], "saturday")
        self.assertEqual(document["batchCookingSuggestions"][0]["cookingMethod"], "oven_bake")
        self.assertEqual(document["preferences"]["preferredPrepDays"], ["saturday"])
        self.assertEqual(document["knowledgeVersion"], "1")

    def test_injected_knowledge_base(self):
        knowledge = PrepKnowledgeBase.from_dict({"version": "custom", "proteins": {
            "tofu": {"methods": ["oven_bake"], "prepTime": 10}}})
        analyzer = MealPrepAnalyzer(knowledge)
        a = {"title": "Tofu Bowl", "ingredients": [{"name": "tofu", "amount": "1 block"}]}
        b = {"title": "Tofu Curry", "ingredients": [{"name": "tofu", "amount": "1 block"}]}
        suggestion = analyzer.analyze_meal_plan(_plan(monday=[a], tuesday=[b]), UserPrepPreferences())
        self.assertEqual([s.ingredient for s in suggestion.batch_cooking_suggestions], ["tofu"])
        self.assertEqual(suggestion.batch_cooking_suggestions[0].storage_instructions,
                         "Refrigerate in airtight container")
        self.assertEqual(suggestion.knowledge_version, "custom")


class TestQuantityMultiplier(unittest.TestCase):

    def test_buckets(self):
        self.assertEqual(quantity_multiplier("2 lbs"), 1)
        self.assertEqual(quantity_multiplier("3 lbs"), 1.5)
        self.assertEqual(quantity_multiplier("8 cups"), 2)
        self.assertEqual(quantity_multiplier("12 cups"), 2.5)
        self.assertEqual(quantity_multiplier(""), 1)
        self.assertEqual(quantity_multiplier("some"), 1)
