"""Meal plan domain entities: a week of day buckets, each holding planned meals."""
from typing import Dict, List, Optional

from kitchen.domain.Recipe import Recipe
from kitchen.utilities.constants import WEEK_DAYS


class PlannedMeal:
    def __init__(self, recipe_id: Optional[str] = None, recipe_name: str = "", meal_type: str = "",
                 servings: Optional[int] = None, recipe: Optional[Recipe] = None):
        self.recipe_id = str(recipe_id) if recipe_id not in (None, "") else None
        self.recipe_name = recipe_name
        self.meal_type = meal_type
        self.servings = servings
        self.recipe = recipe  # resolved Recipe, if the caller populated it

    def __str__(self) -> str:
        return f"{self.meal_type}: {self.recipe_name} x{self.servings}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        raw_recipe = d.get('recipe')
        recipe_id = d.get('recipeId')
        # a populated reference may sit directly in recipeId
        if isinstance(recipe_id, dict):
            raw_recipe = raw_recipe or recipe_id
            recipe_id = recipe_id.get('_id', recipe_id.get('id'))
        recipe = None
        if isinstance(raw_recipe, Recipe):
            recipe = raw_recipe
        elif isinstance(raw_recipe, dict):
            recipe = Recipe.from_dict(raw_recipe)
        return PlannedMeal(
            recipe_id=recipe_id if recipe_id is not None else (recipe.id if recipe else None),
            recipe_name=d.get('recipeName') or (recipe.title if recipe else ''),
            meal_type=d.get('mealType', ''),
            servings=d.get('servings'),
            recipe=recipe,
        )

    def to_dict(self):
        return {
            "recipeId": self.recipe_id,
            "recipeName": self.recipe_name,
            "mealType": self.meal_type,
            "servings": self.servings,
        }


class MealPlan:
    def __init__(self, id: str = "", name: str = "", week_start_date: Optional[str] = None,
                 meals: Optional[Dict[str, List[PlannedMeal]]] = None):
        self.id = id
        self.name = name
        self.week_start_date = week_start_date
        self.meals: Dict[str, List[PlannedMeal]] = {day: [] for day in WEEK_DAYS}
        for day, planned in (meals or {}).items():
            self.meals[str(day).lower()] = list(planned or [])

    def planned_meals(self):
        """Yield (day, PlannedMeal) in week order."""
        for day in WEEK_DAYS:
            for meal in self.meals.get(day, []):
                yield day, meal

    def recipe_ids(self) -> List[str]:
        ids: List[str] = []
        for _, meal in self.planned_meals():
            if meal.recipe_id and meal.recipe_id not in ids:
                ids.append(meal.recipe_id)
        return ids

    def resolve(self, recipes: List[Recipe]) -> int:
        """Attach Recipe objects to planned meals by id; returns how many meals resolved."""
        index = {r.id: r for r in recipes}
        resolved = 0
        for _, meal in self.planned_meals():
            if meal.recipe is None and meal.recipe_id in index:
                meal.recipe = index[meal.recipe_id]
            if meal.recipe is not None:
                resolved += 1
        return resolved

    def __str__(self) -> str:
        count = sum(1 for _ in self.planned_meals())
        return f"Meal plan {self.name or self.id} (week of {self.week_start_date}) - {count} meals"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        raw_meals = d.get('meals') if isinstance(d.get('meals'), dict) else {}
        meals = {}
        for day, entries in raw_meals.items():
            if isinstance(entries, list):
                meals[day] = [PlannedMeal.from_dict(e) for e in entries if isinstance(e, dict)]
        return MealPlan(
            id=str(d.get('_id', d.get('id', '')) or ''),
            name=d.get('name', ''),
            week_start_date=d.get('weekStartDate'),
            meals=meals,
        )

    def to_dict(self):
        return {
            "_id": self.id,
            "name": self.name,
            "weekStartDate": self.week_start_date,
            "meals": {day: [m.to_dict() for m in self.meals.get(day, [])] for day in WEEK_DAYS},
        }
