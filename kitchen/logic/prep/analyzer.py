"""Meal-prep analysis.

MealPrepAnalyzer walks a resolved meal plan, finds ingredients used by two or
more recipe occurrences and turns them into batch-cooking suggestions
(proteins and grains) and ingredient prep suggestions (vegetables), then lays
them out on the user's preferred prep days.
"""
from __future__ import annotations
import logging
import math
from typing import Any, Dict, List, Optional, Union

from kitchen.domain.Ingredient import Ingredient
from kitchen.domain.MealPrep import (
    BatchCookingSuggestion, IngredientPrepSuggestion, IngredientUsage, MealPrepSuggestion, PlannedRecipe,
    UserPrepPreferences,
)
from kitchen.domain.Plan import MealPlan
from kitchen.domain.Recipe import Recipe
from kitchen.logic.parsing.amounts import leading_number
from kitchen.logic.parsing.names import prep_key
from kitchen.logic.prep.knowledge import GRAINS, PROTEINS, VEGETABLES, PrepKnowledgeBase, PrepKnowledgeEntry, load_default
from kitchen.logic.prep.schedule import calculate_metrics, create_prep_schedule
from kitchen.utilities.config import BATCH_USAGE_THRESHOLD, DEFAULT_PLANNED_SERVINGS, TIME_SAVED_RATIO
from kitchen.utilities.constants import (
    BATCH_PREP_FALLBACK, BATCH_PREP_TEMPLATES, DEFAULT_BATCH_PREP_TIME, DEFAULT_SHELF_LIFE, DEFAULT_STORAGE,
    DEFAULT_VEG_PREP_TIME, GRAIN, GRAIN_KEYWORDS, OTHER, PROTEIN, PROTEIN_KEYWORDS, QUANTITY_BUCKETS,
    QUANTITY_MULTIPLIER_MAX, VEG_PREP_FALLBACK, VEG_PREP_TEMPLATES, VEGETABLE, VEGETABLE_KEYWORDS,
)
from kitchen.utilities.errors import MissingRelationError

logger = logging.getLogger(__name__)

__all__ = ["MealPrepAnalyzer", "generate_meal_prep", "quantity_multiplier"]

_DOMAIN_CATEGORY = {PROTEINS: PROTEIN, VEGETABLES: VEGETABLE, GRAINS: GRAIN}
_KEYWORD_CATEGORIES = ((PROTEIN, PROTEIN_KEYWORDS), (VEGETABLE, VEGETABLE_KEYWORDS), (GRAIN, GRAIN_KEYWORDS))

MSG_PLAN_NOT_FOUND = "Meal plan not found"


def quantity_multiplier(total_amount: Any) -> float:
    """Bucket the leading number of an amount string: <=2 -> 1, <=4 -> 1.5, <=8 -> 2, else 2.5."""
    quantity = leading_number(total_amount)
    if quantity is None:
        return 1.0
    for upper, multiplier in QUANTITY_BUCKETS:
        if quantity <= upper:
            return multiplier
    return QUANTITY_MULTIPLIER_MAX


def _estimate_time(base: Optional[int], default: int, total_amount: str) -> int:
    return math.ceil((base or default) * quantity_multiplier(total_amount))


def _as_preferences(preferences) -> UserPrepPreferences:
    if isinstance(preferences, UserPrepPreferences):
        return preferences
    return UserPrepPreferences.from_dict(preferences or {})


class MealPrepAnalyzer:
    def __init__(self, knowledge_base: Optional[PrepKnowledgeBase] = None,
                 usage_threshold: int = BATCH_USAGE_THRESHOLD, time_saved_ratio: float = TIME_SAVED_RATIO):
        self.knowledge_base = knowledge_base if knowledge_base is not None else load_default()
        self.usage_threshold = usage_threshold
        self.time_saved_ratio = time_saved_ratio

    def extract_recipes_from_meal_plan(self, meal_plan: MealPlan) -> List[PlannedRecipe]:
        """One PlannedRecipe per planned meal with a resolved recipe, Monday to Sunday."""
        planned: List[PlannedRecipe] = []
        for day, meal in meal_plan.planned_meals():
            recipe = meal.recipe
            if recipe is None:
                logger.debug(f"Skipping unresolved meal on {day}: {meal.recipe_name or meal.recipe_id!r}")
                continue
            planned.append(PlannedRecipe(
                title=recipe.title or meal.recipe_name,
                ingredients=list(recipe.ingredients),
                servings=meal.servings or recipe.servings or DEFAULT_PLANNED_SERVINGS,
                day=day,
                meal_type=meal.meal_type,
                recipe_id=recipe.id or meal.recipe_id,
            ))
        return planned

    def normalize_ingredient_name(self, name: Any) -> str:
        return prep_key(name)

    def categorize_ingredient(self, name: Any) -> str:
        """protein / vegetable / grain / other, knowledge base first, then keywords."""
        normalized = self.normalize_ingredient_name(name)
        domain = self.knowledge_base.domain_of(normalized)
        if domain in _DOMAIN_CATEGORY:
            return _DOMAIN_CATEGORY[domain]
        for category, keywords in _KEYWORD_CATEGORIES:
            if any(keyword in normalized for keyword in keywords):
                return category
        return OTHER

    def analyze_ingredients(self, recipes: List[PlannedRecipe]) -> List[IngredientUsage]:
        usages: Dict[str, IngredientUsage] = {}
        for recipe in recipes:
            for ingredient in recipe.ingredients or []:
                if isinstance(ingredient, dict):
                    ingredient = Ingredient.from_dict(ingredient)
                if (not isinstance(ingredient, Ingredient) or not isinstance(ingredient.name, str)
                        or not ingredient.name.strip()):
                    logger.warning(f"Skipping malformed ingredient in recipe {recipe.title!r}")
                    continue
                normalized = self.normalize_ingredient_name(ingredient.name)
                if not normalized:
                    logger.debug(f"Ingredient {ingredient.name!r} has no name left after normalization")
                    continue
                usage = usages.get(normalized)
                if usage is None:
                    usage = IngredientUsage(
                        name=ingredient.name,
                        normalized_name=normalized,
                        category=self.categorize_ingredient(ingredient.name),
                    )
                    usages[normalized] = usage
                usage.amounts.append(ingredient.parsed())
                usage.recipes.append(recipe.title)
                usage.usage_count += 1
        return list(usages.values())

    def _batch_instructions(self, name: str, method: str) -> str:
        return BATCH_PREP_TEMPLATES.get(method, BATCH_PREP_FALLBACK).format(name=name)

    def _prep_instructions(self, name: str, prep_type: str) -> str:
        return VEG_PREP_TEMPLATES.get(prep_type, VEG_PREP_FALLBACK).format(name=name)

    @staticmethod
    def _assess_difficulty(category: str, method: str) -> str:
        if category == PROTEIN and ('slow_cook' in method or 'oven' in method):
            return "easy"
        if category == PROTEIN and 'grill' in method:
            return "medium"
        return "easy"

    def generate_batch_cooking_suggestions(self, usages: List[IngredientUsage]) -> List[BatchCookingSuggestion]:
        suggestions: List[BatchCookingSuggestion] = []
        for usage in usages:
            if usage.usage_count < self.usage_threshold or usage.category not in (PROTEIN, GRAIN):
                continue
            entry: Optional[PrepKnowledgeEntry] = self.knowledge_base.lookup(usage.normalized_name)
            if entry is None or not entry.methods:
                continue
            method = entry.methods[0]
            total_amount = usage.total_amount
            suggestions.append(BatchCookingSuggestion(
                ingredient=usage.name,
                total_amount=total_amount,
                unit=usage.unit,
                recipes=list(usage.recipes),
                cooking_method=method,
                prep_instructions=self._batch_instructions(usage.name, method),
                storage_instructions=entry.storage_instructions or DEFAULT_STORAGE,
                shelf_life=entry.shelf_life or DEFAULT_SHELF_LIFE,
                estimated_prep_time=_estimate_time(entry.prep_time, DEFAULT_BATCH_PREP_TIME, total_amount),
                difficulty=self._assess_difficulty(usage.category, method),
            ))
        # most recipes touched first
        suggestions.sort(key=lambda s: len(set(s.recipes)), reverse=True)
        return suggestions

    def generate_ingredient_prep_suggestions(self, usages: List[IngredientUsage]) -> List[IngredientPrepSuggestion]:
        suggestions: List[IngredientPrepSuggestion] = []
        for usage in usages:
            if usage.usage_count < self.usage_threshold:
                continue
            entry = self.knowledge_base.lookup(usage.normalized_name)
            if entry is None or entry.domain != VEGETABLES or not entry.prep_methods:
                continue
            prep_type = entry.prep_methods[0]
            total_amount = usage.total_amount
            suggestions.append(IngredientPrepSuggestion(
                ingredient=usage.name,
                total_amount=total_amount,
                prep_type=prep_type,
                recipes=list(usage.recipes),
                prep_instructions=self._prep_instructions(usage.name, prep_type),
                storage_method=entry.storage_method or DEFAULT_STORAGE,
                estimated_prep_time=_estimate_time(entry.prep_time, DEFAULT_VEG_PREP_TIME, total_amount),
            ))
        return suggestions

    def analyze_meal_plan(self, meal_plan: Union[MealPlan, Dict[str, Any], None],
                          preferences: Union[UserPrepPreferences, Dict[str, Any], None] = None) -> MealPrepSuggestion:
        """Run the whole pipeline. Raises MissingRelationError when there is no meal plan."""
        if isinstance(meal_plan, dict):
            meal_plan = MealPlan.from_dict(meal_plan)
        if meal_plan is None:
            raise MissingRelationError(MSG_PLAN_NOT_FOUND)
        prefs = _as_preferences(preferences)

        recipes = self.extract_recipes_from_meal_plan(meal_plan)
        usages = self.analyze_ingredients(recipes)
        batch = self.generate_batch_cooking_suggestions(usages)
        prep = self.generate_ingredient_prep_suggestions(usages)
        schedule = create_prep_schedule(batch, prep, prefs)
        metrics = calculate_metrics(batch, prep, schedule, time_saved_ratio=self.time_saved_ratio)

        logger.info(f"Meal prep for plan {meal_plan.id or meal_plan.name!r}: {len(recipes)} recipes, "
                    f"{len(batch)} batch, {len(prep)} prep, {metrics.total_prep_time} min")
        return MealPrepSuggestion(
            meal_plan_id=meal_plan.id,
            batch_cooking_suggestions=batch,
            ingredient_prep_suggestions=prep,
            prep_schedule=schedule,
            metrics=metrics,
            preferences=prefs,
            week_start_date=meal_plan.week_start_date,
            knowledge_version=self.knowledge_base.version,
        )


def generate_meal_prep(meal_plan: Union[MealPlan, Dict[str, Any], None],
                       preferences: Union[UserPrepPreferences, Dict[str, Any], None] = None,
                       recipes: Optional[List[Union[Recipe, Dict[str, Any]]]] = None,
                       knowledge_base: Optional[PrepKnowledgeBase] = None) -> Dict[str, Any]:
    """Entry point returning {"success", "suggestion", "message"}; recipes resolve plan references by id."""
    if isinstance(meal_plan, dict):
        meal_plan = MealPlan.from_dict(meal_plan)
    if meal_plan is not None and recipes:
        meal_plan.resolve([r if isinstance(r, Recipe) else Recipe.from_dict(r) for r in recipes
                           if isinstance(r, (Recipe, dict))])
    try:
        suggestion = MealPrepAnalyzer(knowledge_base).analyze_meal_plan(meal_plan, preferences)
    except MissingRelationError as e:
        logger.warning(str(e))
        return {"success": False, "message": str(e)}
    return {"success": True, "suggestion": suggestion.to_dict(), "message": "Meal prep suggestions generated"}
