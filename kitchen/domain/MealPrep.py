"""Meal-prep result records: suggestions, schedule, metrics and the preferences that shape them.

All of these are computed fresh for each analysis and only live inside a
MealPrepSuggestion document.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from kitchen.logic.parsing.amounts import ParsedAmount, format_amount
from kitchen.utilities.config import DEFAULT_MAX_PREP_TIME, DEFAULT_PREP_DAYS, DEFAULT_SKILL_LEVEL


@dataclass
class UserPrepPreferences:
    max_prep_time: int = DEFAULT_MAX_PREP_TIME
    preferred_prep_days: List[str] = field(default_factory=lambda: list(DEFAULT_PREP_DAYS))
    avoided_tasks: List[str] = field(default_factory=list)
    skill_level: str = DEFAULT_SKILL_LEVEL

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        days = [str(x).strip().lower() for x in d.get('preferredPrepDays') or [] if str(x).strip()]
        return UserPrepPreferences(
            max_prep_time=d.get('maxPrepTime') or DEFAULT_MAX_PREP_TIME,
            preferred_prep_days=days or list(DEFAULT_PREP_DAYS),
            avoided_tasks=list(d.get('avoidedTasks') or []),
            skill_level=d.get('skillLevel') or DEFAULT_SKILL_LEVEL,
        )

    def to_dict(self):
        return {
            "maxPrepTime": self.max_prep_time,
            "preferredPrepDays": list(self.preferred_prep_days),
            "avoidedTasks": list(self.avoided_tasks),
            "skillLevel": self.skill_level,
        }


@dataclass
class PlannedRecipe:
    """A recipe occurrence in the meal plan: (recipe, servings, day, meal type)."""
    title: str
    ingredients: List[Any]
    servings: int
    day: str
    meal_type: str = ""
    recipe_id: Optional[str] = None


@dataclass
class IngredientUsage:
    """Usage of one normalized ingredient across the week's recipes."""
    name: str
    normalized_name: str
    category: str
    amounts: List[ParsedAmount] = field(default_factory=list)
    recipes: List[str] = field(default_factory=list)
    usage_count: int = 0

    @property
    def total_amount(self) -> str:
        """Same-unit amounts summed, unit groups joined: '3 lbs', '2 lbs, 1 cup'."""
        totals: Dict[str, float] = {}
        for parsed in self.amounts:
            if parsed.amount <= 0 and not parsed.unit:
                continue
            totals[parsed.unit] = totals.get(parsed.unit, 0.0) + parsed.amount
        parts = []
        for unit, amount in totals.items():
            if amount > 0:
                parts.append(f"{format_amount(amount)} {unit}".strip())
            elif unit:
                parts.append(unit)
        return ", ".join(parts)

    @property
    def unit(self) -> str:
        for parsed in self.amounts:
            if parsed.unit:
                return parsed.unit
        return ""

    def to_dict(self):
        return {
            "name": self.name,
            "normalizedName": self.normalized_name,
            "category": self.category,
            "totalAmount": self.total_amount,
            "amounts": [{"amount": a.amount, "unit": a.unit} for a in self.amounts],
            "recipes": list(self.recipes),
            "usageCount": self.usage_count,
        }


@dataclass
class BatchCookingSuggestion:
    ingredient: str
    total_amount: str
    unit: str
    recipes: List[str]
    cooking_method: str
    prep_instructions: str
    storage_instructions: str
    shelf_life: str
    estimated_prep_time: int
    difficulty: str

    def to_dict(self):
        return {
            "ingredient": self.ingredient,
            "totalAmount": self.total_amount,
            "unit": self.unit,
            "recipes": list(self.recipes),
            "cookingMethod": self.cooking_method,
            "prepInstructions": self.prep_instructions,
            "storageInstructions": self.storage_instructions,
            "shelfLife": self.shelf_life,
            "estimatedPrepTime": self.estimated_prep_time,
            "difficulty": self.difficulty,
        }


@dataclass
class IngredientPrepSuggestion:
    ingredient: str
    total_amount: str
    prep_type: str
    recipes: List[str]
    prep_instructions: str
    storage_method: str
    estimated_prep_time: int

    def to_dict(self):
        return {
            "ingredient": self.ingredient,
            "totalAmount": self.total_amount,
            "prepType": self.prep_type,
            "recipes": list(self.recipes),
            "prepInstructions": self.prep_instructions,
            "storageMethod": self.storage_method,
            "estimatedPrepTime": self.estimated_prep_time,
        }


@dataclass
class PrepTask:
    task_type: str
    description: str
    estimated_time: int
    priority: str
    ingredients: List[str] = field(default_factory=list)
    equipment: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            "taskType": self.task_type,
            "description": self.description,
            "estimatedTime": self.estimated_time,
            "priority": self.priority,
            "ingredients": list(self.ingredients),
            "equipment": list(self.equipment),
        }


@dataclass
class PrepScheduleDay:
    day: str
    tasks: List[PrepTask] = field(default_factory=list)

    @property
    def total_time(self) -> int:
        return sum(task.estimated_time or 0 for task in self.tasks)

    def to_dict(self):
        return {"day": self.day, "tasks": [t.to_dict() for t in self.tasks], "totalTime": self.total_time}


@dataclass
class PrepMetrics:
    total_prep_time: int = 0
    time_saved: int = 0
    efficiency: int = 0
    recipes_affected: int = 0
    ingredients_consolidated: int = 0

    def to_dict(self):
        return {
            "totalPrepTime": self.total_prep_time,
            "timeSaved": self.time_saved,
            "efficiency": self.efficiency,
            "recipesAffected": self.recipes_affected,
            "ingredientsConsolidated": self.ingredients_consolidated,
        }


@dataclass
class MealPrepSuggestion:
    meal_plan_id: str
    batch_cooking_suggestions: List[BatchCookingSuggestion]
    ingredient_prep_suggestions: List[IngredientPrepSuggestion]
    prep_schedule: List[PrepScheduleDay]
    metrics: PrepMetrics
    preferences: UserPrepPreferences
    week_start_date: Optional[str] = None
    knowledge_version: str = ""
    status: str = "generated"

    def to_dict(self):
        return {
            "mealPlanId": self.meal_plan_id,
            "batchCookingSuggestions": [s.to_dict() for s in self.batch_cooking_suggestions],
            "ingredientPrepSuggestions": [s.to_dict() for s in self.ingredient_prep_suggestions],
            "prepSchedule": [d.to_dict() for d in self.prep_schedule],
            "metrics": self.metrics.to_dict(),
            "preferences": self.preferences.to_dict(),
            "weekStartDate": self.week_start_date,
            "knowledgeVersion": self.knowledge_version,
            "status": self.status,
        }
