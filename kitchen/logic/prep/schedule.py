"""Prep schedule and metrics.

Batch cooking lands on the first preferred prep day; ingredient prep is dealt
round-robin across all preferred days. Days that end up empty are dropped.
"""
from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional, Sequence

from kitchen.domain.MealPrep import (
    BatchCookingSuggestion, IngredientPrepSuggestion, PrepMetrics, PrepScheduleDay, PrepTask, UserPrepPreferences,
)
from kitchen.utilities.config import DEFAULT_PREP_DAYS, TIME_SAVED_RATIO
from kitchen.utilities.constants import (
    BATCH_COOK, DEFAULT_EQUIPMENT, INGREDIENT_PREP, METHOD_EQUIPMENT, PREP_EQUIPMENT,
)

logger = logging.getLogger(__name__)

__all__ = ["create_prep_schedule", "calculate_metrics", "required_equipment"]

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"


def required_equipment(cooking_method: str, equipment: Optional[Dict[str, List[str]]] = None) -> List[str]:
    table = METHOD_EQUIPMENT if equipment is None else equipment
    return list(table.get(cooking_method, DEFAULT_EQUIPMENT))


def _describe(verb: str, amount: str, ingredient: str) -> str:
    return " ".join(part for part in (verb, amount, ingredient) if part)


def _prep_days(preferences: UserPrepPreferences) -> List[str]:
    days: List[str] = []
    for day in preferences.preferred_prep_days or DEFAULT_PREP_DAYS:
        if day not in days:
            days.append(day)
    return days


def create_prep_schedule(batch: Sequence[BatchCookingSuggestion], prep: Sequence[IngredientPrepSuggestion],
                         preferences: Optional[UserPrepPreferences] = None,
                         equipment: Optional[Dict[str, List[str]]] = None) -> List[PrepScheduleDay]:
    preferences = preferences or UserPrepPreferences()
    days = _prep_days(preferences)
    avoided = set(preferences.avoided_tasks or [])

    schedule: List[PrepScheduleDay] = []
    for index, day in enumerate(days):
        day_schedule = PrepScheduleDay(day=day)

        if index == 0 and BATCH_COOK not in avoided:
            for suggestion in batch:
                day_schedule.tasks.append(PrepTask(
                    task_type=BATCH_COOK,
                    description=_describe("Batch cook", suggestion.total_amount, suggestion.ingredient),
                    estimated_time=suggestion.estimated_prep_time,
                    priority=PRIORITY_HIGH,
                    ingredients=[suggestion.ingredient],
                    equipment=required_equipment(suggestion.cooking_method, equipment),
                ))

        if INGREDIENT_PREP not in avoided:
            for idx, suggestion in enumerate(prep):
                if idx % len(days) != index:
                    continue
                day_schedule.tasks.append(PrepTask(
                    task_type=INGREDIENT_PREP,
                    description=_describe("Prep", suggestion.total_amount, suggestion.ingredient),
                    estimated_time=suggestion.estimated_prep_time,
                    priority=PRIORITY_MEDIUM,
                    ingredients=[suggestion.ingredient],
                    equipment=list(PREP_EQUIPMENT),
                ))

        if not day_schedule.tasks:
            continue
        if preferences.max_prep_time and day_schedule.total_time > preferences.max_prep_time:
            logger.warning(f"Prep on {day} takes {day_schedule.total_time} min, "
                           f"over the {preferences.max_prep_time} min budget")
        schedule.append(day_schedule)

    if avoided:
        logger.debug(f"Skipped avoided task types: {sorted(avoided)}")
    return schedule


def calculate_metrics(batch: Sequence[BatchCookingSuggestion], prep: Sequence[IngredientPrepSuggestion],
                      schedule: Sequence[PrepScheduleDay], time_saved_ratio: float = TIME_SAVED_RATIO) -> PrepMetrics:
    total = sum(day.total_time for day in schedule)
    time_saved = math.floor(total * time_saved_ratio)
    efficiency = min(math.floor(time_saved / total * 100), 100) if total > 0 else 0

    recipes = set()
    for suggestion in list(batch) + list(prep):
        recipes.update(suggestion.recipes)

    return PrepMetrics(
        total_prep_time=total,
        time_saved=time_saved,
        efficiency=efficiency,
        recipes_affected=len(recipes),
        ingredients_consolidated=len(batch) + len(prep),
    )
