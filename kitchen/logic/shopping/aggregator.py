"""Ingredient aggregation across recipes.

combine_ingredients() merges per-recipe contributions by aggregation key.
Amounts are only summed when the unit string matches exactly; any other
unit is kept aside in `alternative_amounts` instead of being converted.
"""
from __future__ import annotations
import logging
import time
from numbers import Real
from typing import Any, Dict, Iterable, List, Optional

from kitchen.domain.Ingredient import AggregatedIngredient
from kitchen.logic.parsing.amounts import parse_amount
from kitchen.logic.parsing.names import aggregation_key
from kitchen.logic.shopping.categories import OTHER_CATEGORY
from kitchen.utilities.config import DEFAULT_RECIPE_SERVINGS
from kitchen.utilities.errors import AggregationError

logger = logging.getLogger(__name__)

__all__ = ["combine_ingredients", "scale_amount", "scale_factor"]


def _as_number(value: Any) -> float:
    if value is None or value == '':
        return 0.0
    if isinstance(value, bool) or not isinstance(value, Real):
        raise AggregationError(f"Amount must be numeric, got {value!r}")
    return float(value)


def scale_factor(recipe_servings: Any, meal_servings: Any) -> float:
    """meal_servings / recipe_servings, recipe servings defaulting to 1 when falsy."""
    base = recipe_servings or DEFAULT_RECIPE_SERVINGS
    if not meal_servings:
        return 1.0
    try:
        return float(meal_servings) / float(base)
    except (TypeError, ValueError, ZeroDivisionError):
        logger.warning(f"Unreadable servings ({meal_servings!r} for a {base!r}-serving recipe), not scaling")
        return 1.0


def scale_amount(base_amount: float, recipe_servings: Any, meal_usages: Optional[Iterable[Any]] = None) -> float:
    '''
    Total quantity of an ingredient needed for every planned use of its recipe.

    meal_usages holds one entry per planned meal, either the planned servings
    or a {"servings": n} dict. Without usages the base amount is returned as is.
    '''
    usages = list(meal_usages or [])
    if not usages:
        return base_amount
    total = 0.0
    for usage in usages:
        servings = usage.get('servings') if isinstance(usage, dict) else usage
        total += base_amount * scale_factor(recipe_servings, servings)
    return total


def _merge(existing: AggregatedIngredient, amount: float, unit: str, recipes: List[str], optional: bool):
    if existing.unit == unit:
        existing.amount += amount
    else:
        existing.alternative_amounts.append({"amount": amount, "unit": unit, "recipes": list(recipes)})
    existing.add_recipes(recipes)
    # an ingredient is optional only if every contribution is
    existing.optional = existing.optional and optional


def combine_ingredients(ingredients: Iterable[Any]) -> List[AggregatedIngredient]:
    """Merge ingredient contributions into one AggregatedIngredient per key, in first-seen order."""
    combined: Dict[str, AggregatedIngredient] = {}
    timestamp = int(time.time() * 1000)

    for index, item in enumerate(ingredients or []):
        if not isinstance(item, dict):
            logger.warning(f"Skipping ingredient #{index}: not an object ({item!r})")
            continue
        name = item.get('name')
        if not isinstance(name, str) or not name.strip():
            logger.warning(f"Skipping ingredient #{index}: missing name")
            continue

        key = aggregation_key(name)
        try:
            amount = _as_number(item.get('amount'))
            unit = item.get('unit') or ''
            recipes = item.get('recipes') or []
            recipes = [recipes] if isinstance(recipes, str) else list(recipes)
            optional = bool(item.get('optional', False))
            if key in combined:
                _merge(combined[key], amount, unit, recipes, optional)
            else:
                combined[key] = AggregatedIngredient(
                    key=key,
                    name=name.strip(),
                    amount=amount,
                    unit=unit,
                    recipes=recipes,
                    category=item.get('category') or OTHER_CATEGORY,
                    optional=optional,
                )
        except Exception as e:
            fallback_key = f"{key}_{timestamp}_{index}"
            logger.warning(f"Could not combine {name!r} ({e}); keeping it separately as {fallback_key}")
            raw_recipes = item.get('recipes')
            combined[fallback_key] = AggregatedIngredient(
                key=fallback_key,
                name=name.strip(),
                amount=parse_amount(item.get('amount')).amount,
                unit=item.get('unit') if isinstance(item.get('unit'), str) else '',
                recipes=list(raw_recipes) if isinstance(raw_recipes, (list, tuple)) else [],
                category=OTHER_CATEGORY,
                optional=bool(item.get('optional', False)),
            )

    logger.debug(f"Combined {len(combined)} ingredients")
    return list(combined.values())
