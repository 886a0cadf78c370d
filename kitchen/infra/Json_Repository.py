import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from kitchen.domain.Inventory import UserInventory
from kitchen.domain.MealPrep import UserPrepPreferences
from kitchen.domain.Plan import MealPlan
from kitchen.domain.Recipe import Recipe
from kitchen.utilities.validators import (
    InventoryInput, MealPlanInput, PrepPreferencesInput, RecipeInput, ShoppingListUpdateInput,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def reading_document(path: PathLike, what: str = "JSON") -> Any:
    """Raw JSON content of a file; None (logged) when it is missing or invalid."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning(f"{what} file not found: {path}")
        return None
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {what.lower()} file {path}: {e}")
        return None


def reading_recipes(path: PathLike, validate: bool = False) -> List[Recipe]:
    '''
    Read recipes from a JSON array (or {"recipes": [...]}). Missing/invalid file -> empty list.
    With validate=True every entry goes through RecipeInput and invalid ones are skipped.
    '''
    data = reading_document(path, "Recipes")
    if isinstance(data, dict):
        data = data.get('recipes')
    if not isinstance(data, list):
        return []
    recipes = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            continue
        if validate:
            try:
                entry = RecipeInput.model_validate(entry).model_dump(by_alias=True)
            except ValidationError as e:
                logger.warning(f"Skipping invalid recipe #{index} in {path}: {e.error_count()} errors")
                continue
        recipes.append(Recipe.from_dict(entry))
    logger.debug(f"Read {len(recipes)} recipes from {path}")
    return recipes


def reading_meal_plan(path: PathLike, recipes: Optional[List[Recipe]] = None,
                      validate: bool = False) -> Optional[MealPlan]:
    """Read a meal plan and attach the given recipes to its meals by recipe id. Missing file -> None."""
    data = reading_document(path, "Meal plan")
    if not isinstance(data, dict):
        return None
    if validate:
        # ValidationError propagates: a malformed plan is a caller error
        data = MealPlanInput.model_validate(data).model_dump(by_alias=True)
    meal_plan = MealPlan.from_dict(data)
    if recipes:
        resolved = meal_plan.resolve(recipes)
        total = sum(1 for _ in meal_plan.planned_meals())
        if resolved < total:
            logger.warning(f"Resolved {resolved} of {total} planned meals against {len(recipes)} recipes")
    return meal_plan


def reading_inventory(path: Optional[PathLike], validate: bool = False) -> UserInventory:
    if path is None:
        return UserInventory()
    data = reading_document(path, "Inventory")
    if validate and data is not None:
        items = data if isinstance(data, list) else (data.get('items') if isinstance(data, dict) else [])
        data = InventoryInput.model_validate({'items': items or []}).model_dump()
    return UserInventory.from_dict(data)


def reading_preferences(path: Optional[PathLike]) -> UserPrepPreferences:
    """Validated prep preferences; defaults when no file is given."""
    if path is None:
        return UserPrepPreferences()
    data = reading_document(path, "Preferences") or {}
    validated = PrepPreferencesInput.model_validate(data).model_dump(by_alias=True)
    return UserPrepPreferences.from_dict(validated)


def reading_updates(path: PathLike) -> List[dict]:
    """Shopping list updates ([{ingredientName, ...fields}]); entries without an ingredientName are skipped."""
    data = reading_document(path, "Updates")
    if isinstance(data, dict):
        data = data.get('updates')
    updates = []
    for index, entry in enumerate(data if isinstance(data, list) else []):
        try:
            update = ShoppingListUpdateInput.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"Skipping invalid update #{index}: {e.error_count()} errors")
            continue
        updates.append({"ingredientName": update.ingredient_name, **update.fields()})
    return updates


def writing_json(data: Any, path: PathLike) -> Path:
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.info(f"Wrote {path}")
    return path
