"""Shopping list builder.

Provides build_shopping_list(recipes, meal_usages=None, inventory=None) and the
meal-plan / selected-recipes entry points that wrap it, plus the partial update
contract used after a list has been generated.
"""
from __future__ import annotations
import locale
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from kitchen.domain.Ingredient import Ingredient
from kitchen.domain.Inventory import InventoryLike, as_inventory
from kitchen.domain.Plan import MealPlan
from kitchen.domain.Recipe import Recipe
from kitchen.domain.ShoppingList import ShoppingList, ShoppingListItem
from kitchen.logic.parsing.amounts import format_amount
from kitchen.logic.parsing.names import slugify
from kitchen.logic.shopping.aggregator import combine_ingredients, scale_amount
from kitchen.logic.shopping.categories import DEFAULT_TAXONOMY, CategoryTaxonomy
from kitchen.utilities.errors import MissingRelationError

logger = logging.getLogger(__name__)

__all__ = [
    "build_shopping_list", "generate_meal_plan_shopping_list", "generate_recipes_shopping_list",
    "update_shopping_list",
]

MSG_GENERATED = "Shopping list generated successfully"
MSG_PLAN_NOT_FOUND = "Meal plan not found"
MSG_NO_PLANNED_RECIPES = "No recipes found in meal plan"
MSG_NO_RESOLVED_RECIPES = "No recipes found for the planned meals"
MSG_NO_RECIPES_SELECTED = "No recipes selected"

RecipeUsages = List[Tuple[Recipe, Optional[List[Dict[str, Any]]]]]


def _as_recipe(recipe: Union[Recipe, Dict[str, Any]]) -> Optional[Recipe]:
    if isinstance(recipe, Recipe):
        return recipe
    if isinstance(recipe, dict):
        return Recipe.from_dict(recipe)
    return None


def _sort_key(item: ShoppingListItem):
    return locale.strxfrm((item.ingredient or '').casefold())


def _display_amount(amount: float, unit: str) -> str:
    if not amount or amount <= 0:
        return ''
    return f"{format_amount(amount)} {unit}" if unit else format_amount(amount)


def _contributions(pairs: RecipeUsages, taxonomy: CategoryTaxonomy) -> List[Dict[str, Any]]:
    contributions: List[Dict[str, Any]] = []
    for recipe, usages in pairs:
        label = recipe.title
        if usages:
            label = usages[0].get('recipeName') or recipe.title
        for index, ingredient in enumerate(recipe.ingredients):
            if (not isinstance(ingredient, Ingredient) or not isinstance(ingredient.name, str)
                    or not ingredient.name.strip()):
                logger.warning(f"Skipping malformed ingredient #{index} in recipe {recipe.title!r}")
                continue
            parsed = ingredient.parsed()
            contributions.append({
                "name": ingredient.name,
                "amount": scale_amount(parsed.amount, recipe.servings, usages),
                "unit": parsed.unit,
                "category": taxonomy.categorize(ingredient.name),
                "recipes": [label],
                "optional": ingredient.optional,
            })
    return contributions


def _build(pairs: RecipeUsages, inventory: InventoryLike = None, taxonomy: Optional[CategoryTaxonomy] = None,
           now: Optional[datetime] = None) -> ShoppingList:
    taxonomy = taxonomy or DEFAULT_TAXONOMY
    now = now or datetime.now()
    stamp = int(now.timestamp() * 1000)
    user_inventory = as_inventory(inventory)

    aggregated = combine_ingredients(_contributions(pairs, taxonomy))

    grouped: Dict[str, List[ShoppingListItem]] = {}
    used_keys = set()
    for ingredient in aggregated:
        match = user_inventory.find_match(ingredient.name)
        item_key = f"{slugify(ingredient.name)}-{stamp}"
        suffix = 2
        while item_key in used_keys:
            item_key = f"{slugify(ingredient.name)}-{stamp}-{suffix}"
            suffix += 1
        used_keys.add(item_key)

        category = taxonomy.coerce(ingredient.category)
        item = ShoppingListItem(
            ingredient=ingredient.name,
            amount=_display_amount(ingredient.amount, ingredient.unit),
            unit=ingredient.unit,
            category=category,
            recipes=ingredient.recipes,
            in_inventory=match is not None,
            inventory_item=match.to_dict() if match is not None else None,
            purchased=False,
            selected=True,
            optional=ingredient.optional,
            alternative_amounts=ingredient.alternative_amounts,
            item_key=item_key,
        )
        grouped.setdefault(category, []).append(item)

    items: Dict[str, List[ShoppingListItem]] = {}
    for category in sorted(grouped, key=taxonomy.display_rank):
        items[category] = sorted(grouped[category], key=_sort_key)

    all_items = [i for group in items.values() for i in group]
    summary = {
        "totalItems": len(all_items),
        "needToBuy": sum(1 for i in all_items if not i.in_inventory),
        "inInventory": sum(1 for i in all_items if i.in_inventory),
        "purchased": 0,
    }
    metadata = {
        "categoriesUsed": list(items),
        "totalCategories": len(items),
        "optionalItems": sum(1 for i in all_items if i.optional),
        "taxonomyVersion": taxonomy.version,
    }
    logger.info(f"Built shopping list: {summary['totalItems']} items, {summary['needToBuy']} to buy, "
                f"{len(items)} categories")
    return ShoppingList(items=items, generated_at=now, recipes=[r.summary() for r, _ in pairs],
                        metadata=metadata, summary=summary)


def build_shopping_list(recipes: Iterable[Union[Recipe, Dict[str, Any]]],
                        meal_usages: Optional[Dict[str, List[Any]]] = None,
                        inventory: InventoryLike = None, taxonomy: Optional[CategoryTaxonomy] = None,
                        now: Optional[datetime] = None) -> ShoppingList:
    """Aggregate the given recipes into a categorized ShoppingList.

    Args:
        recipes: Recipe objects or recipe dicts.
        meal_usages: {recipe id: [usage]} where a usage is the planned servings
            or a {"servings": n, "recipeName": ...} dict. Recipes without usages
            contribute their authored amounts unscaled.
        inventory: UserInventory, list of inventory items, or None.
        taxonomy: category table to classify with (default taxonomy when None).
        now: generation time; also stamps the item keys.
    """
    pairs: RecipeUsages = []
    for raw in recipes or []:
        recipe = _as_recipe(raw)
        if recipe is None:
            logger.warning(f"Skipping recipe that is not an object: {raw!r}")
            continue
        usages = (meal_usages or {}).get(recipe.id)
        pairs.append((recipe, [u if isinstance(u, dict) else {"servings": u} for u in usages] if usages else None))
    return _build(pairs, inventory=inventory, taxonomy=taxonomy, now=now)


def _empty_result(message: str, success: bool = True, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    empty = ShoppingList(items={}, metadata={"categoriesUsed": [], "totalCategories": 0, "optionalItems": 0,
                                             **(metadata or {})})
    return {"success": success, "shoppingList": empty.to_dict(), "message": message}


def _plan_usages(meal_plan: MealPlan, recipes: Iterable[Union[Recipe, Dict[str, Any]]]) -> RecipeUsages:
    """Pair each planned recipe with its meal usages, in week order. Raises MissingRelationError."""
    usages: Dict[str, List[Dict[str, Any]]] = {}
    for day, meal in meal_plan.planned_meals():
        recipe_id = meal.recipe_id or (meal.recipe.id if meal.recipe else None)
        if not recipe_id:
            continue
        usages.setdefault(recipe_id, []).append({
            "day": day,
            "mealType": meal.meal_type,
            "servings": meal.servings,
            "recipeName": meal.recipe_name,
        })
    if not usages:
        raise MissingRelationError(MSG_NO_PLANNED_RECIPES)

    known = [r for r in (_as_recipe(raw) for raw in recipes or []) if r is not None]
    meal_plan.resolve(known)
    resolved: Dict[str, Recipe] = {}
    for _, meal in meal_plan.planned_meals():
        if meal.recipe is not None:
            resolved.setdefault(meal.recipe_id or meal.recipe.id, meal.recipe)

    pairs = [(resolved[rid], meal_usages) for rid, meal_usages in usages.items() if rid in resolved]
    missing = [rid for rid in usages if rid not in resolved]
    if missing:
        logger.warning(f"Planned recipes not found: {missing}")
    if not pairs:
        raise MissingRelationError(MSG_NO_RESOLVED_RECIPES)
    return pairs


def generate_meal_plan_shopping_list(meal_plan: Union[MealPlan, Dict[str, Any], None],
                                     recipes: Optional[Iterable[Union[Recipe, Dict[str, Any]]]] = None,
                                     inventory: InventoryLike = None, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Shopping list for every recipe planned in the week.

    Returns {"success", "shoppingList", "message"}. A missing meal plan or a plan
    without resolvable recipes yields an empty shopping list and a message.
    """
    if isinstance(meal_plan, dict):
        meal_plan = MealPlan.from_dict(meal_plan)
    if meal_plan is None:
        logger.warning(MSG_PLAN_NOT_FOUND)
        return _empty_result(MSG_PLAN_NOT_FOUND, success=False)

    plan_info = {"mealPlanName": meal_plan.name, "weekStart": meal_plan.week_start_date}
    try:
        pairs = _plan_usages(meal_plan, recipes)
    except MissingRelationError as e:
        logger.info(f"Meal plan {meal_plan.id or meal_plan.name!r}: {e}")
        return _empty_result(str(e), metadata=plan_info)

    shopping_list = _build(pairs, inventory=inventory, now=now)
    shopping_list.metadata.update(plan_info)
    return {"success": True, "shoppingList": shopping_list.to_dict(), "message": MSG_GENERATED}


def generate_recipes_shopping_list(recipes: Optional[Iterable[Union[Recipe, Dict[str, Any]]]],
                                   inventory: InventoryLike = None, target_servings: Optional[int] = None,
                                   now: Optional[datetime] = None) -> Dict[str, Any]:
    """Shopping list for hand-picked recipes, optionally rescaled to target_servings each."""
    pairs: RecipeUsages = []
    for raw in recipes or []:
        recipe = _as_recipe(raw)
        if recipe is None:
            logger.warning(f"Skipping recipe that is not an object: {raw!r}")
            continue
        pairs.append((recipe, [{"servings": target_servings}] if target_servings else None))
    if not pairs:
        return _empty_result(MSG_NO_RECIPES_SELECTED)

    shopping_list = _build(pairs, inventory=inventory, now=now)
    if target_servings:
        shopping_list.metadata["targetServings"] = target_servings
    return {"success": True, "shoppingList": shopping_list.to_dict(), "message": MSG_GENERATED}


def update_shopping_list(items: Union[List[Any], Dict[str, List[Any]], ShoppingList],
                         updates: Iterable[Dict[str, Any]]) -> int:
    '''
    Merge [{ingredientName, ...fields}] into the first item with that exact
    ingredient name. `items` may be a flat list, a {category: [items]} mapping
    or a ShoppingList; entries may be dicts or ShoppingListItem objects.
    Returns the number of updates applied.
    '''
    if isinstance(items, ShoppingList):
        return items.update_items(list(updates or []))
    if isinstance(items, dict):
        flat = [i for group in items.values() for i in (group or [])]
    else:
        flat = list(items or [])

    updated = 0
    for update in updates or []:
        if not isinstance(update, dict):
            logger.warning(f"Ignoring shopping list update that is not an object: {update!r}")
            continue
        name = update.get("ingredientName")
        target = None
        for item in flat:
            current = item.ingredient if isinstance(item, ShoppingListItem) else (
                item.get("ingredient") if isinstance(item, dict) else None)
            if current == name:
                target = item
                break
        if target is None:
            logger.debug(f"No shopping list item named {name!r}")
            continue
        if isinstance(target, ShoppingListItem):
            target.apply(update)
        else:
            target.update({k: v for k, v in update.items() if k != "ingredientName"})
        updated += 1
    return updated
