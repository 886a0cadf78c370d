"""Command line entry point: python -m kitchen.main <command> [options]."""
import argparse
import json
import logging
import sys

from pydantic import ValidationError

from kitchen.domain.ShoppingList import ShoppingList
from kitchen.infra import Json_Repository as repo
from kitchen.infra.Knowledge_Repository import reading_prep_knowledge
from kitchen.infra.pdf_utils import generate_pdf_for_prep_schedule, generate_pdf_for_shopping_list
from kitchen.logic.prep.analyzer import MealPrepAnalyzer
from kitchen.logic.shopping.list_builder import (
    generate_meal_plan_shopping_list, generate_recipes_shopping_list, update_shopping_list,
)
from kitchen.utilities.config import LOG_LEVEL
from kitchen.utilities.errors import KnowledgeBaseError, MissingRelationError
from kitchen.utilities.export_import import ShoppingListExporter

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _emit(document, output=None):
    if output:
        repo.writing_json(document, output)
    else:
        print(json.dumps(document, indent=2, ensure_ascii=False))


def _write_bytes(data: bytes, path: str):
    with open(path, "wb") as f:
        f.write(data)
    logger.info(f"Wrote {path}")


def run_shopping_list(args) -> int:
    recipes = repo.reading_recipes(args.recipes, validate=True)
    inventory = repo.reading_inventory(args.inventory, validate=True)
    if args.meal_plan:
        meal_plan = repo.reading_meal_plan(args.meal_plan, validate=True)
        result = generate_meal_plan_shopping_list(meal_plan, recipes, inventory)
        title = meal_plan.name if meal_plan and meal_plan.name else "Meal Plan"
    else:
        result = generate_recipes_shopping_list(recipes, inventory, target_servings=args.servings)
        title = "Selected Recipes"

    _emit(result, args.output)
    if result.get("success"):
        exporter = ShoppingListExporter(result["shoppingList"], title=title)
        if args.csv:
            exporter.export_csv(args.csv)
        if args.text:
            exporter.export_text(args.text)
        if args.pdf:
            _write_bytes(generate_pdf_for_shopping_list(exporter.shopping_list, title=title), args.pdf)
    return 0 if result.get("success") else 1


def run_meal_prep(args) -> int:
    recipes = repo.reading_recipes(args.recipes, validate=True) if args.recipes else []
    meal_plan = repo.reading_meal_plan(args.meal_plan, recipes, validate=True)
    preferences = repo.reading_preferences(args.preferences)
    knowledge = reading_prep_knowledge(args.knowledge) if args.knowledge else None

    try:
        suggestion = MealPrepAnalyzer(knowledge).analyze_meal_plan(meal_plan, preferences)
    except MissingRelationError as e:
        _emit({"success": False, "message": str(e)}, args.output)
        return 1

    _emit({"success": True, "suggestion": suggestion.to_dict(), "message": "Meal prep suggestions generated"},
          args.output)
    if args.pdf:
        _write_bytes(generate_pdf_for_prep_schedule(suggestion), args.pdf)
    return 0


def run_update_list(args) -> int:
    document = repo.reading_document(args.list, "Shopping list")
    if not isinstance(document, dict):
        print(f"Error: could not read shopping list {args.list}", file=sys.stderr)
        return 1
    # accept a whole generate response as well as a bare shopping list
    if isinstance(document.get("shoppingList"), dict):
        document = document["shoppingList"]

    shopping_list = ShoppingList.from_dict(document)
    updated = update_shopping_list(shopping_list, repo.reading_updates(args.updates))
    shopping_list.refresh_summary()
    logger.info(f"Updated {updated} shopping list items")
    _emit({"success": True, "shoppingList": shopping_list.to_dict(), "updated": updated,
           "message": "Shopping list updated successfully"}, args.output)
    return 0


def main(argv=None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Shopping list and meal prep engine")
    sub = parser.add_subparsers(dest="command", required=True)

    shop = sub.add_parser("shopping-list", help="Build a shopping list from a meal plan or a set of recipes")
    shop.add_argument("--recipes", required=True, help="Recipes JSON file")
    shop.add_argument("--meal-plan", help="Meal plan JSON file (omit to shop for every recipe in --recipes)")
    shop.add_argument("--inventory", help="Inventory JSON file")
    shop.add_argument("--servings", type=int, help="Rescale every recipe to this many servings (no meal plan)")
    shop.add_argument("--output", help="Write the result JSON here instead of stdout")
    shop.add_argument("--pdf", help="Also write a printable PDF")
    shop.add_argument("--csv", help="Also write a CSV export")
    shop.add_argument("--text", help="Also write a plain-text checklist")
    shop.set_defaults(handler=run_shopping_list)

    prep = sub.add_parser("meal-prep", help="Suggest batch cooking and a prep schedule for a meal plan")
    prep.add_argument("--meal-plan", required=True, help="Meal plan JSON file")
    prep.add_argument("--recipes", help="Recipes JSON file used to resolve the plan's recipe ids")
    prep.add_argument("--preferences", help="Prep preferences JSON file")
    prep.add_argument("--knowledge", help="Prep knowledge JSON file (defaults to the packaged one)")
    prep.add_argument("--output", help="Write the result JSON here instead of stdout")
    prep.add_argument("--pdf", help="Also write a printable prep schedule")
    prep.set_defaults(handler=run_meal_prep)

    update = sub.add_parser("update-list", help="Apply [{ingredientName, ...fields}] updates to a shopping list")
    update.add_argument("--list", required=True, help="Shopping list JSON file")
    update.add_argument("--updates", required=True, help="Updates JSON file")
    update.add_argument("--output", help="Write the result JSON here instead of stdout")
    update.set_defaults(handler=run_update_list)

    args = parser.parse_args(argv)
    try:
        return args.handler(args)
    except ValidationError as e:
        print(f"Error: invalid input\n{e}", file=sys.stderr)
        return 2
    except KnowledgeBaseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
