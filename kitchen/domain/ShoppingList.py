"""ShoppingList aggregate: categorized shopping list items plus summary and metadata."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from kitchen.logic.shopping.categories import OTHER_CATEGORY

# camelCase document key -> attribute name
_FIELD_MAP = {
    "ingredient": "ingredient",
    "amount": "amount",
    "unit": "unit",
    "category": "category",
    "recipes": "recipes",
    "inInventory": "in_inventory",
    "inventoryItem": "inventory_item",
    "purchased": "purchased",
    "selected": "selected",
    "optional": "optional",
    "alternativeAmounts": "alternative_amounts",
    "itemKey": "item_key",
}

FILTERS = ("all", "needToBuy", "inInventory", "purchased")


class ShoppingListItem:
    def __init__(self, ingredient: str = "", amount: str = "", unit: str = "", category: str = OTHER_CATEGORY,
                 recipes: Optional[List[str]] = None, in_inventory: bool = False,
                 inventory_item: Optional[Dict[str, Any]] = None, purchased: bool = False,
                 selected: bool = True, optional: bool = False,
                 alternative_amounts: Optional[List[Dict[str, Any]]] = None, item_key: str = "",
                 extra: Optional[Dict[str, Any]] = None):
        self.ingredient = ingredient
        self.amount = amount
        self.unit = unit
        self.category = category
        self.recipes = recipes[:] if recipes else []
        self.in_inventory = in_inventory
        self.inventory_item = inventory_item
        self.purchased = purchased
        self.selected = selected
        self.optional = optional
        self.alternative_amounts = alternative_amounts[:] if alternative_amounts else []
        self.item_key = item_key or f"{ingredient}-{category}"
        self.extra = dict(extra) if extra else {}

    def apply(self, fields: Dict[str, Any]) -> None:
        '''Merge the given document fields into this item; anything else is left alone.'''
        for key, value in fields.items():
            if key == "ingredientName":
                continue
            attr = _FIELD_MAP.get(key)
            if attr is None and key in _FIELD_MAP.values():
                attr = key
            if attr is not None:
                setattr(self, attr, value)
            else:
                self.extra[key] = value

    def __str__(self) -> str:
        mark = "x" if self.purchased else " "
        have = " (in inventory)" if self.in_inventory else ""
        return f"[{mark}] {self.ingredient} {self.amount}{have}".rstrip()

    __repr__ = __str__

    @staticmethod
    def from_dict(data, category: Optional[str] = None):
        d = dict(data) if isinstance(data, dict) else {}
        name = d.get("ingredient") or d.get("name") or ""
        cat = category or d.get("category") or OTHER_CATEGORY
        known = set(_FIELD_MAP) | {"name"}
        return ShoppingListItem(
            ingredient=name,
            amount=d.get("amount") or "",
            unit=d.get("unit") or "",
            category=cat,
            recipes=d.get("recipes") or [],
            in_inventory=bool(d.get("inInventory", False)),
            inventory_item=d.get("inventoryItem"),
            purchased=bool(d.get("purchased", False)),
            selected=bool(d.get("selected", True)),
            optional=bool(d.get("optional", False)),
            alternative_amounts=d.get("alternativeAmounts") or [],
            item_key=d.get("itemKey") or f"{name}-{cat}",
            extra={k: v for k, v in d.items() if k not in known},
        )

    def to_dict(self):
        data = {
            "ingredient": self.ingredient,
            "amount": self.amount,
            "unit": self.unit,
            "category": self.category,
            "recipes": list(self.recipes),
            "inInventory": self.in_inventory,
            "inventoryItem": dict(self.inventory_item) if self.inventory_item else None,
            "purchased": self.purchased,
            "selected": self.selected,
            "optional": self.optional,
            "alternativeAmounts": [dict(a) for a in self.alternative_amounts],
            "itemKey": self.item_key,
        }
        data.update(self.extra)
        return data


class ShoppingList:
    def __init__(self, items: Optional[Dict[str, List[ShoppingListItem]]] = None,
                 generated_at: Optional[datetime] = None, recipes: Optional[List[Dict[str, Any]]] = None,
                 metadata: Optional[Dict[str, Any]] = None, summary: Optional[Dict[str, int]] = None):
        self.items: Dict[str, List[ShoppingListItem]] = {k: list(v) for k, v in (items or {}).items()}
        self.generated_at = generated_at or datetime.now()
        self.recipes = recipes[:] if recipes else []
        self.metadata = dict(metadata) if metadata else {}
        self.summary = dict(summary) if summary else self.calculate_stats()

    def all_items(self) -> List[ShoppingListItem]:
        return [item for items in self.items.values() for item in items]

    def find(self, ingredient_name: str) -> Optional[ShoppingListItem]:
        for item in self.all_items():
            if item.ingredient == ingredient_name:
                return item
        return None

    def find_by_key(self, item_key: str) -> Optional[ShoppingListItem]:
        for item in self.all_items():
            if item.item_key == item_key:
                return item
        return None

    def update_items(self, updates: List[Dict[str, Any]]) -> int:
        '''
        Applies [{ingredientName, ...fields}] updates; returns the number of items changed.
        The stored summary is left as generated, call refresh_summary() to recount.
        '''
        updated = 0
        for update in updates or []:
            if not isinstance(update, dict):
                continue
            item = self.find(update.get("ingredientName"))
            if item is not None:
                item.apply(update)
                updated += 1
        return updated

    def toggle_purchased(self, item_key: str) -> bool:
        '''Flips the purchased flag of one item; returns the new value (False if not found).'''
        item = self.find_by_key(item_key)
        if item is None:
            return False
        item.purchased = not item.purchased
        return item.purchased

    def mark_all_purchased(self):
        for item in self.all_items():
            item.purchased = True
        return self

    def clear_purchased(self):
        for item in self.all_items():
            item.purchased = False
        return self

    def calculate_stats(self) -> Dict[str, int]:
        items = self.all_items()
        return {
            "totalItems": len(items),
            "needToBuy": sum(1 for i in items if not i.in_inventory and not i.purchased),
            "inInventory": sum(1 for i in items if i.in_inventory),
            "purchased": sum(1 for i in items if i.purchased),
        }

    def refresh_summary(self):
        self.summary = self.calculate_stats()
        return self.summary

    def filter_items(self, kind: str = "all") -> Dict[str, List[ShoppingListItem]]:
        '''Returns {category: items} for one of FILTERS; categories left empty are omitted.'''
        if kind not in FILTERS:
            raise ValueError(f"Unknown shopping list filter: {kind}")
        tests = {
            "all": lambda i: True,
            "needToBuy": lambda i: not i.in_inventory and not i.purchased,
            "inInventory": lambda i: i.in_inventory,
            "purchased": lambda i: i.purchased,
        }
        result: Dict[str, List[ShoppingListItem]] = {}
        for category, items in self.items.items():
            kept = [i for i in items if tests[kind](i)]
            if kept:
                result[category] = kept
        return result

    def __str__(self) -> str:
        lines = []
        for category, items in self.items.items():
            lines.append(f"{category}:")
            lines.extend(f"\t{item}" for item in items)
        return "Shopping List\n" + "\n".join(lines)

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        '''
        Builds a ShoppingList from a stored document. `items` may be a flat array
        (grouped here by each item's category) or an already categorized object.
        '''
        d = dict(data) if isinstance(data, dict) else {}
        raw_items = d.get("items")
        items: Dict[str, List[ShoppingListItem]] = {}
        if isinstance(raw_items, list):
            for raw in raw_items:
                if isinstance(raw, dict):
                    item = ShoppingListItem.from_dict(raw)
                    items.setdefault(item.category, []).append(item)
        elif isinstance(raw_items, dict):
            for category, entries in raw_items.items():
                items[category] = [ShoppingListItem.from_dict(e, category) for e in entries or []
                                   if isinstance(e, dict)]
        generated_at = d.get("generatedAt")
        if isinstance(generated_at, str):
            try:
                generated_at = datetime.fromisoformat(generated_at)
            except ValueError:
                generated_at = None
        summary = d.get("summary") or d.get("stats")
        shopping_list = ShoppingList(items=items, generated_at=generated_at if isinstance(generated_at, datetime) else None,
                                     recipes=d.get("recipes") or [], metadata=d.get("metadata") or {})
        if isinstance(summary, dict) and summary.get("totalItems"):
            shopping_list.summary = {
                "totalItems": summary.get("totalItems", 0),
                "needToBuy": summary.get("needToBuy", 0),
                "inInventory": summary.get("inInventory", summary.get("alreadyHave", 0)),
                "purchased": summary.get("purchased", 0),
            }
        return shopping_list

    def to_dict(self):
        return {
            "items": {category: [i.to_dict() for i in items] for category, items in self.items.items()},
            "summary": dict(self.summary),
            "generatedAt": self.generated_at.isoformat(),
            "recipes": [dict(r) for r in self.recipes],
            "metadata": dict(self.metadata),
        }


def validate_shopping_list_data(data) -> Dict[str, Any]:
    """Structural check of a stored shopping list document: {isValid, errors, warnings}."""
    errors: List[str] = []
    warnings: List[str] = []
    if not data:
        errors.append("Shopping list data is required")
        return {"isValid": False, "errors": errors, "warnings": warnings}

    items = data.get("items") if isinstance(data, dict) else None
    if items is None:
        errors.append("Shopping list must have items")
    elif not isinstance(items, (list, dict)):
        errors.append("Shopping list items must be an object or array")
    elif len(items) == 0:
        warnings.append("Shopping list is empty")

    if isinstance(items, (list, dict)):
        flat = items if isinstance(items, list) else [i for group in items.values() for i in (group or [])]
        for index, item in enumerate(flat):
            if not isinstance(item, dict) or not (item.get("name") or item.get("ingredient")):
                errors.append(f"Item at index {index} missing name/ingredient")

    return {"isValid": not errors, "errors": errors, "warnings": warnings}
