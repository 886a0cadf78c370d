"""User inventory aggregate and the ingredient -> inventory matcher."""
from typing import Any, Iterable, List, Optional, Union


class InventoryItem:
    def __init__(self, name: str = "", quantity: Any = None, unit: str = "", location: str = ""):
        self.name = name
        self.quantity = quantity
        self.unit = unit or ""
        self.location = location or ""

    def __str__(self) -> str:
        where = f" @ {self.location}" if self.location else ""
        return f"{self.name} - {self.quantity} {self.unit}{where}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return InventoryItem(
            name=d.get("name") or "",
            quantity=d.get("quantity"),
            unit=d.get("unit") or "",
            location=d.get("location") or "",
        )

    def to_dict(self):
        '''Snapshot stored on a shopping list item.'''
        return {"name": self.name, "quantity": self.quantity, "unit": self.unit, "location": self.location}


class UserInventory:
    def __init__(self, items: Optional[List[InventoryItem]] = None):
        self.items: List[InventoryItem] = items[:] if items else []

    def add_item(self, item: InventoryItem):
        self.items.append(item)

    def get_items(self):
        return self.items

    def find_match(self, ingredient_name: str) -> Optional[InventoryItem]:
        '''
        Returns the first item whose lowercased name contains the ingredient
        name or is contained in it. Array order decides between candidates.
        '''
        if not self.items or not isinstance(ingredient_name, str) or not ingredient_name.strip():
            return None
        name = ingredient_name.lower()
        for item in self.items:
            item_name = (item.name or "").lower()
            if not item_name:
                continue
            if name in item_name or item_name in name:
                return item
        return None

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Inventory:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        '''Accepts {"items": [...]} or a bare list of item dictionaries.'''
        if isinstance(data, dict):
            raw = data.get("items") or []
        elif isinstance(data, list):
            raw = data
        else:
            raw = []
        return UserInventory([InventoryItem.from_dict(i) for i in raw if isinstance(i, dict)])

    def to_dict(self):
        return {"items": [item.to_dict() for item in self.items]}


InventoryLike = Union[UserInventory, Iterable[Union[InventoryItem, dict]], dict, None]


def as_inventory(inventory: InventoryLike) -> UserInventory:
    if isinstance(inventory, UserInventory):
        return inventory
    if inventory is None:
        return UserInventory()
    if isinstance(inventory, dict):
        return UserInventory.from_dict(inventory)
    items = []
    for entry in inventory:
        if isinstance(entry, InventoryItem):
            items.append(entry)
        elif isinstance(entry, dict):
            items.append(InventoryItem.from_dict(entry))
    return UserInventory(items)


def find_inventory_match(inventory: InventoryLike, ingredient_name: str) -> Optional[InventoryItem]:
    """Bidirectional, case-insensitive substring match; None when absent."""
    return as_inventory(inventory).find_match(ingredient_name)
