"""Ingredient domain entities: the raw recipe ingredient and its aggregated shopping form."""
from typing import Any, Dict, List, Optional

from kitchen.logic.parsing.amounts import ParsedAmount, parse_amount


class Ingredient:
    def __init__(self, name: str = "", amount: Any = None, unit: str = "", optional: bool = False):
        self.name = name
        self.amount = amount
        self.unit = unit or ""
        self.optional = bool(optional)

    def parsed(self) -> ParsedAmount:
        """Amount normalized through parse_amount; the ingredient's own unit fills an empty parsed unit."""
        parsed = parse_amount(self.amount)
        if not parsed.unit and isinstance(self.unit, str) and self.unit.strip():
            return ParsedAmount(parsed.amount, self.unit.strip())
        return parsed

    def __str__(self) -> str:
        amount = "" if self.amount in (None, "") else f"{self.amount} "
        unit = f"{self.unit} " if self.unit else ""
        return f"{amount}{unit}{self.name}".strip()

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Ingredient(
            name=d.get("name") or "",
            amount=d.get("amount", d.get("quantity")),
            unit=d.get("unit") or "",
            optional=d.get("optional", False),
        )

    def to_dict(self):
        return {"name": self.name, "amount": self.amount, "unit": self.unit, "optional": self.optional}


class AggregatedIngredient:
    """One logical ingredient merged across every recipe in scope.

    `amount` is only ever summed with contributions of the exact same unit;
    other units are kept in `alternative_amounts`.
    """

    def __init__(self, key: str, name: str, amount: float = 0, unit: str = "",
                 recipes: Optional[List[str]] = None, category: str = "Other", optional: bool = False,
                 alternative_amounts: Optional[List[Dict[str, Any]]] = None):
        self.key = key
        self.name = name
        self.amount = amount
        self.unit = unit
        self.recipes = recipes[:] if recipes else []
        self.category = category
        self.optional = optional
        self.alternative_amounts = alternative_amounts[:] if alternative_amounts else []

    def add_recipes(self, recipes: List[str]):
        for r in recipes:
            if r not in self.recipes:
                self.recipes.append(r)

    def __str__(self) -> str:
        return f"{self.name} - {self.amount} {self.unit} ({self.category}) - Recipes: {', '.join(self.recipes)}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "key": self.key,
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
            "alternativeAmounts": [dict(a) for a in self.alternative_amounts],
            "recipes": list(self.recipes),
            "category": self.category,
            "optional": self.optional,
        }
