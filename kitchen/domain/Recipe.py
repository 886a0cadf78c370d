"""Recipe domain entity: id, title, default servings and authored ingredients."""
from typing import List, Optional

from kitchen.domain.Ingredient import Ingredient


class Recipe:
    def __init__(self, id: str = "", title: str = "", servings: int = 0,
                 ingredients: Optional[List[Ingredient]] = None):
        self.id = str(id) if id is not None else ""
        self.title = title
        self.servings = servings
        # Malformed entries are kept as-is so the shopping pipeline can report and skip them
        self.ingredients = ingredients[:] if ingredients else []

    def __str__(self) -> str:
        return f"{self.title} - {self.servings} servings - {len(self.ingredients)} ingredients"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        raw = d.get('ingredients')
        ingredients = []
        for ing in raw if isinstance(raw, list) else []:
            ingredients.append(Ingredient.from_dict(ing) if isinstance(ing, dict) else ing)
        return Recipe(
            id=d.get('_id', d.get('id', '')),
            title=d.get('title') or d.get('name') or '',
            servings=d.get('servings') or 0,
            ingredients=ingredients,
        )

    def to_dict(self):
        return {
            "_id": self.id,
            "title": self.title,
            "servings": self.servings,
            "ingredients": [ing.to_dict() if isinstance(ing, Ingredient) else ing for ing in self.ingredients],
        }

    def summary(self):
        """Reference used in produced documents: {id, title, servings}."""
        return {"id": self.id, "title": self.title, "servings": self.servings}
