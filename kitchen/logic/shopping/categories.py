"""Grocery category taxonomy and ingredient classification.

The keyword table is ORDERED: categorize() walks it top to bottom and the
first category with a keyword contained in the ingredient name wins. The
order resolves overlaps ("ice cream" is Frozen Foods before Dairy sees
"cream", "unsalted butter" is Dairy before Spices sees "salt"), so
reordering entries changes results.
"""
from __future__ import annotations
import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

__all__ = [
    "OTHER_CATEGORY", "CATEGORY_KEYWORDS", "DISPLAY_ORDER", "CategoryTaxonomy", "DEFAULT_TAXONOMY",
    "categorize", "all_category_names", "is_valid_category", "coerce_category", "default_category_order",
]

OTHER_CATEGORY = "Other"

CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Frozen Foods", ('frozen', 'ice cream', 'sorbet')),
    ("Canned Goods", ('canned', 'tomato paste', 'tomato sauce', 'diced tomatoes', 'crushed tomatoes',
                      'coconut milk', 'broth', 'stock', 'bouillon', 'black beans', 'kidney beans', 'chickpeas')),
    ("Fresh Produce", ('butternut', 'cilantro', 'parsley', 'fresh basil', 'fresh herbs', 'scallion',
                       'green onion', 'avocado', 'ginger root')),
    ("Condiments", ('ketchup', 'mustard', 'mayo', 'hot sauce', 'soy sauce', 'worcestershire', 'salsa',
                    'relish', 'dressing', 'bbq sauce', 'barbecue sauce', 'sriracha', 'vinegar',
                    'peanut butter', 'almond butter', 'jam', 'jelly', 'honey', 'maple syrup')),
    ("Cheese", ('cheese', 'cheddar', 'mozzarella', 'parmesan', 'feta', 'ricotta', 'gouda', 'swiss')),
    ("Dairy", ('milk', 'cream', 'butter', 'yogurt', 'half and half', 'ghee', 'kefir')),
    ("Baking Ingredients", ('flour', 'sugar', 'baking powder', 'baking soda', 'yeast', 'vanilla', 'cocoa',
                            'chocolate chips', 'cornstarch')),
    ("Cooking Oil", ('oil', 'cooking spray', 'shortening')),
    ("Spices & Seasonings", ('salt', 'pepper flakes', 'black pepper', 'white pepper', 'peppercorn', 'paprika',
                             'cumin', 'chili powder', 'garlic powder', 'onion powder', 'oregano', 'thyme',
                             'rosemary', 'cinnamon', 'nutmeg', 'turmeric', 'curry', 'seasoning', 'bay lea',
                             'cayenne', 'spice', 'dried basil')),
    ("Breads & Bakery", ('bread', 'buns', 'bagel', 'tortilla', 'pita', 'dinner roll', 'baguette',
                         'croissant', 'english muffin')),
    ("Snacks", ('chips', 'crackers', 'pretzel', 'popcorn', 'granola bar')),
    ("Fresh Poultry", ('chicken', 'turkey', 'duck', 'poultry')),
    ("Fresh Meat", ('beef', 'pork', 'lamb', 'bacon', 'ham', 'sausage', 'steak', 'veal', 'prosciutto',
                    'pancetta')),
    ("Fresh Seafood", ('fish', 'salmon', 'tuna', 'shrimp', 'cod', 'tilapia', 'crab', 'lobster', 'scallop',
                       'mussel', 'clam', 'anchov')),
    ("Beverages", ('juice', 'soda', 'coffee', 'tea', 'wine', 'beer', 'sparkling water')),
    ("Pasta & Grains", ('pasta', 'spaghetti', 'penne', 'macaroni', 'noodle', 'lasagna', 'rice', 'quinoa',
                        'oats', 'barley', 'couscous', 'cereal', 'granola')),
    ("Fresh Vegetables", ('tomato', 'onion', 'garlic', 'carrot', 'celery', 'lettuce', 'spinach', 'potato',
                          'broccoli', 'cucumber', 'mushroom', 'cabbage', 'zucchini', 'eggplant',
                          'cauliflower', 'kale', 'squash', 'pepper', 'jalapeno', 'green bean', 'asparagus',
                          'shallot', 'leek', 'corn', 'peas', 'beet', 'radish', 'arugula', 'veggie')),
    ("Fresh Fruits", ('apple', 'banana', 'lemon', 'lime', 'orange', 'berries', 'strawberr', 'blueberr',
                      'raspberr', 'cranberr', 'grape', 'mango', 'pineapple', 'peach', 'pear', 'cherr',
                      'kiwi', 'melon')),
    ("Eggs", ('egg',)),
    ("Nuts & Seeds", ('almond', 'walnut', 'pecan', 'cashew', 'pistachio', 'peanut', 'sesame seed',
                      'sunflower seed', 'chia', 'flax')),
)

# Store walking order used when presenting a categorized list
DISPLAY_ORDER: Tuple[str, ...] = (
    "Fresh Produce", "Fresh Vegetables", "Fresh Fruits",
    "Fresh Meat", "Fresh Poultry", "Fresh Seafood",
    "Breads & Bakery",
    "Dairy", "Cheese", "Eggs",
    "Pasta & Grains", "Canned Goods", "Baking Ingredients", "Cooking Oil", "Spices & Seasonings",
    "Condiments", "Nuts & Seeds", "Snacks", "Beverages",
    "Frozen Foods",
    OTHER_CATEGORY,
)


class CategoryTaxonomy:
    """Closed, ordered category table. 'Other' is always part of it."""

    def __init__(self, table: Sequence[Tuple[str, Iterable[str]]] = CATEGORY_KEYWORDS,
                 display_order: Optional[Sequence[str]] = None, version: str = "1"):
        self.version = version
        self._table: Tuple[Tuple[str, Tuple[str, ...]], ...] = tuple(
            (name, tuple(k.lower() for k in keywords)) for name, keywords in table
        )
        names: List[str] = []
        for name, _ in self._table:
            if name not in names:
                names.append(name)
        if OTHER_CATEGORY not in names:
            names.append(OTHER_CATEGORY)
        self._names: Tuple[str, ...] = tuple(names)
        order = [c for c in (display_order or DISPLAY_ORDER) if c in self._names and c != OTHER_CATEGORY]
        order += [c for c in self._names if c not in order and c != OTHER_CATEGORY]
        # "Other" always goes last
        self._display_order: Tuple[str, ...] = tuple(order + [OTHER_CATEGORY])

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    @property
    def display_order(self) -> Tuple[str, ...]:
        return self._display_order

    def categorize(self, name: Any) -> str:
        if not isinstance(name, str) or not name.strip():
            return OTHER_CATEGORY
        lowered = name.lower()
        for category, keywords in self._table:
            if any(keyword in lowered for keyword in keywords):
                return category
        return OTHER_CATEGORY

    def is_valid(self, category: Any) -> bool:
        return category in self._names

    def coerce(self, category: Any) -> str:
        """Map anything outside the taxonomy to 'Other'."""
        if self.is_valid(category):
            return category
        if category not in (None, ''):
            logger.debug(f"Category {category!r} not in taxonomy, using {OTHER_CATEGORY}")
        return OTHER_CATEGORY

    def display_rank(self, category: str) -> int:
        try:
            return self._display_order.index(category)
        except ValueError:
            return len(self._display_order)


DEFAULT_TAXONOMY = CategoryTaxonomy()


def categorize(name: Any) -> str:
    """Classify an ingredient name with the default taxonomy."""
    return DEFAULT_TAXONOMY.categorize(name)


def all_category_names() -> List[str]:
    return list(DEFAULT_TAXONOMY.names)


def is_valid_category(category: Any) -> bool:
    return DEFAULT_TAXONOMY.is_valid(category)


def coerce_category(category: Any) -> str:
    return DEFAULT_TAXONOMY.coerce(category)


def default_category_order() -> List[str]:
    return list(DEFAULT_TAXONOMY.display_order)
