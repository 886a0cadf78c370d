from typing import Final, Dict, List, Tuple

# Meal plan buckets, in week order
WEEK_DAYS: Final[Tuple[str, ...]] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
)

# Words dropped by the prep-analysis name normalizer
DESCRIPTOR_WORDS: Final[Tuple[str, ...]] = (
    "fresh", "dried", "minced", "chopped", "sliced", "diced", "whole", "ground", "crushed"
)

# Analyzer categories
PROTEIN: Final[str] = "protein"
VEGETABLE: Final[str] = "vegetable"
GRAIN: Final[str] = "grain"
OTHER: Final[str] = "other"

# Fallback keywords when an ingredient is not in the knowledge base
PROTEIN_KEYWORDS: Final[Tuple[str, ...]] = ('chicken', 'beef', 'pork', 'turkey', 'fish', 'salmon', 'tuna', 'shrimp')
VEGETABLE_KEYWORDS: Final[Tuple[str, ...]] = ('onion', 'pepper', 'tomato', 'carrot', 'broccoli', 'spinach')
GRAIN_KEYWORDS: Final[Tuple[str, ...]] = ('rice', 'pasta', 'quinoa', 'bread', 'noodles')

# Task types
BATCH_COOK: Final[str] = "batch_cook"
INGREDIENT_PREP: Final[str] = "ingredient_prep"

BATCH_PREP_TEMPLATES: Final[Dict[str, str]] = {
    'oven_bake': "Preheat oven to 375°F. Season {name} and bake until cooked through.",
    'slow_cook': "Add {name} to slow cooker with seasonings. Cook on low 6-8 hours.",
    'stovetop_brown': "Heat oil in large pan. Brown {name} in batches until cooked through.",
    'grill': "Preheat grill to medium-high. Grill {name} until cooked through.",
    'oven_roast': "Preheat oven to 400°F. Roast {name} until internal temp reaches safe level.",
    'rice_cooker': "Rinse {name}, add to rice cooker with water and start the cook cycle.",
    'large_pot_boiling': "Bring a large pot of salted water to a boil. Cook {name} until just al dente.",
}
BATCH_PREP_FALLBACK: Final[str] = "Cook {name} using preferred method."

VEG_PREP_TEMPLATES: Final[Dict[str, str]] = {
    'dice': "Wash and peel if needed. Dice {name} into uniform pieces.",
    'slice': "Wash and trim {name}. Slice into even pieces.",
    'chop': "Wash and prepare {name}. Chop into desired size.",
    'mince': "Peel and mince {name} finely.",
    'julienne': "Wash and trim {name}. Cut into thin matchsticks.",
}
VEG_PREP_FALLBACK: Final[str] = "Prep {name} as needed for recipes."

METHOD_EQUIPMENT: Final[Dict[str, List[str]]] = {
    'oven_bake': ['baking sheet', 'oven'],
    'slow_cook': ['slow cooker'],
    'stovetop_brown': ['large skillet', 'stovetop'],
    'grill': ['grill', 'tongs'],
    'oven_roast': ['roasting pan', 'oven'],
    'rice_cooker': ['rice cooker'],
    'large_pot_boiling': ['large pot', 'stovetop'],
}
DEFAULT_EQUIPMENT: Final[List[str]] = ['basic cooking equipment']
PREP_EQUIPMENT: Final[List[str]] = ['cutting board', 'knife']

DEFAULT_STORAGE: Final[str] = 'Refrigerate in airtight container'
DEFAULT_SHELF_LIFE: Final[str] = '3-4 days'
DEFAULT_BATCH_PREP_TIME: Final[int] = 15
DEFAULT_VEG_PREP_TIME: Final[int] = 5

# Quantity multiplier buckets: (upper bound inclusive, multiplier)
QUANTITY_BUCKETS: Final[Tuple[Tuple[float, float], ...]] = ((2, 1.0), (4, 1.5), (8, 2.0))
QUANTITY_MULTIPLIER_MAX: Final[float] = 2.5
