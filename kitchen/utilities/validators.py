"""
Input validation schemas using Pydantic for the engine's boundary objects.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional, Union

from kitchen.utilities.config import DEFAULT_MAX_PREP_TIME, DEFAULT_PREP_DAYS, DEFAULT_SKILL_LEVEL
from kitchen.utilities.constants import WEEK_DAYS


class IngredientInput(BaseModel):
    """Schema for a recipe ingredient as authored."""
    name: str = Field(..., min_length=1, max_length=200)
    amount: Optional[Union[float, int, str]] = None
    unit: str = ''
    optional: bool = False

    @field_validator('name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('unit', mode='before')
    @classmethod
    def none_unit(cls, v):
        return '' if v is None else v


class RecipeInput(BaseModel):
    """Schema for recipe input validation."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias='_id', min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    servings: int = Field(1, ge=0, le=100)
    ingredients: List[IngredientInput] = Field(default_factory=list)

    @field_validator('id', mode='before')
    @classmethod
    def stringify_id(cls, v):
        return str(v) if v is not None else v

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        """Validate recipe title."""
        if not v.strip():
            raise ValueError('Recipe title cannot be empty')
        return v.strip()

    @field_validator('servings', mode='before')
    @classmethod
    def default_servings(cls, v):
        return v or 1


class PlannedMealInput(BaseModel):
    """Schema for one slot of a meal plan day."""
    model_config = ConfigDict(populate_by_name=True)

    recipe_id: Optional[str] = Field(None, alias='recipeId')
    recipe_name: str = Field('', alias='recipeName')
    meal_type: str = Field('', alias='mealType')
    servings: Optional[int] = Field(None, ge=0, le=100)

    @field_validator('recipe_id', mode='before')
    @classmethod
    def stringify_id(cls, v):
        """Accept a plain id or a populated recipe object."""
        if isinstance(v, dict):
            v = v.get('_id', v.get('id'))
        return str(v) if v not in (None, '') else None


class MealPlanInput(BaseModel):
    """Schema for a weekly meal plan."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias='_id')
    name: str = ''
    week_start_date: Optional[str] = Field(None, alias='weekStartDate')
    meals: Dict[str, List[PlannedMealInput]] = Field(default_factory=dict)

    @field_validator('meals')
    @classmethod
    def validate_days(cls, v):
        """Only the seven week-day buckets are allowed."""
        cleaned = {}
        for day, meals in v.items():
            key = day.strip().lower()
            if key not in WEEK_DAYS:
                raise ValueError(f'Unknown meal plan day: {day}')
            cleaned[key] = meals
        return cleaned


class InventoryItemInput(BaseModel):
    """Schema for an inventory entry."""
    name: str = Field(..., min_length=1, max_length=200)
    quantity: Optional[Union[float, int, str]] = None
    unit: str = ''
    location: str = ''

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        return v.strip()


class InventoryInput(BaseModel):
    items: List[InventoryItemInput] = Field(default_factory=list)


class PrepPreferencesInput(BaseModel):
    """Schema for user meal-prep preferences."""
    model_config = ConfigDict(populate_by_name=True)

    max_prep_time: int = Field(DEFAULT_MAX_PREP_TIME, alias='maxPrepTime', ge=0, le=24 * 60)
    preferred_prep_days: List[str] = Field(default_factory=lambda: list(DEFAULT_PREP_DAYS), alias='preferredPrepDays')
    avoided_tasks: List[str] = Field(default_factory=list, alias='avoidedTasks')
    skill_level: str = Field(DEFAULT_SKILL_LEVEL, alias='skillLevel')

    @field_validator('preferred_prep_days')
    @classmethod
    def validate_prep_days(cls, v):
        """Lowercase day names; an empty list falls back to the default prep days."""
        days = [d.strip().lower() for d in v if d and d.strip()]
        for d in days:
            if d not in WEEK_DAYS:
                raise ValueError(f'Unknown prep day: {d}')
        return days or list(DEFAULT_PREP_DAYS)

    @field_validator('skill_level')
    @classmethod
    def validate_skill(cls, v):
        if v not in ('beginner', 'intermediate', 'advanced'):
            raise ValueError(f'Unknown skill level: {v}')
        return v


class ShoppingListUpdateInput(BaseModel):
    """Schema for one shopping list item update ({ingredientName, ...fields})."""
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    ingredient_name: str = Field(..., alias='ingredientName', min_length=1)

    def fields(self) -> Dict[str, Any]:
        """Return the fields to merge into the matched item."""
        return dict(self.model_extra or {})
