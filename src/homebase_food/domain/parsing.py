"""Models for AI food parsing results."""

from typing import Literal

from pydantic import BaseModel, Field

from homebase_food.domain.nutrition import FoodSource

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


class ParsedFoodItem(BaseModel):
    """Single food item parsed from a free-text description."""

    food_name: str
    quantity: str
    calories: float = 0
    protein: float = 0
    fat: float = 0
    carbs: float = 0
    fiber: float = 0
    sugar: float = 0
    sodium: float = 0
    categories: list[str] = Field(default_factory=list)
    whole_food_ingredients: list[str] = Field(default_factory=list)
    provided_by_user: bool = False
    source: FoodSource = FoodSource.AI
    unverified: bool = False


class MealGroup(BaseModel):
    """Items eaten together as one meal."""

    meal_type: MealType
    confidence: float
    items: list[ParsedFoodItem]


class ParsedFood(BaseModel):
    """Structured output for a food description."""

    meals: list[MealGroup]
