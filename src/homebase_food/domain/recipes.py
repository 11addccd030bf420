"""Domain models for recipe ingredient parsing."""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel

RecipeInputType = Literal["text", "saved_meal", "url"]


class RecipeIngredient(BaseModel):
    """Structured ingredient parsed from recipe text."""

    name: str
    quantity: float | None = None
    unit: str | None = None
    original_text: str | None = None


@dataclass(frozen=True)
class RecipePage:
    """Content scraped from a recipe web page."""

    title: str
    ingredients: list[str]
    instructions: list[str]
    page_text: str


@dataclass(frozen=True)
class SavedMeal:
    """A user's saved meal template."""

    id: str
    meal_name: str
    items: list[dict[str, object]]
    recipe_url: str | None = None
    recipe_instructions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedRecipe:
    """Ingredients and metadata for a meal built from recipe input."""

    meal_name: str
    servings: int
    ingredients: list[RecipeIngredient]
    recipe_url: str
    recipe_instructions: list[str]
    source: RecipeInputType
