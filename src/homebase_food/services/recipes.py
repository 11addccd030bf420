"""Meal ingredient parsing from text, saved meals or recipe URLs."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from homebase_food.adapters.recipe_page_client import RecipePageClient
from homebase_food.domain.errors import RecipeInputError, SavedMealNotFoundError
from homebase_food.domain.recipes import (
    ParsedRecipe,
    RecipeIngredient,
    RecipeInputType,
    SavedMeal,
)
from homebase_food.services.llm import (
    LanguageModelClient,
    ModelOptions,
    nullable,
    strict_object,
)

DEFAULT_SERVINGS = 4

_logger = logging.getLogger(__name__)

INGREDIENT_LINES_SCHEMA = strict_object(
    {"ingredients": {"type": "array", "items": {"type": "string"}}}
)

INGREDIENTS_SCHEMA = strict_object(
    {
        "ingredients": {
            "type": "array",
            "items": strict_object(
                {
                    "name": {"type": "string"},
                    "quantity": nullable({"type": "number"}),
                    "unit": nullable({"type": "string"}),
                    "original_text": {"type": "string"},
                }
            ),
        }
    }
)

EXTRACT_PROMPT = (
    "Extract the ingredient list from this recipe webpage text. "
    "Return only the ingredients, one entry per ingredient."
)

PARSE_PROMPT = (
    "You are a recipe parser. Extract structured ingredient data from the "
    "given text. For each ingredient give name (the food item), quantity "
    "(numeric amount), unit (cup, tbsp, oz, g, lb, piece, etc.) and "
    "original_text (the exact text as provided). If servings are mentioned, "
    "scale quantities appropriately. Default serving size: {servings}"
)


class SavedMealRepository(Protocol):
    """Read access to a user's saved meals."""

    def get_saved_meal(self, meal_id: str, user_id: UUID | None) -> SavedMeal | None:
        """Return a saved meal owned by the user, if present."""


@dataclass
class RecipeService:
    """Builds a structured ingredient list for a meal."""

    client: LanguageModelClient
    options: ModelOptions
    page_client: RecipePageClient
    saved_meals: SavedMealRepository

    async def parse_ingredients(
        self,
        input_type: RecipeInputType,
        value: str,
        servings: int | None = None,
        user_id: UUID | None = None,
    ) -> ParsedRecipe:
        """Turn text, a saved meal id or a recipe URL into ingredients."""
        resolved_servings = servings or DEFAULT_SERVINGS
        recipe_url = ""
        instructions: list[str] = []

        if input_type == "text":
            meal_name = "Custom Meal"
            ingredients_text = value
        elif input_type == "saved_meal":
            saved = self.saved_meals.get_saved_meal(value, user_id)
            if saved is None:
                raise SavedMealNotFoundError("Saved meal not found")
            meal_name = saved.meal_name
            recipe_url = saved.recipe_url or ""
            instructions = list(saved.recipe_instructions)
            ingredients_text = ", ".join(
                f"{item.get('quantity', '')} {item.get('food_name', '')}".strip()
                for item in saved.items
            )
        else:
            meal_name, ingredients_text, instructions = await self._from_url(value)
            recipe_url = value

        if not ingredients_text.strip():
            raise RecipeInputError("No ingredients found")

        raw = await self.client.extract(
            model=self.options.model,
            reasoning_effort=self.options.reasoning_effort,
            store=self.options.store,
            prompt=PARSE_PROMPT.format(servings=resolved_servings),
            schema_name="recipe_ingredients",
            schema=INGREDIENTS_SCHEMA,
            text=ingredients_text,
        )
        ingredients = [
            RecipeIngredient.model_validate(item)
            for item in raw.get("ingredients") or []
        ]
        return ParsedRecipe(
            meal_name=meal_name,
            servings=resolved_servings,
            ingredients=ingredients,
            recipe_url=recipe_url,
            recipe_instructions=instructions,
            source=input_type,
        )

    async def _from_url(self, url: str) -> tuple[str, str, list[str]]:
        try:
            page = await self.page_client.fetch(url)
        except Exception as exc:
            _logger.warning("Recipe page fetch failed: %s", exc, extra={"url": url})
            raise RecipeInputError(
                "Failed to parse recipe URL. Please try entering ingredients manually."
            ) from exc

        ingredients = page.ingredients
        if not ingredients and page.page_text:
            raw = await self.client.extract(
                model=self.options.model,
                reasoning_effort=self.options.reasoning_effort,
                store=self.options.store,
                prompt=EXTRACT_PROMPT,
                schema_name="recipe_ingredient_lines",
                schema=INGREDIENT_LINES_SCHEMA,
                text=page.page_text,
            )
            ingredients = [
                line.strip() for line in raw.get("ingredients") or [] if line.strip()
            ]
        return page.title, ", ".join(ingredients), page.instructions
