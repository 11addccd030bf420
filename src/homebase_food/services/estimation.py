"""AI nutrition estimation and free-text food parsing."""

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime

from homebase_food.domain.nutrition import FoodSource, MacroProfile, MasterFoodEntry
from homebase_food.domain.parsing import MealGroup, MealType, ParsedFood, ParsedFoodItem
from homebase_food.services.llm import (
    LanguageModelClient,
    ModelOptions,
    nullable,
    strict_object,
)
from homebase_food.services.units import normalize_food_name

AI_MATCH_CONFIDENCE = 0.5
DEFAULT_MEAL_CONFIDENCE = 0.85
MIN_MACROS_FOR_CALORIES = 2

_MEAL_TYPES: set[str] = {"breakfast", "lunch", "dinner", "snack"}
_NUMERIC_CLEANUP = re.compile(r"[^0-9.\-]")

_logger = logging.getLogger(__name__)

_NUMBER = {"type": "number"}
_STRING_LIST = {"type": "array", "items": {"type": "string"}}

ESTIMATE_SCHEMA = strict_object(
    {
        "food_name": {"type": "string"},
        "calories_per_100g": _NUMBER,
        "protein_per_100g": _NUMBER,
        "fat_per_100g": _NUMBER,
        "carbs_per_100g": _NUMBER,
        "fiber_per_100g": _NUMBER,
        "sugar_per_100g": _NUMBER,
        "sodium_mg_per_100g": _NUMBER,
        "typical_serving_g": nullable(_NUMBER),
        "notes": nullable({"type": "string"}),
    }
)

PARSE_FOOD_SCHEMA = strict_object(
    {
        "meals": {
            "type": "array",
            "items": strict_object(
                {
                    "meal_type": {
                        "type": "string",
                        "enum": ["breakfast", "lunch", "dinner", "snack"],
                    },
                    "confidence": _NUMBER,
                    "items": {
                        "type": "array",
                        "items": strict_object(
                            {
                                "food_name": {"type": "string"},
                                "quantity": {"type": "string"},
                                "calories": _NUMBER,
                                "protein": _NUMBER,
                                "fat": _NUMBER,
                                "carbs": _NUMBER,
                                "fiber": _NUMBER,
                                "sugar": _NUMBER,
                                "sodium": _NUMBER,
                                "categories": _STRING_LIST,
                                "whole_food_ingredients": _STRING_LIST,
                                "provided_by_user": {"type": "boolean"},
                            }
                        ),
                    },
                }
            ),
        }
    }
)

ESTIMATE_PROMPT = (
    "You are a nutrition database. Give typical nutrition values per 100 g "
    "for the food the user names. Prefer common label values for branded "
    "packaged foods and USDA reference values for whole foods. Never return "
    "placeholder zeros for normal foods. Calories in kcal, protein, fat, "
    "carbs, fiber and sugar in grams, sodium in milligrams. Put the food's "
    "usual single-serving weight in typical_serving_g when one exists."
)

PARSE_FOOD_PROMPT = """You are a nutrition expert. Parse food descriptions and split into separate meals.

CRITICAL RULES:
1) If the user provides nutrition numbers for an item, copy them EXACTLY for that item.
2) If nutrition is not provided, estimate reasonably, but be CONSISTENT across runs:
   - Prefer typical label values / most common serving values for branded packaged foods.
3) Do NOT output placeholder zeros for calories/protein/fat/carbs for normal foods.

MEALS:
- meal_type MUST be one of: breakfast | lunch | dinner | snack
- Post-workout/after workout -> snack

CATEGORIES (assign ALL that apply):
- protein, dairy, vegetable, fruit, grain, fat, beverage

WHOLE FOOD INGREDIENTS (for biodiversity):
- Extract whole/minimally processed ingredients (fruits, vegetables, legumes, nuts, seeds, grains, meats).
- Exclude processed components like syrup/jam/bread unless clearly whole-grain.
- Be specific.

PROVIDED_BY_USER FLAG:
- true if the user explicitly stated ANY nutrition numbers for that specific item
- false if you are estimating

Units: calories kcal; protein/fat/carbs/fiber/sugar grams; sodium mg.

Current time context: {hour}:00"""


@dataclass
class EstimationService:
    """Service that asks a language model for nutrition estimates."""

    client: LanguageModelClient
    options: ModelOptions

    async def estimate_per_100g(self, food_name: str) -> MasterFoodEntry:
        """Estimate per-100g nutrition for a food name."""
        raw = await self.client.extract(
            model=self.options.model,
            reasoning_effort=self.options.reasoning_effort,
            store=self.options.store,
            prompt=ESTIMATE_PROMPT,
            schema_name="nutrition_estimate",
            schema=ESTIMATE_SCHEMA,
            text=food_name,
        )
        per_100g = MacroProfile(
            calories=round(num_or_none(raw.get("calories_per_100g")) or 0),
            protein_g=_round1(raw.get("protein_per_100g")),
            fat_g=_round1(raw.get("fat_per_100g")),
            carbs_g=_round1(raw.get("carbs_per_100g")),
            fiber_g=_round1(raw.get("fiber_per_100g")),
            sugar_g=_round1(raw.get("sugar_per_100g")),
            sodium_mg=round(num_or_none(raw.get("sodium_mg_per_100g")) or 0),
        )
        serving_g = num_or_none(raw.get("typical_serving_g"))
        _logger.info(
            "AI estimate: food=%s calories_per_100g=%s", food_name, per_100g.calories
        )
        return MasterFoodEntry(
            normalized_name=normalize_food_name(food_name),
            food_name=food_name.strip(),
            per_100g=per_100g,
            serving_g=serving_g if serving_g else None,
            source=FoodSource.AI,
            unverified=True,
            match_confidence=AI_MATCH_CONFIDENCE,
            match_notes=str(raw.get("notes") or "") or None,
        )

    async def parse_food(self, description: str) -> ParsedFood:
        """Split a food description into meals with estimated nutrition."""
        raw = await self.client.extract(
            model=self.options.model,
            reasoning_effort=self.options.reasoning_effort,
            store=self.options.store,
            prompt=PARSE_FOOD_PROMPT.format(hour=datetime.now().astimezone().hour),
            schema_name="parsed_food",
            schema=PARSE_FOOD_SCHEMA,
            text=description,
        )
        return normalize_parsed_food(raw)


def num_or_none(value: object) -> float | None:
    """Coerce model output like "1,200 kcal" into a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value) if math.isfinite(value) else None
    cleaned = _NUMERIC_CLEANUP.sub("", str(value).strip().replace(",", ""))
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def normalize_meal_type(value: object) -> MealType:
    text = str(value or "").lower().strip()
    if text in _MEAL_TYPES:
        return text  # type: ignore[return-value]
    return "snack"


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    cleaned = (str(entry or "").strip().lower() for entry in value)
    return [entry for entry in cleaned if entry]


def normalize_food_item(raw: dict[str, object]) -> ParsedFoodItem:
    """Apply provenance rules to a single parsed item.

    All-zero macros are flagged as an unverified estimate. Missing calories
    with at least two macros are recomputed with 4/4/9 kcal per gram. Values
    the user stated are trusted over both.
    """
    calories_raw = num_or_none(raw.get("calories"))
    protein_raw = num_or_none(raw.get("protein"))
    fat_raw = num_or_none(raw.get("fat"))
    carbs_raw = num_or_none(raw.get("carbs"))

    calories = calories_raw or 0.0
    protein = protein_raw or 0.0
    fat = fat_raw or 0.0
    carbs = carbs_raw or 0.0

    source = FoodSource.AI
    unverified = False

    macro_count = sum(
        1 for value in (protein_raw, fat_raw, carbs_raw) if value and value > 0
    )
    if calories == 0 and protein == 0 and fat == 0 and carbs == 0:
        source = FoodSource.AI_ESTIMATED
        unverified = True

    if calories == 0 and macro_count >= MIN_MACROS_FOR_CALORIES:
        calories = float(round(protein * 4 + carbs * 4 + fat * 9))
        source = FoodSource.AI_FIXED_FROM_MACROS
        unverified = True

    provided_by_user = raw.get("provided_by_user") is True
    if provided_by_user:
        source = FoodSource.AI_USER_PROVIDED
        unverified = False

    return ParsedFoodItem(
        food_name=str(raw.get("food_name") or "").strip() or "Unknown food",
        quantity=str(raw.get("quantity") or "").strip() or "1 serving",
        calories=calories,
        protein=protein,
        fat=fat,
        carbs=carbs,
        fiber=num_or_none(raw.get("fiber")) or 0.0,
        sugar=num_or_none(raw.get("sugar")) or 0.0,
        sodium=num_or_none(raw.get("sodium")) or 0.0,
        categories=_string_list(raw.get("categories")),
        whole_food_ingredients=_string_list(raw.get("whole_food_ingredients")),
        provided_by_user=provided_by_user,
        source=source,
        unverified=unverified,
    )


def normalize_parsed_food(raw: dict[str, object]) -> ParsedFood:
    meals_raw = raw.get("meals")
    meals = []
    for meal in meals_raw if isinstance(meals_raw, list) else []:
        items_raw = meal.get("items")
        confidence = num_or_none(meal.get("confidence"))
        meals.append(
            MealGroup(
                meal_type=normalize_meal_type(meal.get("meal_type")),
                confidence=(
                    DEFAULT_MEAL_CONFIDENCE if confidence is None else confidence
                ),
                items=[
                    normalize_food_item(item)
                    for item in (items_raw if isinstance(items_raw, list) else [])
                ],
            )
        )
    return ParsedFood(meals=meals)


def _round1(value: object) -> float:
    return round(num_or_none(value) or 0.0, 1)
