"""Pydantic request models for the HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from homebase_food.domain.expiration import StorageLocation
from homebase_food.domain.goals import (
    DEFAULT_BIODIVERSITY_TARGET,
    DEFAULT_FIBER_TARGET_G,
    DEFAULT_SODIUM_LIMIT_MG,
    DEFAULT_SUGAR_LIMIT_G,
)
from homebase_food.domain.recipes import RecipeInputType


class CamelModel(BaseModel):
    """Request body accepting camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FoodMacrosRequest(CamelModel):
    food_name: str = Field(min_length=1)
    quantity: str | None = None


class BarcodeRequest(CamelModel):
    barcode: str


class NutritionLabelRequest(CamelModel):
    image_base64: str = Field(min_length=1)
    mime_type: str | None = None


class ParseFoodRequest(CamelModel):
    food_description: str = Field(min_length=1)


class MealIngredientsRequest(CamelModel):
    input_type: RecipeInputType
    input: str = Field(min_length=1)
    servings: int | None = Field(default=None, gt=0)
    user_id: UUID | None = None


class UsdaSearchRequest(CamelModel):
    query: str = Field(min_length=1)


class ExpirationRequest(CamelModel):
    food_name: str = Field(min_length=1)
    storage_location: StorageLocation
    date_added: date | None = None


class GoalsRequest(CamelModel):
    """Goals as edited by the user; omitted limits fall back to defaults."""

    target_calories: float = Field(default=0, ge=0)
    target_protein: float = Field(default=0, ge=0)
    target_fat: float = Field(default=0, ge=0)
    target_carbs: float = Field(default=0, ge=0)
    target_fiber: float = Field(default=DEFAULT_FIBER_TARGET_G, ge=0)
    override_calories: float | None = None
    override_protein: float | None = None
    override_fat: float | None = None
    override_carbs: float | None = None
    override_fiber: float | None = None
    sugar_limit: int = DEFAULT_SUGAR_LIMIT_G
    sodium_limit: int = DEFAULT_SODIUM_LIMIT_MG
    biodiversity_target: int = Field(default=DEFAULT_BIODIVERSITY_TARGET, ge=0)
    tdee: float | None = None
    goal_type: str | None = None


class BackfillRequest(CamelModel):
    user_id: UUID
