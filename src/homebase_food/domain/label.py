"""Models for nutrition label readings."""

from pydantic import BaseModel, Field

from homebase_food.domain.nutrition import FoodSource


class LabelReading(BaseModel):
    """Raw values read from a nutrition facts panel, per serving."""

    food_name: str | None = None
    serving_size: str | None = None
    calories: float | None = None
    protein: float | None = None
    fat: float | None = None
    carbs: float | None = None
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    error: str | None = None


class CacheCandidate(BaseModel):
    """Per-100g values a caller may confirm into the master food database."""

    normalized_name: str
    food_name: str
    brand: str | None = None
    calories_per_100g: float
    protein_per_100g: float = 0
    fat_per_100g: float = 0
    carbs_per_100g: float = 0
    fiber_per_100g: float = 0
    sugar_per_100g: float = 0
    sodium_mg_per_100g: float = 0
    serving_size_label: str | None = None
    serving_g: float | None = None
    serving_ml: float | None = None
    source: FoodSource
    unverified: bool = False
    match_confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    match_notes: str | None = None


class ScannedFood(BaseModel):
    """Per-serving food item produced by a barcode scan or label photo."""

    food_name: str
    quantity: str
    calories: float
    protein: float
    fat: float
    carbs: float
    fiber: float
    sugar: float
    sodium: float
    source: FoodSource
    provided_by_user: bool = True
    unverified: bool = False
    categories: list[str] = Field(default_factory=list)
    whole_food_ingredients: list[str] = Field(default_factory=list)
    cache_candidate: CacheCandidate | None = None
