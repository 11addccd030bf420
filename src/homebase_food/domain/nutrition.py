"""Nutrition domain models."""

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID


class FoodSource(str, Enum):
    """Where a nutrition value came from."""

    CACHE = "cache"
    OFF = "off"
    AI = "ai"
    AI_ESTIMATED = "ai_estimated"
    AI_FIXED_FROM_MACROS = "ai_fixed_from_macros"
    AI_USER_PROVIDED = "ai_user_provided"
    BARCODE = "barcode"
    LABEL_PHOTO = "label_photo"


AUTHORITATIVE_SOURCES = frozenset(
    {FoodSource.BARCODE, FoodSource.LABEL_PHOTO, FoodSource.AI_USER_PROVIDED}
)

# Tags written by earlier versions of the app.
_LEGACY_SOURCES = {"openfoodfacts": FoodSource.OFF}


def parse_food_source(
    value: object, default: FoodSource | None = None
) -> FoodSource | None:
    """Map a stored source tag to a FoodSource, using ``default`` when unknown."""
    if not value:
        return default
    raw = str(value)
    if raw in _LEGACY_SOURCES:
        return _LEGACY_SOURCES[raw]
    try:
        return FoodSource(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class MacroProfile:
    """Macronutrient profile for a food item or a 100 g reference amount."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0

    def scaled(self, grams: float) -> "MacroProfile":
        """Scale per-100g values to the given weight, rounded for display."""
        ratio = grams / 100
        return MacroProfile(
            calories=round(self.calories * ratio),
            protein_g=round(self.protein_g * ratio, 1),
            fat_g=round(self.fat_g * ratio, 1),
            carbs_g=round(self.carbs_g * ratio, 1),
            fiber_g=round(self.fiber_g * ratio, 1),
            sugar_g=round(self.sugar_g * ratio, 1),
            sodium_mg=round(self.sodium_mg * ratio),
        )

    def to_item_fields(self) -> dict[str, float]:
        """Return the macro columns used by logged food items."""
        return {
            "calories": self.calories,
            "protein": self.protein_g,
            "fat": self.fat_g,
            "carbs": self.carbs_g,
            "fiber": self.fiber_g,
            "sugar": self.sugar_g,
            "sodium": self.sodium_mg,
        }

    def to_per_100g_fields(self) -> dict[str, float]:
        """Return the per-100g columns used by the master food database."""
        return {
            "calories_per_100g": self.calories,
            "protein_per_100g": self.protein_g,
            "fat_per_100g": self.fat_g,
            "carbs_per_100g": self.carbs_g,
            "fiber_per_100g": self.fiber_g,
            "sugar_per_100g": self.sugar_g,
            "sodium_mg_per_100g": self.sodium_mg,
        }


@dataclass(frozen=True)
class MasterFoodEntry:
    """A cached, normalized food with per-100g nutrition."""

    normalized_name: str
    food_name: str
    per_100g: MacroProfile
    source: FoodSource
    unverified: bool
    match_confidence: float
    brand: str | None = None
    serving_size_label: str | None = None
    serving_g: float | None = None
    serving_ml: float | None = None
    match_notes: str | None = None

    def to_row(self) -> dict[str, object]:
        """Serialize into a master food database row."""
        return {
            "normalized_name": self.normalized_name,
            "food_name": self.food_name,
            "brand": self.brand,
            **self.per_100g.to_per_100g_fields(),
            "serving_size_label": self.serving_size_label,
            "serving_g": self.serving_g,
            "serving_ml": self.serving_ml,
            "source": self.source.value,
            "unverified": self.unverified,
            "match_confidence": self.match_confidence,
            "match_notes": self.match_notes,
        }


@dataclass(frozen=True)
class ResolvedFood:
    """Outcome of the cache-first resolution chain."""

    entry: MasterFoodEntry
    source: FoodSource
    grams: float
    scaled: MacroProfile

    @property
    def unverified(self) -> bool:
        return self.entry.unverified

    @property
    def match_confidence(self) -> float:
        return self.entry.match_confidence


@dataclass(frozen=True)
class FoodSummary:
    """Search hit from USDA FoodData Central with per-100g nutrition."""

    fdc_id: int
    description: str
    brand_name: str | None
    data_type: str | None
    per_100g: MacroProfile


@dataclass(frozen=True)
class FoodItem:
    """A logged consumption record."""

    id: UUID
    user_id: UUID
    food_name: str
    quantity: str
    macros: MacroProfile
    source: FoodSource | None = None
    unverified: bool = False
    provided_by_user: bool = False
    categories: list[str] = field(default_factory=list)
    whole_food_ingredients: list[str] = field(default_factory=list)

    @property
    def is_authoritative(self) -> bool:
        """Return true when the item's values must never be overwritten."""
        return self.provided_by_user or self.source in AUTHORITATIVE_SOURCES
