"""Field extraction for Open Food Facts product payloads."""

import math

from homebase_food.domain.nutrition import FoodSource, MacroProfile, MasterFoodEntry
from homebase_food.services.units import normalize_food_name

UNKNOWN_PRODUCT = "Unknown Product"


def nutrient(nutriments: dict[str, object], key: str) -> float:
    """Return a finite nutriment value, or 0 when missing or malformed."""
    value = nutriments.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return float(value)


def has_calories(nutriments: dict[str, object], suffix: str) -> bool:
    """Return true when the product reports calories for the given basis."""
    value = nutriments.get(f"energy-kcal{suffix}")
    return isinstance(value, int | float) and not isinstance(value, bool)


def product_display_name(product: dict[str, object]) -> str:
    """Brand and product name joined, the way foods are logged."""
    parts = [product.get("brands"), product.get("product_name")]
    name = " ".join(str(part) for part in parts if part)
    return name or UNKNOWN_PRODUCT


def primary_brand(product: dict[str, object]) -> str | None:
    """First brand from the comma-separated brand list."""
    brands = product.get("brands")
    if not brands:
        return None
    return str(brands).split(",")[0].strip() or None


def macros_for_basis(nutriments: dict[str, object], suffix: str) -> MacroProfile:
    """Extract macros for "_100g" or "_serving" values, rounded for display.

    Open Food Facts stores sodium in grams; the result carries milligrams.
    """
    return MacroProfile(
        calories=round(nutrient(nutriments, f"energy-kcal{suffix}")),
        protein_g=round(nutrient(nutriments, f"proteins{suffix}"), 1),
        fat_g=round(nutrient(nutriments, f"fat{suffix}"), 1),
        carbs_g=round(nutrient(nutriments, f"carbohydrates{suffix}"), 1),
        fiber_g=round(nutrient(nutriments, f"fiber{suffix}"), 1),
        sugar_g=round(nutrient(nutriments, f"sugars{suffix}"), 1),
        sodium_mg=round(nutrient(nutriments, f"sodium{suffix}") * 1000),
    )


def serving_amounts(product: dict[str, object]) -> tuple[float | None, float | None]:
    """Return (serving grams, serving millilitres) from the serving fields."""
    label = product.get("serving_size")
    raw_quantity = product.get("serving_quantity")
    if not label or raw_quantity in (None, ""):
        return None, None
    try:
        quantity = float(raw_quantity)
    except (TypeError, ValueError):
        return None, None
    if not quantity:
        return None, None
    lowered = str(label).lower()
    if "ml" in lowered or "fl oz" in lowered:
        return None, quantity
    if "g" in lowered:
        return quantity, None
    return None, None


def cache_entry_from_product(
    product: dict[str, object],
    *,
    match_confidence: float,
    food_name: str | None = None,
) -> MasterFoodEntry | None:
    """Build a per-100g cache entry, or None when the product lacks 100g data."""
    nutriments = product.get("nutriments") or {}
    if not has_calories(nutriments, "_100g"):
        return None
    name = food_name or product_display_name(product)
    serving_g, serving_ml = serving_amounts(product)
    return MasterFoodEntry(
        normalized_name=normalize_food_name(name),
        food_name=name,
        brand=primary_brand(product),
        per_100g=macros_for_basis(nutriments, "_100g"),
        serving_size_label=product.get("serving_size") or None,
        serving_g=serving_g,
        serving_ml=serving_ml,
        source=FoodSource.OFF,
        unverified=False,
        match_confidence=match_confidence,
        match_notes=product.get("product_name") or None,
    )
