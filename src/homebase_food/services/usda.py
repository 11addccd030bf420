"""USDA FoodData Central search."""

import logging
from dataclasses import dataclass

from homebase_food.adapters.fdc_client import FdcClient
from homebase_food.domain.nutrition import FoodSummary, MacroProfile

_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
    "fiber": 1079,
    "sugar": 2000,
    "sodium": 1093,
}

_logger = logging.getLogger(__name__)


class UsdaNotConfiguredError(RuntimeError):
    """Raised when USDA search is called without an API key."""


@dataclass
class UsdaSearchService:
    """Service for per-100g USDA food searches."""

    fdc_client: FdcClient | None

    async def search(self, query: str, limit: int = 5) -> list[FoodSummary]:
        """Search FDC foods and extract per-100g nutrition."""
        if self.fdc_client is None:
            raise UsdaNotConfiguredError("USDA API key not configured")
        try:
            payload = await self.fdc_client.search_foods(query, page_size=limit)
        except Exception as exc:
            _logger.warning(
                "USDA search failed (status=%s): %s",
                _status_code_from_exception(exc),
                exc,
            )
            raise
        foods = [
            FoodSummary(
                fdc_id=food["fdcId"],
                description=food.get("description", ""),
                brand_name=food.get("brandName"),
                data_type=food.get("dataType"),
                per_100g=_extract_macros(food.get("foodNutrients", [])),
            )
            for food in payload.get("foods", [])
        ]
        _logger.info("USDA search: query=%s results=%s", query, len(foods))
        return foods


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _extract_macros(food_nutrients: list[dict[str, object]]) -> MacroProfile:
    """Extract per-100g values from abridged search nutrients."""
    values = dict.fromkeys(_NUTRIENT_IDS, 0.0)
    ids_to_names = {nutrient_id: name for name, nutrient_id in _NUTRIENT_IDS.items()}
    for nutrient in food_nutrients:
        name = ids_to_names.get(nutrient.get("nutrientId"))
        amount = nutrient.get("value")
        if name is not None and amount is not None:
            values[name] = float(amount)

    return MacroProfile(
        calories=values["calories"],
        protein_g=values["protein"],
        fat_g=values["fat"],
        carbs_g=values["carbs"],
        fiber_g=values["fiber"],
        sugar_g=values["sugar"],
        sodium_mg=values["sodium"],
    )
