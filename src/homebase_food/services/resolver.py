"""Cache-first food macro resolution."""

import logging
from dataclasses import dataclass

from homebase_food.adapters.off_client import OpenFoodFactsClient
from homebase_food.domain.errors import MacroResolutionError
from homebase_food.domain.nutrition import FoodSource, MasterFoodEntry, ResolvedFood
from homebase_food.services.estimation import EstimationService
from homebase_food.services.master_foods import MasterFoodRepository
from homebase_food.services.off_products import (
    cache_entry_from_product,
    product_display_name,
)
from homebase_food.services.units import (
    DEFAULT_GRAMS,
    convert_to_grams,
    name_match_confidence,
    normalize_food_name,
)

MIN_NAME_MATCH_CONFIDENCE = 0.5

_logger = logging.getLogger(__name__)


@dataclass
class FoodMacroResolver:
    """Resolves per-100g nutrition for a food name.

    Stages run in a fixed order and the first one that succeeds wins:
    the master food database, Open Food Facts name search, then an AI
    estimate. Anything not already cached is written back under the
    normalized name so the next lookup is a cache hit.
    """

    repository: MasterFoodRepository
    off_client: OpenFoodFactsClient
    estimation_service: EstimationService
    off_page_size: int = 5

    async def resolve(
        self, food_name: str, quantity: str | None = None
    ) -> ResolvedFood:
        """Resolve a food and scale its macros to the requested quantity."""
        normalized = normalize_food_name(food_name)
        if not normalized:
            raise MacroResolutionError("Food name is required")
        grams = convert_to_grams(quantity) if quantity else DEFAULT_GRAMS

        cached = self.repository.get_by_normalized_name(normalized)
        if cached is not None:
            _logger.info("Macro resolution: food=%s source=cache", normalized)
            return _resolved(cached, FoodSource.CACHE, grams)

        entry = await self._from_open_food_facts(food_name)
        if entry is None:
            entry = await self._from_estimate(food_name)

        self._write_back(entry)
        _logger.info(
            "Macro resolution: food=%s source=%s confidence=%s",
            normalized,
            entry.source.value,
            entry.match_confidence,
        )
        return _resolved(entry, entry.source, grams)

    async def _from_open_food_facts(self, food_name: str) -> MasterFoodEntry | None:
        try:
            products = await self.off_client.search_products(
                food_name, page_size=self.off_page_size
            )
        except Exception:
            _logger.warning(
                "Open Food Facts search failed",
                exc_info=True,
                extra={"food": food_name},
            )
            return None

        for product in products:
            confidence = name_match_confidence(
                food_name, product_display_name(product)
            )
            if confidence < MIN_NAME_MATCH_CONFIDENCE:
                continue
            entry = cache_entry_from_product(
                product, match_confidence=confidence, food_name=food_name.strip()
            )
            if entry is not None:
                return entry
        return None

    async def _from_estimate(self, food_name: str) -> MasterFoodEntry:
        try:
            return await self.estimation_service.estimate_per_100g(food_name)
        except Exception as exc:
            raise MacroResolutionError(
                f"Could not resolve nutrition for {food_name!r}"
            ) from exc

    def _write_back(self, entry: MasterFoodEntry) -> None:
        try:
            self.repository.upsert_entry(entry)
        except Exception:
            _logger.exception(
                "Failed to cache resolved food",
                extra={"normalized_name": entry.normalized_name},
            )


def _resolved(entry: MasterFoodEntry, source: FoodSource, grams: float) -> ResolvedFood:
    return ResolvedFood(
        entry=entry,
        source=source,
        grams=grams,
        scaled=entry.per_100g.scaled(grams),
    )
