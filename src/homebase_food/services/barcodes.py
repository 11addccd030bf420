"""Barcode lookups against Open Food Facts."""

import logging
import re
from dataclasses import dataclass

from homebase_food.adapters.off_client import OpenFoodFactsClient
from homebase_food.domain.errors import InvalidBarcodeError, ProductNotFoundError
from homebase_food.domain.label import CacheCandidate, ScannedFood
from homebase_food.domain.nutrition import FoodSource
from homebase_food.services.off_products import (
    cache_entry_from_product,
    has_calories,
    macros_for_basis,
    product_display_name,
)

MIN_BARCODE_DIGITS = 6

_NON_DIGIT = re.compile(r"\D")

_logger = logging.getLogger(__name__)


@dataclass
class BarcodeService:
    """Turns a scanned UPC/EAN code into a loggable food item."""

    off_client: OpenFoodFactsClient

    async def lookup(self, barcode: str) -> ScannedFood:
        """Look up a barcode, preferring per-serving values.

        Falls back to per-100g values when the product has no serving data.
        The returned cache candidate always carries per-100g values so that
        confirming it lets later name lookups hit the local cache.
        """
        clean = clean_barcode(barcode)
        product = await self.off_client.get_product(clean)
        if product is None:
            raise ProductNotFoundError("Product not found in Open Food Facts")

        nutriments = product.get("nutriments") or {}
        has_serving = has_calories(nutriments, "_serving")
        suffix = "_serving" if has_serving else "_100g"
        macros = macros_for_basis(nutriments, suffix)
        food_name = product_display_name(product)

        entry = cache_entry_from_product(product, match_confidence=1.0)
        candidate = (
            CacheCandidate(**entry.to_row()) if entry is not None else None
        )
        _logger.info(
            "Barcode lookup: barcode=%s basis=%s cacheable=%s",
            clean,
            suffix,
            candidate is not None,
        )
        return ScannedFood(
            food_name=food_name,
            quantity=(
                str(product.get("serving_size") or "1 serving") if has_serving else "100g"
            ),
            **macros.to_item_fields(),
            source=FoodSource.BARCODE,
            cache_candidate=candidate,
        )


def clean_barcode(barcode: str) -> str:
    """Strip separators and validate the digit count."""
    clean = _NON_DIGIT.sub("", barcode or "")
    if not clean:
        raise InvalidBarcodeError("Barcode is required")
    if len(clean) < MIN_BARCODE_DIGITS:
        raise InvalidBarcodeError("Invalid barcode, must be at least 6 digits")
    return clean
