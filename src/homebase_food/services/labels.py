"""Nutrition label reading using a vision-capable model."""

import base64
import logging
import re
from dataclasses import dataclass

from homebase_food.domain.errors import LabelUnreadableError
from homebase_food.domain.label import CacheCandidate, LabelReading, ScannedFood
from homebase_food.domain.nutrition import FoodSource, MacroProfile
from homebase_food.services.llm import (
    LanguageModelClient,
    ModelOptions,
    nullable,
    strict_object,
)
from homebase_food.services.units import normalize_food_name

_NUMBER = nullable({"type": "number"})
_SERVING_GRAMS = re.compile(r"(\d+(?:\.\d+)?)\s*g\b", re.IGNORECASE)

_logger = logging.getLogger(__name__)

LABEL_SCHEMA = strict_object(
    {
        "food_name": nullable({"type": "string"}),
        "serving_size": nullable({"type": "string"}),
        "calories": _NUMBER,
        "protein": _NUMBER,
        "fat": _NUMBER,
        "carbs": _NUMBER,
        "fiber": _NUMBER,
        "sugar": _NUMBER,
        "sodium": _NUMBER,
        "error": nullable({"type": "string"}),
    }
)

LABEL_PROMPT = (
    "You are a nutrition facts label reader. Read the EXACT numbers printed on "
    "the nutrition facts panel. Do not estimate, round differently, or guess "
    "any values. All numbers are per serving as shown on the label: calories; "
    "protein, total fat, total carbohydrate, dietary fiber and total sugars in "
    "grams (fiber and sugar are 0 if not listed); sodium in milligrams. Copy "
    "serving_size exactly as printed, e.g. '1 cup (240ml)' or '28g (1 oz)'. "
    "Use the product name visible on the label as food_name, or null. If the "
    "image is unclear, not a nutrition label, or values are unreadable, set "
    "error to a brief description."
)


@dataclass
class LabelReaderService:
    """Service that reads nutrition facts panels from photos."""

    client: LanguageModelClient
    options: ModelOptions

    async def read_label(
        self, image_bytes: bytes, mime_type: str | None = None
    ) -> ScannedFood:
        """Read per-serving values from a label photo."""
        raw = await self.client.extract(
            model=self.options.model,
            reasoning_effort=self.options.reasoning_effort,
            store=self.options.store,
            prompt=LABEL_PROMPT,
            schema_name="nutrition_label",
            schema=LABEL_SCHEMA,
            text="Please read all nutrition values exactly as shown on this label.",
            image_data_url=_to_data_url(image_bytes, mime_type),
        )
        reading = LabelReading.model_validate(raw)
        if reading.error:
            raise LabelUnreadableError(reading.error)

        food_name = (reading.food_name or "").strip() or "Unknown Product"
        serving_size = (reading.serving_size or "").strip() or "1 serving"
        macros = MacroProfile(
            calories=round(reading.calories or 0),
            protein_g=round(reading.protein or 0, 1),
            fat_g=round(reading.fat or 0, 1),
            carbs_g=round(reading.carbs or 0, 1),
            fiber_g=round(reading.fiber or 0, 1),
            sugar_g=round(reading.sugar or 0, 1),
            sodium_mg=round(reading.sodium or 0),
        )
        candidate = _cache_candidate(food_name, serving_size, macros)
        _logger.info(
            "Label read: food=%s serving=%s cacheable=%s",
            food_name,
            serving_size,
            candidate is not None,
        )
        return ScannedFood(
            food_name=food_name,
            quantity=serving_size,
            **macros.to_item_fields(),
            source=FoodSource.LABEL_PHOTO,
            cache_candidate=candidate,
        )


def serving_grams(serving_size: str) -> float | None:
    """Return the gram weight printed in a serving size, if any."""
    match = _SERVING_GRAMS.search(serving_size)
    if match is None:
        return None
    grams = float(match.group(1))
    return grams or None


def _cache_candidate(
    food_name: str, serving_size: str, per_serving: MacroProfile
) -> CacheCandidate | None:
    grams = serving_grams(serving_size)
    if grams is None or food_name == "Unknown Product":
        return None
    # scaled() treats its input as a per-100g profile, so invert the ratio.
    per_100g = per_serving.scaled(100 * 100 / grams)
    return CacheCandidate(
        normalized_name=normalize_food_name(food_name),
        food_name=food_name,
        **per_100g.to_per_100g_fields(),
        serving_size_label=serving_size,
        serving_g=grams,
        source=FoodSource.LABEL_PHOTO,
        match_confidence=1.0,
        match_notes="Read from nutrition label",
    )


def _to_data_url(image_bytes: bytes, mime_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL for image input."""
    resolved = mime_type or _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{resolved};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
