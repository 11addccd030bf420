"""Tests for nutrition label reading."""

import asyncio

import pytest

from homebase_food.domain.errors import LabelUnreadableError
from homebase_food.domain.nutrition import FoodSource
from homebase_food.services.labels import LabelReaderService, serving_grams
from homebase_food.services.llm import ModelOptions
from tests.conftest import FakeLanguageModelClient

PNG_BYTES = b"\x89PNG\r\n\x1a\nrest-of-image"


def _label_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "food_name": "Granola Bar",
        "serving_size": "1 bar (40g)",
        "calories": 190,
        "protein": 4,
        "fat": 7,
        "carbs": 29,
        "fiber": 2,
        "sugar": 12,
        "sodium": 150,
        "error": None,
    }
    payload.update(overrides)
    return payload


def _service(
    payload: dict[str, object],
) -> tuple[LabelReaderService, FakeLanguageModelClient]:
    client = FakeLanguageModelClient(payloads={"nutrition_label": payload})
    return LabelReaderService(client=client, options=ModelOptions(model="m")), client


def test_read_label_returns_per_serving_item_and_candidate() -> None:
    service, client = _service(_label_payload())

    scanned = asyncio.run(service.read_label(PNG_BYTES))

    assert scanned.food_name == "Granola Bar"
    assert scanned.quantity == "1 bar (40g)"
    assert scanned.calories == 190
    assert scanned.sodium == 150
    assert scanned.source == FoodSource.LABEL_PHOTO
    candidate = scanned.cache_candidate
    assert candidate is not None
    assert candidate.normalized_name == "granola bar"
    assert candidate.serving_g == 40
    assert candidate.calories_per_100g == 475
    assert candidate.protein_per_100g == 10
    assert candidate.sodium_mg_per_100g == 375
    assert str(client.calls[0]["image_data_url"]).startswith("data:image/png;base64,")


def test_read_label_without_gram_serving_has_no_candidate() -> None:
    service, _ = _service(_label_payload(serving_size=None, food_name=None))

    scanned = asyncio.run(service.read_label(PNG_BYTES, "image/jpeg"))

    assert scanned.food_name == "Unknown Product"
    assert scanned.quantity == "1 serving"
    assert scanned.cache_candidate is None


def test_read_label_reports_model_error() -> None:
    service, _ = _service(_label_payload(error="Image is too blurry"))

    with pytest.raises(LabelUnreadableError, match="blurry"):
        asyncio.run(service.read_label(PNG_BYTES))


@pytest.mark.parametrize(
    ("label", "grams"),
    [("28g (1 oz)", 28), ("2 cookies (31.5 g)", 31.5), ("1 cup (240ml)", None)],
)
def test_serving_grams(label: str, grams: float | None) -> None:
    assert serving_grams(label) == grams
