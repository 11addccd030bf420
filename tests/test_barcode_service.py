"""Tests for barcode lookups."""

import asyncio

import pytest

from homebase_food.domain.errors import InvalidBarcodeError, ProductNotFoundError
from homebase_food.domain.nutrition import FoodSource
from homebase_food.services.barcodes import BarcodeService, clean_barcode
from tests.conftest import FakeOpenFoodFactsClient, off_product


def test_clean_barcode_strips_separators() -> None:
    assert clean_barcode("0 49000-02890 4") == "049000028904"


@pytest.mark.parametrize("raw", ["", "abc", "12345"])
def test_clean_barcode_rejects_short_codes(raw: str) -> None:
    with pytest.raises(InvalidBarcodeError):
        clean_barcode(raw)


def test_lookup_prefers_serving_values() -> None:
    product = off_product(
        **{
            "energy-kcal_serving": 146,
            "proteins_serving": 7.7,
            "fat_serving": 7.9,
            "carbohydrates_serving": 11.5,
            "sodium_serving": 0.1,
        }
    )
    client = FakeOpenFoodFactsClient(products={"049000028904": product})

    scanned = asyncio.run(BarcodeService(client).lookup("049000028904"))

    assert scanned.food_name == "Acme Whole Milk"
    assert scanned.quantity == "240 ml"
    assert scanned.calories == 146
    assert scanned.protein == 7.7
    assert scanned.sodium == 100
    assert scanned.source == FoodSource.BARCODE
    assert scanned.provided_by_user is True
    candidate = scanned.cache_candidate
    assert candidate is not None
    assert candidate.source == FoodSource.OFF
    assert candidate.match_confidence == 1.0
    assert candidate.calories_per_100g == 61
    assert candidate.sodium_mg_per_100g == 40
    assert candidate.serving_ml == 240


def test_lookup_falls_back_to_per_100g_values() -> None:
    client = FakeOpenFoodFactsClient(products={"12345678": off_product()})

    scanned = asyncio.run(BarcodeService(client).lookup("12345678"))

    assert scanned.quantity == "100g"
    assert scanned.calories == 61
    assert scanned.fat == 3.3
    assert scanned.sodium == 40


def test_lookup_without_100g_data_has_no_cache_candidate() -> None:
    product = off_product(**{"energy-kcal_serving": 200})
    del product["nutriments"]["energy-kcal_100g"]
    client = FakeOpenFoodFactsClient(products={"12345678": product})

    scanned = asyncio.run(BarcodeService(client).lookup("12345678"))

    assert scanned.calories == 200
    assert scanned.cache_candidate is None


def test_lookup_unknown_product() -> None:
    client = FakeOpenFoodFactsClient()

    with pytest.raises(ProductNotFoundError):
        asyncio.run(BarcodeService(client).lookup("12345678"))
