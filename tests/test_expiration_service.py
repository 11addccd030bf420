"""Tests for shelf-life estimates."""

from datetime import date, timedelta

from homebase_food.domain.expiration import ExpirationDefault
from homebase_food.services.expiration import ExpirationService, best_keyword_match
from tests.conftest import InMemoryExpirationRepository

ADDED = date(2026, 1, 1)


def _service() -> ExpirationService:
    return ExpirationService(InMemoryExpirationRepository())


def test_multiple_keyword_match_is_high_confidence() -> None:
    estimate = _service().estimate("Chicken breast", "fridge", ADDED)

    assert estimate.category == "poultry"
    assert estimate.confidence == "high"
    assert estimate.shelf_life_days == 2
    assert estimate.expiration_date == date(2026, 1, 3)
    assert estimate.estimated is True


def test_single_keyword_match_is_medium_confidence() -> None:
    estimate = _service().estimate("Greek Yogurt", "freezer", ADDED)

    assert estimate.category == "dairy"
    assert estimate.confidence == "medium"
    assert estimate.expiration_date == ADDED + timedelta(days=90)


def test_unsupported_storage_location_has_no_date() -> None:
    estimate = _service().estimate("milk", "pantry", ADDED)

    assert estimate.expiration_date is None
    assert estimate.estimated is False
    assert estimate.message == "dairy cannot be stored in pantry"


def test_unknown_food_uses_fallback_shelf_life() -> None:
    estimate = _service().estimate("mystery casserole", "freezer", ADDED)

    assert estimate.category == "unknown"
    assert estimate.confidence == "low"
    assert estimate.shelf_life_days == 90
    assert estimate.expiration_date == ADDED + timedelta(days=90)


def test_date_added_defaults_to_today() -> None:
    estimate = _service().estimate("rice", "pantry")

    assert estimate.expiration_date == date.today() + timedelta(days=365)


def test_no_reference_data() -> None:
    service = ExpirationService(InMemoryExpirationRepository(defaults=[]))

    estimate = service.estimate("milk", "fridge", ADDED)

    assert estimate.expiration_date is None
    assert estimate.message == "No expiration data available"


def test_best_keyword_match_keeps_first_on_tie() -> None:
    defaults = [
        ExpirationDefault(food_category="a", keywords=["salad"]),
        ExpirationDefault(food_category="b", keywords=["salad"]),
    ]

    best, score = best_keyword_match("Salad", defaults)

    assert best is not None
    assert best.food_category == "a"
    assert score == 1
