"""Shelf-life estimates for pantry items."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from homebase_food.domain.expiration import (
    ExpirationDefault,
    ExpirationEstimate,
    StorageLocation,
)

FALLBACK_SHELF_LIFE_DAYS: dict[str, int] = {
    "fridge": 7,
    "freezer": 90,
    "pantry": 30,
}


class ExpirationDefaultsRepository(Protocol):
    """Read-only access to expiration reference data."""

    def list_defaults(self) -> list[ExpirationDefault]:
        """Return all expiration defaults."""


@dataclass
class ExpirationService:
    """Estimates when a stored food will expire."""

    repository: ExpirationDefaultsRepository

    def estimate(
        self,
        food_name: str,
        storage_location: StorageLocation,
        date_added: date | None = None,
    ) -> ExpirationEstimate:
        """Match the food against keyword defaults and add its shelf life."""
        added = date_added or date.today()
        defaults = self.repository.list_defaults()
        if not defaults:
            return ExpirationEstimate(
                expiration_date=None,
                estimated=False,
                message="No expiration data available",
            )

        best_match, score = best_keyword_match(food_name, defaults)
        if best_match is None:
            days = FALLBACK_SHELF_LIFE_DAYS[storage_location]
            return ExpirationEstimate(
                expiration_date=added + timedelta(days=days),
                estimated=True,
                shelf_life_days=days,
                category="unknown",
                confidence="low",
            )

        days = best_match.shelf_life_days(storage_location)
        if not days:
            return ExpirationEstimate(
                expiration_date=None,
                estimated=False,
                category=best_match.food_category,
                confidence="high",
                message=(
                    f"{best_match.food_category} cannot be stored in "
                    f"{storage_location}"
                ),
            )

        return ExpirationEstimate(
            expiration_date=added + timedelta(days=days),
            estimated=True,
            shelf_life_days=days,
            category=best_match.food_category,
            confidence="high" if score > 1 else "medium",
        )


def best_keyword_match(
    food_name: str, defaults: list[ExpirationDefault]
) -> tuple[ExpirationDefault | None, int]:
    """Return the default with the most keywords found in the name.

    Ties keep the earliest default.
    """
    normalized = food_name.lower()
    best: ExpirationDefault | None = None
    best_score = 0
    for default in defaults:
        score = sum(1 for keyword in default.keywords if keyword.lower() in normalized)
        if score > best_score:
            best, best_score = default, score
    return best, best_score
