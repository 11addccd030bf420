"""Domain models for pantry expiration estimates."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

StorageLocation = Literal["fridge", "freezer", "pantry"]


@dataclass(frozen=True)
class ExpirationDefault:
    """Reference shelf life for a food category."""

    food_category: str
    keywords: list[str] = field(default_factory=list)
    fridge_days: int | None = None
    freezer_days: int | None = None
    pantry_days: int | None = None

    def shelf_life_days(self, storage_location: StorageLocation) -> int | None:
        """Return shelf life for a storage location, if the food keeps there."""
        return {
            "fridge": self.fridge_days,
            "freezer": self.freezer_days,
            "pantry": self.pantry_days,
        }[storage_location]


@dataclass(frozen=True)
class ExpirationEstimate:
    """Estimated expiration for a stored food."""

    expiration_date: date | None
    estimated: bool
    shelf_life_days: int | None = None
    category: str | None = None
    confidence: Literal["low", "medium", "high"] | None = None
    message: str | None = None
