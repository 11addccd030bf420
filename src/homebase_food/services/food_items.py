"""Persistence interface for logged food items."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from homebase_food.domain.nutrition import FoodItem, FoodSource, MacroProfile


class FoodItemRepository(Protocol):
    """Persistence interface for logged food items."""

    def list_missing_macros(self, user_id: UUID, limit: int) -> list[FoodItem]:
        """Return the newest non-authoritative items without calories."""

    def list_missing_biodiversity(self, user_id: UUID, limit: int) -> list[FoodItem]:
        """Return items without whole-food ingredients."""

    def list_logged_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[FoodItem]:
        """Return items logged in a time range."""

    def update_macros(
        self,
        item_id: UUID,
        macros: MacroProfile,
        source: FoodSource,
        unverified: bool,
    ) -> None:
        """Replace an item's macros and provenance."""

    def update_biodiversity(
        self, item_id: UUID, categories: list[str], whole_food_ingredients: list[str]
    ) -> None:
        """Replace an item's categories and whole-food ingredients."""
