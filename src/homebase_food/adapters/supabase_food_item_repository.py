"""Supabase repository for logged food items."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from homebase_food.domain.nutrition import (
    AUTHORITATIVE_SOURCES,
    FoodItem,
    FoodSource,
    MacroProfile,
    parse_food_source,
)
from homebase_food.services.food_items import FoodItemRepository

_TABLE = "food_items"
_AUTHORITATIVE = ",".join(sorted(source.value for source in AUTHORITATIVE_SOURCES))


@dataclass
class SupabaseFoodItemRepository(FoodItemRepository):
    """Supabase-backed repository for food items."""

    client: Client

    def list_missing_macros(self, user_id: UUID, limit: int) -> list[FoodItem]:
        """Return the newest re-resolvable items whose calories are null or zero.

        Barcode, label and user-provided rows are excluded so they never take
        up batch slots.
        """
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .or_("calories.is.null,calories.eq.0")
            .or_(f"source.is.null,source.not.in.({_AUTHORITATIVE})")
            .not_.is_("provided_by_user", "true")
            .order("logged_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def list_missing_biodiversity(self, user_id: UUID, limit: int) -> list[FoodItem]:
        """Return items with no whole-food ingredients recorded."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .or_("whole_food_ingredients.is.null,whole_food_ingredients.eq.{}")
            .order("logged_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def list_logged_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[FoodItem]:
        """Return items logged in [start, end]."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lte("logged_at", end.isoformat())
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def update_macros(
        self,
        item_id: UUID,
        macros: MacroProfile,
        source: FoodSource,
        unverified: bool,
    ) -> None:
        """Replace an item's macros and provenance."""
        self.client.table(_TABLE).update(
            {
                **macros.to_item_fields(),
                "source": source.value,
                "unverified": unverified,
            }
        ).eq("id", str(item_id)).execute()

    def update_biodiversity(
        self, item_id: UUID, categories: list[str], whole_food_ingredients: list[str]
    ) -> None:
        """Replace an item's categories and whole-food ingredients."""
        self.client.table(_TABLE).update(
            {
                "categories": categories,
                "whole_food_ingredients": whole_food_ingredients,
            }
        ).eq("id", str(item_id)).execute()


def _parse_item(row: dict[str, object]) -> FoodItem:
    """Parse a food item row into a domain model."""
    return FoodItem(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food_name=str(row.get("food_name", "")),
        quantity=str(row.get("quantity") or "1 serving"),
        macros=MacroProfile(
            calories=float(row.get("calories") or 0),
            protein_g=float(row.get("protein") or 0),
            fat_g=float(row.get("fat") or 0),
            carbs_g=float(row.get("carbs") or 0),
            fiber_g=float(row.get("fiber") or 0),
            sugar_g=float(row.get("sugar") or 0),
            sodium_mg=float(row.get("sodium") or 0),
        ),
        source=parse_food_source(row.get("source")),
        unverified=bool(row.get("unverified", False)),
        provided_by_user=bool(row.get("provided_by_user", False)),
        categories=list(row.get("categories") or []),
        whole_food_ingredients=list(row.get("whole_food_ingredients") or []),
    )
