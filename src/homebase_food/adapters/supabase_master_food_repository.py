"""Supabase repository for the master food database."""

from dataclasses import dataclass

from supabase import Client

from homebase_food.domain.nutrition import (
    FoodSource,
    MacroProfile,
    MasterFoodEntry,
    parse_food_source,
)
from homebase_food.services.master_foods import MasterFoodRepository

_TABLE = "master_food_database"


@dataclass
class SupabaseMasterFoodRepository(MasterFoodRepository):
    """Supabase-backed nutrition cache keyed by normalized name."""

    client: Client

    def get_by_normalized_name(self, normalized_name: str) -> MasterFoodEntry | None:
        """Return the cached row for a normalized name, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("normalized_name", normalized_name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def upsert_entry(self, entry: MasterFoodEntry) -> MasterFoodEntry:
        """Insert or replace the row for the entry's normalized name."""
        response = (
            self.client.table(_TABLE)
            .upsert(entry.to_row(), on_conflict="normalized_name")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to upsert master food entry")
        return _parse_entry(response.data[0])


def _parse_entry(row: dict[str, object]) -> MasterFoodEntry:
    """Parse a master food row into a domain model."""
    return MasterFoodEntry(
        normalized_name=str(row["normalized_name"]),
        food_name=str(row.get("food_name") or row["normalized_name"]),
        brand=row.get("brand"),
        per_100g=MacroProfile(
            calories=float(row.get("calories_per_100g") or 0),
            protein_g=float(row.get("protein_per_100g") or 0),
            fat_g=float(row.get("fat_per_100g") or 0),
            carbs_g=float(row.get("carbs_per_100g") or 0),
            fiber_g=float(row.get("fiber_per_100g") or 0),
            sugar_g=float(row.get("sugar_per_100g") or 0),
            sodium_mg=float(row.get("sodium_mg_per_100g") or 0),
        ),
        serving_size_label=row.get("serving_size_label"),
        serving_g=row.get("serving_g"),
        serving_ml=row.get("serving_ml"),
        source=parse_food_source(row.get("source"), FoodSource.CACHE),
        unverified=bool(row.get("unverified", False)),
        match_confidence=float(row.get("match_confidence") or 0),
        match_notes=row.get("match_notes"),
    )
