"""Master food database (the shared nutrition cache)."""

from dataclasses import dataclass
from typing import Protocol

from homebase_food.domain.label import CacheCandidate
from homebase_food.domain.nutrition import MacroProfile, MasterFoodEntry
from homebase_food.services.units import normalize_food_name


class MasterFoodRepository(Protocol):
    """Persistence interface for normalized food cache rows."""

    def get_by_normalized_name(self, normalized_name: str) -> MasterFoodEntry | None:
        """Return the cached entry for a normalized name, if present."""

    def upsert_entry(self, entry: MasterFoodEntry) -> MasterFoodEntry:
        """Insert or replace the row keyed by the entry's normalized name."""


@dataclass
class MasterFoodService:
    """Writes user-confirmed foods into the master food database."""

    repository: MasterFoodRepository

    def confirm(self, candidate: CacheCandidate) -> MasterFoodEntry:
        """Store a cache candidate under the canonical normalized key."""
        entry = MasterFoodEntry(
            normalized_name=normalize_food_name(candidate.food_name),
            food_name=candidate.food_name,
            brand=candidate.brand,
            per_100g=MacroProfile(
                calories=candidate.calories_per_100g,
                protein_g=candidate.protein_per_100g,
                fat_g=candidate.fat_per_100g,
                carbs_g=candidate.carbs_per_100g,
                fiber_g=candidate.fiber_per_100g,
                sugar_g=candidate.sugar_per_100g,
                sodium_mg=candidate.sodium_mg_per_100g,
            ),
            serving_size_label=candidate.serving_size_label,
            serving_g=candidate.serving_g,
            serving_ml=candidate.serving_ml,
            source=candidate.source,
            unverified=candidate.unverified,
            match_confidence=candidate.match_confidence,
            match_notes=candidate.match_notes,
        )
        return self.repository.upsert_entry(entry)
