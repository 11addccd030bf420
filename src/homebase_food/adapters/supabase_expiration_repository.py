"""Supabase repository for expiration reference data."""

from dataclasses import dataclass

from supabase import Client

from homebase_food.domain.expiration import ExpirationDefault
from homebase_food.services.expiration import ExpirationDefaultsRepository


@dataclass
class SupabaseExpirationRepository(ExpirationDefaultsRepository):
    """Reads shelf-life defaults from Supabase."""

    client: Client

    def list_defaults(self) -> list[ExpirationDefault]:
        """Return all expiration defaults."""
        response = self.client.table("food_expiration_defaults").select("*").execute()
        return [
            ExpirationDefault(
                food_category=str(row.get("food_category", "")),
                keywords=list(row.get("keywords") or []),
                fridge_days=row.get("fridge_days"),
                freezer_days=row.get("freezer_days"),
                pantry_days=row.get("pantry_days"),
            )
            for row in response.data or []
        ]
