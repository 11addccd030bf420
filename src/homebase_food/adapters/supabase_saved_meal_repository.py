"""Supabase repository for saved meals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from homebase_food.domain.recipes import SavedMeal
from homebase_food.services.recipes import SavedMealRepository


@dataclass
class SupabaseSavedMealRepository(SavedMealRepository):
    """Supabase-backed read access to saved meals."""

    client: Client

    def get_saved_meal(self, meal_id: str, user_id: UUID | None) -> SavedMeal | None:
        """Return a saved meal, scoped to the user when one is given."""
        query = self.client.table("saved_meals").select("*").eq("id", meal_id)
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        response = query.limit(1).execute()
        if not response.data:
            return None
        row = response.data[0]
        return SavedMeal(
            id=str(row["id"]),
            meal_name=str(row.get("meal_name") or "Saved Meal"),
            items=list(row.get("items") or []),
            recipe_url=row.get("recipe_url"),
            recipe_instructions=list(row.get("recipe_instructions") or []),
        )
