"""Supabase repository for user goals."""

from dataclasses import dataclass, fields
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from homebase_food.domain.goals import UserGoals
from homebase_food.services.goals import GoalsRepository, goals_to_row

_GOAL_FIELDS = {goal_field.name for goal_field in fields(UserGoals)}


@dataclass
class SupabaseGoalsRepository(GoalsRepository):
    """Supabase implementation for goals and their history."""

    client: Client

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return the user's goals row, if present."""
        response = (
            self.client.table("user_goals")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goals(response.data[0])

    def upsert_goals(self, goals: UserGoals) -> UserGoals:
        """Insert or replace the user's goals row."""
        response = (
            self.client.table("user_goals")
            .upsert(
                {**goals_to_row(goals), "updated_at": datetime.now(tz=UTC).isoformat()},
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save goals")
        return _parse_goals(response.data[0])

    def add_history(self, goals: UserGoals) -> None:
        """Append a goals history entry."""
        self.client.table("goals_history").insert(
            {**goals_to_row(goals), "created_at": datetime.now(tz=UTC).isoformat()}
        ).execute()


def _parse_goals(row: dict[str, object]) -> UserGoals:
    """Parse a user_goals row, ignoring columns the model does not know."""
    values = {
        key: value
        for key, value in row.items()
        if key in _GOAL_FIELDS and value is not None
    }
    values["user_id"] = UUID(str(row["user_id"]))
    return UserGoals(**values)
