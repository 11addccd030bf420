"""User nutrition goals."""

from dataclasses import asdict, dataclass
from typing import Protocol
from uuid import UUID

from homebase_food.domain.goals import EffectiveTargets, UserGoals


class GoalsRepository(Protocol):
    """Persistence interface for user goals."""

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return the user's goals row, if present."""

    def upsert_goals(self, goals: UserGoals) -> UserGoals:
        """Insert or replace the user's goals row."""

    def add_history(self, goals: UserGoals) -> None:
        """Append a goals history entry."""


@dataclass
class GoalsService:
    """Application service for reading and saving goals."""

    repository: GoalsRepository

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return stored goals for a user."""
        return self.repository.get_goals(user_id)

    def save_goals(self, goals: UserGoals) -> UserGoals:
        """Upsert goals and record the change in history."""
        saved = self.repository.upsert_goals(goals)
        self.repository.add_history(saved)
        return saved


def effective_targets(goals: UserGoals) -> EffectiveTargets:
    """Apply overrides on top of the calculated baseline targets."""
    return EffectiveTargets(
        calories=_pick(goals.override_calories, goals.target_calories),
        protein=_pick(goals.override_protein, goals.target_protein),
        fat=_pick(goals.override_fat, goals.target_fat),
        carbs=_pick(goals.override_carbs, goals.target_carbs),
        fiber=_pick(goals.override_fiber, goals.target_fiber),
        sugar_limit=goals.sugar_limit,
        sodium_limit=goals.sodium_limit,
        biodiversity=goals.biodiversity_target,
    )


def goals_to_row(goals: UserGoals) -> dict[str, object]:
    """Serialize goals for the user_goals table."""
    row = asdict(goals)
    row["user_id"] = str(goals.user_id)
    return row


def _pick(override: float | None, baseline: float) -> float:
    return override if override else baseline
