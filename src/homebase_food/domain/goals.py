"""Domain models for user nutrition goals."""

from dataclasses import dataclass
from uuid import UUID

DEFAULT_SUGAR_LIMIT_G = 50
DEFAULT_SODIUM_LIMIT_MG = 2300
DEFAULT_BIODIVERSITY_TARGET = 5
DEFAULT_FIBER_TARGET_G = 25


@dataclass(frozen=True)
class UserGoals:
    """Baseline targets, overrides and fixed limits for a user."""

    user_id: UUID
    target_calories: float = 0
    target_protein: float = 0
    target_fat: float = 0
    target_carbs: float = 0
    target_fiber: float = DEFAULT_FIBER_TARGET_G
    override_calories: float | None = None
    override_protein: float | None = None
    override_fat: float | None = None
    override_carbs: float | None = None
    override_fiber: float | None = None
    sugar_limit: int = DEFAULT_SUGAR_LIMIT_G
    sodium_limit: int = DEFAULT_SODIUM_LIMIT_MG
    biodiversity_target: int = DEFAULT_BIODIVERSITY_TARGET
    tdee: float | None = None
    goal_type: str | None = None


@dataclass(frozen=True)
class EffectiveTargets:
    """Targets after applying user overrides."""

    calories: float
    protein: float
    fat: float
    carbs: float
    fiber: float
    sugar_limit: int
    sodium_limit: int
    biodiversity: int
