"""Biodiversity tracking over logged whole foods."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from homebase_food.domain.biodiversity import BiodiversitySummary
from homebase_food.domain.goals import DEFAULT_BIODIVERSITY_TARGET
from homebase_food.domain.nutrition import FoodItem
from homebase_food.services.food_items import FoodItemRepository
from homebase_food.services.goals import GoalsService

_NUT_WORDS = ("nut", "seed", "almond", "walnut", "cashew", "peanut")
_LEGUME_WORDS = ("bean", "lentil", "chickpea", "pea")
_WHOLE_GRAIN_WORDS = ("whole", "brown rice", "quinoa", "oat")


@dataclass(frozen=True)
class BiodiversityReport:
    """Biodiversity for a period compared with the user's target."""

    summary: BiodiversitySummary
    target: int

    @property
    def target_met(self) -> bool:
        return self.summary.total >= self.target


@dataclass
class BiodiversityService:
    """Computes biodiversity for a user over a time range."""

    repository: FoodItemRepository
    goals_service: GoalsService

    def report(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> BiodiversityReport:
        """Summarize unique whole foods logged between start and end."""
        items = self.repository.list_logged_between(user_id, start, end)
        goals = self.goals_service.get_goals(user_id)
        target = goals.biodiversity_target if goals else DEFAULT_BIODIVERSITY_TARGET
        return BiodiversityReport(summary=summarize_biodiversity(items), target=target)


def summarize_biodiversity(items: list[FoodItem]) -> BiodiversitySummary:
    """Bucket each unique whole-food ingredient into food groups.

    An ingredient can count in more than one group, e.g. peanuts are both a
    nut and a legume.
    """
    fruits: dict[str, None] = {}
    vegetables: dict[str, None] = {}
    nuts: dict[str, None] = {}
    legumes: dict[str, None] = {}
    grains: dict[str, None] = {}

    for item in items:
        categories = item.categories
        for ingredient in item.whole_food_ingredients:
            name = ingredient.lower().strip()
            if not name:
                continue
            if "fruit" in categories:
                fruits[name] = None
            if "vegetable" in categories:
                vegetables[name] = None
            if "fat" in categories or name == "avocado" or _contains(name, _NUT_WORDS):
                nuts[name] = None
            if _contains(name, _LEGUME_WORDS):
                legumes[name] = None
            if "grain" in categories and (
                name == "rice" or _contains(name, _WHOLE_GRAIN_WORDS)
            ):
                grains[name] = None

    return BiodiversitySummary(
        fruits=list(fruits),
        vegetables=list(vegetables),
        nuts=list(nuts),
        legumes=list(legumes),
        whole_grains=list(grains),
    )


def _contains(name: str, words: tuple[str, ...]) -> bool:
    return any(word in name for word in words)
