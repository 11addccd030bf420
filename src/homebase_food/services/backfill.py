"""Batch jobs that fill in missing data on logged food items."""

import asyncio
import logging
from dataclasses import dataclass, field
from uuid import UUID

from homebase_food.services.estimation import EstimationService
from homebase_food.services.food_items import FoodItemRepository
from homebase_food.services.resolver import FoodMacroResolver

DEFAULT_BATCH_LIMIT = 500

_logger = logging.getLogger(__name__)


@dataclass
class BackfillSummary:
    """Outcome of a backfill run."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    sources: dict[str, int] = field(default_factory=dict)

    @property
    def message(self) -> str:
        if not self.total:
            return "No items need processing"
        return f"Processed {self.successful + self.failed} items"


@dataclass
class BackfillService:
    """Re-resolves items sequentially with a fixed delay between them."""

    repository: FoodItemRepository
    resolver: FoodMacroResolver
    estimation_service: EstimationService
    batch_limit: int = DEFAULT_BATCH_LIMIT
    delay_seconds: float = 0.1

    async def backfill_macros(self, user_id: UUID) -> BackfillSummary:
        """Resolve macros for items that have none.

        The repository only returns items whose values may be replaced, so
        barcode, label and user-provided items never reach the resolver.
        """
        items = self.repository.list_missing_macros(user_id, self.batch_limit)
        items = items[: self.batch_limit]
        summary = BackfillSummary(
            total=len(items),
            sources={"cache": 0, "off": 0, "ai": 0},
        )

        for index, item in enumerate(items):
            if index:
                await asyncio.sleep(self.delay_seconds)
            try:
                resolved = await self.resolver.resolve(item.food_name, item.quantity)
                self.repository.update_macros(
                    item.id,
                    macros=resolved.scaled,
                    source=resolved.source,
                    unverified=resolved.unverified,
                )
            except Exception:
                _logger.exception(
                    "Macro backfill failed", extra={"item_id": str(item.id)}
                )
                summary.failed += 1
                continue
            summary.successful += 1
            source_key = resolved.source.value
            summary.sources[source_key] = summary.sources.get(source_key, 0) + 1

        _logger.info(
            "Macro backfill: user=%s total=%s ok=%s failed=%s",
            user_id,
            summary.total,
            summary.successful,
            summary.failed,
        )
        return summary

    async def backfill_biodiversity(self, user_id: UUID) -> BackfillSummary:
        """Re-parse items to recover categories and whole-food ingredients."""
        items = self.repository.list_missing_biodiversity(user_id, self.batch_limit)
        items = items[: self.batch_limit]
        summary = BackfillSummary(total=len(items))

        for index, item in enumerate(items):
            if index:
                await asyncio.sleep(self.delay_seconds)
            try:
                parsed = await self.estimation_service.parse_food(item.food_name)
                first_items = parsed.meals[0].items if parsed.meals else []
                if not first_items:
                    _logger.warning(
                        "Biodiversity backfill parsed no items",
                        extra={"item_id": str(item.id)},
                    )
                    summary.failed += 1
                    continue
                self.repository.update_biodiversity(
                    item.id,
                    categories=first_items[0].categories,
                    whole_food_ingredients=first_items[0].whole_food_ingredients,
                )
            except Exception:
                _logger.exception(
                    "Biodiversity backfill failed", extra={"item_id": str(item.id)}
                )
                summary.failed += 1
                continue
            summary.successful += 1

        _logger.info(
            "Biodiversity backfill: user=%s total=%s ok=%s failed=%s",
            user_id,
            summary.total,
            summary.successful,
            summary.failed,
        )
        return summary
