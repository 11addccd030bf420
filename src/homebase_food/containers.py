"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from homebase_food.adapters.fdc_client import HttpxFdcClient
from homebase_food.adapters.off_client import HttpxOpenFoodFactsClient
from homebase_food.adapters.openai_client import OpenAIResponsesClient
from homebase_food.adapters.recipe_page_client import HttpxRecipePageClient
from homebase_food.adapters.supabase_expiration_repository import (
    SupabaseExpirationRepository,
)
from homebase_food.adapters.supabase_food_item_repository import (
    SupabaseFoodItemRepository,
)
from homebase_food.adapters.supabase_goals_repository import SupabaseGoalsRepository
from homebase_food.adapters.supabase_master_food_repository import (
    SupabaseMasterFoodRepository,
)
from homebase_food.adapters.supabase_saved_meal_repository import (
    SupabaseSavedMealRepository,
)
from homebase_food.config import Settings
from homebase_food.services.backfill import BackfillService
from homebase_food.services.barcodes import BarcodeService
from homebase_food.services.biodiversity import BiodiversityService
from homebase_food.services.estimation import EstimationService
from homebase_food.services.expiration import ExpirationService
from homebase_food.services.goals import GoalsService
from homebase_food.services.labels import LabelReaderService
from homebase_food.services.llm import ModelOptions
from homebase_food.services.master_foods import MasterFoodService
from homebase_food.services.recipes import RecipeService
from homebase_food.services.resolver import FoodMacroResolver
from homebase_food.services.usda import UsdaSearchService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    resolver: FoodMacroResolver
    barcode_service: BarcodeService
    label_service: LabelReaderService
    master_food_service: MasterFoodService
    estimation_service: EstimationService
    recipe_service: RecipeService
    usda_service: UsdaSearchService
    expiration_service: ExpirationService
    goals_service: GoalsService
    biodiversity_service: BiodiversityService
    backfill_service: BackfillService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    master_food_repository = SupabaseMasterFoodRepository(supabase_client)
    food_item_repository = SupabaseFoodItemRepository(supabase_client)
    goals_repository = SupabaseGoalsRepository(supabase_client)
    expiration_repository = SupabaseExpirationRepository(supabase_client)
    saved_meal_repository = SupabaseSavedMealRepository(supabase_client)

    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        user_agent=resolved_settings.off_user_agent,
    )
    recipe_page_client = HttpxRecipePageClient.create(resolved_settings.off_user_agent)
    fdc_client = (
        HttpxFdcClient.create(
            api_key=resolved_settings.fdc_api_key,
            base_url=resolved_settings.fdc_base_url,
        )
        if resolved_settings.fdc_api_key
        else None
    )
    openai_client = OpenAIResponsesClient.create(resolved_settings.openai_api_key)
    model_options = ModelOptions(
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    estimation_service = EstimationService(client=openai_client, options=model_options)
    resolver = FoodMacroResolver(
        repository=master_food_repository,
        off_client=off_client,
        estimation_service=estimation_service,
    )
    goals_service = GoalsService(goals_repository)

    async def close_resources() -> None:
        await off_client.close()
        await recipe_page_client.close()
        if fdc_client is not None:
            await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        resolver=resolver,
        barcode_service=BarcodeService(off_client),
        label_service=LabelReaderService(client=openai_client, options=model_options),
        master_food_service=MasterFoodService(master_food_repository),
        estimation_service=estimation_service,
        recipe_service=RecipeService(
            client=openai_client,
            options=model_options,
            page_client=recipe_page_client,
            saved_meals=saved_meal_repository,
        ),
        usda_service=UsdaSearchService(fdc_client),
        expiration_service=ExpirationService(expiration_repository),
        goals_service=goals_service,
        biodiversity_service=BiodiversityService(
            repository=food_item_repository, goals_service=goals_service
        ),
        backfill_service=BackfillService(
            repository=food_item_repository,
            resolver=resolver,
            estimation_service=estimation_service,
            batch_limit=resolved_settings.backfill_batch_limit,
            delay_seconds=resolved_settings.backfill_delay_seconds,
        ),
        close_resources=close_resources,
    )
