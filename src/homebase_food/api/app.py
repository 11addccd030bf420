"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from homebase_food.api.admin import router as admin_router
from homebase_food.api.models import (
    BarcodeRequest,
    ExpirationRequest,
    FoodMacrosRequest,
    GoalsRequest,
    MealIngredientsRequest,
    NutritionLabelRequest,
    ParseFoodRequest,
    UsdaSearchRequest,
)
from homebase_food.app_logging import configure_logging
from homebase_food.containers import AppContainer
from homebase_food.domain.errors import (
    FoodLookupError,
    InvalidBarcodeError,
    LabelUnreadableError,
    MacroResolutionError,
    ProductNotFoundError,
    RecipeInputError,
    SavedMealNotFoundError,
)
from homebase_food.domain.goals import UserGoals
from homebase_food.domain.label import CacheCandidate
from homebase_food.domain.nutrition import FoodSummary
from homebase_food.services.goals import effective_targets
from homebase_food.services.usda import UsdaNotConfiguredError

_ERROR_STATUS: dict[type[FoodLookupError], int] = {
    InvalidBarcodeError: status.HTTP_400_BAD_REQUEST,
    RecipeInputError: status.HTTP_400_BAD_REQUEST,
    ProductNotFoundError: status.HTTP_404_NOT_FOUND,
    SavedMealNotFoundError: status.HTTP_404_NOT_FOUND,
    MacroResolutionError: status.HTTP_404_NOT_FOUND,
    LabelUnreadableError: 422,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(FoodLookupError)
    async def lookup_error(request: Request, exc: FoodLookupError) -> JSONResponse:
        code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.info(
            "Lookup failed (%s): %s", code, exc, extra={"path": request.url.path}
        )
        return _error(code, str(exc))

    @app.exception_handler(UsdaNotConfiguredError)
    async def usda_not_configured(
        request: Request, exc: UsdaNotConfiguredError
    ) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Request failed", extra={"path": request.url.path})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/get-food-macros")
    async def get_food_macros(
        body: FoodMacrosRequest, request: Request
    ) -> dict[str, object]:
        """Resolve macros for a food name through the cache-first chain."""
        state_container: AppContainer = request.app.state.container
        resolved = await state_container.resolver.resolve(body.food_name, body.quantity)
        return {
            "food": resolved.entry.to_row(),
            "scaled": resolved.scaled.to_item_fields(),
            "grams": resolved.grams,
            "source": resolved.source.value,
            "unverified": resolved.unverified,
            "match_confidence": resolved.match_confidence,
        }

    @app.post("/api/lookup-barcode")
    async def lookup_barcode(
        body: BarcodeRequest, request: Request
    ) -> dict[str, object]:
        """Look up a packaged food by barcode."""
        state_container: AppContainer = request.app.state.container
        scanned = await state_container.barcode_service.lookup(body.barcode)
        return scanned.model_dump(mode="json")

    @app.post("/api/parse-nutrition-label", response_model=None)
    async def parse_nutrition_label(
        body: NutritionLabelRequest, request: Request
    ) -> JSONResponse | dict[str, object]:
        """Read a nutrition facts panel from a base64 photo."""
        state_container: AppContainer = request.app.state.container
        image_bytes = _decode_image(body.image_base64)
        if image_bytes is None:
            return _error(
                status.HTTP_400_BAD_REQUEST, "imageBase64 is not valid base64"
            )
        scanned = await state_container.label_service.read_label(
            image_bytes, body.mime_type
        )
        return scanned.model_dump(mode="json")

    @app.post("/api/master-foods")
    async def confirm_master_food(
        body: CacheCandidate, request: Request
    ) -> dict[str, object]:
        """Store a confirmed cache candidate in the master food database."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.master_food_service.confirm(body)
        return {"food": entry.to_row()}

    @app.post("/api/parse-food")
    async def parse_food(body: ParseFoodRequest, request: Request) -> dict[str, object]:
        """Split a free-text description into meals with nutrition."""
        state_container: AppContainer = request.app.state.container
        parsed = await state_container.estimation_service.parse_food(
            body.food_description
        )
        return parsed.model_dump(mode="json")

    @app.post("/api/parse-meal-ingredients")
    async def parse_meal_ingredients(
        body: MealIngredientsRequest, request: Request
    ) -> dict[str, object]:
        """Build an ingredient list from text, a saved meal or a recipe URL."""
        state_container: AppContainer = request.app.state.container
        recipe = await state_container.recipe_service.parse_ingredients(
            body.input_type, body.input, body.servings, body.user_id
        )
        return {
            "meal_name": recipe.meal_name,
            "servings": recipe.servings,
            "ingredients": [item.model_dump() for item in recipe.ingredients],
            "recipe_url": recipe.recipe_url,
            "recipe_instructions": recipe.recipe_instructions,
            "source": recipe.source,
        }

    @app.post("/api/usda-food-search")
    async def usda_food_search(
        body: UsdaSearchRequest, request: Request
    ) -> dict[str, object]:
        """Search USDA FoodData Central."""
        state_container: AppContainer = request.app.state.container
        foods = await state_container.usda_service.search(body.query)
        return {"foods": [_food_summary_payload(food) for food in foods]}

    @app.post("/api/estimate-expiration")
    async def estimate_expiration(
        body: ExpirationRequest, request: Request
    ) -> dict[str, object]:
        """Estimate when a stored food expires."""
        state_container: AppContainer = request.app.state.container
        estimate = state_container.expiration_service.estimate(
            body.food_name, body.storage_location, body.date_added
        )
        return asdict(estimate)

    @app.get("/api/users/{user_id}/goals", response_model=None)
    async def get_goals(
        user_id: UUID, request: Request
    ) -> JSONResponse | dict[str, object]:
        """Return a user's goals and the targets in effect."""
        state_container: AppContainer = request.app.state.container
        goals = state_container.goals_service.get_goals(user_id)
        if goals is None:
            return _error(status.HTTP_404_NOT_FOUND, "Goals not found")
        return _goals_payload(goals)

    @app.put("/api/users/{user_id}/goals")
    async def save_goals(
        user_id: UUID, body: GoalsRequest, request: Request
    ) -> dict[str, object]:
        """Create or replace a user's goals."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.goals_service.save_goals(
            UserGoals(user_id=user_id, **body.model_dump())
        )
        return _goals_payload(saved)

    @app.get("/api/users/{user_id}/biodiversity")
    async def biodiversity(
        user_id: UUID, start: datetime, end: datetime, request: Request
    ) -> dict[str, object]:
        """Summarize the unique whole foods a user ate in a period."""
        state_container: AppContainer = request.app.state.container
        report = state_container.biodiversity_service.report(user_id, start, end)
        return {
            **asdict(report.summary),
            "total": report.summary.total,
            "target": report.target,
            "target_met": report.target_met,
        }

    return app


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def _decode_image(raw: str) -> bytes | None:
    """Decode base64 image data, accepting an optional data URL prefix."""
    encoded = raw.split(",", 1)[1] if raw.startswith("data:") else raw
    try:
        decoded = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return None
    return decoded or None


def _food_summary_payload(food: FoodSummary) -> dict[str, object]:
    return {
        "fdc_id": food.fdc_id,
        "description": food.description,
        "brand_name": food.brand_name,
        "data_type": food.data_type,
        **food.per_100g.to_per_100g_fields(),
    }


def _goals_payload(goals: UserGoals) -> dict[str, object]:
    return {
        "goals": {**asdict(goals), "user_id": str(goals.user_id)},
        "effective_targets": asdict(effective_targets(goals)),
    }
