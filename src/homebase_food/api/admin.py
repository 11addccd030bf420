"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from homebase_food.api.models import BackfillRequest  # noqa: TC001

if TYPE_CHECKING:
    from homebase_food.containers import AppContainer
    from homebase_food.services.backfill import BackfillSummary

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/backfill-food-macros", dependencies=[Depends(require_admin)])
async def backfill_food_macros(
    body: BackfillRequest, request: Request
) -> dict[str, object]:
    """Resolve macros for the user's items that have none."""
    container: AppContainer = request.app.state.container
    summary = await container.backfill_service.backfill_macros(body.user_id)
    return _summary_payload(summary)


@router.post("/backfill-biodiversity", dependencies=[Depends(require_admin)])
async def backfill_biodiversity(
    body: BackfillRequest, request: Request
) -> dict[str, object]:
    """Recover categories and whole-food ingredients for the user's items."""
    container: AppContainer = request.app.state.container
    summary = await container.backfill_service.backfill_biodiversity(body.user_id)
    payload = _summary_payload(summary)
    payload.pop("sources")
    return payload


def _summary_payload(summary: BackfillSummary) -> dict[str, object]:
    return {"success": True, "message": summary.message, **asdict(summary)}
