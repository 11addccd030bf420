"""Tests for container wiring."""

import asyncio

from homebase_food.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.resolver is not None
    assert container.usda_service.fdc_client is not None
    assert container.backfill_service.delay_seconds == 0
    assert container.backfill_service.batch_limit == 500
    asyncio.run(container.close_resources())


def test_build_container_without_usda_key(settings) -> None:
    container = build_container(settings.model_copy(update={"fdc_api_key": None}))

    assert container.usda_service.fdc_client is None
    asyncio.run(container.close_resources())
