"""ASGI entrypoint for the food lookup API."""

from homebase_food.api.app import create_app
from homebase_food.containers import build_container

app = create_app(build_container())
