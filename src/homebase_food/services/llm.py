"""Language model interface shared by the AI-backed services."""

from dataclasses import dataclass
from typing import Protocol


class LanguageModelClient(Protocol):
    """Interface for structured-output model calls."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
        text: str | None = None,
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return JSON data matching the schema."""


@dataclass(frozen=True)
class ModelOptions:
    """Model selection shared by every request a service makes."""

    model: str
    reasoning_effort: str | None = None
    store: bool = False


def nullable(schema: dict[str, object]) -> dict[str, object]:
    """Allow null alongside the given JSON schema."""
    return {"anyOf": [schema, {"type": "null"}]}


def strict_object(properties: dict[str, object]) -> dict[str, object]:
    """Build a strict-mode object schema requiring every property."""
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }
