"""Open Food Facts API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_PRODUCT_FIELDS = "product_name,brands,serving_size,serving_quantity,nutriments"


class OpenFoodFactsClient(Protocol):
    """Interface for Open Food Facts lookups."""

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        """Return the raw product payload for a barcode, or None if unknown."""

    async def search_products(
        self, query: str, page_size: int = 5
    ) -> list[dict[str, object]]:
        """Search products by name and return raw product payloads."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, user_agent: str) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            user_agent=user_agent,
            http_client=httpx.AsyncClient(headers={"User-Agent": user_agent}),
        )

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        """Fetch a product by barcode from the v2 product endpoint."""
        url = f"{self.base_url}/api/v2/product/{barcode}.json"
        response = await self.http_client.get(
            url,
            params={"fields": _PRODUCT_FIELDS},
            timeout=15,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        payload = response.json()
        if payload.get("status") != 1 or not payload.get("product"):
            return None
        return payload["product"]

    async def search_products(
        self, query: str, page_size: int = 5
    ) -> list[dict[str, object]]:
        """Full-text product search."""
        url = f"{self.base_url}/cgi/search.pl"
        response = await self.http_client.get(
            url,
            params={
                "search_terms": query,
                "search_simple": 1,
                "action": "process",
                "json": 1,
                "page_size": page_size,
                "fields": _PRODUCT_FIELDS,
            },
            timeout=15,
        )
        response.raise_for_status()
        return list(response.json().get("products") or [])

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
