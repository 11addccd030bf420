"""Recipe web page fetching and scraping."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from bs4 import BeautifulSoup

from homebase_food.domain.recipes import RecipePage

INGREDIENT_SELECTORS = (
    ".recipe-ingredients li",
    ".ingredients li",
    '[itemprop="recipeIngredient"]',
    ".ingredient",
    "li.ingredient",
)
INSTRUCTION_SELECTORS = (
    ".recipe-instructions li",
    ".instructions li",
    '[itemprop="recipeInstructions"] li',
    ".instruction",
    "ol li",
)
MIN_INSTRUCTION_LENGTH = 10
MAX_PAGE_TEXT = 5000


class RecipePageClient(Protocol):
    """Interface for loading recipe pages."""

    async def fetch(self, url: str) -> RecipePage:
        """Download and scrape a recipe page."""


@dataclass
class HttpxRecipePageClient(RecipePageClient):
    """HTTPX-backed recipe page loader."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, user_agent: str) -> "HttpxRecipePageClient":
        """Create a client with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(
                headers={"User-Agent": user_agent}, follow_redirects=True
            )
        )

    async def fetch(self, url: str) -> RecipePage:
        """Fetch a page and scrape it."""
        response = await self.http_client.get(url, timeout=15)
        response.raise_for_status()
        return scrape_recipe_page(response.text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def scrape_recipe_page(html: str) -> RecipePage:
    """Pull title, ingredients and instructions out of recipe HTML.

    Uses the first selector that matches anything; recipe sites rarely agree
    on markup, so the page text is kept for a model-based fallback.
    """
    soup = BeautifulSoup(html, "html.parser")
    title = _text(soup.find("h1")) or _text(soup.find("title")) or "Recipe from URL"

    ingredients: list[str] = []
    for selector in INGREDIENT_SELECTORS:
        found = soup.select(selector)
        if found:
            ingredients = [text for text in (_text(el) for el in found) if text]
            break

    instructions: list[str] = []
    for selector in INSTRUCTION_SELECTORS:
        found = soup.select(selector)
        if found:
            instructions = [
                text
                for text in (_text(el) for el in found)
                if len(text) > MIN_INSTRUCTION_LENGTH
            ]
            break

    body = soup.body or soup
    page_text = " ".join(body.get_text(" ").split())[:MAX_PAGE_TEXT]
    return RecipePage(
        title=title,
        ingredients=ingredients,
        instructions=instructions,
        page_text=page_text,
    )


def _text(element: object) -> str:
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())
