"""Food name normalization and quantity conversion helpers."""

import re

DEFAULT_GRAMS = 100.0

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_NUMBER = re.compile(r"[\d.]+")

# First match wins, so "kg" must be checked before the bare "g".
_UNIT_FACTORS: list[tuple[str, float]] = [
    ("cup", 240.0),
    ("tbsp", 15.0),
    ("tsp", 5.0),
    ("oz", 28.35),
    ("lb", 453.6),
    ("kg", 1000.0),
    ("g", 1.0),
]


def normalize_food_name(name: str) -> str:
    """Return the dedup key for a food name.

    Lowercases, replaces anything that is not a letter, digit or whitespace
    with a space, then collapses runs of whitespace. Keys already stored in the
    master food database were produced by this exact function.
    """
    lowered = name.lower()
    cleaned = _NON_ALNUM.sub(" ", lowered)
    return _WHITESPACE.sub(" ", cleaned).strip()


def convert_to_grams(quantity: str) -> float:
    """Approximate the gram weight of a free-text quantity like "2 cups"."""
    normalized = quantity.lower().strip()
    match = _NUMBER.search(normalized)
    if match is None:
        return DEFAULT_GRAMS
    try:
        amount = float(match.group(0))
    except ValueError:
        return DEFAULT_GRAMS

    for unit, factor in _UNIT_FACTORS:
        if unit not in normalized:
            continue
        if unit == "oz" and "fl" in normalized:
            continue
        return amount * factor
    return amount


def name_match_confidence(query: str, candidate: str) -> float:
    """Share of the query's tokens that also appear in the candidate name."""
    query_tokens = set(normalize_food_name(query).split())
    if not query_tokens:
        return 0.0
    candidate_tokens = set(normalize_food_name(candidate).split())
    return round(len(query_tokens & candidate_tokens) / len(query_tokens), 2)
