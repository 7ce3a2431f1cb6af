"""Coarse weather categories derived from provider condition text."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

RAINY = "Rainy"
SNOW = "Snow"
STORMY = "Stormy"
CLOUDY = "Cloudy"
SUNNY = "Sunny"
PARTLY_CLOUDY = "Partly Cloudy"
FOGGY = "Foggy"

DEFAULT_CATEGORY = PARTLY_CLOUDY

# Ordered: the first rule with a matching keyword wins.
CATEGORY_RULES: Sequence[Tuple[str, Tuple[str, ...]]] = (
    (RAINY, ("rain", "drizzle", "shower")),
    (SNOW, ("snow", "sleet")),
    (STORMY, ("thunder", "storm")),
    (CLOUDY, ("cloud", "overcast")),
    (PARTLY_CLOUDY, ("few clouds", "scattered", "partly")),
    (SUNNY, ("clear", "sun")),
    (FOGGY, ("fog", "mist", "haze")),
)


def categorize(description: Optional[str]) -> str:
    lowered = (description or "").lower()
    for category, keywords in CATEGORY_RULES:
        if any(keyword in lowered for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def capitalize_first(text: Optional[str]) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


__all__ = [
    "CATEGORY_RULES",
    "CLOUDY",
    "DEFAULT_CATEGORY",
    "FOGGY",
    "PARTLY_CLOUDY",
    "RAINY",
    "SNOW",
    "STORMY",
    "SUNNY",
    "capitalize_first",
    "categorize",
]
