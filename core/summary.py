"""Trip-level statistics, the outlook sentence and packing suggestions."""
from __future__ import annotations

from typing import List, Optional, Sequence

from .conditions import SNOW
from .entities import DailyForecast, TripSummary
from .normalize import round_half_up

RAINY_DAY_THRESHOLD = 40
MAX_PACKING_ITEMS = 5
DEFAULT_CITY = "your destination"

UNIT_SYMBOLS = {"imperial": "°F", "metric": "°C", "standard": "K"}


def unit_symbol(units: str) -> str:
    return UNIT_SYMBOLS.get(units, "°F")


def to_fahrenheit(value: float, units: str) -> float:
    if units == "metric":
        return value * 9 / 5 + 32
    if units == "standard":
        return (value - 273.15) * 9 / 5 + 32
    return value


def _mean(values: Sequence[int]) -> int:
    return round_half_up(sum(values) / len(values))


def outlook(days: Sequence[DailyForecast], avg_precipitation: int) -> str:
    categories = {day.condition_simple for day in days}
    if len(categories) == 1:
        return next(iter(categories)).lower()
    if avg_precipitation > 50:
        return "mostly rainy"
    if avg_precipitation > 30:
        return "mixed with some rain"
    return "pleasant"


def generate_summary(
    days: Sequence[DailyForecast],
    avg_high: int,
    avg_low: int,
    avg_precipitation: int,
    nights: int,
    city: Optional[str],
    units: str = "imperial",
) -> str:
    symbol = unit_symbol(units)
    return (
        f"The weather for your {nights}-night stay in {city or DEFAULT_CITY} will be "
        f"{outlook(days, avg_precipitation)} with temperatures ranging from "
        f"{avg_low}{symbol} to {avg_high}{symbol}."
    )


def packing_list(
    max_high: int,
    min_low: int,
    avg_precipitation: int,
    days: Sequence[DailyForecast],
    units: str = "imperial",
) -> List[str]:
    """Suggest at most five distinct items; thresholds are in Fahrenheit."""
    high = to_fahrenheit(max_high, units)
    low = to_fahrenheit(min_low, units)
    items: List[str] = []
    if high > 85:
        items += ["Light, breathable clothing", "Sunscreen and sunglasses"]
    elif high > 75:
        items += ["Summer clothing", "Sunscreen"]
    elif high < 60:
        items += ["Warm clothing", "Jacket or coat"]

    if low < 60:
        items.append("Warm layers for evenings")
    if high - low > 25:
        items.append("Versatile layers for temperature changes")

    if avg_precipitation > 60:
        items += ["Rain jacket", "Umbrella"]
    elif avg_precipitation > 30:
        items.append("Rain jacket or umbrella")

    if any(day.condition_simple == SNOW for day in days):
        items += ["Winter boots", "Warm coat"]

    return list(dict.fromkeys(items))[:MAX_PACKING_ITEMS]


def summarize(
    days: Sequence[DailyForecast],
    nights: int,
    city: Optional[str] = None,
    units: str = "imperial",
) -> TripSummary:
    if not days:
        raise ValueError("cannot summarize an empty forecast")
    highs = [day.temp_high for day in days]
    lows = [day.temp_low for day in days]
    avg_high = _mean(highs)
    avg_low = _mean(lows)
    max_high = max(highs)
    min_low = min(lows)
    avg_precipitation = _mean([day.precipitation_chance for day in days])
    return TripSummary(
        avg_high=avg_high,
        avg_low=avg_low,
        max_high=max_high,
        min_low=min_low,
        avg_precipitation=avg_precipitation,
        rainy_days=sum(1 for day in days if day.precipitation_chance > RAINY_DAY_THRESHOLD),
        summary=generate_summary(days, avg_high, avg_low, avg_precipitation, nights, city, units),
        packing_recommendations=packing_list(max_high, min_low, avg_precipitation, days, units),
    )


__all__ = ["generate_summary", "outlook", "packing_list", "summarize", "to_fahrenheit", "unit_symbol"]
