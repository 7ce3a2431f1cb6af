"""Turn provider forecast entries into per-day records for a stay."""
from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .conditions import capitalize_first, categorize
from .entities import DailyForecast, DayReading
from .fields import first_number, first_present

DEFAULT_HIGH = 75
DEFAULT_LOW = 60
DEFAULT_PRECIPITATION = 0
DEFAULT_ICON = "02d"
ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"

TEMPERATURE_FIELDS = ("main.temp", "temp", "temperature")
HIGH_FIELDS = ("temp.max", "main.temp_max", "temp_max", "high", "max_temp")
LOW_FIELDS = ("temp.min", "main.temp_min", "temp_min", "low", "min_temp")
FRACTION_PRECIPITATION_FIELDS = ("pop",)
PERCENT_PRECIPITATION_FIELDS = ("precipitation_probability", "precip_chance", "precipitation_chance")
CONDITION_FIELDS = ("weather.0.description", "condition", "description", "summary")
ICON_FIELDS = ("weather.0.icon", "icon")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def precipitation_percent(entry: Mapping[str, Any]) -> Optional[float]:
    """Probability of precipitation in percent, or ``None`` when absent."""
    fraction = first_number(entry, FRACTION_PRECIPITATION_FIELDS)
    if fraction is not None:
        return fraction * 100
    return first_number(entry, PERCENT_PRECIPITATION_FIELDS)


def entry_date(entry: Mapping[str, Any], utc_offset: int = 0) -> Optional[date]:
    """Local calendar date of an entry.

    ``dt`` is read as unix seconds and shifted by ``utc_offset``; ``dt_txt``
    and ``date`` are read as ISO strings already in local time.
    """
    stamp = first_number(entry, ("dt",))
    if stamp is not None:
        try:
            moment = datetime.fromtimestamp(stamp, tz=timezone.utc) + timedelta(seconds=utc_offset)
        except (OverflowError, OSError, ValueError):
            return None
        return moment.date()
    text = first_present(entry, ("dt_txt", "date"))
    if not isinstance(text, str):
        return None
    try:
        return date.fromisoformat(text.strip()[:10])
    except ValueError:
        return None


def _clamp_percent(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def _ordered(high: int, low: int) -> tuple:
    return (high, low) if low <= high else (low, high)


def collapse_buckets(entries: Iterable[Mapping[str, Any]], utc_offset: int = 0) -> Dict[date, DayReading]:
    """Group sub-daily entries by local date and reduce each group to one reading."""
    groups: Dict[date, List[Mapping[str, Any]]] = {}
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        day = entry_date(entry, utc_offset)
        if day is None:
            continue
        groups.setdefault(day, []).append(entry)

    readings: Dict[date, DayReading] = {}
    for day, group in groups.items():
        temps = [t for t in (first_number(e, TEMPERATURE_FIELDS) for e in group) if t is not None]
        if temps:
            high, low = round_half_up(max(temps)), round_half_up(min(temps))
        else:
            high, low = DEFAULT_HIGH, DEFAULT_LOW
        chances = [p for p in (precipitation_percent(e) for e in group) if p is not None]
        midday = group[len(group) // 2]
        readings[day] = DayReading(
            temp_high=high,
            temp_low=low,
            precipitation_chance=_clamp_percent(max(chances)) if chances else DEFAULT_PRECIPITATION,
            description=str(first_present(midday, CONDITION_FIELDS, "")),
            icon=str(first_present(midday, ICON_FIELDS, DEFAULT_ICON)),
        )
    return readings


def collapse_daily(entries: Iterable[Mapping[str, Any]], utc_offset: int = 0) -> Dict[date, DayReading]:
    """Read already aggregated one-entry-per-day records."""
    readings: Dict[date, DayReading] = {}
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        day = entry_date(entry, utc_offset)
        if day is None or day in readings:
            continue
        high = round_half_up(first_number(entry, HIGH_FIELDS, DEFAULT_HIGH))
        low = round_half_up(first_number(entry, LOW_FIELDS, DEFAULT_LOW))
        high, low = _ordered(high, low)
        chance = precipitation_percent(entry)
        readings[day] = DayReading(
            temp_high=high,
            temp_low=low,
            precipitation_chance=_clamp_percent(chance) if chance is not None else DEFAULT_PRECIPITATION,
            description=str(first_present(entry, CONDITION_FIELDS, "")),
            icon=str(first_present(entry, ICON_FIELDS, DEFAULT_ICON)),
        )
    return readings


def normalize(readings: Mapping[date, DayReading], checkin: date, horizon_days: int) -> List[DailyForecast]:
    """Build the forecasts for ``horizon_days`` days starting at ``checkin``.

    Days without a reading are left out rather than padded.
    """
    days: List[DailyForecast] = []
    for offset in range(max(horizon_days, 0)):
        current = checkin + timedelta(days=offset)
        reading = readings.get(current)
        if reading is None:
            continue
        days.append(
            DailyForecast(
                date=current,
                is_checkin=offset == 0,
                is_checkout=offset == horizon_days - 1,
                temp_high=reading.temp_high,
                temp_low=reading.temp_low,
                precipitation_chance=reading.precipitation_chance,
                condition=capitalize_first(reading.description),
                condition_simple=categorize(reading.description),
                icon_url=ICON_URL_TEMPLATE.format(icon=reading.icon),
            )
        )
    return days


__all__ = [
    "collapse_buckets",
    "collapse_daily",
    "entry_date",
    "normalize",
    "precipitation_percent",
    "round_half_up",
]
