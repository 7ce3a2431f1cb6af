from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional


def _text(payload: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = payload.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return None


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` (a trailing time part is ignored); ``None`` if invalid."""
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class TripRequest:
    """Reservation details supplied by the caller.

    All fields are untrusted and optional; blank strings are stored as
    ``None``.  Dates are kept as the caller sent them so that fallback
    responses can echo them back verbatim.
    """

    check_in_date: Optional[str] = None
    check_out_date: Optional[str] = None
    latitude: Any = None
    longitude: Any = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    property_name: Optional[str] = None
    property_id: Any = None
    guest_name: Optional[str] = None
    guest_email: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "TripRequest":
        if not isinstance(payload, Mapping):
            payload = {}
        return cls(
            check_in_date=_text(payload, "check_in_date"),
            check_out_date=_text(payload, "check_out_date"),
            latitude=payload.get("property_latitude"),
            longitude=payload.get("property_longitude"),
            address=_text(payload, "property_address"),
            city=_text(payload, "property_city"),
            state=_text(payload, "property_state"),
            postal_code=_text(payload, "property_zip", "property_postal_code"),
            country=_text(payload, "property_country"),
            property_name=_text(payload, "property_name"),
            property_id=payload.get("property_id"),
            guest_name=_text(payload, "guest_name"),
            guest_email=_text(payload, "guest_email"),
        )

    @property
    def checkin(self) -> Optional[date]:
        return parse_iso_date(self.check_in_date)

    @property
    def checkout(self) -> Optional[date]:
        return parse_iso_date(self.check_out_date)


@dataclass(frozen=True)
class ResolvedLocation:
    latitude: float
    longitude: float
    source: str = "request"
    formatted_address: Optional[str] = None


@dataclass(frozen=True)
class DayReading:
    """One local calendar day collapsed from provider entries."""

    temp_high: int
    temp_low: int
    precipitation_chance: int
    description: str
    icon: str


@dataclass(frozen=True)
class DailyForecast:
    date: date
    is_checkin: bool
    is_checkout: bool
    temp_high: int
    temp_low: int
    precipitation_chance: int
    condition: str
    condition_simple: str
    icon_url: str

    @property
    def day_name(self) -> str:
        return self.date.strftime("%A")

    @property
    def day_short(self) -> str:
        return self.date.strftime("%a")

    @property
    def month_day(self) -> str:
        return f"{self.date.strftime('%b')} {self.date.day}"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "day_name": self.day_name,
            "day_short": self.day_short,
            "month_day": self.month_day,
            "is_checkin": self.is_checkin,
            "is_checkout": self.is_checkout,
            "temp_high": self.temp_high,
            "temp_low": self.temp_low,
            "condition": self.condition,
            "condition_simple": self.condition_simple,
            "precipitation_chance": self.precipitation_chance,
            "icon_url": self.icon_url,
        }


@dataclass(frozen=True)
class TripSummary:
    avg_high: int
    avg_low: int
    max_high: int
    min_low: int
    avg_precipitation: int
    rainy_days: int
    summary: str
    packing_recommendations: List[str] = field(default_factory=list)

    @property
    def has_rain(self) -> bool:
        return self.rainy_days > 0

    def stats(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload.pop("summary")
        payload.pop("packing_recommendations")
        payload["has_rain"] = self.has_rain
        return payload


__all__ = [
    "DailyForecast",
    "DayReading",
    "ResolvedLocation",
    "TripRequest",
    "TripSummary",
    "parse_iso_date",
]
