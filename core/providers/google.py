from __future__ import annotations

from typing import Optional

from .base import HttpProvider, ProviderError
from ..entities import ResolvedLocation
from ..fields import first_number, first_present


class GeocodingError(ProviderError):
    """The geocoder answered but could not place the address."""


class GoogleGeocoder(HttpProvider):
    """Address to coordinates through the Google Geocoding API."""

    name = "google"
    base_url = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(self, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url

    def geocode(self, address: str, country: Optional[str] = None) -> ResolvedLocation:
        params = {"address": address, "key": self.api_key}
        if country:
            params["components"] = f"country:{country}"
        response = self._request("GET", self.base_url, params=params)
        data = self._json(response)
        if not isinstance(data, dict):
            raise GeocodingError("unexpected payload")
        status = data.get("status")
        if status != "OK":
            raise GeocodingError(f"geocoder status {status}")
        results = data.get("results") or []
        if not results:
            raise GeocodingError("no results")
        first = results[0]
        latitude = first_number(first, ("geometry.location.lat",))
        longitude = first_number(first, ("geometry.location.lng",))
        if latitude is None or longitude is None:
            raise GeocodingError("result without coordinates")
        return ResolvedLocation(
            latitude=latitude,
            longitude=longitude,
            source="geocoder",
            formatted_address=first_present(first, ("formatted_address",)),
        )


__all__ = ["GeocodingError", "GoogleGeocoder"]
