"""Resolve a reservation to coordinates, geocoding its address when needed."""
from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from .entities import ResolvedLocation, TripRequest
from .fields import safe_float
from .providers.base import ProviderError
from .providers.google import GoogleGeocoder

logger = logging.getLogger(__name__)


def valid_coordinates(latitude: Any, longitude: Any) -> Optional[Tuple[float, float]]:
    """Numeric, non-zero and in range, or ``None``."""
    lat = safe_float(latitude)
    lon = safe_float(longitude)
    if not lat or not lon:
        return None
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return lat, lon


def build_address(request: TripRequest) -> Optional[str]:
    if request.address:
        address = request.address
    elif request.city and request.state:
        address = f"{request.city}, {request.state}"
    elif request.city:
        address = request.city
    else:
        return None
    if request.postal_code and request.postal_code not in address:
        address = f"{address} {request.postal_code}"
    return address


def can_locate(request: TripRequest) -> bool:
    return valid_coordinates(request.latitude, request.longitude) is not None or build_address(request) is not None


class LocationResolver:
    def __init__(self, geocoder: Optional[GoogleGeocoder] = None) -> None:
        self.geocoder = geocoder

    def resolve(self, request: TripRequest) -> Optional[ResolvedLocation]:
        """Coordinates for ``request``; ``None`` means fall back."""
        coordinates = valid_coordinates(request.latitude, request.longitude)
        if coordinates is not None:
            return ResolvedLocation(latitude=coordinates[0], longitude=coordinates[1])

        address = build_address(request)
        if address is None:
            logger.warning("Missing coordinates and no address to geocode")
            return None
        if self.geocoder is None:
            logger.error("Geocoding API key not configured, cannot resolve %r", address)
            return None

        try:
            location = self.geocoder.geocode(address, country=request.country)
        except ProviderError as exc:
            logger.warning("Geocoding failed for %r: %s", address, exc)
            return None
        logger.info("Geocoded %r to %.4f,%.4f", address, location.latitude, location.longitude)
        return location


__all__ = ["LocationResolver", "build_address", "can_locate", "valid_coordinates"]
