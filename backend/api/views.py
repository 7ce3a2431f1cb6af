"""REST API views for trip weather."""
from __future__ import annotations

import logging
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.entities import TripRequest
from core.fallback import build_fallback
from core.services.trip_weather import PipelineConfig, TripWeatherService

logger = logging.getLogger(__name__)


def pipeline_config() -> PipelineConfig:
    return PipelineConfig(
        forecast_api_key=settings.OPENWEATHER_API_KEY or None,
        geocoding_api_key=settings.GOOGLE_MAPS_API_KEY or None,
        provider=settings.WEATHER_PROVIDER,
        units=settings.WEATHER_UNITS,
        max_forecast_days=settings.WEATHER_MAX_FORECAST_DAYS,
        mode=settings.WEATHER_MODE,
        timeout=settings.WEATHER_HTTP_TIMEOUT,
    )


@lru_cache(maxsize=1)
def get_trip_weather_service() -> TripWeatherService:
    return TripWeatherService(pipeline_config())


class TripWeatherView(APIView):
    """Weather outlook for a reservation, always answered with HTTP 200."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):  # noqa: D401
        """Return the forecast payload or the fallback payload."""
        try:
            body = request.data
        except (ParseError, UnsupportedMediaType) as exc:
            logger.warning("Unreadable trip weather request: %s", exc)
            body = {}
        trip = TripRequest.from_payload(body)
        try:
            service = get_trip_weather_service()
        except (ImproperlyConfigured, ValueError) as exc:
            logger.error("Trip weather service misconfigured: %s", exc)
            return Response(
                build_fallback(trip.check_in_date, trip.check_out_date, trip.city), status=status.HTTP_200_OK
            )
        payload = service.forecast(trip)
        return Response(payload, status=status.HTTP_200_OK)
