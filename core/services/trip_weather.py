from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from ..entities import DailyForecast, ResolvedLocation, TripRequest, TripSummary
from ..fallback import build_fallback
from ..location import LocationResolver
from ..normalize import normalize
from ..providers.base import ForecastSource, ProviderError, RequestConfig
from ..providers.google import GoogleGeocoder
from ..providers.openweather import FORECAST_SOURCES, build_forecast_source
from ..summary import DEFAULT_CITY, UNIT_SYMBOLS, summarize
from ..validation import MODES, RANGE_MODE, SINGLE_MODE, validate


@dataclass(frozen=True)
class PipelineConfig:
    """Everything the pipeline needs from the environment, read once."""

    forecast_api_key: Optional[str] = None
    geocoding_api_key: Optional[str] = None
    provider: str = "openweather"
    units: str = "imperial"
    max_forecast_days: Optional[int] = None
    mode: str = RANGE_MODE
    timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.provider not in FORECAST_SOURCES:
            raise ValueError(f"Unknown forecast provider: {self.provider}")
        if self.units not in UNIT_SYMBOLS:
            raise ValueError(f"Unknown unit system: {self.units}")
        if self.mode not in MODES:
            raise ValueError(f"Unknown forecast mode: {self.mode}")


class TripWeatherService:
    """Forecast, summary and packing list for a stay, or the fallback payload."""

    def __init__(
        self,
        config: PipelineConfig,
        *,
        forecast_source: Optional[ForecastSource] = None,
        resolver: Optional[LocationResolver] = None,
        today: Callable[[], date] = date.today,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        request_config = RequestConfig(timeout=config.timeout)
        if forecast_source is None and config.forecast_api_key:
            forecast_source = build_forecast_source(
                config.provider, api_key=config.forecast_api_key, request_config=request_config
            )
        self.forecast_source = forecast_source
        if resolver is None:
            geocoder = None
            if config.geocoding_api_key:
                geocoder = GoogleGeocoder(api_key=config.geocoding_api_key, request_config=request_config)
            resolver = LocationResolver(geocoder)
        self.resolver = resolver
        self._today = today
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    @property
    def horizon_cap(self) -> int:
        cap = self.forecast_source.horizon_days if self.forecast_source else 0
        if self.config.max_forecast_days:
            cap = min(cap, self.config.max_forecast_days)
        return cap

    def forecast(self, request: TripRequest) -> Dict[str, Any]:
        try:
            return self._forecast(request)
        except Exception as exc:
            self._log.exception("Unexpected error building trip weather: %s", exc)
            return self._fallback(request)

    # Helpers ------------------------------------------------------------
    def _forecast(self, request: TripRequest) -> Dict[str, Any]:
        if self.forecast_source is None:
            self._log.error("Forecast API key not configured")
            return self._fallback(request)

        problem = validate(request, self.config.mode)
        if problem:
            self._log.warning("Invalid trip request: %s", problem)
            return self._fallback(request)

        checkin = request.checkin
        checkout = request.checkout
        nights = (checkout - checkin).days if checkout else 1
        if self.config.mode == SINGLE_MODE:
            days_to_show = 1
        else:
            days_to_show = min(nights, self.horizon_cap)

        location = self.resolver.resolve(request)
        if location is None:
            return self._fallback(request)

        self._log.info("Fetching weather for %s, days: %s", request.city or "unknown city", days_to_show)
        try:
            readings = self.forecast_source.readings(location.latitude, location.longitude, self.config.units)
        except ProviderError as exc:
            self._log.error("Forecast provider %s failed: %s", self.forecast_source.name, exc)
            return self._fallback(request)

        days = normalize(readings, checkin, days_to_show)
        if not days:
            self._log.warning("No forecast days matched %s..%s", checkin, request.check_out_date or checkin)
            return self._fallback(request)

        summary = summarize(days, nights, request.city, self.config.units)
        self._log.info("Built trip weather with %s days", len(days))
        return self._payload(request, location, days, summary, nights, days_to_show)

    def _payload(
        self,
        request: TripRequest,
        location: ResolvedLocation,
        days: List[DailyForecast],
        summary: TripSummary,
        nights: int,
        days_to_show: int,
    ) -> Dict[str, Any]:
        stats: Dict[str, Any] = {
            "check_in_date": request.check_in_date,
            "check_out_date": request.check_out_date,
            "days_until_checkin": (request.checkin - self._today()).days,
            "number_of_nights": nights,
            "days_showing": days_to_show,
        }
        stats.update(summary.stats())
        stats["units"] = self.config.units
        payload: Dict[str, Any] = {
            "success": True,
            "show_weather": True,
            "summary": summary.summary,
            "daily_forecasts": [day.as_dict() for day in days],
            "packing_recommendations": summary.packing_recommendations,
            "stats": stats,
            "location": {
                "city": request.city or DEFAULT_CITY,
                "state": request.state or "",
                "name": request.property_name or "",
                "id": request.property_id,
                "latitude": location.latitude,
                "longitude": location.longitude,
                "source": location.source,
                "address": location.formatted_address,
            },
        }
        if request.guest_name or request.guest_email:
            payload["guest"] = {"name": request.guest_name, "email": request.guest_email}
        return payload

    def _fallback(self, request: TripRequest) -> Dict[str, Any]:
        return build_fallback(request.check_in_date, request.check_out_date, request.city)


__all__ = ["PipelineConfig", "TripWeatherService"]
