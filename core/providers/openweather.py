from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from .base import ForecastSource, ProviderError, RawForecast
from ..entities import DayReading
from ..normalize import collapse_buckets, collapse_daily


class OpenWeatherForecast(ForecastSource):
    """OpenWeather 5 day / 3 hour forecast (free tier)."""

    name = "openweather"
    base_url = "https://api.openweathermap.org/data/2.5/forecast"
    horizon_days = 5

    def fetch(self, latitude: float, longitude: float, units: str = "imperial") -> RawForecast:
        params = {"lat": latitude, "lon": longitude, "units": units, "appid": self.api_key}
        response = self._request("GET", self.base_url, params=params)
        data = self._json(response)
        entries = self._entries(data, "list")
        city = data.get("city") or {}
        self._log.info("Received %s forecast entries", len(entries))
        return RawForecast(entries=entries, utc_offset=_offset(city.get("timezone")))

    def collapse(self, forecast: RawForecast) -> Dict[date, DayReading]:
        return collapse_buckets(forecast.entries, forecast.utc_offset)

    def _entries(self, data: Any, key: str) -> List[Dict[str, Any]]:
        if not isinstance(data, dict):
            raise ProviderError("unexpected payload")
        entries = data.get(key) or []
        if not isinstance(entries, list) or not entries:
            raise ProviderError(f"missing {key} in response")
        return entries


class OpenWeatherDailyForecast(OpenWeatherForecast):
    """OpenWeather One Call daily forecast (up to 8 days, 7 used)."""

    name = "openweather-daily"
    base_url = "https://api.openweathermap.org/data/3.0/onecall"
    horizon_days = 7

    def fetch(self, latitude: float, longitude: float, units: str = "imperial") -> RawForecast:
        params = {
            "lat": latitude,
            "lon": longitude,
            "units": units,
            "exclude": "current,minutely,hourly,alerts",
            "appid": self.api_key,
        }
        response = self._request("GET", self.base_url, params=params)
        data = self._json(response)
        entries = self._entries(data, "daily")
        self._log.info("Received %s daily entries", len(entries))
        return RawForecast(entries=entries, utc_offset=_offset(data.get("timezone_offset")))

    def collapse(self, forecast: RawForecast) -> Dict[date, DayReading]:
        return collapse_daily(forecast.entries, forecast.utc_offset)


FORECAST_SOURCES = {
    OpenWeatherForecast.name: OpenWeatherForecast,
    OpenWeatherDailyForecast.name: OpenWeatherDailyForecast,
}


def build_forecast_source(name: str, api_key: str, **kwargs) -> ForecastSource:
    try:
        source_class = FORECAST_SOURCES[name]
    except KeyError:
        raise ValueError(f"Unknown forecast provider: {name}") from None
    return source_class(api_key=api_key, **kwargs)


def _offset(value: Optional[object]) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0


__all__ = ["FORECAST_SOURCES", "OpenWeatherDailyForecast", "OpenWeatherForecast", "build_forecast_source"]
