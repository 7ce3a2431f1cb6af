from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

import requests
from requests import Response


logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """Base provider error."""


class QuotaExceeded(ProviderError):
    """Raised when a provider reports a quota/usage limit issue."""


@dataclass
class RequestConfig:
    timeout: float = 10.0


@dataclass(frozen=True)
class RawForecast:
    """Forecast entries exactly as the provider returned them.

    ``utc_offset`` is the provider's local time offset in seconds east of UTC;
    entry timestamps are shifted by it before being bucketed into days.
    """

    entries: List[Dict[str, Any]]
    utc_offset: int = 0


class HttpProvider:
    """Base class that adds timeouts and error mapping for HTTP providers.

    Every call is attempted exactly once.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Response:
        if response.status_code == 429:
            self._log.warning("Quota exceeded: %s", response.text)
            raise QuotaExceeded("quota exceeded")
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text)
            raise ProviderError(f"HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise ProviderError("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise ProviderError("request failed") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise ProviderError("invalid json") from exc


class ForecastSource(HttpProvider):
    """A forecast provider that can be turned into per-day readings.

    Subclasses pick the endpoint, the response shape and the furthest day they
    can forecast (``horizon_days``).
    """

    name = "forecast"
    horizon_days = 5

    def __init__(self, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        if base_url:
            self.base_url = base_url

    def fetch(self, latitude: float, longitude: float, units: str = "imperial") -> RawForecast:
        raise NotImplementedError

    def collapse(self, forecast: RawForecast) -> Dict[date, Any]:
        """Reduce raw entries to one ``DayReading`` per local calendar date."""
        raise NotImplementedError

    def readings(self, latitude: float, longitude: float, units: str = "imperial") -> Dict[date, Any]:
        return self.collapse(self.fetch(latitude, longitude, units))


__all__ = [
    "ForecastSource",
    "HttpProvider",
    "ProviderError",
    "QuotaExceeded",
    "RawForecast",
    "RequestConfig",
]
