"""Open-Meteo geocoding and forecast provider implementation."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import ProviderError
from ..redaction import sanitize_text
from .base import WeatherProvider
from .models import CitySuggestion, RawForecastPayload
from .normalizer import is_valid_utc_offset

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "surface_pressure",
    "wind_speed_10m",
)
HOURLY_FIELDS = ("temperature_2m", "weather_code")
DAILY_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "sunrise",
    "sunset",
    "uv_index_max",
)
FORECAST_DAYS = 6


class OpenMeteoProvider(WeatherProvider):
    """Queries the Open-Meteo geocoding and forecast APIs.

    No retries: a single failed call fails the snapshot request immediately.
    """

    provider_name = "open-meteo"

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._client = httpx.AsyncClient(
            timeout=settings.weather_timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> OpenMeteoProvider:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def search(self, query: str, *, count: int = 5) -> list[CitySuggestion]:
        """Geocode a free-text place name."""
        params = {
            "name": query,
            "count": count,
            "language": self.settings.geocoding_language,
            "format": "json",
        }
        payload = await self._request_json(
            str(self.settings.geocoding_url), params=params, context="geocoding search"
        )

        # Open-Meteo omits "results" entirely when nothing matches.
        results = payload.get("results")
        if results is None:
            return []
        if not isinstance(results, list):
            raise ProviderError("Geocoding payload 'results' is not a list.")

        suggestions: list[CitySuggestion] = []
        for item in results:
            if not isinstance(item, dict):
                continue
            suggestion = self._parse_candidate(item)
            if suggestion is not None:
                suggestions.append(suggestion)
        return suggestions

    async def fetch_forecast(self, *, latitude: float, longitude: float) -> RawForecastPayload:
        """Fetch current conditions, hourly series and a 6-day daily series."""
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_FIELDS),
            "hourly": ",".join(HOURLY_FIELDS),
            "daily": ",".join(DAILY_FIELDS),
            "timezone": "auto",
            "forecast_days": FORECAST_DAYS,
        }
        payload = await self._request_json(
            str(self.settings.forecast_url), params=params, context="forecast fetch"
        )
        for section in ("current", "hourly", "daily"):
            if not isinstance(payload.get(section), dict):
                raise ProviderError(f"Forecast payload missing '{section}' object.")
        offset = payload.get("utc_offset_seconds", 0)
        if not is_valid_utc_offset(offset):
            raise ProviderError(f"Forecast payload has invalid utc_offset_seconds {offset!r}.")
        return payload

    async def _request_json(
        self, url: str, *, params: dict[str, Any], context: str
    ) -> dict[str, Any]:
        self.logger.debug("Open-Meteo %s request to %s", context, url)
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise ProviderError(
                f"Open-Meteo {context} failed with status {status} "
                f"at {url}: {sanitize_text(exc.response.text[:300])}",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(
                f"Open-Meteo {context} request failed at {url}: {sanitize_text(str(exc))}"
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError(
                f"Open-Meteo {context} returned non-JSON response at {url}."
            ) from exc

        if not isinstance(payload, dict):
            raise ProviderError(
                f"Open-Meteo {context} returned unexpected payload type "
                f"{type(payload).__name__} at {url}."
            )
        return payload

    def _parse_candidate(self, item: dict[str, Any]) -> CitySuggestion | None:
        name = self._as_str(item.get("name"))
        latitude = self._as_float(item.get("latitude"))
        longitude = self._as_float(item.get("longitude"))
        if name is None or latitude is None or longitude is None:
            self.logger.warning("Skipping incomplete geocoding candidate: %s", item.get("id"))
            return None

        region_parts = [
            part
            for part in (self._as_str(item.get("admin1")), self._as_str(item.get("country")))
            if part
        ]
        return CitySuggestion(
            name=name,
            region=", ".join(region_parts),
            latitude=latitude,
            longitude=longitude,
        )

    @staticmethod
    def _as_str(value: Any) -> str | None:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @staticmethod
    def _as_float(value: Any) -> float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        return None
