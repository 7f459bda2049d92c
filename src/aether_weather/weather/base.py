"""Provider-agnostic geocoding and forecast interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import CitySuggestion, RawForecastPayload


class WeatherProvider(ABC):
    """Base contract for the geocoding/forecast service used by the pipeline."""

    @abstractmethod
    async def search(self, query: str, *, count: int = 5) -> list[CitySuggestion]:
        """Return place-name candidates ordered by provider relevance."""

    @abstractmethod
    async def fetch_forecast(self, *, latitude: float, longitude: float) -> RawForecastPayload:
        """Fetch current, hourly and daily series for one coordinate pair."""

    @abstractmethod
    async def close(self) -> None:
        """Release provider resources."""
