"""Retrieve the raw forecast payload for a resolved location."""

from __future__ import annotations

from .base import WeatherProvider
from .models import RawForecastPayload, ResolvedLocation


class WeatherFetcher:
    """Single-call forecast retrieval; provider errors propagate unchanged."""

    def __init__(self, provider: WeatherProvider) -> None:
        self.provider = provider

    async def fetch(self, location: ResolvedLocation) -> RawForecastPayload:
        return await self.provider.fetch_forecast(
            latitude=location.latitude,
            longitude=location.longitude,
        )
