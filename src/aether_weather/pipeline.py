"""Sequential resolve -> fetch -> normalize chain for one query."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from .weather.fetcher import WeatherFetcher
from .weather.models import ResolvedLocation, WeatherData
from .weather.normalizer import location_now, normalize
from .weather.resolver import LocationResolver


class PipelineResult(BaseModel):
    """Snapshot plus the location and local wall-clock time it was built for."""

    model_config = ConfigDict(frozen=True)

    location: ResolvedLocation
    weather: WeatherData
    local_time: datetime


def _utc_now() -> datetime:
    return datetime.now(UTC)


class WeatherPipeline:
    """Each stage blocks the next; errors from any stage abort the run."""

    def __init__(
        self,
        resolver: LocationResolver,
        fetcher: WeatherFetcher,
        logger: logging.Logger,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.resolver = resolver
        self.fetcher = fetcher
        self.logger = logger
        self.clock = clock

    async def run(self, text: str) -> PipelineResult:
        location = await self.resolver.resolve(text)
        raw = await self.fetcher.fetch(location)
        local_time = location_now(raw, self.clock())
        weather = normalize(raw, location, local_time)
        self.logger.info(
            "Snapshot ready for %s: %s, %s C, hourly=%d daily=%d",
            weather.city,
            weather.condition,
            weather.current_temp,
            len(weather.hourly),
            len(weather.daily),
        )
        return PipelineResult(location=location, weather=weather, local_time=local_time)
