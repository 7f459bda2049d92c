"""Turn free-text or "lat, lng" input into a ResolvedLocation."""

from __future__ import annotations

import logging
import math

from ..exceptions import NotFoundError
from .base import WeatherProvider
from .models import CitySuggestion, ResolvedLocation

COORDINATE_DISPLAY_NAME = "Current Location"
MIN_SUGGEST_LENGTH = 3


def parse_coordinates(text: str) -> tuple[float, float] | None:
    """Return (lat, lng) when the text is exactly two comma-separated floats."""
    if "," not in text:
        return None
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        return None
    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError:
        return None
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None
    return latitude, longitude


class LocationResolver:
    """Resolves user input, geocoding only when it is not a coordinate pair."""

    def __init__(
        self,
        provider: WeatherProvider,
        logger: logging.Logger,
        candidate_count: int = 5,
    ) -> None:
        self.provider = provider
        self.logger = logger
        self.candidate_count = candidate_count

    async def resolve(self, text: str) -> ResolvedLocation:
        query = text.strip()
        if not query:
            raise NotFoundError("Empty location query.")

        coords = parse_coordinates(query)
        if coords is not None:
            latitude, longitude = coords
            return ResolvedLocation(
                latitude=latitude,
                longitude=longitude,
                display_name=COORDINATE_DISPLAY_NAME,
            )

        candidates = await self.provider.search(query, count=self.candidate_count)
        if not candidates:
            raise NotFoundError(f"No location found matching '{query}'.")

        best = candidates[0]
        self.logger.info(
            "Resolved '%s' to %s (%.4f, %.4f) from %d candidates",
            query, best.name, best.latitude, best.longitude, len(candidates),
        )
        return best.to_location()

    async def suggest(self, text: str) -> list[CitySuggestion]:
        """Autocomplete candidates for a partially typed place name."""
        query = text.strip()
        if len(query) < MIN_SUGGEST_LENGTH:
            return []
        return await self.provider.search(query, count=self.candidate_count)
