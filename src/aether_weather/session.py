"""Visible weather state for a single active viewport.

Every query is tagged with a monotonically increasing generation. A pipeline,
summary or analysis result is applied only while its generation is still the
latest one issued, so a slow earlier query can never overwrite a newer
snapshot.
"""

from __future__ import annotations

import asyncio
import logging

from .enrichment.client import AIEnrichmentClient
from .enrichment.models import AIAnalysisResult, EnrichmentState
from .exceptions import AnalysisError, GeolocationDenied, NotFoundError, ProviderError
from .favorites import FavoritesStore
from .geolocation import GeolocationSource, format_coordinates
from .pipeline import PipelineResult, WeatherPipeline
from .theme import ThemeId, derive_theme, is_night_hour
from .weather.models import CitySuggestion, ResolvedLocation, WeatherData

NOT_FOUND_MESSAGE = "City not found. Please check the name and try again."
FETCH_FAILED_MESSAGE = "Failed to fetch weather. Please try again."
LOCATION_ADVISORY = "Location access needed for local weather. Showing default city."
LOCATION_DENIED_MESSAGE = "Location access denied."


class WeatherSession:
    """Owns the current snapshot, theme, error banner and enrichment panels."""

    def __init__(
        self,
        pipeline: WeatherPipeline,
        favorites_store: FavoritesStore,
        logger: logging.Logger,
        *,
        enrichment: AIEnrichmentClient | None = None,
        auto_summary: bool = True,
        default_location: str = "New York",
        geolocation_timeout_seconds: float = 8.0,
        analysis_timeout_seconds: float = 120.0,
    ) -> None:
        self.pipeline = pipeline
        self.favorites_store = favorites_store
        self.logger = logger
        self.enrichment = enrichment
        self.auto_summary = auto_summary
        self.default_location = default_location
        self.geolocation_timeout_seconds = geolocation_timeout_seconds
        self.analysis_timeout_seconds = analysis_timeout_seconds

        self.weather: WeatherData | None = None
        self.location: ResolvedLocation | None = None
        self.theme: ThemeId = "clear"
        self.is_night = False
        self.loading = False
        self.error: str | None = None
        self.summary: EnrichmentState[str] = EnrichmentState[str].empty()
        self.analysis: EnrichmentState[AIAnalysisResult] = (
            EnrichmentState[AIAnalysisResult].empty()
        )
        self.favorites: list[str] = favorites_store.load()

        self._generation = 0
        self._snapshot_generation = 0
        self._background: set[asyncio.Task[None]] = set()

    @property
    def generation(self) -> int:
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _query_in_flight(self) -> bool:
        return self._snapshot_generation != self._generation

    async def search(self, text: str) -> bool:
        """Run one query; returns True when its snapshot became visible."""
        self._generation += 1
        generation = self._generation
        self.loading = True
        self.error = None
        self.summary = EnrichmentState[str].empty()
        self.analysis = EnrichmentState[AIAnalysisResult].empty()

        try:
            result = await self.pipeline.run(text)
        except NotFoundError as exc:
            return self._apply_failure(generation, NOT_FOUND_MESSAGE, exc)
        except ProviderError as exc:
            return self._apply_failure(generation, FETCH_FAILED_MESSAGE, exc)

        if not self._is_current(generation):
            self.logger.info(
                "Discarding stale snapshot for %r (generation %d, latest %d)",
                text, generation, self._generation,
                extra={"generation": generation, "query": text},
            )
            return False

        self._apply_snapshot(generation, result)
        self._start_summary(generation, result.weather)
        return True

    def _apply_snapshot(self, generation: int, result: PipelineResult) -> None:
        self.weather = result.weather
        self.location = result.location
        self.is_night = is_night_hour(result.local_time.hour)
        self.theme = derive_theme(result.weather.condition, self.is_night)
        self.loading = False
        self._snapshot_generation = generation

    def _apply_failure(self, generation: int, message: str, exc: Exception) -> bool:
        if not self._is_current(generation):
            self.logger.info("Discarding stale failure (generation %d): %s", generation, exc)
            return False
        self.logger.warning("Weather query failed: %s", exc, extra={"generation": generation})
        self.error = message
        self.loading = False
        # The previous snapshot stays on screen and remains usable.
        self._snapshot_generation = generation
        return False

    def _start_summary(self, generation: int, weather: WeatherData) -> None:
        if self.enrichment is None or not self.auto_summary:
            return
        self.summary = EnrichmentState[str].pending()
        task = asyncio.create_task(self._run_summary(self.enrichment, generation, weather))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _run_summary(
        self, enrichment: AIEnrichmentClient, generation: int, weather: WeatherData
    ) -> None:
        text = await enrichment.summarize(weather)
        if not self._is_current(generation):
            return
        if text:
            self.summary = EnrichmentState[str].ready(text)
        else:
            self.summary = EnrichmentState[str].failed("Quick summary unavailable.")

    async def wait_for_enrichment(self) -> None:
        """Wait for outstanding fire-and-forget summary tasks."""
        if not self._background:
            return
        results = await asyncio.gather(*list(self._background), return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                self.logger.error("Background enrichment task failed: %s", result)

    async def request_analysis(self) -> bool:
        """Start the deep analysis; a no-op while one is already in flight."""
        if self.enrichment is None or self.weather is None:
            return False
        if self.analysis.is_pending or self._snapshot_generation != self._generation:
            return False

        generation = self._generation
        weather = self.weather
        self.analysis = EnrichmentState[AIAnalysisResult].pending()
        try:
            result = await asyncio.wait_for(
                self.enrichment.analyze(weather),
                timeout=self.analysis_timeout_seconds,
            )
        except AnalysisError as exc:
            self.logger.error("Deep analysis failed for %s: %s", weather.city, exc)
            outcome = EnrichmentState[AIAnalysisResult].failed(str(exc))
        except TimeoutError:
            self.logger.error(
                "Deep analysis for %s timed out after %.1fs",
                weather.city, self.analysis_timeout_seconds,
            )
            outcome = EnrichmentState[AIAnalysisResult].failed("Deep analysis timed out.")
        else:
            outcome = EnrichmentState[AIAnalysisResult].ready(result)

        if not self._is_current(generation):
            self.logger.info("Discarding deep analysis for superseded snapshot %d", generation)
            return False
        self.analysis = outcome
        return outcome.is_ready

    async def start(self, geolocation: GeolocationSource) -> bool:
        """Initial load: device location, else the default city plus an advisory."""
        generation = self._generation
        self.loading = True
        try:
            latitude, longitude = await asyncio.wait_for(
                geolocation.locate(),
                timeout=self.geolocation_timeout_seconds,
            )
        except (GeolocationDenied, TimeoutError) as exc:
            if not self._is_current(generation):
                self.logger.info("Skipping default location; a newer query was issued")
                return False
            self.logger.warning(
                "Geolocation unavailable (%s); showing %s",
                str(exc) or type(exc).__name__, self.default_location,
            )
            applied = await self.search(self.default_location)
            # Only after the fallback snapshot is visible, so search() cannot clear it.
            if applied:
                self.error = LOCATION_ADVISORY
            return applied
        return await self._search_located(generation, latitude, longitude)

    async def locate(self, geolocation: GeolocationSource) -> bool:
        """User-triggered "use my location"."""
        generation = self._generation
        self.loading = True
        try:
            latitude, longitude = await asyncio.wait_for(
                geolocation.locate(),
                timeout=self.geolocation_timeout_seconds,
            )
        except (GeolocationDenied, TimeoutError) as exc:
            self.logger.warning("Geolocation request failed: %s", str(exc) or type(exc).__name__)
            if self._is_current(generation):
                self.error = LOCATION_DENIED_MESSAGE
                if not self._query_in_flight():
                    self.loading = False
            return False
        return await self._search_located(generation, latitude, longitude)

    async def _search_located(self, generation: int, latitude: float, longitude: float) -> bool:
        if not self._is_current(generation):
            self.logger.info("Discarding device location; a newer query was issued")
            return False
        return await self.search(format_coordinates(latitude, longitude))

    async def suggest(self, text: str) -> list[CitySuggestion]:
        """Autocomplete candidates; lookup failures yield no suggestions."""
        try:
            return await self.pipeline.resolver.suggest(text)
        except ProviderError as exc:
            self.logger.warning("City suggestions failed for %r: %s", text, exc)
            return []

    def add_favorite(self, city: str) -> bool:
        if not city or city in self.favorites:
            return False
        updated = [*self.favorites, city]
        self.favorites_store.save(updated)
        self.favorites = updated
        return True

    def remove_favorite(self, city: str) -> bool:
        if city not in self.favorites:
            return False
        updated = [item for item in self.favorites if item != city]
        self.favorites_store.save(updated)
        self.favorites = updated
        return True
