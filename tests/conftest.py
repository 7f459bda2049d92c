"""Shared fakes and fixtures for offline tests."""

from __future__ import annotations

import asyncio
import copy
import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from aether_weather.enrichment.base import ReasoningEffort, TextGenerator
from aether_weather.exceptions import ProviderError
from aether_weather.weather.base import WeatherProvider
from aether_weather.weather.models import CitySuggestion, RawForecastPayload

FIXTURES = Path(__file__).parent / "fixtures"

# 14:00 in Tokyo (UTC+9).
TOKYO_AFTERNOON_UTC = datetime(2026, 10, 19, 5, 0, tzinfo=UTC)


def load_fixture(name: str) -> dict[str, Any]:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


def make_settings(**overrides: Any) -> Any:
    defaults = {
        "summary_model": "test-fast",
        "analysis_model": "test-deep",
        "analysis_reasoning_effort": "high",
        "geocoding_language": "en",
        "weather_timeout_seconds": 5.0,
        "geocoding_url": "https://geocoding.test/v1/search",
        "forecast_url": "https://forecast.test/v1/forecast",
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


class FakeWeatherProvider(WeatherProvider):
    """Deterministic geocoding/forecast provider with call recording."""

    def __init__(
        self,
        *,
        candidates: dict[str, list[CitySuggestion]] | None = None,
        forecast: RawForecastPayload | None = None,
        forecast_error: Exception | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.candidates = candidates or {}
        self.forecast = forecast if forecast is not None else load_fixture("open_meteo_forecast.json")
        self.forecast_error = forecast_error
        self.delays = delays or {}
        self.search_calls: list[str] = []
        self.forecast_calls: list[tuple[float, float]] = []
        self.closed = False

    async def search(self, query: str, *, count: int = 5) -> list[CitySuggestion]:
        self.search_calls.append(query)
        await asyncio.sleep(self.delays.get(query, 0))
        return list(self.candidates.get(query, []))[:count]

    async def fetch_forecast(self, *, latitude: float, longitude: float) -> RawForecastPayload:
        self.forecast_calls.append((latitude, longitude))
        if self.forecast_error is not None:
            raise self.forecast_error
        return copy.deepcopy(self.forecast)

    async def close(self) -> None:
        self.closed = True


class FakeTextGenerator(TextGenerator):
    """Returns canned text; raises when configured with an exception."""

    def __init__(
        self,
        *,
        summary: str | Exception = "Drizzly Tokyo: bring an umbrella and a sense of humour.",
        analysis: str | Exception = (
            '{"advice": "Skip the long run.", "outfit": "Light raincoat.", '
            '"details": "A silver afternoon."}'
        ),
        analysis_delay: float = 0.0,
    ) -> None:
        self.summary = summary
        self.analysis = analysis
        self.analysis_delay = analysis_delay
        self.complete_calls: list[dict[str, Any]] = []
        self.structured_calls: list[dict[str, Any]] = []

    async def complete(self, prompt: str, *, model: str) -> str:
        self.complete_calls.append({"prompt": prompt, "model": model})
        if isinstance(self.summary, Exception):
            raise self.summary
        return self.summary

    async def complete_structured(
        self,
        prompt: str,
        *,
        model: str,
        schema_name: str,
        schema: dict[str, Any],
        reasoning_effort: ReasoningEffort = "high",
    ) -> str:
        self.structured_calls.append(
            {
                "prompt": prompt,
                "model": model,
                "schema_name": schema_name,
                "schema": schema,
                "reasoning_effort": reasoning_effort,
            }
        )
        await asyncio.sleep(self.analysis_delay)
        if isinstance(self.analysis, Exception):
            raise self.analysis
        return self.analysis

    async def close(self) -> None:
        return None


TOKYO = CitySuggestion(name="Tokyo", region="Tokyo, Japan", latitude=35.6895, longitude=139.69171)
NEW_YORK = CitySuggestion(
    name="New York", region="New York, United States", latitude=40.71427, longitude=-74.00597
)
PARIS = CitySuggestion(name="Paris", region="Île-de-France, France", latitude=48.85, longitude=2.35)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("test_aether_weather")


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    return load_fixture("open_meteo_forecast.json")


@pytest.fixture
def provider_error() -> ProviderError:
    return ProviderError("Open-Meteo forecast fetch failed with status 502", status_code=502)
