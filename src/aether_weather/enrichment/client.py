"""Quick summary and deep analysis requests built from a weather snapshot."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from ..config import Settings
from ..exceptions import AnalysisError, ProviderError
from ..weather.models import WeatherData
from .base import TextGenerator
from .models import AIAnalysisResult

ANALYSIS_SCHEMA_NAME = "weather_analysis"
ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "advice": {"type": "string"},
        "outfit": {"type": "string"},
        "details": {"type": "string"},
    },
    "required": ["advice", "outfit", "details"],
    "additionalProperties": False,
}

_MARKUP_RE = re.compile(r"[*_#`~>]")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_markup(text: str) -> str:
    """Remove markdown markup characters and collapse whitespace."""
    return _WHITESPACE_RE.sub(" ", _MARKUP_RE.sub("", text)).strip()


def build_summary_prompt(snapshot: WeatherData) -> str:
    return (
        "Give a 10-word witty summary of this weather: "
        f"{snapshot.condition}, {_fmt(snapshot.current_temp)}C in {snapshot.city}. "
        "Return plain text only, absolutely no markdown formatting like bold, "
        "italics or asterisks."
    )


def build_analysis_prompt(snapshot: WeatherData) -> str:
    daily = json.dumps([day.model_dump(mode="json") for day in snapshot.daily])
    return (
        f"Analyze this weather data for {snapshot.city}:\n"
        f"Condition: {snapshot.condition}, Temp: {_fmt(snapshot.current_temp)}C, "
        f"Feels Like: {_fmt(snapshot.feels_like)}C,\n"
        f"Humidity: {_fmt(snapshot.humidity)}%, Wind: {_fmt(snapshot.wind_speed)}km/h, "
        f"UV: {_fmt(snapshot.uv_index)}.\n"
        f"Forecast: {daily}.\n\n"
        "Provide:\n"
        "1. Detailed health/activity advice (e.g., outdoor sports, allergies, UV protection).\n"
        "2. Specific outfit recommendation.\n"
        '3. A brief "poetic" description of the day.\n'
        "Respond with JSON fields advice, outfit and details."
    )


def parse_analysis(text: str) -> AIAnalysisResult:
    """Parse structured output; only a non-object payload is fatal."""
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise AnalysisError(f"Deep analysis response is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise AnalysisError(
            f"Deep analysis response is a {type(payload).__name__}, expected an object."
        )
    return AIAnalysisResult.model_validate(payload)


class AIEnrichmentClient:
    """Two independent request shapes against one generative-text provider."""

    def __init__(
        self,
        generator: TextGenerator,
        settings: Settings,
        logger: logging.Logger,
    ) -> None:
        self.generator = generator
        self.settings = settings
        self.logger = logger

    async def summarize(self, snapshot: WeatherData) -> str:
        """Cosmetic one-liner; any failure yields an empty string."""
        try:
            text = await self.generator.complete(
                build_summary_prompt(snapshot),
                model=self.settings.summary_model,
            )
        except Exception as exc:
            self.logger.warning("Quick summary failed for %s: %s", snapshot.city, exc)
            return ""
        return strip_markup(text)

    async def analyze(self, snapshot: WeatherData) -> AIAnalysisResult:
        try:
            text = await self.generator.complete_structured(
                build_analysis_prompt(snapshot),
                model=self.settings.analysis_model,
                schema_name=ANALYSIS_SCHEMA_NAME,
                schema=ANALYSIS_SCHEMA,
                reasoning_effort=self.settings.analysis_reasoning_effort,
            )
        except ProviderError as exc:
            raise AnalysisError(f"Deep analysis request failed: {exc}") from exc
        return parse_analysis(text)


def _fmt(value: int | None) -> str:
    return "-" if value is None else str(value)
