"""Typed models for resolved locations and normalized weather snapshots."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

RawForecastPayload = dict[str, Any]


class ResolvedLocation(BaseModel):
    """Canonical coordinates and display names for one query."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    display_name: str
    region: str = ""


class CitySuggestion(BaseModel):
    """One geocoding candidate, ordered by provider relevance."""

    model_config = ConfigDict(frozen=True)

    name: str
    region: str = ""
    latitude: float
    longitude: float

    def to_location(self) -> ResolvedLocation:
        return ResolvedLocation(
            latitude=self.latitude,
            longitude=self.longitude,
            display_name=self.name,
            region=self.region,
        )


class HourlyForecast(BaseModel):
    """Hourly temperature point, time pre-formatted for display."""

    model_config = ConfigDict(frozen=True)

    time: str
    temp: int


class DailyForecast(BaseModel):
    """Daily high/low with a translated condition label."""

    model_config = ConfigDict(frozen=True)

    day: str
    high: int | None = None
    low: int | None = None
    condition: str = "Unknown"


class WeatherData(BaseModel):
    """UI-ready weather snapshot produced by one pipeline run."""

    model_config = ConfigDict(frozen=True)

    city: str
    country: str = ""
    current_temp: int | None = None
    feels_like: int | None = None
    condition: str = "Unknown"
    humidity: int | None = None
    wind_speed: int | None = None
    pressure: int | None = None
    uv_index: int | None = None
    sunrise: str = ""
    sunset: str = ""
    hourly: tuple[HourlyForecast, ...] = ()
    daily: tuple[DailyForecast, ...] = ()
    grounding_source: str | None = None
