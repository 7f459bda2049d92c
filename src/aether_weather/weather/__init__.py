"""Location resolution, forecast retrieval and normalization."""

from .base import WeatherProvider
from .conditions import translate
from .fetcher import WeatherFetcher
from .models import (
    CitySuggestion,
    DailyForecast,
    HourlyForecast,
    RawForecastPayload,
    ResolvedLocation,
    WeatherData,
)
from .normalizer import normalize
from .open_meteo import OpenMeteoProvider
from .resolver import LocationResolver

__all__ = [
    "CitySuggestion",
    "DailyForecast",
    "HourlyForecast",
    "LocationResolver",
    "OpenMeteoProvider",
    "RawForecastPayload",
    "ResolvedLocation",
    "WeatherData",
    "WeatherFetcher",
    "WeatherProvider",
    "normalize",
    "translate",
]
