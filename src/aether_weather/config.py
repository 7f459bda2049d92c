"""Typed settings loader for the Aether weather client."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")

    geocoding_url: AnyUrl = Field(
        default="https://geocoding-api.open-meteo.com/v1/search",
        alias="GEOCODING_URL",
    )
    forecast_url: AnyUrl = Field(
        default="https://api.open-meteo.com/v1/forecast",
        alias="FORECAST_URL",
    )
    weather_timeout_seconds: float = Field(default=15.0, alias="WEATHER_TIMEOUT_SECONDS")
    geocoding_language: str = Field(default="en", alias="GEOCODING_LANGUAGE")
    geocoding_candidate_count: int = Field(default=5, alias="GEOCODING_CANDIDATE_COUNT")

    default_location: str = Field(default="New York", alias="DEFAULT_LOCATION")
    device_lat: float | None = Field(default=None, alias="DEVICE_LAT")
    device_lon: float | None = Field(default=None, alias="DEVICE_LON")
    geolocation_timeout_seconds: float = Field(
        default=8.0,
        alias="GEOLOCATION_TIMEOUT_SECONDS",
    )

    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY", repr=False)
    openai_base_url: AnyUrl | None = Field(default=None, alias="OPENAI_BASE_URL")
    summary_model: str = Field(default="gpt-4o-mini", alias="SUMMARY_MODEL")
    analysis_model: str = Field(default="o4-mini", alias="ANALYSIS_MODEL")
    analysis_reasoning_effort: Literal["low", "medium", "high"] = Field(
        default="high",
        alias="ANALYSIS_REASONING_EFFORT",
    )
    ai_timeout_seconds: float = Field(default=30.0, alias="AI_TIMEOUT_SECONDS")
    analysis_timeout_seconds: float = Field(default=120.0, alias="ANALYSIS_TIMEOUT_SECONDS")

    favorites_path: Path = Field(
        default=Path("./data/favorites.json"),
        alias="FAVORITES_PATH",
    )

    @field_validator("device_lat", "device_lon", "openai_api_key", "openai_base_url", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset optional values."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate timeouts, candidate count and device coordinates."""
        if self.weather_timeout_seconds <= 0:
            raise ValueError("WEATHER_TIMEOUT_SECONDS must be > 0.")
        if self.geolocation_timeout_seconds <= 0:
            raise ValueError("GEOLOCATION_TIMEOUT_SECONDS must be > 0.")
        if self.ai_timeout_seconds <= 0:
            raise ValueError("AI_TIMEOUT_SECONDS must be > 0.")
        if self.analysis_timeout_seconds <= 0:
            raise ValueError("ANALYSIS_TIMEOUT_SECONDS must be > 0.")
        if self.geocoding_candidate_count <= 0:
            raise ValueError("GEOCODING_CANDIDATE_COUNT must be > 0.")
        if not self.default_location.strip():
            raise ValueError("DEFAULT_LOCATION must not be empty.")

        has_lat = self.device_lat is not None
        has_lon = self.device_lon is not None
        if has_lat != has_lon:
            raise ValueError("DEVICE_LAT and DEVICE_LON must be set together.")
        if has_lat and not (-90 <= self.device_lat <= 90):
            raise ValueError("DEVICE_LAT must be between -90 and 90.")
        if has_lon and not (-180 <= self.device_lon <= 180):
            raise ValueError("DEVICE_LON must be between -180 and 180.")
        return self

    @property
    def ai_enabled(self) -> bool:
        return bool(self.openai_api_key)

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "app_env": self.app_env,
            "geocoding_url": str(self.geocoding_url),
            "forecast_url": str(self.forecast_url),
            "weather_timeout_seconds": self.weather_timeout_seconds,
            "default_location": self.default_location,
            "device_location_configured": self.device_lat is not None,
            "geolocation_timeout_seconds": self.geolocation_timeout_seconds,
            "ai_enabled": self.ai_enabled,
            "summary_model": self.summary_model,
            "analysis_model": self.analysis_model,
            "analysis_reasoning_effort": self.analysis_reasoning_effort,
            "analysis_timeout_seconds": self.analysis_timeout_seconds,
            "favorites_path": str(self.favorites_path),
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    settings.favorites_path.parent.mkdir(parents=True, exist_ok=True)
    return settings
