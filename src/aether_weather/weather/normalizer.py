"""Map a raw Open-Meteo forecast payload into a WeatherData snapshot.

Every lookup is bounds-checked: providers may return truncated hourly or daily
arrays around day boundaries, so series are shortened instead of raising.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, timedelta, timezone
from typing import Any

from .conditions import translate
from .models import (
    DailyForecast,
    HourlyForecast,
    RawForecastPayload,
    ResolvedLocation,
    WeatherData,
)

GROUNDING_SOURCE = "Open-Meteo (National Weather Services)"
HOURLY_WINDOW = 24
DAILY_WINDOW = 5
MAX_UTC_OFFSET_SECONDS = 24 * 60 * 60

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def normalize(
    raw: RawForecastPayload,
    location: ResolvedLocation,
    now: datetime,
) -> WeatherData:
    """Build the canonical snapshot; `now` is wall-clock time at the location."""
    current = _section(raw, "current")
    hourly = _section(raw, "hourly")
    daily = _section(raw, "daily")

    return WeatherData(
        city=location.display_name,
        country=location.region,
        current_temp=round_display(current.get("temperature_2m")),
        feels_like=round_display(current.get("apparent_temperature")),
        condition=translate(current.get("weather_code")),
        humidity=round_display(current.get("relative_humidity_2m")),
        wind_speed=round_display(current.get("wind_speed_10m")),
        pressure=round_display(current.get("surface_pressure")),
        uv_index=round_display(_value_at(daily.get("uv_index_max"), 0)),
        sunrise=format_clock(_value_at(daily.get("sunrise"), 0)),
        sunset=format_clock(_value_at(daily.get("sunset"), 0)),
        hourly=tuple(window_hourly(hourly, start_index=now.hour)),
        daily=tuple(window_daily(daily)),
        grounding_source=GROUNDING_SOURCE,
    )


def window_hourly(hourly: dict[str, Any], start_index: int) -> list[HourlyForecast]:
    """Collect up to 24 entries from start_index, stopping at the end of the data."""
    times = _as_list(hourly.get("time"))
    temps = _as_list(hourly.get("temperature_2m"))
    entries: list[HourlyForecast] = []
    for index in range(max(start_index, 0), start_index + HOURLY_WINDOW):
        label = format_clock(_value_at(times, index))
        temp = round_display(_value_at(temps, index))
        if not label or temp is None:
            break
        entries.append(HourlyForecast(time=label, temp=temp))
    return entries


def window_daily(daily: dict[str, Any]) -> list[DailyForecast]:
    """Take today plus the next four days, truncating when the series is short."""
    days = _as_list(daily.get("time"))
    highs = _as_list(daily.get("temperature_2m_max"))
    lows = _as_list(daily.get("temperature_2m_min"))
    codes = _as_list(daily.get("weather_code"))
    entries: list[DailyForecast] = []
    for index in range(DAILY_WINDOW):
        day = format_weekday(_value_at(days, index))
        if not day:
            break
        entries.append(
            DailyForecast(
                day=day,
                high=round_display(_value_at(highs, index)),
                low=round_display(_value_at(lows, index)),
                condition=translate(_value_at(codes, index)),
            )
        )
    return entries


def location_now(raw: RawForecastPayload, now: datetime | None = None) -> datetime:
    """Shift `now` into the forecast location's UTC offset."""
    instant = now or datetime.now(UTC)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    offset = raw.get("utc_offset_seconds")
    if not is_valid_utc_offset(offset):
        offset = 0
    return instant.astimezone(timezone(timedelta(seconds=int(offset))))


def is_valid_utc_offset(value: Any) -> bool:
    """True for a finite offset strictly inside one day."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and abs(value) < MAX_UTC_OFFSET_SECONDS


def round_display(value: Any) -> int | None:
    """Round half away from zero; None for missing or non-numeric values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def format_clock(value: Any) -> str:
    """Format a provider-local ISO timestamp as HH:MM."""
    parsed = _parse_local(value)
    if parsed is None:
        return ""
    return parsed.strftime("%H:%M")


def format_weekday(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        return ""
    try:
        parsed = date.fromisoformat(value.strip()[:10])
    except ValueError:
        return ""
    return _WEEKDAYS[parsed.weekday()]


def _parse_local(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def _section(raw: RawForecastPayload, name: str) -> dict[str, Any]:
    section = raw.get(name) if isinstance(raw, dict) else None
    return section if isinstance(section, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _value_at(values: Any, index: int) -> Any:
    if not isinstance(values, list) or not 0 <= index < len(values):
        return None
    return values[index]
