"""WMO weather-code translation."""

from __future__ import annotations

from typing import Any

UNKNOWN_CONDITION = "Unknown"

WMO_CONDITIONS: dict[int, str] = {
    0: "Clear Sky",
    1: "Mainly Clear",
    2: "Partly Cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing Rime Fog",
    51: "Light Drizzle",
    53: "Moderate Drizzle",
    55: "Dense Drizzle",
    56: "Light Freezing Drizzle",
    57: "Dense Freezing Drizzle",
    61: "Slight Rain",
    63: "Moderate Rain",
    65: "Heavy Rain",
    66: "Light Freezing Rain",
    67: "Heavy Freezing Rain",
    71: "Slight Snow",
    73: "Moderate Snow",
    75: "Heavy Snow",
    77: "Snow Grains",
    80: "Slight Rain Showers",
    81: "Moderate Rain Showers",
    82: "Violent Rain Showers",
    85: "Slight Snow Showers",
    86: "Heavy Snow Showers",
    95: "Thunderstorm",
    96: "Thunderstorm with Hail",
    99: "Heavy Thunderstorm with Hail",
}


def translate(code: Any) -> str:
    """Return the English label for a WMO code, or "Unknown"."""
    if isinstance(code, bool):
        return UNKNOWN_CONDITION
    if isinstance(code, float) and code.is_integer():
        code = int(code)
    if not isinstance(code, int):
        return UNKNOWN_CONDITION
    return WMO_CONDITIONS.get(code, UNKNOWN_CONDITION)
