"""Pick a visual palette from the current condition and time of day."""

from __future__ import annotations

from typing import Literal

ThemeId = Literal["clear", "cloudy", "rain", "storm", "snow", "fog", "night"]

NIGHT_STARTS_AFTER_HOUR = 20
NIGHT_ENDS_BEFORE_HOUR = 6

# Checked in order; the first matching keyword group wins.
_CONDITION_RULES: tuple[tuple[tuple[str, ...], ThemeId], ...] = (
    (("rain", "drizzle"), "rain"),
    (("storm", "thunder"), "storm"),
    (("cloud", "overcast"), "cloudy"),
    (("snow", "ice"), "snow"),
    (("fog", "mist"), "fog"),
)

THEME_GRADIENTS: dict[ThemeId, str] = {
    "night": "from-slate-900 to-indigo-950",
    "rain": "from-blue-200 via-slate-200 to-gray-100",
    "storm": "from-slate-400 via-slate-300 to-gray-200",
    "cloudy": "from-slate-200 via-gray-100 to-white",
    "snow": "from-blue-50 via-indigo-50 to-white",
    "fog": "from-gray-200 via-slate-100 to-white",
    "clear": "from-sky-200 via-blue-100 to-white",
}

THEME_STYLES: dict[ThemeId, str] = {
    "night": "bold white on grey11",
    "rain": "bold steel_blue",
    "storm": "bold grey50",
    "cloudy": "bold grey70",
    "snow": "bold light_cyan1",
    "fog": "bold grey62",
    "clear": "bold sky_blue1",
}


def is_night_hour(hour: int) -> bool:
    return hour < NIGHT_ENDS_BEFORE_HOUR or hour > NIGHT_STARTS_AFTER_HOUR


def derive_theme(condition: str, is_night: bool) -> ThemeId:
    """Night overrides every condition; otherwise match keywords, default clear."""
    if is_night:
        return "night"
    lowered = (condition or "").lower()
    for keywords, theme in _CONDITION_RULES:
        if any(keyword in lowered for keyword in keywords):
            return theme
    return "clear"
