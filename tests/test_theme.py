"""Tests for theme derivation rule order."""

from __future__ import annotations

import pytest

from aether_weather.theme import THEME_GRADIENTS, THEME_STYLES, derive_theme, is_night_hour


@pytest.mark.parametrize(
    ("condition", "theme"),
    [
        ("Heavy Rain", "rain"),
        ("Light Drizzle", "rain"),
        ("Thunderstorm", "storm"),
        ("Thunderstorm with Hail", "storm"),
        ("Partly Cloudy", "cloudy"),
        ("Overcast", "cloudy"),
        ("Heavy Snow", "snow"),
        ("Ice pellets", "snow"),
        ("Depositing Rime Fog", "fog"),
        ("Mist", "fog"),
        ("Clear Sky", "clear"),
        ("Unknown", "clear"),
        ("", "clear"),
    ],
)
def test_day_themes_follow_condition(condition: str, theme: str) -> None:
    assert derive_theme(condition, False) == theme


def test_rain_takes_priority_over_later_rules() -> None:
    assert derive_theme("Rain and thunder", False) == "rain"
    assert derive_theme("Slight Snow Showers", False) == "snow"
    assert derive_theme("Light Freezing Rain", False) == "rain"


@pytest.mark.parametrize("condition", ["Heavy Rain", "Thunderstorm", "Clear Sky", "Fog", ""])
def test_night_overrides_every_condition(condition: str) -> None:
    assert derive_theme(condition, True) == "night"


def test_day_rain_and_storm_differ_from_night() -> None:
    night = derive_theme("anything", True)
    assert derive_theme("Heavy Rain", False) != night
    assert derive_theme("Thunderstorm", False) != night
    assert derive_theme("Heavy Rain", False) != derive_theme("Thunderstorm", False)


@pytest.mark.parametrize(
    ("hour", "night"),
    [(0, True), (5, True), (6, False), (12, False), (20, False), (21, True), (23, True)],
)
def test_is_night_hour(hour: int, night: bool) -> None:
    assert is_night_hour(hour) is night


def test_every_theme_has_palette_and_style() -> None:
    assert set(THEME_GRADIENTS) == set(THEME_STYLES)
    assert "night" in THEME_GRADIENTS
