"""Tests for coordinate/place-name disambiguation in the location resolver."""

from __future__ import annotations

import asyncio
import logging

import pytest
from conftest import PARIS, TOKYO, FakeWeatherProvider

from aether_weather.exceptions import NotFoundError
from aether_weather.weather.resolver import (
    COORDINATE_DISPLAY_NAME,
    LocationResolver,
    parse_coordinates,
)


def _resolver(provider: FakeWeatherProvider) -> LocationResolver:
    return LocationResolver(provider, logging.getLogger("test_resolver"))


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("40.71, -74.01", (40.71, -74.01)),
        ("40.71,-74.01", (40.71, -74.01)),
        ("  -33.8688 ,151.2093 ", (-33.8688, 151.2093)),
        ("0, 0", (0.0, 0.0)),
        ("1e1, 2", (10.0, 2.0)),
    ],
)
def test_coordinate_pairs_parse(text: str, expected: tuple[float, float]) -> None:
    assert parse_coordinates(text) == expected


@pytest.mark.parametrize(
    "text",
    ["Paris, France", "Tokyo", "40.71", "40.71, Paris", "Springfield, IL, USA", "1, 2, 3", ", "],
)
def test_non_coordinate_inputs_are_rejected(text: str) -> None:
    assert parse_coordinates(text) is None


def test_coordinate_input_skips_geocoding() -> None:
    provider = FakeWeatherProvider()
    location = asyncio.run(_resolver(provider).resolve("40.71, -74.01"))

    assert provider.search_calls == []
    assert location.latitude == 40.71
    assert location.longitude == -74.01
    assert location.display_name == COORDINATE_DISPLAY_NAME
    assert location.region == ""


def test_place_name_with_comma_falls_through_to_geocoding() -> None:
    provider = FakeWeatherProvider(candidates={"Paris, France": [PARIS]})
    location = asyncio.run(_resolver(provider).resolve("Paris, France"))

    assert provider.search_calls == ["Paris, France"]
    assert location.display_name == "Paris"
    assert location.region == "Île-de-France, France"


def test_first_candidate_is_authoritative() -> None:
    other = TOKYO.model_copy(update={"region": "South Carolina, United States", "latitude": 34.8})
    provider = FakeWeatherProvider(candidates={"Tokyo": [TOKYO, other]})
    location = asyncio.run(_resolver(provider).resolve("  Tokyo "))

    assert provider.search_calls == ["Tokyo"]
    assert location.latitude == TOKYO.latitude
    assert location.region == "Tokyo, Japan"


def test_no_candidates_raises_not_found() -> None:
    provider = FakeWeatherProvider(candidates={})
    with pytest.raises(NotFoundError, match="Atlantis"):
        asyncio.run(_resolver(provider).resolve("Atlantis"))
    assert provider.search_calls == ["Atlantis"]


def test_blank_input_raises_without_lookup() -> None:
    provider = FakeWeatherProvider()
    with pytest.raises(NotFoundError):
        asyncio.run(_resolver(provider).resolve("   "))
    assert provider.search_calls == []


def test_suggest_requires_three_characters() -> None:
    provider = FakeWeatherProvider(candidates={"Tok": [TOKYO]})
    resolver = _resolver(provider)

    assert asyncio.run(resolver.suggest("To")) == []
    assert asyncio.run(resolver.suggest("Tok")) == [TOKYO]
    assert provider.search_calls == ["Tok"]
