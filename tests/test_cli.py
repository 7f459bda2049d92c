"""CLI offline smoke tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
from conftest import load_fixture

from aether_weather import cli
from aether_weather.weather.open_meteo import OpenMeteoProvider

_GEOCODING = {
    "Tokyo": load_fixture("open_meteo_geocoding.json"),
    "New York": {
        "results": [
            {
                "name": "New York",
                "latitude": 40.71427,
                "longitude": -74.00597,
                "admin1": "New York",
                "country": "United States",
            }
        ]
    },
}


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.host == "geocoding.test":
        name = request.url.params["name"]
        return httpx.Response(200, json=_GEOCODING.get(name, {"generationtime_ms": 0.1}))
    return httpx.Response(200, json=load_fixture("open_meteo_forecast.json"))


def _set_required_env(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("DEVICE_LAT", raising=False)
    monkeypatch.delenv("DEVICE_LON", raising=False)
    monkeypatch.delenv("DEFAULT_LOCATION", raising=False)
    monkeypatch.setenv("GEOCODING_URL", "https://geocoding.test/v1/search")
    monkeypatch.setenv("FORECAST_URL", "https://forecast.test/v1/forecast")
    monkeypatch.setenv("FAVORITES_PATH", str(tmp_path / "favorites.json"))
    monkeypatch.setattr(
        cli,
        "OpenMeteoProvider",
        lambda settings, logger: OpenMeteoProvider(
            settings=settings, logger=logger, transport=httpx.MockTransport(_handler)
        ),
    )


def test_cli_place_name_smoke(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_required_env(monkeypatch, tmp_path)

    assert cli.main(["Tokyo"]) == 0

    output = capsys.readouterr().out
    assert "Tokyo, Japan" in output
    assert "Slight Rain" in output
    assert "5-Day Forecast" in output
    assert "Open-Meteo" in output


def test_cli_unknown_city_returns_error(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_required_env(monkeypatch, tmp_path)

    assert cli.main(["Atlantis"]) == 4
    assert "City not found" in capsys.readouterr().out


def test_cli_without_location_falls_back_to_default(
    monkeypatch: Any, tmp_path: Path, capsys: Any
) -> None:
    _set_required_env(monkeypatch, tmp_path)

    assert cli.main([]) == 0
    output = capsys.readouterr().out
    assert "New York" in output
    assert "Location access needed" in output


def test_cli_save_and_list_favorites(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_required_env(monkeypatch, tmp_path)

    assert cli.main(["Tokyo", "--save"]) == 0
    assert json.loads((tmp_path / "favorites.json").read_text(encoding="utf-8")) == ["Tokyo"]

    capsys.readouterr()
    assert cli.main(["--favorites"]) == 0
    assert "Favorites: Tokyo" in capsys.readouterr().out

    assert cli.main(["--remove", "Tokyo"]) == 0
    assert json.loads((tmp_path / "favorites.json").read_text(encoding="utf-8")) == []


def test_cli_analyze_without_key_reports(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_required_env(monkeypatch, tmp_path)

    assert cli.main(["40.71, -74.01", "--analyze"]) == 0
    output = capsys.readouterr().out
    assert "Current Location" in output
    assert "OPENAI_API_KEY" in output


def test_cli_suggest(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_required_env(monkeypatch, tmp_path)

    assert cli.main(["--suggest", "Tokyo"]) == 0
    output = capsys.readouterr().out
    assert "Suggestions" in output
    assert "Japan" in output


def test_cli_config_error_returns_2(monkeypatch: Any, tmp_path: Path) -> None:
    _set_required_env(monkeypatch, tmp_path)
    monkeypatch.setenv("DEVICE_LAT", "40.7")

    assert cli.main(["Tokyo"]) == 2
