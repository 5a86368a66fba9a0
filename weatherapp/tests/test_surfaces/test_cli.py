"""Tests for CLI commands against a mocked weather API."""

import asyncio
import json
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest
import respx

from weatherapp.cli import _interactive, main
from weatherapp.config.loader import API_KEY_ENV
from weatherapp.ingest.location import LocationService, PermissionStatus
from weatherapp.ingest.weather_client import WeatherClient
from weatherapp.models.weather import Coordinates
from weatherapp.screen.controller import ScreenController
from weatherapp.screen.state import Phase

BASE = "https://owm.test/data/2.5"


@pytest.fixture
def owm(owm_current: dict, owm_forecast: dict):
    with respx.mock(assert_all_called=False) as router:
        router.get(f"{BASE}/weather", name="weather").mock(
            return_value=httpx.Response(200, json=owm_current)
        )
        router.get(f"{BASE}/forecast", name="forecast").mock(
            return_value=httpx.Response(200, json=owm_forecast)
        )
        yield router


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        assert main([]) == 1

    def test_config_show_masks_key(self, config_yaml_path: Path, capsys):
        result = main(["--config", str(config_yaml_path), "config", "show"])
        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["api"]["api_key"] == "***"

    def test_missing_api_key(self, tmp_path: Path, monkeypatch, capsys):
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert main(["--config", str(path), "show"]) == 1
        assert "API key" in capsys.readouterr().err

    def test_show(self, config_yaml_path: Path, owm, capsys):
        result = main(["--config", str(config_yaml_path), "show"])
        assert result == 0
        out = capsys.readouterr().out
        assert "London, GB" in out
        assert "5-Day Forecast" in out

    def test_search_fahrenheit(self, config_yaml_path: Path, owm, capsys):
        result = main(["--config", str(config_yaml_path), "--unit", "F", "search", "London"])
        assert result == 0
        assert "54°F" in capsys.readouterr().out
        assert owm["weather"].calls.last.request.url.params["q"] == "London"

    def test_search_multi_word_city(self, config_yaml_path: Path, owm, capsys):
        main(["--config", str(config_yaml_path), "search", "New", "York"])
        assert owm["weather"].calls.last.request.url.params["q"] == "New York"

    def test_search_json(self, config_yaml_path: Path, owm, capsys):
        main(["--config", str(config_yaml_path), "--json", "search", "London"])
        data = json.loads(capsys.readouterr().out)
        assert data["phase"] == "ready"
        assert data["card"]["temperature"] == "12°C"

    def test_city_not_found_alerts(self, config_yaml_path: Path, capsys):
        with respx.mock(assert_all_called=False) as router:
            router.get(f"{BASE}/weather").mock(return_value=httpx.Response(404))
            router.get(f"{BASE}/forecast").mock(return_value=httpx.Response(404))
            result = main(["--config", str(config_yaml_path), "search", "Atlantis"])
        assert result == 1
        captured = capsys.readouterr()
        assert captured.err.count("!! City not found") == 1
        assert "!!" not in captured.out

    def test_permission_prompt_declined(self, tmp_path: Path, monkeypatch, capsys):
        path = tmp_path / "prompt.yaml"
        path.write_text("api:\n  api_key: k\nlocation:\n  permission: prompt\n")
        monkeypatch.setattr("builtins.input", lambda _prompt="": "n")
        assert main(["--config", str(path), "show"]) == 1
        assert "Permission denied" in capsys.readouterr().err


class TestInteractive:
    def test_session(self, reading, forecast, capsys):
        client = MagicMock(spec=WeatherClient)
        client.fetch_current.return_value = reading
        client.fetch_forecast.return_value = forecast
        location = MagicMock(spec=LocationService)
        location.request_permission.return_value = PermissionStatus.GRANTED
        location.get_current_position.return_value = Coordinates(51.5, -0.12)
        controller = ScreenController(client, location)
        lines = iter(["u", "s Paris", "Rome", "r", "q"])

        result = asyncio.run(_interactive(controller, False, read_line=lambda _p: next(lines)))

        assert result == 0
        assert controller.state.phase == Phase.READY
        assert controller.state.city_query == "Rome"
        assert client.fetch_current.await_count == 4
        assert "54°F" in capsys.readouterr().out

    def test_eof_ends_session(self, reading, forecast):
        client = MagicMock(spec=WeatherClient)
        client.fetch_current.return_value = reading
        client.fetch_forecast.return_value = forecast
        location = MagicMock(spec=LocationService)
        location.request_permission.return_value = PermissionStatus.DENIED

        def read_line(_prompt: str) -> str:
            raise EOFError

        controller = ScreenController(client, location)
        assert asyncio.run(_interactive(controller, False, read_line=read_line)) == 0
        assert controller.state.phase == Phase.FAILED
