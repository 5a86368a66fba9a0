"""Tests for the dashboard API with a mocked controller backend."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from weatherapp.config.schema import AppConfig
from weatherapp.dashboard import create_app
from weatherapp.errors import CityNotFound
from weatherapp.ingest.location import LocationService, PermissionStatus
from weatherapp.ingest.weather_client import WeatherClient
from weatherapp.models.weather import Coordinates
from weatherapp.screen.controller import ScreenController


@pytest.fixture
def weather_client(reading, forecast) -> MagicMock:
    mock = MagicMock(spec=WeatherClient)
    mock.fetch_current.return_value = reading
    mock.fetch_forecast.return_value = forecast
    return mock


@pytest.fixture
def api(weather_client, app_config: AppConfig):
    location = MagicMock(spec=LocationService)
    location.request_permission.return_value = PermissionStatus.GRANTED
    location.get_current_position.return_value = Coordinates(51.5, -0.12)
    controller = ScreenController(weather_client, location)
    with TestClient(create_app(app_config, controller)) as client:
        yield client


class TestDashboard:
    def test_mounted_on_startup(self, api):
        data = api.get("/api/screen").json()
        assert data["phase"] == "ready"
        assert data["card"]["city"] == "London"
        assert len(data["forecast"]) == 5

    def test_health(self, api):
        data = api.get("/api/health").json()
        assert data == {"status": "ok", "phase": "ready", "unit": "C", "has_data": True}

    def test_toggle_unit(self, api):
        data = api.post("/api/unit/toggle").json()
        assert data["unit"] == "F"
        assert data["card"]["temperature"] == "54°F"

    def test_search(self, api, weather_client):
        data = api.post("/api/search", json={"city": "Paris"}).json()
        assert data["phase"] == "ready"
        assert weather_client.fetch_current.await_args.args[0].city == "Paris"

    def test_blank_search_rejected(self, api):
        assert api.post("/api/search", json={"city": "  "}).status_code == 422

    def test_search_not_found_then_retry(self, api, weather_client, reading):
        weather_client.fetch_current.side_effect = [CityNotFound("Atlantis"), reading]
        data = api.post("/api/search", json={"city": "Atlantis"}).json()
        assert data["phase"] == "failed"
        assert data["alert"]["reason"] == "CITY_NOT_FOUND"

        data = api.post("/api/retry").json()
        assert data["phase"] == "ready"

    def test_refresh(self, api, weather_client):
        api.post("/api/refresh")
        assert weather_client.fetch_current.await_count == 2

    def test_html_page(self, api):
        resp = api.get("/")
        assert resp.status_code == 200
        assert "linear-gradient" in resp.text
        assert "London" in resp.text

    def test_form_actions_redirect(self, api):
        resp = api.post("/unit", follow_redirects=False)
        assert resp.status_code == 303
        assert "54°F" in api.get("/").text

    def test_search_form(self, api, weather_client):
        resp = api.post("/search", data={"city": " Paris "}, follow_redirects=False)
        assert resp.status_code == 303
        assert weather_client.fetch_current.await_args.args[0].city == "Paris"

    def test_blank_search_form_is_ignored(self, api, weather_client):
        api.post("/search", data={"city": "  "})
        assert weather_client.fetch_current.await_count == 1

    def test_form_actions_reject_get(self, api, weather_client):
        assert api.get("/unit").status_code == 405
        assert api.get("/refresh").status_code == 405
        assert api.get("/search", params={"city": "Paris"}).status_code == 405
        assert weather_client.fetch_current.await_count == 1
        assert api.get("/api/screen").json()["unit"] == "C"

    def test_page_forms_post(self, api):
        page = api.get("/").text
        assert "method='post' action='/unit'" in page
        assert "method='get'" not in page
