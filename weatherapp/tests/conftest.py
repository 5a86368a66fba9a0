"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from weatherapp.config.schema import AppConfig
from weatherapp.models.weather import ForecastDay, WeatherReading

TEST_BASE_URL = "https://owm.test/data/2.5"
TEST_IP_URL = "https://ip.test/json/"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def owm_current(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "owm_current_london.json") as f:
        return json.load(f)


@pytest.fixture
def owm_forecast(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "owm_forecast_london.json") as f:
        return json.load(f)


@pytest.fixture
def app_config() -> AppConfig:
    """Config pointing at fake hosts, with location permission granted."""
    return AppConfig(
        api={"base_url": TEST_BASE_URL, "api_key": "test-key"},
        location={
            "permission": "granted",
            "provider": "static",
            "latitude": 51.5085,
            "longitude": -0.1257,
            "ip_lookup_url": TEST_IP_URL,
        },
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path, app_config: AppConfig) -> Path:
    """Write app_config to YAML and return its path."""
    path = tmp_path / "weatherapp.yaml"
    with open(path, "w") as f:
        yaml.dump(app_config.model_dump(mode="json"), f)
    return path


@pytest.fixture
def reading() -> WeatherReading:
    return WeatherReading(
        city="London",
        country="GB",
        temperature_c=12.34,
        feels_like_c=11.5,
        condition="light rain",
        humidity_pct=81,
        wind_speed_kph=14.8,
        pressure_hpa=1012.0,
        visibility_km=10.0,
        sunrise="07:20",
        sunset="17:30",
    )


@pytest.fixture
def forecast() -> tuple[ForecastDay, ...]:
    return (
        ForecastDay(day="Thu", condition="light rain", high_c=12.5, low_c=8.2),
        ForecastDay(day="Fri", condition="scattered clouds", high_c=11.6, low_c=4.4),
        ForecastDay(day="Sat", condition="snow", high_c=3.9, low_c=0.5),
        ForecastDay(day="Sun", condition="clear sky", high_c=16.4, low_c=5.0),
        ForecastDay(day="Mon", condition="thunderstorm with rain", high_c=18.2, low_c=8.0),
    )
