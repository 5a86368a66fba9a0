"""OpenWeatherMap client for current conditions and the 5-day forecast.

Every call is a fresh request: no retry, no caching. Failures are logged and
raised as CityNotFound or NetworkError for the screen controller to surface.
"""

import logging
from datetime import UTC, datetime

import httpx

from weatherapp.config.schema import ApiConfig
from weatherapp.errors import CityNotFound, ConfigurationError, NetworkError
from weatherapp.models.weather import ForecastDay, LocationQuery, WeatherReading

logger = logging.getLogger(__name__)

OWM_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_USER_AGENT = "weatherapp/0.1.0"
MS_TO_KPH = 3.6


class WeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OWM_BASE_URL,
        timeout: float = 10.0,
        forecast_days: int = 5,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        if not api_key:
            raise ConfigurationError(
                "OpenWeatherMap API key not set (api.api_key or OPENWEATHER_API_KEY)"
            )
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.forecast_days = forecast_days
        self.user_agent = user_agent

    @classmethod
    def from_config(cls, api: ApiConfig) -> "WeatherClient":
        return cls(
            api_key=api.api_key,
            base_url=api.base_url,
            timeout=api.timeout_seconds,
            forecast_days=api.forecast_days,
        )

    async def fetch_current(self, query: LocationQuery) -> WeatherReading:
        """Current conditions for a city name or coordinates."""
        raw = await self._get("/weather", query)
        return parse_current(raw)

    async def fetch_forecast(self, query: LocationQuery) -> tuple[ForecastDay, ...]:
        """Daily forecast, chronological, at most ``forecast_days`` entries."""
        raw = await self._get("/forecast", query)
        return parse_forecast(raw, self.forecast_days)

    def _params(self, query: LocationQuery) -> dict[str, str | float]:
        params: dict[str, str | float] = {"appid": self.api_key, "units": "metric"}
        if query.city is not None:
            params["q"] = query.city
        else:
            assert query.coordinates is not None
            params["lat"] = query.coordinates.latitude
            params["lon"] = query.coordinates.longitude
        return params

    async def _get(self, endpoint: str, query: LocationQuery) -> dict:
        url = f"{self.base_url}{endpoint}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=self._params(query), headers=headers)
        except httpx.RequestError as e:
            logger.error(
                "Weather API request failed: %s %s -> %s", endpoint, query.describe(), e
            )
            raise NetworkError(f"Request failed: {e}") from e

        if resp.status_code == 404 and query.city is not None:
            logger.warning("Weather API does not know city=%r", query.city)
            raise CityNotFound(query.city)
        if resp.status_code >= 400:
            logger.error(
                "Weather API %d: %s %s -> %s",
                resp.status_code, endpoint, query.describe(), resp.text,
            )
            raise NetworkError(f"HTTP {resp.status_code}", resp.status_code)
        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Weather API returned invalid JSON for %s", endpoint)
            raise NetworkError("Invalid JSON from weather API") from e
        if not isinstance(data, dict):
            logger.error("Weather API returned %s for %s", type(data).__name__, endpoint)
            raise NetworkError(f"Unexpected payload type from {endpoint}")
        return data


def parse_current(raw: dict) -> WeatherReading:
    """Normalize an OpenWeatherMap /weather payload."""
    try:
        offset = int(raw.get("timezone", 0))
        main = raw["main"]
        sys_info = raw.get("sys", {})
        return WeatherReading(
            city=raw.get("name", ""),
            country=sys_info.get("country", ""),
            temperature_c=float(main["temp"]),
            feels_like_c=float(main.get("feels_like", main["temp"])),
            condition=_condition(raw),
            humidity_pct=int(main.get("humidity", 0)),
            wind_speed_kph=round(float(raw.get("wind", {}).get("speed", 0.0)) * MS_TO_KPH, 1),
            pressure_hpa=float(main.get("pressure", 0.0)),
            # OWM reports visibility in metres, capped at 10 km
            visibility_km=round(float(raw.get("visibility", 0)) / 1000, 1),
            sunrise=_local_time(sys_info.get("sunrise"), offset),
            sunset=_local_time(sys_info.get("sunset"), offset),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise NetworkError(f"Unexpected current-weather payload: {e}") from e


def parse_forecast(raw: dict, days: int = 5) -> tuple[ForecastDay, ...]:
    """Collapse 3-hourly /forecast entries into one ForecastDay per local date.

    High is the max of the entries' temp_max, low the min of temp_min, and
    the condition comes from the entry closest to local noon.
    """
    try:
        offset = int(raw.get("city", {}).get("timezone", 0))
        by_date: dict[str, list[tuple[datetime, dict]]] = {}
        for entry in raw["list"]:
            local = datetime.fromtimestamp(int(entry["dt"]) + offset, tz=UTC)
            by_date.setdefault(local.date().isoformat(), []).append((local, entry))

        result: list[ForecastDay] = []
        for entries in list(by_date.values())[:days]:
            first_local = entries[0][0]
            _, noon_entry = min(entries, key=lambda le: abs(le[0].hour - 12))
            result.append(
                ForecastDay(
                    day=first_local.strftime("%a"),
                    condition=_condition(noon_entry),
                    high_c=max(float(e["main"]["temp_max"]) for _, e in entries),
                    low_c=min(float(e["main"]["temp_min"]) for _, e in entries),
                )
            )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise NetworkError(f"Unexpected forecast payload: {e}") from e

    if not result:
        raise NetworkError("Empty forecast payload")
    if len(result) < days:
        logger.warning("Forecast covers %d of %d requested days", len(result), days)
    return tuple(result)


def _condition(entry: dict) -> str:
    weather = entry.get("weather") or [{}]
    return weather[0].get("description") or weather[0].get("main", "")


def _local_time(timestamp: int | None, offset: int) -> str:
    if timestamp is None:
        return ""
    return datetime.fromtimestamp(int(timestamp) + offset, tz=UTC).strftime("%H:%M")
