"""Screen controller: drives ScreenState from user actions and fetch results."""

import asyncio
import logging
from collections.abc import Callable

from weatherapp.config.schema import AppConfig
from weatherapp.display.units import toggle
from weatherapp.errors import (
    CityNotFound,
    LocationUnavailable,
    NetworkError,
    PermissionDenied,
    WeatherAppError,
)
from weatherapp.ingest.location import LocationService, PermissionStatus
from weatherapp.ingest.weather_client import WeatherClient
from weatherapp.models.display import DisplayUnit
from weatherapp.models.weather import LocationQuery
from weatherapp.screen.state import Failure, FailureReason, Phase, ScreenState

logger = logging.getLogger(__name__)

Notifier = Callable[[Failure], None]
StateListener = Callable[[ScreenState], None]


class ScreenController:
    """Owns the single display state.

    Each load takes a new generation number. Results that come back for an
    older generation are dropped, so the most recently issued request wins
    even when an earlier one resolves later.
    """

    def __init__(
        self,
        client: WeatherClient,
        location: LocationService,
        unit: DisplayUnit = DisplayUnit.CELSIUS,
        notifier: Notifier | None = None,
        on_change: StateListener | None = None,
    ):
        self.client = client
        self.location = location
        self.notifier = notifier
        self.on_change = on_change
        self._state = ScreenState(unit=unit)
        self._generation = 0

    @property
    def state(self) -> ScreenState:
        return self._state

    async def mount(self) -> ScreenState:
        """Initial load from the device location."""
        return await self._load(city=None)

    async def search(self, city: str) -> ScreenState:
        city = city.strip()
        if not city:
            return self._state
        return await self._load(city=city)

    async def refresh(self) -> ScreenState:
        """Re-run the last query mode, keeping the displayed data meanwhile."""
        if self._state.phase == Phase.IDLE:
            return await self.mount()
        return await self._load(
            city=self._state.city_query, refreshing=self._state.has_data
        )

    async def retry(self) -> ScreenState:
        if self._state.phase != Phase.FAILED:
            logger.debug("Retry ignored in phase %s", self._state.phase)
            return self._state
        return await self._load(city=self._state.city_query)

    def toggle_unit(self) -> ScreenState:
        self._set(self._state.with_unit(toggle(self._state.unit)))
        return self._state

    async def _load(self, city: str | None, refreshing: bool = False) -> ScreenState:
        self._generation += 1
        generation = self._generation
        self._set(self._state.loading(generation, city, refreshing=refreshing))

        try:
            query = LocationQuery.for_city(city) if city is not None else await self._locate()
            logger.debug("Fetching weather by %s: %s", query.mode, query.describe())
            # Fail-fast pair: either leg raising fails the whole load.
            reading, forecast = await asyncio.gather(
                self.client.fetch_current(query),
                self.client.fetch_forecast(query),
            )
        except WeatherAppError as e:
            return self._fail(generation, _failure_for(e))
        except Exception:
            logger.exception("Unexpected error loading weather (city=%r)", city)
            return self._fail(generation, _generic_failure(FailureReason.UNEXPECTED))

        if self._is_stale(generation):
            return self._state
        logger.info(
            "Loaded weather for %s, %s (%d forecast days)",
            reading.city, reading.country, len(forecast),
        )
        self._set(self._state.ready(reading, forecast))
        return self._state

    async def _locate(self) -> LocationQuery:
        status = await self.location.request_permission()
        if status != PermissionStatus.GRANTED:
            raise PermissionDenied("Location permission is required for weather data")
        coords = await self.location.get_current_position()
        return LocationQuery(coordinates=coords)

    def _fail(self, generation: int, failure: Failure) -> ScreenState:
        if self._is_stale(generation):
            return self._state
        logger.warning("Weather load failed: %s (%s)", failure.reason, failure.message)
        self._set(self._state.failed(failure))
        if self.notifier is not None:
            self.notifier(failure)
        return self._state

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug(
                "Discarding result of generation %d (current %d)",
                generation, self._generation,
            )
            return True
        return False

    def _set(self, state: ScreenState) -> None:
        self._state = state
        if self.on_change is not None:
            self.on_change(state)


def _failure_for(error: WeatherAppError) -> Failure:
    if isinstance(error, PermissionDenied):
        return Failure(
            FailureReason.PERMISSION_DENIED,
            "Permission denied",
            "Location permission is required for weather data",
        )
    if isinstance(error, LocationUnavailable):
        return Failure(
            FailureReason.LOCATION_UNAVAILABLE,
            "Location unavailable",
            "Could not determine your current location",
        )
    if isinstance(error, CityNotFound):
        return Failure(
            FailureReason.CITY_NOT_FOUND,
            "City not found",
            f"No weather data found for '{error.city}'",
        )
    if isinstance(error, NetworkError):
        return _generic_failure(FailureReason.NETWORK_ERROR)
    return _generic_failure(FailureReason.UNEXPECTED)


def _generic_failure(reason: FailureReason) -> Failure:
    return Failure(reason, "Error", "Failed to load weather data")


def build_controller(
    config: AppConfig,
    prompt: Callable[[str], bool] | None = None,
    notifier: Notifier | None = None,
    on_change: StateListener | None = None,
    unit: DisplayUnit | None = None,
) -> ScreenController:
    """Wire a controller from config. Raises ConfigurationError without an API key."""
    return ScreenController(
        client=WeatherClient.from_config(config.api),
        location=LocationService(config.location, prompt=prompt),
        unit=unit or config.display.default_unit,
        notifier=notifier,
        on_change=on_change,
    )
