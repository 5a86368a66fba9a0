"""Screen state machine as an immutable value object.

    IDLE -> LOADING -> READY | FAILED
    READY -> LOADING      refresh or new search
    FAILED -> LOADING     retry
    LOADING -> LOADING    a newer request supersedes the one in flight

Every transition returns a new ScreenState; anything outside the table
raises InvalidTransition.
"""

from dataclasses import dataclass, replace
from enum import StrEnum

from weatherapp.models.display import DisplayUnit
from weatherapp.models.weather import ForecastDay, WeatherReading


class Phase(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class FailureReason(StrEnum):
    PERMISSION_DENIED = "PERMISSION_DENIED"
    LOCATION_UNAVAILABLE = "LOCATION_UNAVAILABLE"
    CITY_NOT_FOUND = "CITY_NOT_FOUND"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNEXPECTED = "UNEXPECTED"


@dataclass(frozen=True)
class Failure:
    reason: FailureReason
    title: str
    message: str


class InvalidTransition(Exception):
    def __init__(self, current: Phase, target: Phase):
        super().__init__(f"Cannot move from {current} to {target}")
        self.current = current
        self.target = target


_TRANSITIONS: dict[Phase, frozenset[Phase]] = {
    Phase.IDLE: frozenset({Phase.LOADING}),
    Phase.LOADING: frozenset({Phase.LOADING, Phase.READY, Phase.FAILED}),
    Phase.READY: frozenset({Phase.LOADING}),
    Phase.FAILED: frozenset({Phase.LOADING}),
}


@dataclass(frozen=True)
class ScreenState:
    phase: Phase = Phase.IDLE
    unit: DisplayUnit = DisplayUnit.CELSIUS
    city_query: str | None = None  # None = device location
    reading: WeatherReading | None = None
    forecast: tuple[ForecastDay, ...] = ()
    failure: Failure | None = None
    refreshing: bool = False
    generation: int = 0

    def _to(self, target: Phase, **changes) -> "ScreenState":
        if target not in _TRANSITIONS[self.phase]:
            raise InvalidTransition(self.phase, target)
        return replace(self, phase=target, **changes)

    def loading(
        self, generation: int, city_query: str | None, refreshing: bool = False
    ) -> "ScreenState":
        """Start a request. Displayed data stays until the new pair arrives."""
        return self._to(
            Phase.LOADING,
            generation=generation,
            city_query=city_query,
            refreshing=refreshing,
            failure=None,
        )

    def ready(
        self, reading: WeatherReading, forecast: tuple[ForecastDay, ...]
    ) -> "ScreenState":
        return self._to(
            Phase.READY, reading=reading, forecast=tuple(forecast), refreshing=False
        )

    def failed(self, failure: Failure) -> "ScreenState":
        """Keeps the last complete pair, if any; never a partial one."""
        return self._to(Phase.FAILED, failure=failure, refreshing=False)

    def with_unit(self, unit: DisplayUnit) -> "ScreenState":
        return replace(self, unit=unit)

    @property
    def has_data(self) -> bool:
        return self.reading is not None
