"""Weather records returned by the data client."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationQuery:
    """Either device coordinates or a city name, never both."""

    coordinates: Coordinates | None = None
    city: str | None = None

    def __post_init__(self) -> None:
        if (self.coordinates is None) == (self.city is None):
            raise ValueError("exactly one of coordinates or city is required")

    @classmethod
    def for_city(cls, city: str) -> "LocationQuery":
        return cls(city=city)

    @classmethod
    def for_coordinates(cls, latitude: float, longitude: float) -> "LocationQuery":
        return cls(coordinates=Coordinates(latitude, longitude))

    @property
    def mode(self) -> str:
        return "city" if self.city is not None else "location"

    def describe(self) -> str:
        if self.city is not None:
            return self.city
        assert self.coordinates is not None
        return f"{self.coordinates.latitude:.4f},{self.coordinates.longitude:.4f}"


@dataclass(frozen=True)
class WeatherReading:
    city: str
    country: str
    temperature_c: float
    feels_like_c: float
    condition: str
    humidity_pct: int
    wind_speed_kph: float
    pressure_hpa: float
    visibility_km: float
    sunrise: str  # HH:MM local
    sunset: str  # HH:MM local


@dataclass(frozen=True)
class ForecastDay:
    day: str
    condition: str
    high_c: float
    low_c: float
