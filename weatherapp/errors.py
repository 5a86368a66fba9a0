"""Error taxonomy shared by the data client, location service and controller."""


class WeatherAppError(Exception):
    """Base class for all weatherapp errors."""


class ConfigurationError(WeatherAppError):
    """Raised when required configuration (e.g. the API key) is missing."""


class PermissionDenied(WeatherAppError):
    """The user declined the location permission request."""


class LocationUnavailable(WeatherAppError):
    """Permission was granted but no position could be determined."""


class CityNotFound(WeatherAppError):
    """The weather API does not recognise the requested city name."""

    def __init__(self, city: str):
        super().__init__(f"City not found: {city}")
        self.city = city


class NetworkError(WeatherAppError):
    """Transport failure, unexpected HTTP status or unreadable payload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
