"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from weatherapp.models.display import DisplayUnit


class PermissionMode(StrEnum):
    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"  # ask the user through the surface's prompt


class LocationProvider(StrEnum):
    IP = "ip"  # IP geolocation lookup
    STATIC = "static"  # fixed coordinates from this config


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.openweathermap.org/data/2.5"
    api_key: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    forecast_days: int = Field(default=5, ge=1, le=5)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    permission: PermissionMode = PermissionMode.PROMPT
    provider: LocationProvider = LocationProvider.IP
    ip_lookup_url: str = "https://ipapi.co/json/"
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    timeout_seconds: float = Field(default=10.0, gt=0.0)

    @model_validator(mode="after")
    def _coordinates_paired(self) -> "LocationConfig":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be set together")
        return self


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_unit: DisplayUnit = DisplayUnit.CELSIUS


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    location: LocationConfig = LocationConfig()
    display: DisplayConfig = DisplayConfig()
    logging: LoggingConfig = LoggingConfig()
    dashboard: DashboardConfig = DashboardConfig()
