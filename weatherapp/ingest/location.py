"""Location service: permission request and current-position lookup."""

import asyncio
import logging
from collections.abc import Callable
from enum import StrEnum

import httpx

from weatherapp.config.schema import LocationConfig, LocationProvider, PermissionMode
from weatherapp.errors import LocationUnavailable
from weatherapp.models.weather import Coordinates

logger = logging.getLogger(__name__)

PERMISSION_QUESTION = "Allow weatherapp to use your location for weather data?"


class PermissionStatus(StrEnum):
    GRANTED = "granted"
    DENIED = "denied"


class LocationService:
    """Answers "may we locate the user?" and "where are they?".

    In ``prompt`` mode the question goes to ``prompt``; a granted answer is
    remembered for the lifetime of the process only. Without a prompt the
    request is treated as denied.
    """

    def __init__(
        self,
        config: LocationConfig,
        prompt: Callable[[str], bool] | None = None,
    ):
        self.config = config
        self.prompt = prompt
        self._granted = False

    async def request_permission(self) -> PermissionStatus:
        if self.config.permission == PermissionMode.GRANTED or self._granted:
            return PermissionStatus.GRANTED
        if self.config.permission == PermissionMode.DENIED:
            return PermissionStatus.DENIED
        if self.prompt is None:
            logger.info("No permission prompt available, treating location as denied")
            return PermissionStatus.DENIED

        answer = await asyncio.to_thread(self.prompt, PERMISSION_QUESTION)
        self._granted = bool(answer)
        return PermissionStatus.GRANTED if self._granted else PermissionStatus.DENIED

    async def get_current_position(self) -> Coordinates:
        if self.config.provider == LocationProvider.STATIC:
            if self.config.latitude is None or self.config.longitude is None:
                raise LocationUnavailable("No static coordinates configured")
            return Coordinates(self.config.latitude, self.config.longitude)
        return await self._lookup_ip()

    async def _lookup_ip(self) -> Coordinates:
        """Approximate position from IP geolocation."""
        url = self.config.ip_lookup_url
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                resp = await client.get(url)
            resp.raise_for_status()
            data = resp.json()
            return Coordinates(float(data["latitude"]), float(data["longitude"]))
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error("IP geolocation via %s failed: %s", url, e)
            raise LocationUnavailable(f"Location could not be determined: {e}") from e
