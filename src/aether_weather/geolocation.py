"""Device geolocation sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .exceptions import GeolocationDenied


class GeolocationSource(ABC):
    """Base contract for acquiring the device's coordinates."""

    @abstractmethod
    async def locate(self) -> tuple[float, float]:
        """Return (latitude, longitude) or raise GeolocationDenied."""


class StaticGeolocation(GeolocationSource):
    """Coordinates supplied up front, e.g. from DEVICE_LAT/DEVICE_LON."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self.latitude = latitude
        self.longitude = longitude

    async def locate(self) -> tuple[float, float]:
        return self.latitude, self.longitude


class UnavailableGeolocation(GeolocationSource):
    """No location sensor; every request is denied."""

    def __init__(self, reason: str = "Device location is not configured.") -> None:
        self.reason = reason

    async def locate(self) -> tuple[float, float]:
        raise GeolocationDenied(self.reason)


def format_coordinates(latitude: float, longitude: float) -> str:
    """Render coordinates as the "lat, lng" query the resolver accepts."""
    return f"{latitude}, {longitude}"
