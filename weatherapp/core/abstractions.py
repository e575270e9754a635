"""Core abstractions for the weather screen."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Protocol, Sequence, Set, Tuple


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A single resolved location sample (a fix)."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class WeatherCondition:
    main: str
    description: str
    icon: str


@dataclass(frozen=True, slots=True)
class WeatherRecord:
    """Current weather as returned by the provider.

    Records are always replaced wholesale: a new fetch produces a new record,
    never a partial update of a previous one.
    """

    location_name: str
    country_code: str
    conditions: Tuple[WeatherCondition, ...]
    temperature: float
    temp_min: float
    temp_max: float
    humidity_percent: int
    wind_speed: float
    sunrise: int
    sunset: int

    @property
    def primary_condition(self) -> Optional[WeatherCondition]:
        return self.conditions[0] if self.conditions else None


class Transport(str, Enum):
    CELLULAR = "cellular"
    WIFI = "wifi"
    ETHERNET = "ethernet"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class NetworkCapabilities:
    transports: FrozenSet[Transport]
    validated: bool = True


@dataclass(frozen=True, slots=True)
class LocationRequest:
    """One-shot, high accuracy location request."""

    priority: str = "high_accuracy"
    interval_ms: int = 1000
    max_updates: int = 1
    wait_for_accurate_location: bool = False


class NetworkStack(Protocol):
    def active_network(self) -> Optional[NetworkCapabilities]:
        """Return the capabilities of the active network, if there is one."""
        ...


class LocationProvider(Protocol):
    """Platform location service."""

    def enabled_providers(self) -> Set[str]:
        """Names of the enabled providers (``gps``, ``network``)."""
        ...

    async def request_location_updates(self, request: LocationRequest) -> Coordinate:
        """Deliver a single fix for ``request``."""
        ...


class PermissionGateway(Protocol):
    async def request(self, permissions: Sequence[str]) -> Dict[str, bool]:
        """Ask for ``permissions`` and return the grant result per permission."""
        ...


class SettingsNavigator(Protocol):
    def open_location_settings(self) -> None:
        ...

    def open_app_settings(self) -> None:
        """Open the application's settings page or raise ``SettingsUnavailable``."""
        ...


class Notifier(Protocol):
    def show_notice(self, message: str) -> None:
        """Show a transient notice."""
        ...

    def show_rationale(self, title: str, message: str) -> bool:
        """Show the permission rationale dialog; True if the user chose settings."""
        ...


class WeatherProvider(Protocol):
    name: str

    async def fetch_weather(self, coordinate: Coordinate, units: Optional[str] = None) -> WeatherRecord:
        """Fetch the current weather for ``coordinate``."""
        ...


__all__ = [
    "Coordinate",
    "WeatherCondition",
    "WeatherRecord",
    "Transport",
    "NetworkCapabilities",
    "LocationRequest",
    "NetworkStack",
    "LocationProvider",
    "PermissionGateway",
    "SettingsNavigator",
    "Notifier",
    "WeatherProvider",
]
