"""Host implementations of the platform collaborators.

The screen runs headless, so the "device" is the host: network state comes
from sysfs, location from configured coordinates or an IP geolocation
service, and permissions and settings pages are driven by configuration.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set

import requests

from .abstractions import Coordinate, LocationRequest, NetworkCapabilities, Transport
from .errors import LocationUnavailable, ProviderError, SettingsUnavailable
from .location import GPS_PROVIDER, NETWORK_PROVIDER
from .providers.base import HttpProvider, RequestConfig


logger = logging.getLogger(__name__)

SYSFS_NET = Path("/sys/class/net")
CELLULAR_PREFIXES = ("wwan", "rmnet", "ppp", "ccmni")
ARPHRD_ETHER = 1


# -- Network --------------------------------------------------------------
class SysfsNetworkStack:
    """Reads interface state from ``/sys/class/net``."""

    def __init__(self, root: Path = SYSFS_NET) -> None:
        self.root = Path(root)

    def active_network(self) -> Optional[NetworkCapabilities]:
        """The best interface that is up.

        Tunnels and other non-internet links are only reported when no
        cellular, wifi or ethernet interface is up; among the rest a link with
        carrier wins. Ties keep the alphabetical interface order.
        """
        try:
            interfaces = sorted(self.root.iterdir())
        except OSError as exc:
            logger.debug("Cannot list network interfaces: %s", exc)
            return None
        candidates: List[NetworkCapabilities] = []
        for interface in interfaces:
            if interface.name == "lo":
                continue
            if self._read(interface / "operstate") != "up":
                continue
            candidates.append(
                NetworkCapabilities(
                    transports=frozenset({self._transport(interface)}),
                    validated=self._read(interface / "carrier") != "0",
                )
            )
        if not candidates:
            return None
        return min(candidates, key=lambda caps: (Transport.OTHER in caps.transports, not caps.validated))

    def _transport(self, interface: Path) -> Transport:
        if (interface / "wireless").exists() or (interface / "phy80211").exists():
            return Transport.WIFI
        if interface.name.startswith(CELLULAR_PREFIXES):
            return Transport.CELLULAR
        if self._read(interface / "type") == str(ARPHRD_ETHER):
            return Transport.ETHERNET
        return Transport.OTHER

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError:
            return ""


# -- Location -------------------------------------------------------------
class StaticLocationProvider:
    """A "gps" provider reporting fixed, configured coordinates."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self.coordinate = Coordinate(latitude=latitude, longitude=longitude)

    def enabled_providers(self) -> Set[str]:
        return {GPS_PROVIDER}

    async def request_location_updates(self, request: LocationRequest) -> Coordinate:
        return self.coordinate


class IPLocationProvider(HttpProvider):
    """A "network" provider resolving the host's public IP to coordinates."""

    base_url = "http://ip-api.com/json/"

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__(session=session, request_config=RequestConfig(timeout=timeout))
        self.base_url = base_url or self.base_url

    def enabled_providers(self) -> Set[str]:
        return {NETWORK_PROVIDER}

    def locate(self) -> Coordinate:
        try:
            response = self._request("GET", self.base_url)
            data = response.json()
        except ProviderError as exc:
            raise LocationUnavailable(f"geolocation request failed: {exc}") from exc
        except ValueError as exc:
            raise LocationUnavailable("invalid geolocation payload") from exc
        if not isinstance(data, dict):
            raise LocationUnavailable("geolocation payload is not an object")
        latitude = data.get("lat", data.get("latitude"))
        longitude = data.get("lon", data.get("longitude"))
        if latitude is None or longitude is None:
            raise LocationUnavailable("geolocation payload has no coordinates")
        try:
            return Coordinate(latitude=float(latitude), longitude=float(longitude))
        except (TypeError, ValueError) as exc:
            raise LocationUnavailable(f"geolocation coordinates are not numbers: {latitude!r}, {longitude!r}") from exc

    async def request_location_updates(self, request: LocationRequest) -> Coordinate:
        return await asyncio.to_thread(self.locate)


class DisabledLocationProvider:
    """No provider configured: nothing is enabled and no fix ever arrives."""

    def enabled_providers(self) -> Set[str]:
        return set()

    async def request_location_updates(self, request: LocationRequest) -> Coordinate:
        raise LocationUnavailable("no location provider configured")


# -- Permissions & settings pages ----------------------------------------
class SettingsPermissionGateway:
    def __init__(self, granted: Iterable[str]) -> None:
        self.granted = frozenset(granted)

    async def request(self, permissions: Sequence[str]) -> Dict[str, bool]:
        return {name: name in self.granted for name in permissions}


class SettingsNavigator:
    """Records which settings pages were opened."""

    LOCATION_SETTINGS = "location_settings"
    APP_SETTINGS = "app_settings"

    def __init__(self, *, app_settings_available: bool = True) -> None:
        self.app_settings_available = app_settings_available
        self.opened: List[str] = []

    def open_location_settings(self) -> None:
        logger.info("Opening location settings")
        self.opened.append(self.LOCATION_SETTINGS)

    def open_app_settings(self) -> None:
        if not self.app_settings_available:
            raise SettingsUnavailable("application settings page not available")
        logger.info("Opening application settings")
        self.opened.append(self.APP_SETTINGS)


__all__ = [
    "SysfsNetworkStack",
    "StaticLocationProvider",
    "IPLocationProvider",
    "DisabledLocationProvider",
    "SettingsPermissionGateway",
    "SettingsNavigator",
]
