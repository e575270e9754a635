"""One-shot location acquisition.

The acquirer walks through a small state machine::

    IDLE -> PERMISSION_REQUESTED -> PERMISSION_GRANTED | PERMISSION_DENIED
    PERMISSION_GRANTED -> AWAITING_FIX -> FIX_OBTAINED | FIX_FAILED

Denials and failed fixes are reported to the user (where the platform does so)
and logged, but never raised: :meth:`LocationAcquirer.acquire` simply returns
``None``.
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

from .abstractions import (
    Coordinate,
    LocationProvider,
    LocationRequest,
    Notifier,
    PermissionGateway,
    SettingsNavigator,
)
from .cancellation import CancellationToken
from .errors import (
    LocationProviderDisabled,
    LocationUnavailable,
    PermissionDenied,
    SettingsUnavailable,
)

FINE_LOCATION = "location.fine"
COARSE_LOCATION = "location.coarse"
LOCATION_PERMISSIONS = (FINE_LOCATION, COARSE_LOCATION)

GPS_PROVIDER = "gps"
NETWORK_PROVIDER = "network"

PROVIDER_DISABLED_NOTICE = "Location provider is turned off. Please turn it on"
RATIONALE_TITLE = "Weather App"
RATIONALE_MESSAGE = (
    "It looks like you have turned off permissions required for this feature."
    " It can be enabled under Application Settings"
)


class LocationState(str, Enum):
    IDLE = "idle"
    PERMISSION_REQUESTED = "permission_requested"
    PERMISSION_GRANTED = "permission_granted"
    PERMISSION_DENIED = "permission_denied"
    AWAITING_FIX = "awaiting_fix"
    FIX_OBTAINED = "fix_obtained"
    FIX_FAILED = "fix_failed"


class LocationAcquirer:
    def __init__(
        self,
        *,
        provider: LocationProvider,
        permissions: PermissionGateway,
        navigator: SettingsNavigator,
        notifier: Notifier,
        request: Optional[LocationRequest] = None,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self.permissions = permissions
        self.navigator = navigator
        self.notifier = notifier
        self.request = request or LocationRequest()
        self.timeout = timeout
        self.state = LocationState.IDLE
        self._permission_granted = False
        self._log = logger or logging.getLogger(self.__class__.__name__)

    @property
    def permission_granted(self) -> bool:
        return self._permission_granted

    # Public API ---------------------------------------------------------
    def check_location_enabled(self) -> bool:
        """Redirect to the location settings when no provider is enabled.

        The result is advisory; the flow carries on either way.
        """
        try:
            self._require_provider()
        except LocationProviderDisabled as exc:
            self._log.warning("%s", exc)
            self.notifier.show_notice(PROVIDER_DISABLED_NOTICE)
            self.navigator.open_location_settings()
            return False
        return True

    async def request_permission(self) -> bool:
        self.state = LocationState.PERMISSION_REQUESTED
        results = await self.permissions.request(LOCATION_PERMISSIONS)
        if any(results.get(name) for name in LOCATION_PERMISSIONS):
            self.state = LocationState.PERMISSION_GRANTED
            self._permission_granted = True
            return True
        self.state = LocationState.PERMISSION_DENIED
        self._permission_granted = False
        self._log.info("Location permission denied")
        self._show_rationale()
        return False

    async def request_fix(self, token: CancellationToken) -> Optional[Coordinate]:
        if not self._permission_granted:
            self._log.error("Location fix requested without permission")
            return None
        self.state = LocationState.AWAITING_FIX
        try:
            coordinate = await asyncio.wait_for(
                self.provider.request_location_updates(self.request),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            self.state = LocationState.FIX_FAILED
            self._log.error("Location fix timed out after %ss", self.timeout)
            return None
        except LocationUnavailable as exc:
            self.state = LocationState.FIX_FAILED
            self._log.error("Location fix failed: %s", exc)
            return None
        token.raise_if_cancelled()
        self.state = LocationState.FIX_OBTAINED
        self._log.debug("Location fix %s,%s", coordinate.latitude, coordinate.longitude)
        return coordinate

    async def acquire(self, token: CancellationToken) -> Optional[Coordinate]:
        self.check_location_enabled()
        try:
            await self._ensure_permission(token)
        except PermissionDenied as exc:
            self._log.info("Skipping location fix: %s", exc)
            return None
        return await self.request_fix(token)

    # Helpers ------------------------------------------------------------
    def _require_provider(self) -> None:
        if not self.provider.enabled_providers() & {GPS_PROVIDER, NETWORK_PROVIDER}:
            raise LocationProviderDisabled("No location provider enabled")

    async def _ensure_permission(self, token: CancellationToken) -> None:
        if self._permission_granted:
            return
        granted = await self.request_permission()
        token.raise_if_cancelled()
        if not granted:
            raise PermissionDenied("neither fine nor coarse location permission granted")

    def _show_rationale(self) -> None:
        if not self.notifier.show_rationale(RATIONALE_TITLE, RATIONALE_MESSAGE):
            return
        try:
            self.navigator.open_app_settings()
        except SettingsUnavailable as exc:
            self._log.warning("App settings unavailable, opening location settings: %s", exc)
            self.navigator.open_location_settings()


__all__ = [
    "LocationAcquirer",
    "LocationState",
    "FINE_LOCATION",
    "COARSE_LOCATION",
    "LOCATION_PERMISSIONS",
    "GPS_PROVIDER",
    "NETWORK_PROVIDER",
    "PROVIDER_DISABLED_NOTICE",
    "RATIONALE_TITLE",
    "RATIONALE_MESSAGE",
]
