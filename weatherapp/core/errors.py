"""Error taxonomy for the weather screen.

Every error is handled inside :class:`~weatherapp.core.services.weather_screen.WeatherScreen`;
none of them is fatal and none triggers a retry.
"""
from __future__ import annotations

from typing import Optional


class WeatherAppError(RuntimeError):
    """Base error."""


class PermissionDenied(WeatherAppError):
    """Neither the fine nor the coarse location permission was granted."""


class LocationProviderDisabled(WeatherAppError):
    """No location provider (gps or network) is enabled."""


class LocationUnavailable(WeatherAppError):
    """The location fix failed or timed out."""


class SettingsUnavailable(WeatherAppError):
    """A settings page could not be opened."""


class NoNetwork(WeatherAppError):
    """No validated cellular, wifi or ethernet transport is active."""


class MalformedCachedData(WeatherAppError):
    """The stored last result could not be parsed."""


class OperationCancelled(WeatherAppError):
    """The screen was torn down while an operation was in flight."""


class ProviderError(WeatherAppError):
    """Base weather provider error."""


class TransportFailure(ProviderError):
    """No HTTP response was received at all."""


class InvalidPayload(ProviderError):
    """A successful response carried a body that is not a weather record."""


class HttpError(ProviderError):
    """The provider answered with an error status."""

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        super().__init__(message or f"HTTP {status_code}")
        self.status_code = status_code


class HttpBadRequest(HttpError):
    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(400, message)


class HttpNotFound(HttpError):
    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(404, message)


__all__ = [
    "WeatherAppError",
    "PermissionDenied",
    "LocationProviderDisabled",
    "LocationUnavailable",
    "SettingsUnavailable",
    "NoNetwork",
    "MalformedCachedData",
    "OperationCancelled",
    "ProviderError",
    "TransportFailure",
    "InvalidPayload",
    "HttpError",
    "HttpBadRequest",
    "HttpNotFound",
]
