"""REST API views exposing the weather screen."""
from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.cache import caches
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from weatherapp.core.cache import LastResultCache
from weatherapp.core.location import LocationAcquirer
from weatherapp.core.platform import (
    DisabledLocationProvider,
    IPLocationProvider,
    SettingsNavigator,
    SettingsPermissionGateway,
    StaticLocationProvider,
    SysfsNetworkStack,
)
from weatherapp.core.presenter import Presenter, country_from_locale
from weatherapp.core.providers.openweather import OpenWeatherClient
from weatherapp.core.services.weather_screen import ScreenNotifier, ScreenState, WeatherScreen


logger = logging.getLogger(__name__)

# One cycle at a time: the screen state is not thread safe.
_screen_lock = threading.Lock()


def _location_provider():
    if settings.WEATHER_LATITUDE is not None and settings.WEATHER_LONGITUDE is not None:
        return StaticLocationProvider(settings.WEATHER_LATITUDE, settings.WEATHER_LONGITUDE)
    if settings.WEATHER_IP_LOCATION_URL:
        return IPLocationProvider(settings.WEATHER_IP_LOCATION_URL, timeout=settings.WEATHER_LOCATION_TIMEOUT)
    return DisabledLocationProvider()


def _presenter() -> Presenter:
    country: Optional[str] = None
    if settings.WEATHER_LOCALE:
        country = country_from_locale(settings.WEATHER_LOCALE)
    tz = ZoneInfo(settings.WEATHER_TIME_ZONE) if settings.WEATHER_TIME_ZONE else None
    return Presenter(country_code=country, tz=tz)


def build_weather_screen() -> WeatherScreen:
    if not settings.OPENWEATHER_API_KEY:
        logger.warning("OPENWEATHER_API_KEY is not set; requests will be rejected")
    notifier = ScreenNotifier(ScreenState(), accept_rationale=settings.WEATHER_RATIONALE_ACCEPT)
    acquirer = LocationAcquirer(
        provider=_location_provider(),
        permissions=SettingsPermissionGateway(settings.WEATHER_GRANTED_PERMISSIONS),
        navigator=SettingsNavigator(app_settings_available=settings.WEATHER_APP_SETTINGS_AVAILABLE),
        notifier=notifier,
        timeout=settings.WEATHER_LOCATION_TIMEOUT,
    )
    client = OpenWeatherClient(
        api_key=settings.OPENWEATHER_API_KEY,
        base_url=settings.OPENWEATHER_BASE_URL,
        units=settings.WEATHER_UNITS,
        timeout=settings.WEATHER_HTTP_TIMEOUT,
    )
    return WeatherScreen(
        acquirer=acquirer,
        client=client,
        cache=LastResultCache(caches[settings.WEATHER_STATE_CACHE_ALIAS]),
        presenter=_presenter(),
        network=SysfsNetworkStack(),
        notifier=notifier,
        units=settings.WEATHER_UNITS,
    )


@lru_cache(maxsize=1)
def get_weather_screen() -> WeatherScreen:
    return build_weather_screen()


class ScreenView(APIView):
    """Current screen state; the first request starts the screen."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        screen = get_weather_screen()
        with _screen_lock:
            if not screen.started:
                async_to_sync(screen.start)()
            payload = screen.state.as_dict()
        return Response(payload, status=status.HTTP_200_OK)


class RefreshView(APIView):
    """The "Refresh" menu command."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):  # noqa: D401
        screen = get_weather_screen()
        with _screen_lock:
            if not screen.started:
                state = async_to_sync(screen.start)()
            else:
                state = async_to_sync(screen.refresh)()
            payload = state.as_dict()
        return Response(payload, status=status.HTTP_200_OK)


class MenuView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        return Response(list(get_weather_screen().menu), status=status.HTTP_200_OK)
