from __future__ import annotations

from datetime import timezone
from typing import Optional

import pytest
from django.conf import settings
from django.core.cache import caches

from weatherapp.core.cache import LastResultCache
from weatherapp.core.location import COARSE_LOCATION, FINE_LOCATION, LocationAcquirer
from weatherapp.core.platform import SettingsNavigator, SettingsPermissionGateway
from weatherapp.core.presenter import Presenter
from weatherapp.core.providers.openweather import OpenWeatherClient
from weatherapp.core.services.weather_screen import ScreenNotifier, ScreenState, WeatherScreen

from tests.fakes import BASE_URL, ONLINE, FakeLocationProvider, FakeNetwork


@pytest.fixture
def state_cache() -> LastResultCache:
    backend = caches[settings.WEATHER_STATE_CACHE_ALIAS]
    backend.clear()
    yield LastResultCache(backend)
    backend.clear()


@pytest.fixture
def build_screen(state_cache):
    def _build(
        *,
        provider: Optional[FakeLocationProvider] = None,
        network: Optional[FakeNetwork] = None,
        client=None,
        granted=(FINE_LOCATION, COARSE_LOCATION),
        accept_rationale: bool = False,
        country_code: str = "GB",
    ) -> WeatherScreen:
        notifier = ScreenNotifier(ScreenState(), accept_rationale=accept_rationale)
        acquirer = LocationAcquirer(
            provider=provider or FakeLocationProvider(),
            permissions=SettingsPermissionGateway(granted),
            navigator=SettingsNavigator(),
            notifier=notifier,
        )
        return WeatherScreen(
            acquirer=acquirer,
            client=client or OpenWeatherClient(api_key="test-key", base_url=BASE_URL),
            cache=state_cache,
            presenter=Presenter(country_code=country_code, tz=timezone.utc),
            network=network or FakeNetwork(ONLINE),
            notifier=notifier,
            units="metric",
        )

    return _build
