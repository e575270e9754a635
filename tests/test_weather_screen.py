from __future__ import annotations

import asyncio
import logging

import requests

from weatherapp.core.location import RATIONALE_MESSAGE
from weatherapp.core.platform import IPLocationProvider
from weatherapp.core.presenter import WeatherIcon
from weatherapp.core.services.weather_screen import MENU, NO_INTERNET_NOTICE

from tests.fakes import ONLINE, PAYLOAD, WEATHER_URL, FakeLocationProvider, FakeNetwork, make_record


class TearDownDuringFetch:
    """Client that tears the screen down while its request is in flight."""

    name = "teardown"

    def __init__(self, record) -> None:
        self.record = record
        self.screen = None
        self.calls = 0

    async def fetch_weather(self, coordinate, units=None):
        self.calls += 1
        self.screen.teardown()
        return self.record


def test_successful_fetch_renders_and_caches(requests_mock, build_screen, state_cache):
    requests_mock.get(WEATHER_URL, json=PAYLOAD)
    screen = build_screen()

    state = asyncio.run(screen.start())

    assert requests_mock.call_count == 1
    assert state.weather.icon is WeatherIcon.CLEAR_DAY
    assert state.weather.temperature == "18.0°C"
    assert state.progress_visible is False
    assert state.notices == []
    assert state_cache.load() == make_record()


def test_not_found_leaves_cache_untouched(requests_mock, build_screen, state_cache, caplog):
    previous = make_record(location_name="Oslo", temperature=-3.0)
    state_cache.save(previous)
    requests_mock.get(WEATHER_URL, status_code=404, json={"cod": "404", "message": "city not found"})
    screen = build_screen()

    with caplog.at_level(logging.ERROR):
        state = asyncio.run(screen.start())

    assert state_cache.load() == previous
    assert state.weather.location_name == "Oslo"
    assert state.weather.temperature == "-3.0°C"
    assert state.notices == []
    assert state.progress_visible is False
    assert "Not Found" in caplog.text


def test_bad_request_is_logged_only(requests_mock, build_screen, state_cache, caplog):
    requests_mock.get(WEATHER_URL, status_code=400)
    screen = build_screen()

    with caplog.at_level(logging.ERROR):
        state = asyncio.run(screen.start())

    assert "Bad Connection" in caplog.text
    assert state.notices == []
    assert state.weather is None
    assert state_cache.load() is None


def test_other_http_error_is_logged_only(requests_mock, build_screen, caplog):
    requests_mock.get(WEATHER_URL, status_code=500)
    screen = build_screen()

    with caplog.at_level(logging.ERROR):
        state = asyncio.run(screen.start())

    assert "Generic Error" in caplog.text
    assert state.notices == []


def test_transport_failure_dismisses_progress(requests_mock, build_screen, state_cache):
    requests_mock.get(WEATHER_URL, exc=requests.ConnectionError("down"))
    screen = build_screen()

    state = asyncio.run(screen.start())

    assert state.progress_visible is False
    assert state.notices == []
    assert state_cache.load() is None


def test_no_network_never_calls_client(requests_mock, build_screen, state_cache):
    requests_mock.get(WEATHER_URL, json=PAYLOAD)
    screen = build_screen(network=FakeNetwork(None))

    state = asyncio.run(screen.start())

    assert requests_mock.call_count == 0
    assert state.notices == [NO_INTERNET_NOTICE]
    assert state.weather is None
    assert state.progress_visible is False
    assert state_cache.load() is None


def test_notices_are_cleared_once_back_online(requests_mock, build_screen):
    requests_mock.get(WEATHER_URL, json=PAYLOAD)
    network = FakeNetwork(None)
    screen = build_screen(network=network)

    async def offline_then_online():
        await screen.start()
        await screen.refresh()
        offline = list(screen.state.notices)
        network.capabilities = ONLINE
        await screen.refresh()
        return offline

    offline = asyncio.run(offline_then_online())

    assert offline == [NO_INTERNET_NOTICE]
    assert screen.state.notices == []
    assert screen.state.weather.temperature == "18.0°C"
    assert requests_mock.call_count == 1


def test_no_network_is_logged(build_screen, caplog):
    screen = build_screen(network=FakeNetwork(None))

    with caplog.at_level(logging.INFO):
        asyncio.run(screen.start())

    assert "Skipping weather request: no validated cellular, wifi or ethernet network" in caplog.text


def test_cached_record_is_rendered_at_start(requests_mock, build_screen, state_cache):
    state_cache.save(make_record(location_name="Cached", temperature=9.5))
    screen = build_screen(network=FakeNetwork(None))

    state = asyncio.run(screen.start())

    assert state.weather.location_name == "Cached"
    assert state.weather.temperature == "9.5°C"


def test_permission_denied_skips_fetch(requests_mock, build_screen):
    requests_mock.get(WEATHER_URL, json=PAYLOAD)
    screen = build_screen(granted=())

    state = asyncio.run(screen.start())

    assert requests_mock.call_count == 0
    assert state.notices == [RATIONALE_MESSAGE]


def test_permission_denial_is_logged(build_screen, caplog):
    screen = build_screen(granted=())

    with caplog.at_level(logging.INFO):
        asyncio.run(screen.start())

    assert "Skipping location fix: neither fine nor coarse location permission granted" in caplog.text


def test_garbled_geolocation_skips_fetch(requests_mock, build_screen, state_cache):
    requests_mock.get("https://geo.test/json/", json={"lat": "n/a", "lon": 1})
    requests_mock.get(WEATHER_URL, json=PAYLOAD)
    screen = build_screen(provider=IPLocationProvider("https://geo.test/json/"))

    state = asyncio.run(screen.start())

    assert requests_mock.call_count == 1
    assert state.weather is None
    assert state.progress_visible is False
    assert state_cache.load() is None


def test_failed_fix_skips_fetch(requests_mock, build_screen):
    requests_mock.get(WEATHER_URL, json=PAYLOAD)
    screen = build_screen(provider=FakeLocationProvider(fail=True))

    asyncio.run(screen.start())

    assert requests_mock.call_count == 0


def test_refresh_issues_one_request_per_fix(requests_mock, build_screen):
    requests_mock.get(WEATHER_URL, json=PAYLOAD)
    screen = build_screen(country_code="US")

    async def start_then_refresh():
        await screen.start()
        return await screen.refresh()

    state = asyncio.run(start_then_refresh())

    assert requests_mock.call_count == 2
    assert state.weather.temperature == "18.0°F"


def test_teardown_drops_in_flight_result(build_screen, state_cache):
    client = TearDownDuringFetch(make_record())
    screen = build_screen(client=client)
    client.screen = screen

    state = asyncio.run(screen.start())

    assert client.calls == 1
    assert state.weather is None
    assert state_cache.load() is None


def test_nothing_runs_after_teardown(requests_mock, build_screen):
    requests_mock.get(WEATHER_URL, json=PAYLOAD)
    screen = build_screen()
    screen.teardown()

    state = asyncio.run(screen.refresh())

    assert requests_mock.call_count == 0
    assert state.weather is None


def test_menu_has_only_refresh(build_screen):
    assert build_screen().menu == MENU
    assert [item["title"] for item in MENU] == ["Refresh"]
