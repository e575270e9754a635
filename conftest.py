from __future__ import annotations

import os

import django
import pytest
import requests_mock as requests_mock_lib


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "weatherapp.settings")
os.environ.setdefault("TESTING_MODE", "1")
os.environ.setdefault("OPENWEATHER_API_KEY", "test-key")
os.environ.setdefault("OPENWEATHER_BASE_URL", "https://weather.test/data/")
os.environ.setdefault("WEATHER_LOCALE", "en_GB.UTF-8")
os.environ.setdefault("WEATHER_TIME_ZONE", "UTC")

django.setup()


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker
