"""Django settings for the weather screen."""
from __future__ import annotations

from pathlib import Path
import os

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


def env_float(name: str) -> float | None:
    """Optional float; an empty value means "not set"."""

    value = os.environ.get(name, "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ImproperlyConfigured(f"Environment variable {name} must be a number") from exc


def env_list(name: str, default: str = "") -> list[str]:
    return [item.strip() for item in os.environ.get(name, default).split(",") if item.strip()]


SECRET_KEY = env("DJANGO_SECRET_KEY")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = env_list("DJANGO_ALLOWED_HOSTS", "*")
TESTING_MODE = os.environ.get("TESTING_MODE", "0") == "1"

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "weatherapp.api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "weatherapp.urls"

WSGI_APPLICATION = "weatherapp.wsgi.application"

DATABASES: dict = {}

# Local key-value storage for the last successful response.
WEATHER_STATE_DIR = Path(env("WEATHER_STATE_DIR", str(BASE_DIR / "var" / "state")))
WEATHER_STATE_CACHE_ALIAS = env("WEATHER_STATE_CACHE_ALIAS", "weather-state")

if TESTING_MODE:
    _state_cache = {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "weather-state",
    }
else:
    _state_cache = {
        "BACKEND": "django.core.cache.backends.filebased.FileBasedCache",
        "LOCATION": str(WEATHER_STATE_DIR),
        "TIMEOUT": None,
    }

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "weather-local",
    },
    WEATHER_STATE_CACHE_ALIAS: _state_cache,
}

# OpenWeather
OPENWEATHER_API_KEY = env("OPENWEATHER_API_KEY", "")
OPENWEATHER_BASE_URL = env("OPENWEATHER_BASE_URL", "https://api.openweathermap.org/data/")
WEATHER_UNITS = env("WEATHER_UNITS", "metric")
WEATHER_HTTP_TIMEOUT = env_float("WEATHER_HTTP_TIMEOUT")

# Location
WEATHER_LATITUDE = env_float("WEATHER_LATITUDE")
WEATHER_LONGITUDE = env_float("WEATHER_LONGITUDE")
WEATHER_IP_LOCATION_URL = env("WEATHER_IP_LOCATION_URL", "http://ip-api.com/json/")
WEATHER_LOCATION_TIMEOUT = env_float("WEATHER_LOCATION_TIMEOUT")
WEATHER_GRANTED_PERMISSIONS = env_list("WEATHER_GRANTED_PERMISSIONS", "location.fine,location.coarse")
WEATHER_RATIONALE_ACCEPT = os.environ.get("WEATHER_RATIONALE_ACCEPT", "0") == "1"
WEATHER_APP_SETTINGS_AVAILABLE = os.environ.get("WEATHER_APP_SETTINGS_AVAILABLE", "1") == "1"

# Presentation; empty values fall back to the process locale / system zone.
WEATHER_LOCALE = os.environ.get("WEATHER_LOCALE", "")
WEATHER_TIME_ZONE = os.environ.get("WEATHER_TIME_ZONE", "")

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {
        "handlers": ["console"],
        "level": env("WEATHER_LOG_LEVEL", "INFO"),
    },
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True
