"""Last successful weather response, kept in local key-value storage."""
from __future__ import annotations

import logging
from typing import Optional

from django.core.cache.backends.base import BaseCache

from .abstractions import WeatherRecord
from .errors import MalformedCachedData
from .schemas import WeatherResponsePayload, parse_weather_json


logger = logging.getLogger(__name__)

WEATHER_RESPONSE_DATA = "weather_response_data"


class LastResultCache:
    """Stores one JSON blob under a fixed key.

    ``save`` always overwrites and never expires; there is no versioning.
    A stored value that cannot be parsed reads as absent.
    """

    key = WEATHER_RESPONSE_DATA

    def __init__(self, backend: BaseCache) -> None:
        self._backend = backend

    def save(self, record: WeatherRecord) -> None:
        blob = WeatherResponsePayload.from_record(record).model_dump_json()
        self._backend.set(self.key, blob, timeout=None)

    def load(self) -> Optional[WeatherRecord]:
        blob = self._backend.get(self.key, "")
        if not blob:
            return None
        try:
            return self._parse(blob)
        except MalformedCachedData as exc:
            logger.warning("Ignoring cached weather data: %s", exc)
            return None

    def clear(self) -> None:
        self._backend.delete(self.key)

    def _parse(self, blob: str) -> WeatherRecord:
        try:
            return parse_weather_json(blob)
        except ValueError as exc:
            raise MalformedCachedData("stored weather response is not valid") from exc


__all__ = ["LastResultCache", "WEATHER_RESPONSE_DATA"]
