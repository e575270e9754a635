"""OpenWeather current weather client."""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import requests
from pydantic import ValidationError

from ..abstractions import Coordinate, WeatherRecord
from ..errors import InvalidPayload
from ..schemas import WeatherResponsePayload
from .base import HttpProvider, RequestConfig


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/"
METRIC_UNIT = "metric"


class OpenWeatherClient(HttpProvider):
    """Integration with the OpenWeather ``2.5/weather`` endpoint.

    Each call issues exactly one GET request; nothing is retried.
    """

    name = "openweather"
    endpoint = "2.5/weather"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        units: str = METRIC_UNIT,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__(session=session, request_config=RequestConfig(timeout=timeout))
        self.api_key = api_key
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.units = units
        self._testing_mode = os.environ.get("TESTING_MODE", "0") == "1"

    @property
    def url(self) -> str:
        return self.base_url + self.endpoint

    def get_weather(self, coordinate: Coordinate, units: Optional[str] = None) -> WeatherRecord:
        params = {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "units": units or self.units,
            "appid": self.api_key,
        }
        response = self._request("GET", self.url, params=params)
        self._log_response(response)
        try:
            payload = WeatherResponsePayload.model_validate_json(response.content)
        except ValidationError as exc:
            self._log.error("Failed to decode weather payload", exc_info=exc)
            raise InvalidPayload("invalid weather payload") from exc
        return payload.to_record()

    async def fetch_weather(self, coordinate: Coordinate, units: Optional[str] = None) -> WeatherRecord:
        return await asyncio.to_thread(self.get_weather, coordinate, units)

    def _log_response(self, response: requests.Response) -> None:
        if not self._testing_mode:
            return
        logger.info(
            "OpenWeather request",
            extra={"status": response.status_code, "body": response.text[:500]},
        )


__all__ = ["OpenWeatherClient", "DEFAULT_BASE_URL", "METRIC_UNIT"]
