"""Pydantic schemas for the OpenWeather current weather payload."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .abstractions import WeatherCondition, WeatherRecord

__all__ = ["WeatherResponsePayload", "parse_weather_json"]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ConditionPayload(_Payload):
    main: str
    description: str
    icon: str


class SysPayload(_Payload):
    country: str = Field(default="")
    sunrise: int
    sunset: int


class MainPayload(_Payload):
    temp: float
    temp_min: float
    temp_max: float
    humidity: int


class WindPayload(_Payload):
    speed: float


class WeatherResponsePayload(_Payload):
    name: str = Field(default="")
    sys: SysPayload
    main: MainPayload
    wind: WindPayload
    weather: List[ConditionPayload] = Field(min_length=1)

    def to_record(self) -> WeatherRecord:
        return WeatherRecord(
            location_name=self.name,
            country_code=self.sys.country,
            conditions=tuple(
                WeatherCondition(main=item.main, description=item.description, icon=item.icon)
                for item in self.weather
            ),
            temperature=self.main.temp,
            temp_min=self.main.temp_min,
            temp_max=self.main.temp_max,
            humidity_percent=self.main.humidity,
            wind_speed=self.wind.speed,
            sunrise=self.sys.sunrise,
            sunset=self.sys.sunset,
        )

    @classmethod
    def from_record(cls, record: WeatherRecord) -> "WeatherResponsePayload":
        return cls(
            name=record.location_name,
            sys=SysPayload(country=record.country_code, sunrise=record.sunrise, sunset=record.sunset),
            main=MainPayload(
                temp=record.temperature,
                temp_min=record.temp_min,
                temp_max=record.temp_max,
                humidity=record.humidity_percent,
            ),
            wind=WindPayload(speed=record.wind_speed),
            weather=[
                ConditionPayload(main=item.main, description=item.description, icon=item.icon)
                for item in record.conditions
            ],
        )


def parse_weather_json(raw: str | bytes) -> WeatherRecord:
    """Parse a JSON document into a record.

    Raises ``pydantic.ValidationError`` (a ``ValueError``) when the document is
    not valid JSON or does not match the payload shape.
    """
    return WeatherResponsePayload.model_validate_json(raw).to_record()
