"""Map a :class:`WeatherRecord` onto display strings."""
from __future__ import annotations

import locale
from dataclasses import asdict, dataclass
from datetime import datetime, tzinfo
from enum import Enum
from typing import Dict, Optional

from .abstractions import WeatherRecord

CELSIUS = "°C"
FAHRENHEIT = "°F"
# Countries whose locale shows degrees Fahrenheit.
FAHRENHEIT_COUNTRIES = frozenset({"US", "LR", "MM"})


class WeatherIcon(str, Enum):
    CLEAR_DAY = "clear-day"
    PARTLY_CLOUDY_DAY = "partly-cloudy-day"
    CLEAR_NIGHT = "clear-night"
    PARTLY_CLOUDY_NIGHT = "partly-cloudy-night"
    CLOUDS = "clouds"
    DARK_CLOUDS = "dark-clouds"
    RAIN_DAY = "rain-day"
    RAIN_NIGHT = "rain-night"
    STORM = "storm"
    SNOW = "snow"
    FOG = "fog"
    UNKNOWN = "unknown"


ICON_TABLE: Dict[str, WeatherIcon] = {
    # day
    "01d": WeatherIcon.CLEAR_DAY,
    "02d": WeatherIcon.PARTLY_CLOUDY_DAY,
    "03d": WeatherIcon.CLOUDS,
    "04d": WeatherIcon.DARK_CLOUDS,
    "10d": WeatherIcon.RAIN_DAY,
    "11d": WeatherIcon.STORM,
    "13d": WeatherIcon.SNOW,
    "50d": WeatherIcon.FOG,
    # night
    "01n": WeatherIcon.CLEAR_NIGHT,
    "02n": WeatherIcon.PARTLY_CLOUDY_NIGHT,
    "03n": WeatherIcon.CLOUDS,
    "04n": WeatherIcon.DARK_CLOUDS,
    "10n": WeatherIcon.RAIN_NIGHT,
    "11n": WeatherIcon.STORM,
    "13n": WeatherIcon.SNOW,
    "50n": WeatherIcon.FOG,
}


def icon_for(code: str) -> WeatherIcon:
    return ICON_TABLE.get(code, WeatherIcon.UNKNOWN)


def temperature_unit(country_code: str) -> str:
    if country_code.upper() in FAHRENHEIT_COUNTRIES:
        return FAHRENHEIT
    return CELSIUS


def country_from_locale(value: Optional[str]) -> str:
    """Extract the country part of a locale name: ``en_US.UTF-8`` -> ``US``."""
    if not value:
        return ""
    name = value.split(".", 1)[0].split("@", 1)[0].replace("-", "_")
    if "_" not in name:
        return ""
    return name.rsplit("_", 1)[1].upper()


def device_country() -> str:
    language_code, _ = locale.getlocale()
    return country_from_locale(language_code)


def format_clock(epoch_seconds: int, tz: Optional[tzinfo] = None) -> str:
    """24-hour ``HH:MM`` in ``tz`` (the system local zone when omitted)."""
    moment = datetime.fromtimestamp(epoch_seconds, tz=tz)
    return moment.strftime("%H:%M")


def _number(value: float) -> str:
    return str(float(value))


@dataclass(frozen=True)
class RenderedWeather:
    location_name: str
    country: str
    main: str
    description: str
    temperature: str
    temp_min: str
    temp_max: str
    wind_speed: str
    humidity: str
    sunrise: str
    sunset: str
    icon: WeatherIcon

    def as_dict(self) -> Dict[str, str]:
        payload = asdict(self)
        payload["icon"] = self.icon.value
        return payload


class Presenter:
    """Pure mapping from a record to display values.

    Only the primary (first) condition is shown.
    """

    def __init__(self, *, country_code: Optional[str] = None, tz: Optional[tzinfo] = None) -> None:
        self.country_code = device_country() if country_code is None else country_code
        self.tz = tz

    @property
    def unit(self) -> str:
        return temperature_unit(self.country_code)

    def render(self, record: WeatherRecord) -> RenderedWeather:
        condition = record.primary_condition
        return RenderedWeather(
            location_name=record.location_name,
            country=record.country_code,
            main=condition.main if condition else "",
            description=condition.description if condition else "",
            temperature=_number(record.temperature) + self.unit,
            temp_min=f"{_number(record.temp_min)} min",
            temp_max=f"{_number(record.temp_max)} max",
            wind_speed=_number(record.wind_speed),
            humidity=f"{record.humidity_percent} per cent",
            sunrise=format_clock(record.sunrise, self.tz),
            sunset=format_clock(record.sunset, self.tz),
            icon=icon_for(condition.icon) if condition else WeatherIcon.UNKNOWN,
        )


__all__ = [
    "Presenter",
    "RenderedWeather",
    "WeatherIcon",
    "ICON_TABLE",
    "CELSIUS",
    "FAHRENHEIT",
    "FAHRENHEIT_COUNTRIES",
    "icon_for",
    "temperature_unit",
    "country_from_locale",
    "device_country",
    "format_clock",
]
