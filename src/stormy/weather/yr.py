"""Yr / MET Norway locationforecast provider.

No API key, but met.no requires an identifying User-Agent. Values are always
metric on the wire; dew point and feels-like are computed locally.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..conversions import (
    apparent_temperature,
    c_to_f,
    dew_point,
    mm_to_inch,
    ms_to_mph,
    normalize_degrees,
    round_int,
    round_one,
    round_places,
)
from ..exceptions import ApiReturnedError
from ..models import Language, Location, Provider, Units, Weather, WeatherConditionIcon
from ..translations import translate
from .base import WeatherProvider

YR_API_URL = "https://api.met.no/weatherapi/locationforecast/2.0/compact"

_SYMBOL_SUFFIXES = ("_day", "_night", "_polartwilight")

# base symbol code -> (description key, icon)
SYMBOLS: dict[str, tuple[str, WeatherConditionIcon]] = {
    "clearsky": ("Clear sky", WeatherConditionIcon.CLEAR),
    "fair": ("Fair", WeatherConditionIcon.PARTLY_CLOUDY),
    "partlycloudy": ("Partly cloudy", WeatherConditionIcon.PARTLY_CLOUDY),
    "cloudy": ("Cloudy", WeatherConditionIcon.CLOUDY),
    "fog": ("Fog", WeatherConditionIcon.FOG),
    "lightrain": ("Light rain", WeatherConditionIcon.LIGHT_SHOWERS),
    "rain": ("Rain", WeatherConditionIcon.LIGHT_SHOWERS),
    "heavyrain": ("Heavy rain", WeatherConditionIcon.HEAVY_SHOWERS),
    "lightrainshowers": ("Slight rain showers", WeatherConditionIcon.LIGHT_SHOWERS),
    "rainshowers": ("Rain showers", WeatherConditionIcon.LIGHT_SHOWERS),
    "heavyrainshowers": ("Violent rain showers", WeatherConditionIcon.HEAVY_SHOWERS),
    "lightsleet": ("Sleet", WeatherConditionIcon.LIGHT_SNOW),
    "sleet": ("Sleet", WeatherConditionIcon.LIGHT_SNOW),
    "heavysleet": ("Sleet", WeatherConditionIcon.HEAVY_SNOW),
    "lightsleetshowers": ("Sleet", WeatherConditionIcon.LIGHT_SNOW),
    "sleetshowers": ("Sleet", WeatherConditionIcon.LIGHT_SNOW),
    "heavysleetshowers": ("Sleet", WeatherConditionIcon.HEAVY_SNOW),
    "lightsnow": ("Light snow", WeatherConditionIcon.LIGHT_SNOW),
    "snow": ("Snow", WeatherConditionIcon.LIGHT_SNOW),
    "heavysnow": ("Heavy snow", WeatherConditionIcon.HEAVY_SNOW),
    "lightsnowshowers": ("Slight snow showers", WeatherConditionIcon.LIGHT_SNOW),
    "snowshowers": ("Snow showers", WeatherConditionIcon.LIGHT_SNOW),
    "heavysnowshowers": ("Heavy snow showers", WeatherConditionIcon.HEAVY_SNOW),
}


def base_symbol_code(code: str) -> str:
    for suffix in _SYMBOL_SUFFIXES:
        if code.endswith(suffix):
            return code[: -len(suffix)]
    return code


def symbol_code_to_icon(code: str) -> WeatherConditionIcon:
    base = base_symbol_code(code)
    if "andthunder" in base:
        return WeatherConditionIcon.THUNDERSTORM
    entry = SYMBOLS.get(base)
    return entry[1] if entry else WeatherConditionIcon.UNKNOWN


def symbol_code_to_description(code: str, language: Language) -> str:
    base = base_symbol_code(code)
    if "andthunder" in base:
        return translate(language, "Thunderstorm")
    entry = SYMBOLS.get(base)
    if entry is None:
        return f"{translate(language, 'Unknown')} ({code})"
    return translate(language, entry[0])


class _Details(BaseModel):
    air_temperature: float
    relative_humidity: float
    wind_speed: float
    wind_from_direction: float | None = None
    air_pressure_at_sea_level: float
    precipitation_amount: float | None = None


class _Instant(BaseModel):
    details: _Details


class _Summary(BaseModel):
    symbol_code: str


class _PeriodDetails(BaseModel):
    precipitation_amount: float | None = None


class _Period(BaseModel):
    summary: _Summary | None = None
    details: _PeriodDetails = Field(default_factory=_PeriodDetails)


class _Data(BaseModel):
    instant: _Instant
    next_1_hours: _Period | None = None
    next_6_hours: _Period | None = None

    def next_period(self) -> _Period | None:
        return self.next_1_hours or self.next_6_hours

    def symbol_code(self) -> str:
        period = self.next_period()
        if period is None or period.summary is None:
            return "unknown"
        return period.summary.symbol_code

    def precipitation(self) -> float:
        if self.instant.details.precipitation_amount is not None:
            return self.instant.details.precipitation_amount
        period = self.next_period()
        if period is not None and period.details.precipitation_amount is not None:
            return period.details.precipitation_amount
        return 0.0


class _Timeseries(BaseModel):
    data: _Data


class _Properties(BaseModel):
    timeseries: list[_Timeseries] = Field(default_factory=list)


class _ForecastResponse(BaseModel):
    properties: _Properties


class YrProvider(WeatherProvider):
    """Fetches the nearest forecast step from MET Norway (yr.no)."""

    provider = Provider.YR
    display_name = "Yr"

    def fetch_weather(self, location: Location) -> Weather:
        settings = self.settings
        payload = self._request_json(
            YR_API_URL,
            # met.no rejects more than four decimals.
            params={"lat": round(location.latitude, 4), "lon": round(location.longitude, 4)},
            headers={"User-Agent": settings.yr_user_agent},
            context="weather fetch",
        )
        if isinstance(payload, dict) and "properties" not in payload and "message" in payload:
            raise ApiReturnedError(f"Yr: {payload['message']}")
        data = self._decode(payload, _ForecastResponse, None, context="weather fetch")
        if not data.properties.timeseries:
            raise ApiReturnedError("Yr: no timeseries returned")

        step = data.properties.timeseries[0].data
        details = step.instant.details
        humidity = details.relative_humidity
        temperature = details.air_temperature
        wind_speed = details.wind_speed
        precipitation = step.precipitation()
        if settings.units == Units.IMPERIAL:
            temperature = c_to_f(temperature)
            wind_speed = ms_to_mph(wind_speed)
            precipitation = round_places(mm_to_inch(precipitation), 2)

        symbol = step.symbol_code()
        return self._build_weather(
            temperature=round_one(temperature),
            feels_like=apparent_temperature(temperature, wind_speed, humidity, settings.units),
            dew_point=dew_point(temperature, humidity, settings.units),
            humidity=round_int(humidity),
            precipitation=precipitation,
            pressure=round_int(details.air_pressure_at_sea_level),
            wind_speed=round_one(wind_speed),
            wind_direction=normalize_degrees(details.wind_from_direction or 0.0),
            uv_index=self._fallback_uv_index(location),
            description=symbol_code_to_description(symbol, settings.language),
            icon=symbol_code_to_icon(symbol),
            location_name=location.name,
            approximated=("dew_point", "feels_like"),
        )
