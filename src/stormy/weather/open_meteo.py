"""Open-Meteo (open-meteo.com) provider. No API key required."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..conversions import dew_point, normalize_degrees, round_int
from ..exceptions import ApiReturnedError, CityNotFoundError
from ..models import Language, Location, Provider, Units, Weather, WeatherConditionIcon
from ..translations import translate
from .base import WeatherProvider

GEO_API_URL = "https://geocoding-api.open-meteo.com/v1/search"
WEATHER_API_URL = "https://api.open-meteo.com/v1/forecast"
WEATHER_API_FIELDS = (
    "temperature_2m,apparent_temperature,relative_humidity_2m,precipitation,"
    "surface_pressure,wind_speed_10m,wind_direction_10m,weather_code"
)

# WMO weather interpretation codes.
WMO_DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def wmo_code_to_icon(code: int) -> WeatherConditionIcon:
    if code == 0:
        return WeatherConditionIcon.CLEAR
    if code in (1, 2):
        return WeatherConditionIcon.PARTLY_CLOUDY
    if code == 3:
        return WeatherConditionIcon.CLOUDY
    if code in (45, 48):
        return WeatherConditionIcon.FOG
    if 51 <= code <= 57 or code == 80:
        return WeatherConditionIcon.LIGHT_SHOWERS
    if 61 <= code <= 67 or code in (81, 82):
        return WeatherConditionIcon.HEAVY_SHOWERS
    if code in (71, 73):
        return WeatherConditionIcon.LIGHT_SNOW
    if code in (75, 77, 85, 86):
        return WeatherConditionIcon.HEAVY_SNOW
    if code in (95, 96, 99):
        return WeatherConditionIcon.THUNDERSTORM
    return WeatherConditionIcon.UNKNOWN


def wmo_code_to_description(code: int, language: Language) -> str:
    return translate(language, WMO_DESCRIPTIONS.get(code, "Unknown"))


class _Current(BaseModel):
    temperature: float = Field(alias="temperature_2m")
    apparent_temperature: float
    humidity: float = Field(alias="relative_humidity_2m")
    precipitation: float
    pressure: float = Field(alias="surface_pressure")
    wind_speed: float = Field(alias="wind_speed_10m")
    wind_direction: float = Field(alias="wind_direction_10m")
    weather_code: int


class _WeatherResponse(BaseModel):
    current: _Current


class _GeoResult(BaseModel):
    name: str
    latitude: float
    longitude: float


class _GeoResponse(BaseModel):
    results: list[_GeoResult] = Field(default_factory=list)


def _raise_if_error(payload: object) -> None:
    # Open-Meteo signals failures with sibling ``error``/``reason`` fields.
    if isinstance(payload, dict) and payload.get("error") is True:
        raise ApiReturnedError(f"Open-Meteo: {payload.get('reason') or 'Unknown error'}")


class OpenMeteoProvider(WeatherProvider):
    """Fetches current conditions and geocodes through Open-Meteo."""

    provider = Provider.OPEN_METEO
    display_name = "Open-Meteo"
    supports_geocoding = True

    def geocode(self, city: str, language: Language) -> Location:
        payload = self._request_json(
            GEO_API_URL,
            params={"name": city, "count": 1, "language": language.value, "format": "json"},
            context="geocoding",
        )
        _raise_if_error(payload)
        data = self._decode(payload, _GeoResponse, None, context="geocoding")
        if not data.results:
            raise CityNotFoundError(city)
        result = data.results[0]
        return self._build_location(result.name, result.latitude, result.longitude)

    def fetch_weather(self, location: Location) -> Weather:
        units = self.settings.units
        if units == Units.IMPERIAL:
            temperature_unit, wind_speed_unit, precipitation_unit = "fahrenheit", "mph", "inch"
        else:
            temperature_unit, wind_speed_unit, precipitation_unit = "celsius", "ms", "mm"

        payload = self._request_json(
            WEATHER_API_URL,
            params={
                "latitude": location.latitude,
                "longitude": location.longitude,
                "current": WEATHER_API_FIELDS,
                "temperature_unit": temperature_unit,
                "wind_speed_unit": wind_speed_unit,
                "precipitation_unit": precipitation_unit,
            },
            context="weather fetch",
        )
        _raise_if_error(payload)
        current = self._decode(payload, _WeatherResponse, None, context="weather fetch").current

        return self._build_weather(
            temperature=current.temperature,
            feels_like=current.apparent_temperature,
            dew_point=dew_point(current.temperature, current.humidity, units),
            humidity=round_int(current.humidity),
            precipitation=current.precipitation,
            pressure=round_int(current.pressure),
            wind_speed=current.wind_speed,
            wind_direction=normalize_degrees(current.wind_direction),
            uv_index=self._fallback_uv_index(location),
            description=wmo_code_to_description(current.weather_code, self.settings.language),
            icon=wmo_code_to_icon(current.weather_code),
            location_name=location.name,
            approximated=("dew_point",),
        )
