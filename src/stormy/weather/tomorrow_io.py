"""Tomorrow.io realtime provider.

The realtime endpoint accepts a city name as well as coordinates, so city
lookup reuses it and reads the resolved point from the response.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..conversions import normalize_degrees, round_int
from ..exceptions import ApiReturnedError, CityNotFoundError
from ..models import Language, Location, Provider, Weather, WeatherConditionIcon
from ..translations import translate
from .base import WeatherProvider

REALTIME_API_URL = "https://api.tomorrow.io/v4/weather/realtime"

# Longer city names are shown without the country.
MAX_CITY_NAME_LENGTH = 20

_ICONS: dict[int, WeatherConditionIcon] = {1000: WeatherConditionIcon.CLEAR}
_ICONS.update(dict.fromkeys((1100, 1101), WeatherConditionIcon.PARTLY_CLOUDY))
_ICONS.update(dict.fromkeys((1001, 1102), WeatherConditionIcon.CLOUDY))
_ICONS.update(dict.fromkeys((2000, 2100), WeatherConditionIcon.FOG))
_ICONS.update(dict.fromkeys((4000, 4200, 6000, 6200), WeatherConditionIcon.LIGHT_SHOWERS))
_ICONS.update(dict.fromkeys((4001, 4201, 6001, 6201), WeatherConditionIcon.HEAVY_SHOWERS))
_ICONS.update(dict.fromkeys((5001, 5100, 7102), WeatherConditionIcon.LIGHT_SNOW))
_ICONS.update(dict.fromkeys((5000, 5101, 7000, 7101), WeatherConditionIcon.HEAVY_SNOW))
_ICONS[8000] = WeatherConditionIcon.THUNDERSTORM

WEATHER_CODE_DESCRIPTIONS: dict[int, str] = {
    1000: "Clear",
    1100: "Mostly clear",
    1101: "Partly cloudy",
    1102: "Mostly cloudy",
    1001: "Cloudy",
    2000: "Fog",
    2100: "Light fog",
    4000: "Drizzle",
    4001: "Rain",
    4200: "Light rain",
    4201: "Heavy rain",
    5000: "Snow",
    5001: "Flurries",
    5100: "Light snow",
    5101: "Heavy snow",
    6000: "Freezing drizzle",
    6001: "Freezing rain",
    6200: "Light freezing rain",
    6201: "Heavy freezing rain",
    7000: "Ice pellets",
    7101: "Heavy ice pellets",
    7102: "Light ice pellets",
    8000: "Thunderstorm",
}


def tomorrow_code_to_icon(code: int) -> WeatherConditionIcon:
    return _ICONS.get(code, WeatherConditionIcon.UNKNOWN)


def tomorrow_code_to_description(code: int, language: Language) -> str:
    return translate(language, WEATHER_CODE_DESCRIPTIONS.get(code, "Unknown"))


def shorten_location_name(name: str) -> str:
    """Reduce "city, region, ..., country" to "city, country".

    Tomorrow.io names come in the local language and can be very long. When
    the city part alone exceeds MAX_CITY_NAME_LENGTH, only the city is kept.
    """
    parts = [part.strip() for part in name.split(",")]
    if len(parts) < 2:
        return name
    city, country = parts[0], parts[-1]
    if len(city) <= MAX_CITY_NAME_LENGTH:
        return f"{city}, {country}"
    return city


class _ErrorResponse(BaseModel):
    code: int
    type: str
    message: str


class _Values(BaseModel):
    temperature: float
    temperature_apparent: float = Field(alias="temperatureApparent")
    dew_point: float = Field(alias="dewPoint")
    humidity: float
    rain_intensity: float = Field(default=0.0, alias="rainIntensity")
    sleet_intensity: float = Field(default=0.0, alias="sleetIntensity")
    snow_intensity: float = Field(default=0.0, alias="snowIntensity")
    freezing_rain_intensity: float = Field(default=0.0, alias="freezingRainIntensity")
    pressure_surface_level: float = Field(alias="pressureSurfaceLevel")
    wind_speed: float = Field(alias="windSpeed")
    wind_direction: float = Field(default=0.0, alias="windDirection")
    uv_index: float | None = Field(default=None, alias="uvIndex")
    weather_code: int = Field(alias="weatherCode")

    def precipitation(self) -> float:
        return (
            self.rain_intensity
            + self.sleet_intensity
            + self.snow_intensity
            + self.freezing_rain_intensity
        )


class _Data(BaseModel):
    values: _Values


class _LocationData(BaseModel):
    name: str = ""
    lat: float | None = None
    lon: float | None = None


class _WeatherResponse(BaseModel):
    data: _Data
    location: _LocationData = Field(default_factory=_LocationData)


class TomorrowIoProvider(WeatherProvider):
    """Fetches realtime conditions from Tomorrow.io."""

    provider = Provider.TOMORROW_IO
    display_name = "Tomorrow.io"
    requires_api_key = True
    supports_geocoding = True

    def geocode(self, city: str, language: Language) -> Location:
        data = self._realtime(city, context="geocoding")
        place = data.location
        if place.lat is None or place.lon is None:
            raise CityNotFoundError(city)
        name = shorten_location_name(place.name) if place.name else city
        return self._build_location(name, place.lat, place.lon)

    def fetch_weather(self, location: Location) -> Weather:
        settings = self.settings
        data = self._realtime(f"{location.latitude},{location.longitude}", context="weather fetch")

        values = data.data.values
        if values.uv_index is None:
            uv_index = self._fallback_uv_index(location)
        else:
            uv_index = max(0, round_int(values.uv_index))
        location_name = (
            shorten_location_name(data.location.name) if data.location.name else location.name
        )
        return self._build_weather(
            temperature=values.temperature,
            feels_like=values.temperature_apparent,
            dew_point=values.dew_point,
            humidity=round_int(values.humidity),
            precipitation=values.precipitation(),
            pressure=round_int(values.pressure_surface_level),
            wind_speed=values.wind_speed,
            wind_direction=normalize_degrees(values.wind_direction),
            uv_index=uv_index,
            description=tomorrow_code_to_description(values.weather_code, settings.language),
            icon=tomorrow_code_to_icon(values.weather_code),
            location_name=location_name,
        )

    def _realtime(self, location_query: str, *, context: str) -> _WeatherResponse:
        api_key = self._api_key()
        payload = self._request_json(
            REALTIME_API_URL,
            params={
                "location": location_query,
                "units": self.settings.units.value,
                "apikey": api_key,
            },
            context=context,
        )
        data = self._decode(payload, _WeatherResponse, _ErrorResponse, context=context)
        if isinstance(data, _ErrorResponse):
            raise ApiReturnedError(f"#{data.code} {data.type}: {data.message}")
        return data
