"""WeatherAPI.com provider."""

from __future__ import annotations

from typing import NoReturn

from pydantic import BaseModel, RootModel

from ..conversions import kmh_to_ms, normalize_degrees, round_int, round_one
from ..exceptions import ApiReturnedError, CityNotFoundError
from ..models import Language, Location, Provider, Units, Weather, WeatherConditionIcon
from .base import WeatherProvider

WEATHER_API_URL = "https://api.weatherapi.com/v1/current.json"
SEARCH_API_URL = "https://api.weatherapi.com/v1/search.json"

# https://www.weatherapi.com/docs/conditions.json
_ICONS: dict[int, WeatherConditionIcon] = {
    1000: WeatherConditionIcon.CLEAR,
    1003: WeatherConditionIcon.PARTLY_CLOUDY,
}
_ICONS.update(dict.fromkeys((1006, 1009), WeatherConditionIcon.CLOUDY))
_ICONS.update(dict.fromkeys((1030, 1135, 1147), WeatherConditionIcon.FOG))
_ICONS.update(
    dict.fromkeys(
        (1063, 1150, 1153, 1180, 1183, 1240, 1249, 1252),
        WeatherConditionIcon.LIGHT_SHOWERS,
    )
)
_ICONS.update(
    dict.fromkeys((1186, 1189, 1192, 1195, 1243, 1246), WeatherConditionIcon.HEAVY_SHOWERS)
)
_ICONS.update(
    dict.fromkeys(
        (1066, 1069, 1072, 1210, 1213, 1216, 1219, 1222, 1225, 1237, 1255),
        WeatherConditionIcon.LIGHT_SNOW,
    )
)
_ICONS.update(dict.fromkeys((1114, 1117, 1228, 1231, 1258), WeatherConditionIcon.HEAVY_SNOW))
_ICONS.update(
    dict.fromkeys((1087, 1273, 1276, 1279, 1282), WeatherConditionIcon.THUNDERSTORM)
)


def weather_api_code_to_icon(code: int) -> WeatherConditionIcon:
    return _ICONS.get(code, WeatherConditionIcon.UNKNOWN)


class _ErrorDetail(BaseModel):
    code: int
    message: str


class _ErrorResponse(BaseModel):
    error: _ErrorDetail


class _Place(BaseModel):
    name: str = ""
    region: str = ""
    country: str = ""
    lat: float
    lon: float

    def display_name(self) -> str:
        if not self.name:
            return f"{self.lat}, {self.lon}"
        if self.region and self.country:
            return f"{self.name}, {self.region}, {self.country}"
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name


class _SearchResponse(RootModel[list[_Place]]):
    pass


class _Condition(BaseModel):
    text: str
    code: int


class _Current(BaseModel):
    temp_c: float
    temp_f: float
    feelslike_c: float
    feelslike_f: float
    dewpoint_c: float
    dewpoint_f: float
    condition: _Condition
    wind_mph: float
    wind_kph: float
    wind_degree: float
    pressure_mb: float
    precip_mm: float
    precip_in: float
    humidity: float
    uv: float


class _WeatherResponse(BaseModel):
    location: _Place
    current: _Current


def _raise_api_error(error: _ErrorResponse) -> NoReturn:
    raise ApiReturnedError(f"WeatherAPI: {error.error.code} {error.error.message}")


class WeatherApiProvider(WeatherProvider):
    """Fetches current conditions and geocodes through WeatherAPI.com."""

    provider = Provider.WEATHER_API
    display_name = "WeatherAPI"
    requires_api_key = True
    supports_geocoding = True

    def geocode(self, city: str, language: Language) -> Location:
        api_key = self._api_key()
        payload = self._request_json(
            SEARCH_API_URL,
            params={"q": city, "key": api_key},
            context="geocoding",
        )
        data = self._decode(payload, _SearchResponse, _ErrorResponse, context="geocoding")
        if isinstance(data, _ErrorResponse):
            _raise_api_error(data)
        if not data.root:
            raise CityNotFoundError(city)
        place = data.root[0]
        return self._build_location(place.display_name(), place.lat, place.lon)

    def fetch_weather(self, location: Location) -> Weather:
        api_key = self._api_key()
        settings = self.settings
        payload = self._request_json(
            WEATHER_API_URL,
            params={
                "q": f"{location.latitude},{location.longitude}",
                "key": api_key,
                "lang": settings.language.value,
                "aqi": "no",
            },
            context="weather fetch",
        )
        data = self._decode(payload, _WeatherResponse, _ErrorResponse, context="weather fetch")
        if isinstance(data, _ErrorResponse):
            _raise_api_error(data)

        current = data.current
        if settings.units == Units.IMPERIAL:
            temperature, feels_like, dew = current.temp_f, current.feelslike_f, current.dewpoint_f
            precipitation = current.precip_in
            wind_speed = round_one(current.wind_mph)
        else:
            temperature, feels_like, dew = current.temp_c, current.feelslike_c, current.dewpoint_c
            precipitation = current.precip_mm
            wind_speed = round_one(kmh_to_ms(current.wind_kph))

        return self._build_weather(
            temperature=temperature,
            feels_like=feels_like,
            dew_point=dew,
            humidity=round_int(current.humidity),
            precipitation=precipitation,
            pressure=round_int(current.pressure_mb),
            wind_speed=wind_speed,
            wind_direction=normalize_degrees(current.wind_degree),
            uv_index=max(0, round_int(current.uv)),
            description=current.condition.text,
            icon=weather_api_code_to_icon(current.condition.code),
            location_name=data.location.display_name(),
        )
