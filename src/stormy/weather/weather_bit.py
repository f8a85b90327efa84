"""Weatherbit (weatherbit.io) provider.

Weatherbit condition codes follow the OpenWeatherMap numbering, so the icon
table is shared with that adapter.
"""

from __future__ import annotations

from pydantic import BaseModel

from ..conversions import normalize_degrees, round_int
from ..exceptions import ApiReturnedError, CityNotFoundError
from ..models import Language, Location, Provider, Units, Weather
from .base import WeatherProvider
from .open_weather_map import owm_code_to_icon

GEO_API_URL = "https://api.weatherbit.io/v2.0/geocode"
WEATHER_API_URL = "https://api.weatherbit.io/v2.0/current"


class _ErrorResponse(BaseModel):
    error: str


class _GeoResponse(BaseModel):
    name: str
    lat: float
    lon: float


class _Condition(BaseModel):
    description: str
    code: int


class _Observation(BaseModel):
    city_name: str = ""
    temp: float
    app_temp: float
    dewpt: float
    rh: float
    precip: float = 0.0
    pres: float
    wind_spd: float
    wind_dir: float
    uv: float = 0.0
    weather: _Condition


class _WeatherResponse(BaseModel):
    count: int = 0
    data: list[_Observation]


class WeatherBitProvider(WeatherProvider):
    """Fetches current conditions and geocodes through Weatherbit."""

    provider = Provider.WEATHER_BIT
    display_name = "Weatherbit"
    requires_api_key = True
    supports_geocoding = True

    def geocode(self, city: str, language: Language) -> Location:
        api_key = self._api_key()
        payload = self._request_json(
            GEO_API_URL,
            params={"city": city, "key": api_key},
            context="geocoding",
        )
        if not payload:
            raise CityNotFoundError(city)
        data = self._decode(payload, _GeoResponse, _ErrorResponse, context="geocoding")
        if isinstance(data, _ErrorResponse):
            raise ApiReturnedError(f"Weatherbit: {data.error}")
        return self._build_location(data.name, data.lat, data.lon)

    def fetch_weather(self, location: Location) -> Weather:
        api_key = self._api_key()
        settings = self.settings
        payload = self._request_json(
            WEATHER_API_URL,
            params={
                "lat": location.latitude,
                "lon": location.longitude,
                "key": api_key,
                "lang": settings.language.value,
                "units": "I" if settings.units == Units.IMPERIAL else "M",
            },
            context="weather fetch",
        )
        data = self._decode(payload, _WeatherResponse, _ErrorResponse, context="weather fetch")
        if isinstance(data, _ErrorResponse):
            raise ApiReturnedError(f"Weatherbit: {data.error}")
        if data.count == 0 or not data.data:
            raise CityNotFoundError(location.name)

        observation = data.data[0]
        return self._build_weather(
            temperature=observation.temp,
            feels_like=observation.app_temp,
            dew_point=observation.dewpt,
            humidity=round_int(observation.rh),
            precipitation=observation.precip,
            pressure=round_int(observation.pres),
            wind_speed=observation.wind_spd,
            wind_direction=normalize_degrees(observation.wind_dir),
            uv_index=max(0, round_int(observation.uv)),
            description=observation.weather.description,
            icon=owm_code_to_icon(observation.weather.code),
            location_name=observation.city_name or location.name,
        )
