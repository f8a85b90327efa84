"""OpenWeatherMap (openweathermap.org) provider."""

from __future__ import annotations

from pydantic import BaseModel, Field, RootModel

from ..conversions import dew_point, normalize_degrees, round_int
from ..exceptions import ApiReturnedError, CityNotFoundError
from ..models import Language, Location, Provider, Weather, WeatherConditionIcon
from ..translations import translate
from .base import WeatherProvider

GEO_API_URL = "https://api.openweathermap.org/geo/1.0/direct"
WEATHER_API_URL = "https://api.openweathermap.org/data/2.5/weather"


def owm_code_to_icon(code: int) -> WeatherConditionIcon:
    """Map an OpenWeatherMap condition id (also used by Weatherbit)."""
    if 200 <= code <= 232:
        return WeatherConditionIcon.THUNDERSTORM
    if 300 <= code <= 321 or code in (500, 520):
        return WeatherConditionIcon.LIGHT_SHOWERS
    if 500 <= code <= 531:
        return WeatherConditionIcon.HEAVY_SHOWERS
    if code in (600, 612, 615, 620):
        return WeatherConditionIcon.LIGHT_SNOW
    if 601 <= code <= 622:
        return WeatherConditionIcon.HEAVY_SNOW
    if 701 <= code <= 781:
        return WeatherConditionIcon.FOG
    if code == 800:
        return WeatherConditionIcon.CLEAR
    if code in (801, 802):
        return WeatherConditionIcon.PARTLY_CLOUDY
    if code in (803, 804):
        return WeatherConditionIcon.CLOUDY
    return WeatherConditionIcon.UNKNOWN


class _ErrorResponse(BaseModel):
    cod: int | str | None = None
    message: str


class _GeoLocation(BaseModel):
    name: str
    lat: float
    lon: float
    local_names: dict[str, str] = Field(default_factory=dict)


class _GeoResponse(RootModel[list[_GeoLocation]]):
    pass


class _Condition(BaseModel):
    id: int
    description: str = ""


class _Main(BaseModel):
    temp: float
    feels_like: float
    humidity: float
    pressure: float


class _Wind(BaseModel):
    speed: float = 0.0
    deg: float = 0.0


class _Precipitation(BaseModel):
    one_hour: float = Field(default=0.0, alias="1h")


class _WeatherResponse(BaseModel):
    weather: list[_Condition] = Field(default_factory=list)
    main: _Main
    wind: _Wind = Field(default_factory=_Wind)
    rain: _Precipitation | None = None
    snow: _Precipitation | None = None
    name: str | None = None

    def precipitation(self) -> float:
        rain = self.rain.one_hour if self.rain else 0.0
        snow = self.snow.one_hour if self.snow else 0.0
        return rain + snow


class OpenWeatherMapProvider(WeatherProvider):
    """Fetches current conditions and geocodes through OpenWeatherMap."""

    provider = Provider.OPEN_WEATHER_MAP
    display_name = "OpenWeatherMap"
    requires_api_key = True
    supports_geocoding = True

    def geocode(self, city: str, language: Language) -> Location:
        api_key = self._api_key()
        payload = self._request_json(
            GEO_API_URL,
            params={"q": city, "limit": 1, "appid": api_key, "lang": language.value},
            context="geocoding",
        )
        data = self._decode(payload, _GeoResponse, _ErrorResponse, context="geocoding")
        if isinstance(data, _ErrorResponse):
            raise ApiReturnedError(f"OpenWeatherMap: {data.message}")
        if not data.root:
            raise CityNotFoundError(city)
        result = data.root[0]
        name = result.local_names.get(language.value, result.name)
        return self._build_location(name, result.lat, result.lon)

    def fetch_weather(self, location: Location) -> Weather:
        api_key = self._api_key()
        settings = self.settings
        payload = self._request_json(
            WEATHER_API_URL,
            params={
                "lat": location.latitude,
                "lon": location.longitude,
                "units": settings.units.value,
                "lang": settings.language.value,
                "appid": api_key,
            },
            context="weather fetch",
        )
        data = self._decode(payload, _WeatherResponse, _ErrorResponse, context="weather fetch")
        if isinstance(data, _ErrorResponse):
            raise ApiReturnedError(f"OpenWeatherMap: {data.message}")

        if data.weather:
            condition = data.weather[0]
            text = condition.description
            description = text[:1].upper() + text[1:]
            icon = owm_code_to_icon(condition.id)
        else:
            description = translate(settings.language, "Unknown")
            icon = WeatherConditionIcon.UNKNOWN

        return self._build_weather(
            temperature=data.main.temp,
            feels_like=data.main.feels_like,
            dew_point=dew_point(data.main.temp, data.main.humidity, settings.units),
            humidity=round_int(data.main.humidity),
            precipitation=data.precipitation(),
            pressure=round_int(data.main.pressure),
            wind_speed=data.wind.speed,
            wind_direction=normalize_degrees(data.wind.deg),
            uv_index=self._fallback_uv_index(location),
            description=description,
            icon=icon,
            location_name=data.name or location.name,
            approximated=("dew_point",),
        )
