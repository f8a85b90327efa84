"""World Weather Online (worldweatheronline.com) provider.

Every numeric value in WWO payloads arrives as a string, so each one is
parsed explicitly and a bad value names the field it came from.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..conversions import dew_point, kmh_to_ms, normalize_degrees, round_int, round_one
from ..exceptions import ApiReturnedError, CityNotFoundError, ResponseParseError
from ..models import Language, Location, Provider, Units, Weather, WeatherConditionIcon
from ..translations import translate
from .base import WeatherProvider

WEATHER_API_URL = "https://api.worldweatheronline.com/premium/v1/weather.ashx"
SEARCH_API_URL = "https://api.worldweatheronline.com/premium/v1/search.ashx"

_ICONS: dict[int, WeatherConditionIcon] = {
    113: WeatherConditionIcon.CLEAR,
    116: WeatherConditionIcon.PARTLY_CLOUDY,
    119: WeatherConditionIcon.CLOUDY,
    122: WeatherConditionIcon.CLOUDY,
}
_ICONS.update(dict.fromkeys((143, 248, 260), WeatherConditionIcon.FOG))
_ICONS.update(dict.fromkeys((263, 266, 281, 284), WeatherConditionIcon.LIGHT_SHOWERS))
_ICONS.update(
    dict.fromkeys(
        (176, 293, 296, 299, 302, 305, 308, 311, 314, 317, 320, 353, 356, 359, 362, 365, 374, 377),
        WeatherConditionIcon.HEAVY_SHOWERS,
    )
)
_ICONS.update(
    dict.fromkeys(
        (179, 227, 230, 323, 326, 329, 332, 335, 338, 368, 371),
        WeatherConditionIcon.HEAVY_SNOW,
    )
)
_ICONS.update(dict.fromkeys((200, 386, 389, 392, 395), WeatherConditionIcon.THUNDERSTORM))


def wwo_code_to_icon(code: int) -> WeatherConditionIcon:
    return _ICONS.get(code, WeatherConditionIcon.UNKNOWN)


def _parse_float(value: str, field: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ResponseParseError(f"Invalid {field} value: {value!r}") from exc


def _parse_int(value: str, field: str) -> int:
    return round_int(_parse_float(value, field))


class _Text(BaseModel):
    value: str


class _CurrentCondition(BaseModel):
    # Localized descriptions arrive as extra ``lang_xx`` keys.
    model_config = ConfigDict(extra="allow")

    temp_c: str = Field(alias="temp_C")
    temp_f: str = Field(alias="temp_F")
    feels_like_c: str = Field(alias="FeelsLikeC")
    feels_like_f: str = Field(alias="FeelsLikeF")
    weather_code: str = Field(alias="weatherCode")
    weather_desc: list[_Text] = Field(default_factory=list, alias="weatherDesc")
    windspeed_miles: str = Field(alias="windspeedMiles")
    windspeed_kmph: str = Field(alias="windspeedKmph")
    winddir_degree: str = Field(alias="winddirDegree")
    precip_mm: str = Field(alias="precipMM")
    precip_inches: str = Field(alias="precipInches")
    humidity: str
    pressure: str
    uv_index: str = Field(alias="uvIndex")

    def description(self, language: Language) -> str:
        if language != Language.ENGLISH:
            localized = (self.model_extra or {}).get(f"lang_{language.value}") or []
            if localized and isinstance(localized[0], dict) and localized[0].get("value"):
                return str(localized[0]["value"])
        if self.weather_desc:
            return self.weather_desc[0].value
        return translate(language, "Unknown")


class _WeatherData(BaseModel):
    current_condition: list[_CurrentCondition]


class _WeatherResponse(BaseModel):
    data: _WeatherData


class _ErrorMessage(BaseModel):
    msg: str


class _ErrorData(BaseModel):
    error: list[_ErrorMessage]


class _ErrorResponse(BaseModel):
    data: _ErrorData

    def message(self) -> str:
        return ", ".join(item.msg for item in self.data.error)


class _SearchResult(BaseModel):
    area_name: list[_Text] = Field(default_factory=list, alias="areaName")
    country: list[_Text] = Field(default_factory=list)
    latitude: str
    longitude: str


class _SearchApi(BaseModel):
    result: list[_SearchResult] = Field(default_factory=list)


class _SearchResponse(BaseModel):
    search_api: _SearchApi


class WorldWeatherOnlineProvider(WeatherProvider):
    """Fetches current conditions and geocodes through World Weather Online."""

    provider = Provider.WORLD_WEATHER_ONLINE
    display_name = "WorldWeatherOnline"
    requires_api_key = True
    supports_geocoding = True

    def geocode(self, city: str, language: Language) -> Location:
        api_key = self._api_key()
        payload = self._request_json(
            SEARCH_API_URL,
            params={"q": city, "key": api_key, "format": "json", "num_of_results": 1},
            context="geocoding",
        )
        data = self._decode(payload, _SearchResponse, _ErrorResponse, context="geocoding")
        if isinstance(data, _ErrorResponse):
            raise ApiReturnedError(f"WorldWeatherOnline: {data.message()}")
        if not data.search_api.result:
            raise CityNotFoundError(city)

        result = data.search_api.result[0]
        parts = [items[0].value for items in (result.area_name, result.country) if items]
        name = ", ".join(parts) or city
        return self._build_location(
            name,
            _parse_float(result.latitude, "latitude"),
            _parse_float(result.longitude, "longitude"),
        )

    def fetch_weather(self, location: Location) -> Weather:
        api_key = self._api_key()
        settings = self.settings
        payload = self._request_json(
            WEATHER_API_URL,
            params={
                "q": f"{location.latitude},{location.longitude}",
                "key": api_key,
                "format": "json",
                "lang": settings.language.value,
                "fx": "no",
                "mca": "no",
            },
            context="weather fetch",
        )
        data = self._decode(payload, _WeatherResponse, _ErrorResponse, context="weather fetch")
        if isinstance(data, _ErrorResponse):
            raise ApiReturnedError(f"WorldWeatherOnline: {data.message()}")
        if not data.data.current_condition:
            raise ApiReturnedError("WorldWeatherOnline: no current condition data")
        condition = data.data.current_condition[0]

        if settings.units == Units.IMPERIAL:
            temperature = _parse_float(condition.temp_f, "temperature")
            feels_like = _parse_float(condition.feels_like_f, "feels like")
            wind_speed = _parse_float(condition.windspeed_miles, "wind speed")
            precipitation = _parse_float(condition.precip_inches, "precipitation")
        else:
            temperature = _parse_float(condition.temp_c, "temperature")
            feels_like = _parse_float(condition.feels_like_c, "feels like")
            wind_speed = round_one(kmh_to_ms(_parse_float(condition.windspeed_kmph, "wind speed")))
            precipitation = _parse_float(condition.precip_mm, "precipitation")

        humidity = _parse_int(condition.humidity, "humidity")
        return self._build_weather(
            temperature=temperature,
            feels_like=feels_like,
            dew_point=dew_point(temperature, humidity, settings.units),
            humidity=humidity,
            precipitation=precipitation,
            pressure=_parse_int(condition.pressure, "pressure"),
            wind_speed=wind_speed,
            wind_direction=normalize_degrees(
                _parse_float(condition.winddir_degree, "wind direction")
            ),
            uv_index=_parse_int(condition.uv_index, "UV index"),
            description=condition.description(settings.language),
            icon=wwo_code_to_icon(_parse_int(condition.weather_code, "weather code")),
            location_name=location.name,
            approximated=("dew_point",),
        )
