"""Canonical, provider-agnostic weather models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Provider(StrEnum):
    """Closed set of supported weather services."""

    OPEN_METEO = "open_meteo"
    OPEN_WEATHER_MAP = "open_weather_map"
    WORLD_WEATHER_ONLINE = "world_weather_online"
    WEATHER_API = "weather_api"
    WEATHER_BIT = "weather_bit"
    TOMORROW_IO = "tomorrow_io"
    YR = "yr"

    @classmethod
    def parse(cls, value: str) -> Provider:
        """Parse a provider tag, accepting the short aliases."""
        key = value.strip().lower().replace("-", "_")
        key = PROVIDER_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown provider '{value}'; expected one of: {choices}") from exc


PROVIDER_ALIASES: dict[str, str] = {
    "om": Provider.OPEN_METEO.value,
    "owm": Provider.OPEN_WEATHER_MAP.value,
    "wwo": Provider.WORLD_WEATHER_ONLINE.value,
    "wa": Provider.WEATHER_API.value,
    "wb": Provider.WEATHER_BIT.value,
    "tio": Provider.TOMORROW_IO.value,
}


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class Language(StrEnum):
    ENGLISH = "en"
    RUSSIAN = "ru"
    SPANISH = "es"
    KOREAN = "ko"


class WeatherConditionIcon(StrEnum):
    """Every provider condition code maps to exactly one of these."""

    UNKNOWN = "unknown"
    CLEAR = "clear"
    PARTLY_CLOUDY = "partly_cloudy"
    CLOUDY = "cloudy"
    FOG = "fog"
    LIGHT_SHOWERS = "light_showers"
    HEAVY_SHOWERS = "heavy_showers"
    LIGHT_SNOW = "light_snow"
    HEAVY_SNOW = "heavy_snow"
    THUNDERSTORM = "thunderstorm"


class Location(BaseModel):
    """Resolved place with coordinates."""

    model_config = ConfigDict(frozen=True)

    name: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    @classmethod
    def from_coordinates(cls, lat: float, lon: float) -> Location:
        return cls(name=f"{lat}, {lon}", latitude=lat, longitude=lon)


class Weather(BaseModel):
    """Current conditions normalized into the configured unit system."""

    model_config = ConfigDict(frozen=True)

    temperature: float
    feels_like: float
    dew_point: float
    humidity: int = Field(ge=0, le=100)
    precipitation: float
    pressure: int = Field(ge=0)
    wind_speed: float
    wind_direction: int = Field(ge=0, lt=360)
    uv_index: int | None = Field(default=None, ge=0)
    description: str
    icon: WeatherConditionIcon
    location_name: str
    # Fields computed locally rather than reported by the provider.
    approximated: tuple[str, ...] = ()
