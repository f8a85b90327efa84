"""Typed settings loader for stormy."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .exceptions import (
    ConfigError,
    InvalidCoordinatesError,
    MissingApiKeyError,
    NoLocationProvidedError,
)
from .models import Language, Provider, Units

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "stormy"
DEFAULT_YR_USER_AGENT = "stormy/0.1 (https://github.com/stormy-weather/stormy)"

# Providers whose API rejects every request without a key.
KEYED_PROVIDERS: dict[Provider, str] = {
    Provider.OPEN_WEATHER_MAP: "api_key_owm",
    Provider.WORLD_WEATHER_ONLINE: "api_key_wwo",
    Provider.WEATHER_API: "api_key_wa",
    Provider.WEATHER_BIT: "api_key_wb",
    Provider.TOMORROW_IO: "api_key_tio",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    providers: Annotated[list[Provider], NoDecode] = Field(
        default_factory=lambda: [Provider.OPEN_METEO],
        alias="STORMY_PROVIDERS",
    )

    city: str | None = Field(default=None, alias="STORMY_CITY")
    lat: float | None = Field(default=None, alias="STORMY_LAT")
    lon: float | None = Field(default=None, alias="STORMY_LON")

    units: Units = Field(default=Units.METRIC, alias="STORMY_UNITS")
    language: Language = Field(default=Language.ENGLISH, alias="STORMY_LANGUAGE")

    use_geocoding_cache: bool = Field(default=False, alias="STORMY_USE_GEOCODING_CACHE")
    cache_dir: Path = Field(default=DEFAULT_CACHE_DIR, alias="STORMY_CACHE_DIR")

    http_timeout_seconds: float = Field(default=10.0, alias="STORMY_HTTP_TIMEOUT_SECONDS")
    yr_user_agent: str = Field(default=DEFAULT_YR_USER_AGENT, alias="STORMY_YR_USER_AGENT")

    live_mode: bool = Field(default=False, alias="STORMY_LIVE_MODE")
    live_mode_interval_seconds: int = Field(
        default=300,
        alias="STORMY_LIVE_MODE_INTERVAL_SECONDS",
    )

    api_key_owm: str = Field(default="", alias="OPEN_WEATHER_MAP_API_KEY", repr=False)
    api_key_wwo: str = Field(default="", alias="WORLD_WEATHER_ONLINE_API_KEY", repr=False)
    api_key_wa: str = Field(default="", alias="WEATHER_API_KEY", repr=False)
    api_key_wb: str = Field(default="", alias="WEATHER_BIT_API_KEY", repr=False)
    api_key_tio: str = Field(default="", alias="TOMORROW_IO_API_KEY", repr=False)
    api_key_open_uv: str = Field(default="", alias="OPEN_UV_API_KEY", repr=False)

    @field_validator("providers", mode="before")
    @classmethod
    def parse_providers(cls, value: Any) -> Any:
        """Accept a comma-separated string and the short provider aliases."""
        if isinstance(value, str):
            value = [part for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple)):
            return [
                item if isinstance(item, Provider) else Provider.parse(str(item))
                for item in value
            ]
        return value

    @field_validator("city", "lat", "lon", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_structure(self) -> Settings:
        if (self.lat is None) != (self.lon is None):
            raise ValueError("STORMY_LAT and STORMY_LON must be set together.")
        if self.http_timeout_seconds <= 0:
            raise ValueError("STORMY_HTTP_TIMEOUT_SECONDS must be > 0.")
        if self.live_mode_interval_seconds <= 0:
            raise ValueError("STORMY_LIVE_MODE_INTERVAL_SECONDS must be > 0.")
        if not self.yr_user_agent.strip():
            raise ValueError("STORMY_YR_USER_AGENT must not be empty.")
        return self

    def api_key_for(self, provider: Provider) -> str:
        """Return the configured key for ``provider`` ('' when unset or keyless)."""
        field_name = KEYED_PROVIDERS.get(provider)
        if field_name is None:
            return ""
        return getattr(self, field_name)

    def coordinates(self) -> tuple[float, float] | None:
        if self.lat is None or self.lon is None:
            return None
        return self.lat, self.lon

    def with_overrides(self, **values: Any) -> Settings:
        """Return a validated copy with non-None ``values`` applied."""
        data = self.model_dump()
        data.update({key: value for key, value in values.items() if value is not None})
        try:
            return type(self).model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "providers": [provider.value for provider in self.providers],
            "city": self.city,
            "coordinates": self.coordinates(),
            "units": self.units.value,
            "language": self.language.value,
            "use_geocoding_cache": self.use_geocoding_cache,
            "http_timeout_seconds": self.http_timeout_seconds,
            "live_mode": self.live_mode,
            "keys_configured": sorted(
                provider.value for provider in KEYED_PROVIDERS if self.api_key_for(provider)
            )
            + (["open_uv"] if self.api_key_open_uv else []),
        }


def validate_settings(settings: Settings) -> None:
    """Run-time checks that must pass before any provider is contacted."""
    city = (settings.city or "").strip()
    if not city and (settings.lat is None or settings.lon is None):
        raise NoLocationProvidedError()

    if not settings.providers:
        raise ConfigError("At least one provider must be specified.")

    for provider in settings.providers:
        if provider in KEYED_PROVIDERS and not settings.api_key_for(provider):
            raise MissingApiKeyError(provider)

    coords = settings.coordinates()
    if coords is not None:
        lat, lon = coords
        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            raise InvalidCoordinatesError(lat, lon)


def load_settings(*, validate_runtime: bool = True, **overrides: Any) -> Settings:
    """Load and validate settings, raising ConfigError on failure.

    ``validate_runtime=False`` skips the location and API key checks, for
    commands such as cache maintenance that never contact a provider.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    if overrides:
        settings = settings.with_overrides(**overrides)
    if validate_runtime:
        validate_settings(settings)
    return settings
