"""Application exception classes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Provider


class StormyError(Exception):
    """Base class for every error raised by stormy."""


class ConfigError(StormyError):
    """Raised when configuration is invalid or incomplete.

    Configuration errors are never retried against another provider.
    """


class MissingApiKeyError(ConfigError):
    """Raised when a selected provider requires an API key that is not set."""

    def __init__(self, provider: Provider) -> None:
        super().__init__(f"API key for provider '{provider}' is missing.")
        self.provider = provider


class NoLocationProvidedError(ConfigError):
    """Raised when neither a city nor coordinates were configured."""

    def __init__(self) -> None:
        super().__init__(
            "Either a city or both latitude and longitude must be provided."
        )


class InvalidCoordinatesError(ConfigError):
    """Raised when coordinates fall outside the valid lat/lon range."""

    def __init__(self, lat: float, lon: float) -> None:
        super().__init__(f"Invalid coordinates: latitude {lat}, longitude {lon}")
        self.lat = lat
        self.lon = lon


class WeatherProviderError(StormyError):
    """Raised when a provider call fails in a way another provider may not."""


class HttpRequestFailedError(WeatherProviderError):
    """Raised for transport failures (DNS, connect, timeout) or bad HTTP replies."""

    def __init__(
        self,
        message: str,
        *,
        category: str = "transport",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status_code = status_code


class ApiReturnedError(WeatherProviderError):
    """Raised when a provider explicitly reports an API-level error."""


class CityNotFoundError(ApiReturnedError):
    """Raised when geocoding returns no match for a city."""

    def __init__(self, city: str) -> None:
        super().__init__(f"City not found: {city}")
        self.city = city


class ResponseParseError(WeatherProviderError):
    """Raised when a response body does not match the expected shape."""


class GeocodingUnsupportedError(WeatherProviderError):
    """Raised when a provider cannot resolve city names to coordinates."""

    def __init__(self, provider: Provider) -> None:
        super().__init__(f"Provider '{provider}' does not support city name lookup.")
        self.provider = provider


class CacheError(StormyError):
    """Raised when reading or writing the geocoding cache fails."""
