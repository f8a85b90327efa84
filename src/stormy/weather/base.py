"""Provider-agnostic weather interface and shared HTTP/decoding helpers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..cache import GeocodingCache
from ..config import Settings
from ..exceptions import (
    GeocodingUnsupportedError,
    HttpRequestFailedError,
    MissingApiKeyError,
    ResponseParseError,
    WeatherProviderError,
)
from ..models import Language, Location, Provider, Weather
from ..redaction import sanitize_text
from .location import resolve_location
from .open_uv import fetch_uv_index

OkT = TypeVar("OkT", bound=BaseModel)
ErrT = TypeVar("ErrT", bound=BaseModel)


class WeatherProvider(ABC):
    """Base contract for current-conditions providers.

    Subclasses implement ``fetch_weather`` and, when the service offers it,
    ``geocode``. Location resolution and UV enrichment are shared here.
    """

    provider: ClassVar[Provider]
    display_name: ClassVar[str]
    requires_api_key: ClassVar[bool] = False
    supports_geocoding: ClassVar[bool] = False

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        cache: GeocodingCache | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        if cache is None and settings.use_geocoding_cache:
            cache = GeocodingCache(settings.cache_dir)
        self.cache = cache
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=settings.http_timeout_seconds,
            headers=self.default_headers(),
        )

    def __enter__(self) -> WeatherProvider:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def get_weather(self) -> Weather:
        """Resolve the configured location and fetch current conditions."""
        location = resolve_location(self.settings, self, self.cache, self.logger)
        return self.fetch_weather(location)

    @abstractmethod
    def fetch_weather(self, location: Location) -> Weather:
        """Fetch current conditions for ``location`` and normalize them."""

    def geocode(self, city: str, language: Language) -> Location:
        """Resolve a city name; providers without a geocoding endpoint refuse."""
        raise GeocodingUnsupportedError(self.provider)

    def _api_key(self) -> str:
        key = self.settings.api_key_for(self.provider)
        if self.requires_api_key and not key:
            raise MissingApiKeyError(self.provider)
        return key

    def _fallback_uv_index(self, location: Location) -> int | None:
        """Query OpenUV for providers that do not report a UV index.

        Failures are logged and yield None; they never fail the weather call.
        """
        try:
            return fetch_uv_index(self._client, self.settings, location, self.logger)
        except WeatherProviderError as exc:
            self.logger.warning("UV index enrichment failed: %s", exc)
            return None

    def _request_json(
        self,
        url: str,
        *,
        params: dict[str, Any],
        context: str,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Issue one GET and return the decoded JSON body.

        JSON bodies are returned even for 4xx/5xx replies so that callers can
        decode the provider's own error shape.
        """
        self.logger.debug("%s %s request: %s", self.display_name, context, url)
        try:
            response = self._client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as exc:
            raise HttpRequestFailedError(
                f"{self.display_name} {context} timed out: {sanitize_text(str(exc))}",
                category="timeout",
            ) from exc
        except httpx.HTTPError as exc:
            raise HttpRequestFailedError(
                f"{self.display_name} {context} request failed: {sanitize_text(str(exc))}",
                category="transport",
            ) from exc

        status = response.status_code
        try:
            return response.json()
        except ValueError as exc:
            if status >= 400:
                raise HttpRequestFailedError(
                    f"{self.display_name} {context} failed with status {status}: "
                    f"{sanitize_text(response.text[:300])}",
                    category="http_status",
                    status_code=status,
                ) from exc
            raise ResponseParseError(
                f"{self.display_name} {context} returned non-JSON response."
            ) from exc

    def _decode(
        self,
        payload: Any,
        ok_model: type[OkT],
        error_model: type[ErrT] | None,
        *,
        context: str,
    ) -> OkT | ErrT:
        """Decode the success shape first, then the provider's error shape."""
        try:
            return ok_model.model_validate(payload)
        except ValidationError as ok_exc:
            failure = ok_exc
        if error_model is not None:
            try:
                return error_model.model_validate(payload)
            except ValidationError:
                self.logger.debug(
                    "%s %s payload matched no error shape", self.display_name, context
                )
        raise ResponseParseError(
            f"{self.display_name} {context} returned an unexpected payload: "
            f"{failure.error_count()} validation error(s), first: "
            f"{failure.errors()[0]['loc']} {failure.errors()[0]['msg']}"
        ) from failure

    def _build_weather(self, **fields: Any) -> Weather:
        try:
            return Weather(**fields)
        except ValidationError as exc:
            raise ResponseParseError(
                f"{self.display_name} weather values out of range: {exc}"
            ) from exc

    def _build_location(self, name: str, latitude: float, longitude: float) -> Location:
        try:
            return Location(name=name, latitude=latitude, longitude=longitude)
        except ValidationError as exc:
            raise ResponseParseError(
                f"{self.display_name} geocoding returned invalid coordinates: {exc}"
            ) from exc
