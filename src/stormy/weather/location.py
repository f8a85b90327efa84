"""Location resolution shared by every provider adapter."""

from __future__ import annotations

import logging
from typing import Protocol

from ..cache import GeocodingCache
from ..config import Settings
from ..exceptions import (
    CacheError,
    GeocodingUnsupportedError,
    InvalidCoordinatesError,
    NoLocationProvidedError,
)
from ..models import Language, Location, Provider


class Geocoder(Protocol):
    """Anything able to turn a city name into a Location."""

    provider: Provider
    supports_geocoding: bool

    def geocode(self, city: str, language: Language) -> Location: ...


def validate_coordinates(lat: float, lon: float) -> None:
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        raise InvalidCoordinatesError(lat, lon)


def resolve_location(
    settings: Settings,
    geocoder: Geocoder,
    cache: GeocodingCache | None,
    logger: logging.Logger,
) -> Location:
    """Resolve configured coordinates or city name into a Location.

    Coordinates take precedence over a city. A city is looked up in the cache
    first (when enabled) and otherwise through ``geocoder``; successful
    lookups are written back to the cache. A geocoder that does not support
    city lookup is never called; a cache miss then raises
    GeocodingUnsupportedError.
    """
    if settings.lat is not None and settings.lon is not None:
        validate_coordinates(settings.lat, settings.lon)
        return Location.from_coordinates(settings.lat, settings.lon)

    city = (settings.city or "").strip()
    if not city:
        raise NoLocationProvidedError()

    active_cache = cache if settings.use_geocoding_cache else None
    if active_cache is not None:
        try:
            cached = active_cache.get(city, settings.language)
        except CacheError as exc:
            logger.warning("Geocoding cache read failed; using live lookup: %s", exc)
            cached = None
        if cached is not None:
            logger.debug("Geocoding cache hit for %r (%s)", city, settings.language)
            return cached

    if not geocoder.supports_geocoding:
        raise GeocodingUnsupportedError(geocoder.provider)
    location = geocoder.geocode(city, settings.language)

    if active_cache is not None:
        active_cache.put(city, settings.language, location)
    return location
