"""Map provider tags to adapter classes."""

from __future__ import annotations

import logging

import httpx

from ..cache import GeocodingCache
from ..config import Settings
from ..models import Provider
from .base import WeatherProvider
from .open_meteo import OpenMeteoProvider
from .open_weather_map import OpenWeatherMapProvider
from .tomorrow_io import TomorrowIoProvider
from .weather_api import WeatherApiProvider
from .weather_bit import WeatherBitProvider
from .world_weather_online import WorldWeatherOnlineProvider
from .yr import YrProvider

PROVIDER_CLASSES: dict[Provider, type[WeatherProvider]] = {
    Provider.OPEN_METEO: OpenMeteoProvider,
    Provider.OPEN_WEATHER_MAP: OpenWeatherMapProvider,
    Provider.WORLD_WEATHER_ONLINE: WorldWeatherOnlineProvider,
    Provider.WEATHER_API: WeatherApiProvider,
    Provider.WEATHER_BIT: WeatherBitProvider,
    Provider.TOMORROW_IO: TomorrowIoProvider,
    Provider.YR: YrProvider,
}


def create_provider(
    tag: Provider,
    settings: Settings,
    logger: logging.Logger,
    cache: GeocodingCache | None = None,
    client: httpx.Client | None = None,
) -> WeatherProvider:
    """Instantiate the adapter for ``tag``."""
    provider_cls = PROVIDER_CLASSES[Provider(tag)]
    return provider_cls(settings, logger, cache=cache, client=client)
