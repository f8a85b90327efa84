"""Weather provider adapters and location resolution."""

from .base import WeatherProvider
from .factory import PROVIDER_CLASSES, create_provider
from .location import resolve_location, validate_coordinates
from .open_meteo import OpenMeteoProvider
from .open_weather_map import OpenWeatherMapProvider
from .tomorrow_io import TomorrowIoProvider
from .weather_api import WeatherApiProvider
from .weather_bit import WeatherBitProvider
from .world_weather_online import WorldWeatherOnlineProvider
from .yr import YrProvider

__all__ = [
    "OpenMeteoProvider",
    "OpenWeatherMapProvider",
    "PROVIDER_CLASSES",
    "TomorrowIoProvider",
    "WeatherApiProvider",
    "WeatherBitProvider",
    "WeatherProvider",
    "WorldWeatherOnlineProvider",
    "YrProvider",
    "create_provider",
    "resolve_location",
    "validate_coordinates",
]
