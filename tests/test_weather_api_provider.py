"""Tests for the WeatherAPI.com adapter."""

from __future__ import annotations

import pytest
from provider_helpers import BATUMI, RecordingRequests, make_logger, make_settings

from stormy.exceptions import ApiReturnedError, CityNotFoundError
from stormy.models import Language, Units, WeatherConditionIcon
from stormy.weather.weather_api import WeatherApiProvider, weather_api_code_to_icon

BATUMI_PAYLOAD = {
    "location": {
        "name": "Batumi",
        "region": "Ajaria",
        "country": "Georgia",
        "lat": 41.6386,
        "lon": 41.6372,
        "tz_id": "Asia/Tbilisi",
        "localtime": "2025-09-08 14:59",
    },
    "current": {
        "temp_c": 25.3,
        "temp_f": 77.5,
        "condition": {"text": "Переменная облачность", "code": 1003},
        "wind_mph": 6.5,
        "wind_kph": 10.4,
        "wind_degree": 257,
        "wind_dir": "WSW",
        "pressure_mb": 1011,
        "pressure_in": 29.85,
        "precip_mm": 0.04,
        "precip_in": 0,
        "humidity": 74,
        "feelslike_c": 27.4,
        "feelslike_f": 81.2,
        "dewpoint_c": 19.8,
        "dewpoint_f": 67.7,
        "uv": 5.3,
    },
}


def _provider(**overrides: object) -> WeatherApiProvider:
    settings = make_settings(lat=41.6, lon=41.6, api_key_wa="wa-key", **overrides)
    return WeatherApiProvider(settings, make_logger())


def test_fetch_weather_metric() -> None:
    provider = _provider(language=Language.RUSSIAN)
    requests = RecordingRequests(BATUMI_PAYLOAD)
    provider._request_json = requests  # type: ignore[method-assign]

    weather = provider.fetch_weather(BATUMI)

    assert weather.location_name == "Batumi, Ajaria, Georgia"
    assert weather.temperature == 25.3
    assert weather.feels_like == 27.4
    assert weather.humidity == 74
    assert weather.dew_point == 19.8
    assert weather.precipitation == 0.04
    assert weather.pressure == 1011
    assert weather.wind_speed == 2.9
    assert weather.wind_direction == 257
    assert weather.uv_index == 5
    assert weather.description == "Переменная облачность"
    assert weather.icon == WeatherConditionIcon.PARTLY_CLOUDY
    assert weather.approximated == ()
    params = requests.calls[0]["params"]
    assert params["q"] == "41.6386,41.6372"
    assert params["lang"] == "ru"
    assert params["aqi"] == "no"


def test_fetch_weather_imperial_keeps_pressure_in_hpa() -> None:
    provider = _provider(units=Units.IMPERIAL)
    provider._request_json = RecordingRequests(BATUMI_PAYLOAD)  # type: ignore[method-assign]

    weather = provider.fetch_weather(BATUMI)

    assert weather.temperature == 77.5
    assert weather.feels_like == 81.2
    assert weather.dew_point == 67.7
    assert weather.wind_speed == 6.5
    assert weather.precipitation == 0.0
    assert weather.pressure == 1011


def test_error_payload_carries_code_and_message() -> None:
    provider = _provider()
    provider._request_json = RecordingRequests(  # type: ignore[method-assign]
        {"error": {"code": 1006, "message": "No matching location found."}}
    )

    with pytest.raises(ApiReturnedError, match="1006 No matching location found."):
        provider.fetch_weather(BATUMI)


def test_geocode_uses_first_search_result() -> None:
    provider = _provider()
    requests = RecordingRequests(
        [
            {
                "name": "Batumi",
                "region": "Ajaria",
                "country": "Georgia",
                "lat": 41.64,
                "lon": 41.64,
            },
            {"name": "Batumi", "region": "", "country": "Elsewhere", "lat": 10.0, "lon": 10.0},
        ]
    )
    provider._request_json = requests  # type: ignore[method-assign]

    location = provider.geocode("Batumi", Language.ENGLISH)

    assert location.name == "Batumi, Ajaria, Georgia"
    assert (location.latitude, location.longitude) == (41.64, 41.64)
    assert requests.calls[0]["params"] == {"q": "Batumi", "key": "wa-key"}


def test_geocode_empty_list_is_city_not_found() -> None:
    provider = _provider()
    provider._request_json = RecordingRequests([])  # type: ignore[method-assign]

    with pytest.raises(CityNotFoundError):
        provider.geocode("NonexistentCity", Language.ENGLISH)


@pytest.mark.parametrize(
    ("code", "icon"),
    [
        (1000, WeatherConditionIcon.CLEAR),
        (1009, WeatherConditionIcon.CLOUDY),
        (1135, WeatherConditionIcon.FOG),
        (1183, WeatherConditionIcon.LIGHT_SHOWERS),
        (1195, WeatherConditionIcon.HEAVY_SHOWERS),
        (1213, WeatherConditionIcon.LIGHT_SNOW),
        (1117, WeatherConditionIcon.HEAVY_SNOW),
        (1276, WeatherConditionIcon.THUNDERSTORM),
        (4242, WeatherConditionIcon.UNKNOWN),
    ],
)
def test_weather_api_code_to_icon(code: int, icon: WeatherConditionIcon) -> None:
    assert weather_api_code_to_icon(code) == icon
