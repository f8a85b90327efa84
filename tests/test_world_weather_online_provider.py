"""Tests for the World Weather Online adapter."""

from __future__ import annotations

import pytest
from provider_helpers import BATUMI, RecordingRequests, make_logger, make_settings

from stormy.exceptions import ApiReturnedError, CityNotFoundError, ResponseParseError
from stormy.models import Language, Units, WeatherConditionIcon
from stormy.weather.world_weather_online import WorldWeatherOnlineProvider, wwo_code_to_icon


def _condition(**overrides: object) -> dict[str, object]:
    condition: dict[str, object] = {
        "observation_time": "10:44 AM",
        "temp_C": "24",
        "temp_F": "75",
        "weatherCode": "116",
        "weatherDesc": [{"value": "Partly cloudy"}],
        "lang_ru": [{"value": "Переменная облачность"}],
        "windspeedMiles": "6",
        "windspeedKmph": "10",
        "winddirDegree": "257",
        "winddir16Point": "WSW",
        "precipMM": "0.1",
        "precipInches": "0.0",
        "humidity": "74",
        "visibility": "10",
        "pressure": "1011",
        "cloudcover": "50",
        "FeelsLikeC": "26",
        "FeelsLikeF": "79",
        "uvIndex": "5",
    }
    condition.update(overrides)
    return condition


def _payload(**overrides: object) -> dict[str, object]:
    return {
        "data": {
            "request": [{"type": "LatLon", "query": "Lat 41.64 and Lon 41.64"}],
            "current_condition": [_condition(**overrides)],
        }
    }


def _provider(**overrides: object) -> WorldWeatherOnlineProvider:
    settings = make_settings(lat=41.6, lon=41.6, api_key_wwo="wwo-key", **overrides)
    return WorldWeatherOnlineProvider(settings, make_logger())


def test_fetch_weather_parses_stringified_numbers() -> None:
    provider = _provider()
    requests = RecordingRequests(_payload())
    provider._request_json = requests  # type: ignore[method-assign]

    weather = provider.fetch_weather(BATUMI)

    assert weather.temperature == 24.0
    assert weather.feels_like == 26.0
    assert weather.wind_speed == 2.8
    assert weather.wind_direction == 257
    assert weather.humidity == 74
    assert weather.pressure == 1011
    assert weather.precipitation == 0.1
    assert weather.uv_index == 5
    assert weather.icon == WeatherConditionIcon.PARTLY_CLOUDY
    assert weather.description == "Partly cloudy"
    assert weather.location_name == "Batumi"
    params = requests.calls[0]["params"]
    assert params["q"] == "41.6386,41.6372"
    assert (params["fx"], params["mca"], params["format"]) == ("no", "no", "json")


def test_imperial_uses_imperial_fields() -> None:
    provider = _provider(units=Units.IMPERIAL)
    provider._request_json = RecordingRequests(_payload())  # type: ignore[method-assign]

    weather = provider.fetch_weather(BATUMI)

    assert weather.temperature == 75.0
    assert weather.wind_speed == 6.0
    assert weather.precipitation == 0.0


def test_localized_description() -> None:
    provider = _provider(language=Language.RUSSIAN)
    provider._request_json = RecordingRequests(_payload())  # type: ignore[method-assign]

    assert provider.fetch_weather(BATUMI).description == "Переменная облачность"


def test_bad_numeric_field_names_the_field() -> None:
    provider = _provider()
    provider._request_json = RecordingRequests(  # type: ignore[method-assign]
        _payload(temp_C="n/a")
    )

    with pytest.raises(ResponseParseError, match="Invalid temperature value"):
        provider.fetch_weather(BATUMI)


def test_error_shape_joins_messages() -> None:
    provider = _provider()
    provider._request_json = RecordingRequests(  # type: ignore[method-assign]
        {"data": {"error": [{"msg": "API key has reached calls per day allowed limit."}]}}
    )

    with pytest.raises(ApiReturnedError, match="calls per day"):
        provider.fetch_weather(BATUMI)


def test_geocode_search_result() -> None:
    provider = _provider()
    provider._request_json = RecordingRequests(  # type: ignore[method-assign]
        {
            "search_api": {
                "result": [
                    {
                        "areaName": [{"value": "Batumi"}],
                        "country": [{"value": "Georgia"}],
                        "region": [{"value": "Ajaria"}],
                        "latitude": "41.633",
                        "longitude": "41.633",
                    }
                ]
            }
        }
    )

    location = provider.geocode("Batumi", Language.ENGLISH)

    assert location.name == "Batumi, Georgia"
    assert location.latitude == 41.633


def test_geocode_empty_is_city_not_found() -> None:
    provider = _provider()
    provider._request_json = RecordingRequests(  # type: ignore[method-assign]
        {"search_api": {"result": []}}
    )

    with pytest.raises(CityNotFoundError):
        provider.geocode("NonexistentCity", Language.ENGLISH)


@pytest.mark.parametrize(
    ("code", "icon"),
    [
        (113, WeatherConditionIcon.CLEAR),
        (122, WeatherConditionIcon.CLOUDY),
        (248, WeatherConditionIcon.FOG),
        (266, WeatherConditionIcon.LIGHT_SHOWERS),
        (308, WeatherConditionIcon.HEAVY_SHOWERS),
        (338, WeatherConditionIcon.HEAVY_SNOW),
        (389, WeatherConditionIcon.THUNDERSTORM),
        (999, WeatherConditionIcon.UNKNOWN),
    ],
)
def test_wwo_code_to_icon(code: int, icon: WeatherConditionIcon) -> None:
    assert wwo_code_to_icon(code) == icon
