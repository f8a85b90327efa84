"""Tests for OpenUV enrichment."""

from __future__ import annotations

import logging

import httpx
import pytest
from provider_helpers import BATUMI, make_logger, make_settings

from stormy.exceptions import ApiReturnedError
from stormy.weather.open_meteo import OpenMeteoProvider
from stormy.weather.open_uv import fetch_uv_index

FORECAST_PAYLOAD = {
    "current": {
        "temperature_2m": 20.0,
        "apparent_temperature": 19.0,
        "relative_humidity_2m": 50,
        "precipitation": 0.0,
        "surface_pressure": 1010.0,
        "wind_speed_10m": 1.0,
        "wind_direction_10m": 90,
        "weather_code": 0,
    }
}


def _client(uv_response: httpx.Response, seen: list[httpx.Request] | None = None) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.url.host == "api.openuv.io":
            return uv_response
        return httpx.Response(200, json=FORECAST_PAYLOAD)

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_no_key_means_no_request() -> None:
    seen: list[httpx.Request] = []
    client = _client(httpx.Response(500), seen)

    assert fetch_uv_index(client, make_settings(), BATUMI, make_logger()) is None
    assert seen == []


def test_uv_index_is_rounded_and_sent_with_header() -> None:
    seen: list[httpx.Request] = []
    client = _client(httpx.Response(200, json={"result": {"uv": 5.6, "uv_max": 8.1}}), seen)

    uv = fetch_uv_index(client, make_settings(api_key_open_uv="uv-key"), BATUMI, make_logger())

    assert uv == 6
    assert seen[0].headers["x-access-token"] == "uv-key"
    assert seen[0].url.params["lat"] == "41.6386"
    assert seen[0].url.params["lng"] == "41.6372"


def test_api_error_is_raised() -> None:
    client = _client(httpx.Response(403, json={"error": "Not authorized"}))

    with pytest.raises(ApiReturnedError, match="Not authorized"):
        fetch_uv_index(client, make_settings(api_key_open_uv="bad"), BATUMI, make_logger())


def test_provider_enriches_missing_uv_index() -> None:
    settings = make_settings(lat=41.6, lon=41.6, api_key_open_uv="uv-key")
    client = _client(httpx.Response(200, json={"result": {"uv": 2.4}}))
    provider = OpenMeteoProvider(settings, make_logger(), client=client)

    assert provider.get_weather().uv_index == 2


def test_enrichment_failure_is_soft(caplog: pytest.LogCaptureFixture) -> None:
    settings = make_settings(lat=41.6, lon=41.6, api_key_open_uv="uv-key")
    client = _client(httpx.Response(403, json={"error": "Quota exceeded"}))
    provider = OpenMeteoProvider(settings, make_logger("tests.uv"), client=client)

    with caplog.at_level(logging.WARNING, logger="tests.uv"):
        weather = provider.get_weather()

    assert weather.uv_index is None
    assert weather.temperature == 20.0
    assert "UV index enrichment failed" in caplog.text
