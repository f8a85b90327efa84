"""Builders shared by the provider tests."""

from __future__ import annotations

import logging
from typing import Any

from stormy.config import Settings
from stormy.models import Location, Provider, Weather, WeatherConditionIcon


def make_settings(**overrides: Any) -> Settings:
    """Settings from field names only, ignoring any .env file."""
    return Settings(_env_file=None, **overrides)


def make_logger(name: str = "tests.stormy") -> logging.Logger:
    return logging.getLogger(name)


BATUMI = Location(name="Batumi", latitude=41.6386, longitude=41.6372)


class RecordingRequests:
    """Stand-in for ``WeatherProvider._request_json`` returning canned payloads."""

    def __init__(self, *payloads: Any) -> None:
        self._payloads = list(payloads)
        self.calls: list[dict[str, Any]] = []

    def __call__(self, url: str, **kwargs: Any) -> Any:
        self.calls.append({"url": url, **kwargs})
        if not self._payloads:
            raise AssertionError(f"Unexpected request to {url}")
        return self._payloads.pop(0)


def make_weather(location_name: str = "Batumi") -> Weather:
    return Weather(
        temperature=21.0,
        feels_like=20.5,
        dew_point=12.3,
        humidity=55,
        precipitation=0.0,
        pressure=1012,
        wind_speed=3.0,
        wind_direction=90,
        description="Clear sky",
        icon=WeatherConditionIcon.CLEAR,
        location_name=location_name,
    )


class FakeAdapter:
    """Replays a script of results: Weather values are returned, errors raised.

    The last scripted outcome repeats once the others are used up.
    """

    def __init__(self, provider: Provider, script: list[Any]) -> None:
        self.provider = provider
        self._script = script
        self.calls = 0
        self.closed = False

    def get_weather(self) -> Weather:
        self.calls += 1
        outcome = self._script.pop(0) if len(self._script) > 1 else self._script[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True


class FakeFactory:
    """Provider factory handing out FakeAdapters and remembering them."""

    def __init__(self, scripts: dict[Provider, list[Any]]) -> None:
        self._scripts = scripts
        self.created: list[FakeAdapter] = []

    def __call__(
        self, tag: Provider, settings: Any, logger: Any, cache: Any = None
    ) -> FakeAdapter:
        adapter = FakeAdapter(tag, list(self._scripts[tag]))
        self.created.append(adapter)
        return adapter
