"""Shared fixtures: keep tests independent of the developer's environment."""

from __future__ import annotations

from pathlib import Path

import pytest

_ENV_VARS = (
    "STORMY_PROVIDERS",
    "STORMY_CITY",
    "STORMY_LAT",
    "STORMY_LON",
    "STORMY_UNITS",
    "STORMY_LANGUAGE",
    "STORMY_USE_GEOCODING_CACHE",
    "STORMY_CACHE_DIR",
    "STORMY_HTTP_TIMEOUT_SECONDS",
    "STORMY_LIVE_MODE",
    "STORMY_LIVE_MODE_INTERVAL_SECONDS",
    "STORMY_YR_USER_AGENT",
    "OPEN_WEATHER_MAP_API_KEY",
    "WORLD_WEATHER_ONLINE_API_KEY",
    "WEATHER_API_KEY",
    "WEATHER_BIT_API_KEY",
    "TOMORROW_IO_API_KEY",
    "OPEN_UV_API_KEY",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # No stray .env file is picked up from the working directory.
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STORMY_CACHE_DIR", str(tmp_path / "cache"))
