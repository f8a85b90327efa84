"""Tests for settings loading and run-time validation."""

from __future__ import annotations

import pytest

from stormy.config import Settings, load_settings, validate_settings
from stormy.exceptions import (
    ConfigError,
    InvalidCoordinatesError,
    MissingApiKeyError,
    NoLocationProvidedError,
)
from stormy.models import Language, Provider, Units


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORMY_CITY", "Oslo")
    settings = load_settings()

    assert settings.providers == [Provider.OPEN_METEO]
    assert settings.units == Units.METRIC
    assert settings.language == Language.ENGLISH
    assert settings.http_timeout_seconds == 10.0
    assert settings.live_mode_interval_seconds == 300
    assert settings.use_geocoding_cache is False


def test_providers_parse_comma_separated_aliases(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORMY_PROVIDERS", "owm, om,yr,Tomorrow-IO")
    settings = Settings(_env_file=None)

    assert settings.providers == [
        Provider.OPEN_WEATHER_MAP,
        Provider.OPEN_METEO,
        Provider.YR,
        Provider.TOMORROW_IO,
    ]


def test_unknown_provider_is_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORMY_PROVIDERS", "om,accuweather")
    monkeypatch.setenv("STORMY_CITY", "Oslo")

    with pytest.raises(ConfigError, match="accuweather"):
        load_settings()


def test_lat_without_lon_is_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORMY_LAT", "10")

    with pytest.raises(ConfigError, match="must be set together"):
        load_settings()


def test_env_coordinates_and_units(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORMY_LAT", "41.64")
    monkeypatch.setenv("STORMY_LON", "41.63")
    monkeypatch.setenv("STORMY_UNITS", "imperial")
    monkeypatch.setenv("STORMY_LANGUAGE", "ko")

    settings = load_settings()

    assert settings.coordinates() == (41.64, 41.63)
    assert settings.units == Units.IMPERIAL
    assert settings.language == Language.KOREAN


def test_validate_requires_location() -> None:
    with pytest.raises(NoLocationProvidedError):
        validate_settings(Settings(_env_file=None))


def test_validate_requires_a_provider() -> None:
    with pytest.raises(ConfigError, match="At least one provider"):
        validate_settings(Settings(_env_file=None, city="Oslo", providers=[]))


def test_validate_requires_key_for_each_keyed_provider() -> None:
    settings = Settings(
        _env_file=None,
        city="Oslo",
        providers=[Provider.OPEN_METEO, Provider.WEATHER_BIT],
    )
    with pytest.raises(MissingApiKeyError) as exc_info:
        validate_settings(settings)
    assert exc_info.value.provider == Provider.WEATHER_BIT


def test_validate_accepts_keyless_providers() -> None:
    validate_settings(
        Settings(_env_file=None, city="Oslo", providers=[Provider.OPEN_METEO, Provider.YR])
    )


@pytest.mark.parametrize(("lat", "lon"), [(90.5, 0.0), (0.0, 181.0)])
def test_validate_rejects_bad_coordinates(lat: float, lon: float) -> None:
    with pytest.raises(InvalidCoordinatesError):
        validate_settings(Settings(_env_file=None, lat=lat, lon=lon))


def test_location_check_runs_before_key_check() -> None:
    settings = Settings(_env_file=None, providers=[Provider.OPEN_WEATHER_MAP])
    with pytest.raises(NoLocationProvidedError):
        validate_settings(settings)


def test_with_overrides_ignores_none_and_validates() -> None:
    settings = Settings(_env_file=None, city="Oslo")

    updated = settings.with_overrides(units="imperial", city=None, providers=["wb"])

    assert updated.units == Units.IMPERIAL
    assert updated.city == "Oslo"
    assert updated.providers == [Provider.WEATHER_BIT]
    with pytest.raises(ConfigError):
        settings.with_overrides(live_mode_interval_seconds=0)


def test_load_settings_without_runtime_checks() -> None:
    settings = load_settings(validate_runtime=False)
    assert settings.city is None


def test_api_keys_never_leak(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPEN_WEATHER_MAP_API_KEY", "owm-secret-value")
    monkeypatch.setenv("OPEN_UV_API_KEY", "uv-secret-value")
    settings = Settings(_env_file=None)

    assert settings.api_key_for(Provider.OPEN_WEATHER_MAP) == "owm-secret-value"
    assert settings.api_key_for(Provider.YR) == ""
    assert "secret" not in repr(settings)
    summary = settings.safe_summary()
    assert "secret" not in str(summary)
    assert summary["keys_configured"] == ["open_weather_map", "open_uv"]
