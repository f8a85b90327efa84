"""Command-line entry point: show current weather, optionally in live mode."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.table import Table

from .cache import GeocodingCache
from .config import Settings, load_settings
from .conversions import wind_direction_symbol
from .exceptions import CacheError, ConfigError, WeatherProviderError
from .fallback import FallbackOrchestrator, run_live
from .log_setup import level_for_verbosity, setup_logger
from .models import Language, Provider, Units, Weather
from .redaction import sanitize_for_logging
from .translations import translate

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_CACHE = 3
EXIT_PROVIDER = 4

_UNIT_LABELS = {
    Units.METRIC: ("°C", "m/s", "mm"),
    Units.IMPERIAL: ("°F", "mph", "inch"),
}


def _provider_arg(value: str) -> Provider:
    try:
        return Provider.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="stormy",
        description="Show current weather conditions from one or more providers.",
    )
    parser.add_argument("--city", type=str, default=None, help="City name to look up.")
    parser.add_argument("--lat", type=float, default=None, help="Latitude (with --lon).")
    parser.add_argument("--lon", type=float, default=None, help="Longitude (with --lat).")
    parser.add_argument(
        "--provider",
        dest="providers",
        action="append",
        type=_provider_arg,
        default=None,
        help="Provider to use; repeat to define the fallback order.",
    )
    parser.add_argument(
        "--units",
        choices=[units.value for units in Units],
        default=None,
        help="Unit system for the output.",
    )
    parser.add_argument(
        "--lang",
        choices=[language.value for language in Language],
        default=None,
        help="Language for condition descriptions.",
    )
    parser.add_argument("--json", action="store_true", help="Print weather as JSON.")
    parser.add_argument("--live", action="store_true", help="Refresh until interrupted.")
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help="Live mode refresh interval in seconds.",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Do not read or write the geocoding cache.",
    )
    parser.add_argument(
        "--clear-cache",
        action="store_true",
        help="Delete cached geocoding results and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v warnings, -vv info, -vvv debug).",
    )
    return parser.parse_args(argv)


def _overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "city": args.city,
        "lat": args.lat,
        "lon": args.lon,
        "providers": args.providers,
        "units": args.units,
        "language": args.lang,
        "live_mode": True if args.live else None,
        "live_mode_interval_seconds": args.interval,
        "use_geocoding_cache": False if args.no_cache else None,
    }


def build_weather_table(weather: Weather, settings: Settings) -> Table:
    """Render one Weather as a two-column rich table."""
    temp_unit, wind_unit, precip_unit = _UNIT_LABELS[settings.units]
    lang = settings.language

    def approx(field: str) -> str:
        return " ≈" if field in weather.approximated else ""

    table = Table(title=weather.location_name, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")
    table.add_row("Condition", weather.description)
    table.add_row("Temperature", f"{weather.temperature:.1f}{temp_unit}")
    table.add_row("Feels like", f"{weather.feels_like:.1f}{temp_unit}{approx('feels_like')}")
    table.add_row("Dew point", f"{weather.dew_point:.1f}{temp_unit}{approx('dew_point')}")
    table.add_row("Humidity", f"{weather.humidity}%")
    table.add_row("Precipitation", f"{weather.precipitation:g} {precip_unit}")
    table.add_row("Pressure", f"{weather.pressure} hPa")
    table.add_row(
        "Wind",
        f"{weather.wind_speed:.1f} {wind_unit} "
        f"{wind_direction_symbol(weather.wind_direction)} {weather.wind_direction}°",
    )
    table.add_row(
        "UV index",
        str(weather.uv_index) if weather.uv_index is not None else translate(lang, "Unknown"),
    )
    return table


def _print_weather(console: Console, weather: Weather, settings: Settings, as_json: bool) -> None:
    if as_json:
        sys.stdout.write(json.dumps(weather.model_dump(mode="json"), ensure_ascii=False) + "\n")
        sys.stdout.flush()
        return
    console.print(build_weather_table(weather, settings))


class _FailureReporter:
    """Log provider failures recorded by the orchestrator, each exactly once."""

    def __init__(self, orchestrator: FallbackOrchestrator, logger: logging.Logger) -> None:
        self._orchestrator = orchestrator
        self._logger = logger
        self._reported = 0

    def flush(self) -> None:
        for provider, error in self._orchestrator.failures[self._reported :]:
            self._logger.warning("Provider %s failed: %s", provider, error)
        self._reported = len(self._orchestrator.failures)


def _clear_cache(console: Console, logger: logging.Logger) -> int:
    try:
        settings = load_settings(validate_runtime=False)
        GeocodingCache(settings.cache_dir).clear()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return EXIT_CONFIG
    except CacheError as exc:
        logger.error("Cache failure: %s", exc)
        return EXIT_CACHE
    console.print("Cache cleared successfully.")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Run the weather lookup and return a process exit code."""
    args = parse_args(argv)
    logger = setup_logger(level=level_for_verbosity(args.verbose))
    console = Console()

    if args.clear_cache:
        return _clear_cache(console, logger)

    try:
        settings = load_settings(**_overrides_from_args(args))
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return EXIT_CONFIG
    logger.info("Loaded configuration: %s", sanitize_for_logging(settings.safe_summary()))

    cache = GeocodingCache(settings.cache_dir) if settings.use_geocoding_cache else None

    try:
        orchestrator = FallbackOrchestrator(settings, logger, cache=cache)
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return EXIT_CONFIG

    reporter = _FailureReporter(orchestrator, logger)

    def show(weather: Weather) -> None:
        reporter.flush()
        if settings.live_mode and not args.json:
            console.clear()
        _print_weather(console, weather, settings, args.json)

    exit_code = EXIT_OK
    with orchestrator:
        try:
            if settings.live_mode:
                run_live(orchestrator, show, settings.live_mode_interval_seconds)
            else:
                show(orchestrator.fetch())
        except ConfigError as exc:
            logger.error("Configuration failure: %s", exc)
            exit_code = EXIT_CONFIG
        except CacheError as exc:
            logger.error("Cache failure: %s", exc)
            exit_code = EXIT_CACHE
        except WeatherProviderError as exc:
            reporter.flush()
            logger.error("All weather providers failed; last error: %s", exc)
            exit_code = EXIT_PROVIDER
        except KeyboardInterrupt:
            logger.info("Live mode interrupted by user.")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
