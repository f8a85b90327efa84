"""Provider fallback chain and the live-mode tick loop."""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable

from .cache import GeocodingCache
from .config import Settings
from .exceptions import ConfigError, WeatherProviderError
from .models import Provider, Weather
from .weather.base import WeatherProvider
from .weather.factory import create_provider

ProviderFactory = Callable[..., WeatherProvider]


class FallbackOrchestrator:
    """Try the configured providers in order until one returns weather.

    Provider failures are recorded in ``failures`` and never logged here;
    callers decide how to report them. Dropped providers stay dropped for the
    lifetime of the orchestrator, so a live session keeps using whichever
    adapter last succeeded.
    """

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        cache: GeocodingCache | None = None,
        factory: ProviderFactory = create_provider,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.cache = cache
        self._factory = factory
        self._queue: deque[Provider] = deque(settings.providers)
        if not self._queue:
            raise ConfigError("At least one weather provider must be configured.")
        self.failures: list[tuple[Provider, WeatherProviderError]] = []
        self._active: WeatherProvider | None = self._create(self._queue.popleft())

    def __enter__(self) -> FallbackOrchestrator:
        return self

    def __exit__(self, exc_type: object, exc: object, exc_tb: object) -> None:
        self.close()

    @property
    def active_provider(self) -> Provider | None:
        return self._active.provider if self._active is not None else None

    @property
    def remaining(self) -> tuple[Provider, ...]:
        """Providers not yet tried, in fallback order."""
        return tuple(self._queue)

    def fetch(self) -> Weather:
        """Fetch current weather, falling back on provider failures.

        ConfigError, CacheError and unexpected exceptions propagate at once.
        When every provider has failed, the last provider error is re-raised.
        """
        while True:
            adapter = self._active
            if adapter is None:
                raise WeatherProviderError("All configured weather providers have failed.")
            try:
                return adapter.get_weather()
            except WeatherProviderError as exc:
                self.failures.append((adapter.provider, exc))
                adapter.close()
                if not self._queue:
                    self._active = None
                    raise
                self._active = self._create(self._queue.popleft())

    def close(self) -> None:
        if self._active is not None:
            self._active.close()
            self._active = None
        self._queue.clear()

    def _create(self, tag: Provider) -> WeatherProvider:
        return self._factory(tag, self.settings, self.logger, cache=self.cache)


def run_live(
    orchestrator: FallbackOrchestrator,
    on_weather: Callable[[Weather], None],
    interval_seconds: float,
    *,
    sleep_fn: Callable[[float], None] | None = None,
    max_ticks: int | None = None,
) -> int:
    """Fetch and hand off weather once per interval; return the tick count.

    Runs until ``max_ticks`` is reached (forever when None). Any error raised
    by ``fetch`` or ``on_weather`` ends the loop.
    """
    sleep = sleep_fn or time.sleep
    ticks = 0
    while max_ticks is None or ticks < max_ticks:
        if ticks:
            sleep(interval_seconds)
        on_weather(orchestrator.fetch())
        ticks += 1
    return ticks
