"""
Forecast Result Cache

Explicit, caller-owned TTL cache for forecast results keyed by query
parameters. Nothing in the engine reaches for a module-level cache: the
owner (web app, CLI, batch job) constructs one and passes it in.
"""

import threading
from typing import Hashable, Optional, Tuple

from cachetools import TTLCache

from .forecasting.models import ForecastResult


# 6 hours, matching the forecast refresh cadence of the listings feed
DEFAULT_TTL_SECONDS = 6 * 60 * 60
DEFAULT_MAX_ENTRIES = 1024


def _normalise(value: str) -> str:
    return (value or "").strip().casefold()


class ForecastCache:
    """
    Thread-safe in-process cache of successful forecasts.

    Entries are frozen ForecastResult instances, so every caller can
    share the stored object.

    Concurrent misses for the same key may both compute; the engine is
    deterministic, so the duplicate store is harmless.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        self._cache = TTLCache(maxsize=max_entries, ttl=ttl_seconds)
        self._lock = threading.Lock()

    @staticmethod
    def make_key(
        city: str,
        state: str,
        property_type: str,
        lookback_months: int,
        forecast_months: int,
    ) -> Tuple[Hashable, ...]:
        """Cache key for a forecast query."""
        return (
            _normalise(city),
            _normalise(state),
            _normalise(property_type) or "all",
            int(lookback_months),
            int(forecast_months),
        )

    def get(self, key: Tuple[Hashable, ...]) -> Optional[ForecastResult]:
        with self._lock:
            return self._cache.get(key)

    def set(self, key: Tuple[Hashable, ...], value: ForecastResult) -> None:
        with self._lock:
            self._cache[key] = value

    def clear(self) -> None:
        """Drop every cached forecast."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
