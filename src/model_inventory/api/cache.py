from __future__ import annotations

import threading
import time
from collections.abc import Callable

from model_inventory.core.types import ModelDiscoveryResult


class DiscoveryCache:
    """Single-entry TTL holder for discovery results, owned by one app."""

    def __init__(
        self,
        ttl_s: float,
        loader: Callable[[], ModelDiscoveryResult],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_s = ttl_s
        self._loader = loader
        self._clock = clock
        self._lock = threading.Lock()
        self._value: ModelDiscoveryResult | None = None
        self._stored_ts = 0.0

    def get(self, refresh: bool = False) -> ModelDiscoveryResult:
        with self._lock:
            now = self._clock()
            fresh = self._value is not None and now - self._stored_ts < self._ttl_s
            if fresh and not refresh:
                return self._value
            value = self._loader()
            if self._ttl_s > 0:
                self._value = value
                self._stored_ts = now
            return value

    def clear(self) -> None:
        with self._lock:
            self._value = None
            self._stored_ts = 0.0
