"""Simple in-memory TTL cache for provider search responses.

One instance per process, built in ``create_app`` and handed to route
handlers through the ``get_cache`` dependency. Each uvicorn worker has its
own instance, so with --workers 2 a query may hit the provider once per
worker.

Eviction is lazy: an expired entry is dropped by the ``get`` that finds it.
There is no background sweep.
"""

import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from urllib.parse import urlencode

V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    key: str
    value: V
    stored_at: float


class TTLCache(Generic[V]):
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._store: dict[str, CacheEntry[V]] = {}
        self._lock = threading.Lock()

    def _expired(self, entry: CacheEntry[V], now: float) -> bool:
        return now - entry.stored_at > self.ttl_seconds

    def get(self, key: str) -> V | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._expired(entry, self._clock()):
                del self._store[key]
                return None
            return entry.value

    def set(self, key: str, value: V) -> None:
        if value is None:
            raise ValueError("Refusing to cache None")
        with self._lock:
            self._store[key] = CacheEntry(key=key, value=value, stored_at=self._clock())

    def clear(self) -> int:
        """Drop every entry. Returns how many were removed."""
        with self._lock:
            removed = len(self._store)
            self._store.clear()
        return removed

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._store.get(key)
            return entry is not None and not self._expired(entry, self._clock())

    def __len__(self) -> int:
        # Counts entries not yet evicted, expired or not.
        return len(self._store)


def make_key(namespace: str, params: Mapping[str, Any]) -> str:
    """Build a cache key from a provider tag and the query parameters.

    Parameters are sorted by name so insertion order does not matter,
    ``None`` values are skipped and values are percent-encoded, so no value
    can forge another parameter:

        >>> make_key("yelp", {"term": "cafe", "location": "NY"})
        'yelp:location=NY&term=cafe'
    """
    pairs = []
    for name in sorted(params):
        value = params[name]
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
        pairs.append((name, value))
    return f"{namespace}:{urlencode(pairs)}"
