"""Read-through TTL cache for catalog responses.

Every catalog call goes through a shared :class:`TTLCache` so that repeated
searches and lookups within a few minutes do not hit the network again.

Keys are opaque strings. Callers namespace them as
``<source>:<operation>:<id...>`` so entries from different catalogs never
collide.

Concurrent requests for the same key share a single computation through an
in-flight map. Without it, two threads missing the same key would both fetch
and the last write would win.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_S = 5 * 60.0


@dataclass
class CacheEntry(Generic[T]):
    """A cached value and the clock reading when it was stored."""
    timestamp: float
    value: T


class TTLCache:
    """Process-wide memoizer with a fixed expiry.

    An entry is valid while ``now - timestamp < ttl_s``. Expired entries are
    treated as absent and are replaced on the next access; they are never
    evicted in the background.
    """

    def __init__(self, ttl_s: float = DEFAULT_TTL_S, clock: Callable[[], float] = time.monotonic):
        self.ttl_s = ttl_s
        self._clock = clock
        self._entries: Dict[str, CacheEntry[Any]] = {}
        self._pending: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def _is_valid(self, entry: CacheEntry[Any]) -> bool:
        return self._clock() - entry.timestamp < self.ttl_s

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        """Return the cached value for ``key`` or compute and store it.

        Exceptions raised by ``compute`` propagate to the caller (and to any
        concurrent waiters on the same key) and nothing is stored.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_valid(entry):
                logger.debug("cache hit: %s", key)
                return entry.value

            pending = self._pending.get(key)
            owner = pending is None
            if owner:
                pending = Future()
                self._pending[key] = pending

        if not owner:
            logger.debug("cache wait: %s", key)
            return pending.result()

        logger.debug("cache miss: %s", key)
        try:
            value = compute()
        except BaseException as e:
            with self._lock:
                self._pending.pop(key, None)
            pending.set_exception(e)
            raise

        with self._lock:
            self._entries[key] = CacheEntry(timestamp=self._clock(), value=value)
            self._pending.pop(key, None)
        pending.set_result(value)
        return value

    def peek(self, key: str) -> Optional[Any]:
        """Return a valid cached value without computing, else None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_valid(entry):
                return entry.value
        return None

    def clear(self) -> None:
        """Drop every stored entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
