"""Concurrency-safe entry store with a fixed capacity.

Holds the authoritative key -> CacheEntry mapping. Every operation runs
under one re-entrant lock, so foreground callers and the reaper can use
the store without any locking of their own. The store never reads the
clock: callers pass ``now`` in.
"""

from __future__ import annotations

import threading
from typing import Dict, Generic, Hashable, List, Optional, TypeVar

from generic_cache.core.errors import ConfigurationError
from generic_cache.core.models import CacheEntry

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Store(Generic[K, V]):
    def __init__(self, *, capacity: int) -> None:
        if int(capacity) <= 0:
            raise ConfigurationError("Store capacity should be greater than 0")
        self._capacity = int(capacity)
        self._entries: Dict[K, CacheEntry[V]] = {}

        # Re-entrant so admit() can purge under the same critical section.
        self._lock = threading.RLock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def insert(self, key: K, entry: CacheEntry[V]) -> None:
        # Unconditional write/replace; capacity is the caller's concern.
        with self._lock:
            self._entries[key] = entry

    def lookup(self, key: K) -> Optional[CacheEntry[V]]:
        with self._lock:
            return self._entries.get(key)

    def delete(self, key: K) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def purge_expired(self, now: int) -> int:
        """Remove every entry whose expiry is before ``now``.

        Returns the number of entries removed. Running it again with the
        same ``now`` removes nothing.
        """
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for k in expired:
                del self._entries[k]
            return len(expired)

    def admit(self, key: K, entry: CacheEntry[V], now: int) -> bool:
        """Purge, check capacity and insert as one atomic step.

        Replacing a key that is still present always succeeds since it
        does not grow the entry count. Returns False (store untouched
        apart from the purge) when a new key does not fit.
        """
        with self._lock:
            self.purge_expired(now)
            if key not in self._entries and len(self._entries) >= self._capacity:
                return False
            self._entries[key] = entry
            return True

    def keys(self) -> List[K]:
        with self._lock:
            return list(self._entries.keys())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
