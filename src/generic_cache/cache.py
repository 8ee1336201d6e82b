"""Generic in-memory cache with per-entry TTL and a global timeout.

Store, retrieve and remove values by key. Expired values are never
returned; they are purged inline on every put/get and periodically by a
background reaper. When the cache is full of live entries, new keys are
rejected with CacheOverflowError instead of evicting anything.
"""

from __future__ import annotations

import logging
import weakref
from typing import Callable, Generic, Hashable, List, Optional, TypeVar

from generic_cache.core.errors import CacheOverflowError, ConfigurationError
from generic_cache.core.models import CacheConfig, CacheEntry, now_millis
from generic_cache.core.reaper import Reaper
from generic_cache.core.store import Store

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Clock = Callable[[], int]


class GenericCache(Generic[K, V]):
    """Admission-controlled TTL cache.

    The cache owns its store and its reaper: construction starts the
    reaper and ``shutdown()`` (or leaving a ``with`` block) stops it.
    """

    def __init__(
        self,
        max_size: int,
        global_timeout_seconds: int,
        cleanup_interval_seconds: Optional[int] = None,
        *,
        clock: Optional[Clock] = None,
        start_reaper: bool = True,
    ) -> None:
        try:
            if cleanup_interval_seconds is None:
                self._config = CacheConfig(
                    max_size=max_size, global_timeout_seconds=global_timeout_seconds
                )
            else:
                self._config = CacheConfig(
                    max_size=max_size,
                    global_timeout_seconds=global_timeout_seconds,
                    cleanup_interval_seconds=cleanup_interval_seconds,
                )
        except ConfigurationError as e:
            logger.error(str(e))
            raise

        self._clock: Clock = clock or now_millis
        self._store: Store[K, V] = Store(capacity=self._config.max_size)
        # Weak so a cache dropped without shutdown() can still be collected.
        self._reaper = Reaper(
            weakref.WeakMethod(self.purge_expired),
            interval_seconds=self._config.cleanup_interval_seconds,
        )
        if start_reaper:
            self._reaper.start()

    @classmethod
    def from_config(
        cls,
        cfg: CacheConfig,
        *,
        clock: Optional[Clock] = None,
        start_reaper: bool = True,
    ) -> "GenericCache[K, V]":
        return cls(
            cfg.max_size,
            cfg.global_timeout_seconds,
            cfg.cleanup_interval_seconds,
            clock=clock,
            start_reaper=start_reaper,
        )

    @property
    def max_size(self) -> int:
        return self._config.max_size

    @property
    def global_timeout_seconds(self) -> int:
        return self._config.global_timeout_seconds

    @property
    def cleanup_interval_seconds(self) -> int:
        return self._config.cleanup_interval_seconds

    @property
    def is_running(self) -> bool:
        return self._reaper.is_running

    def put(self, key: K, value: V, ttl_seconds: Optional[int] = None) -> None:
        """Store ``value`` under ``key``.

        ``ttl_seconds`` defaults to the global timeout. Raises
        CacheOverflowError when ``key`` is new and the cache is still full
        after purging expired entries; existing entries are left as is.
        """
        if ttl_seconds is None:
            ttl_seconds = self._config.global_timeout_seconds

        now = self._clock()
        entry = CacheEntry(value=value, expires_at=now + int(ttl_seconds) * 1000)

        if not self._store.admit(key, entry, now):
            err = CacheOverflowError(key)
            logger.error(str(err))
            raise err

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Return the live value for ``key`` or ``default``."""
        now = self._clock()
        self._store.purge_expired(now)

        entry = self._store.lookup(key)
        # A concurrent sweep may not have reached this entry yet.
        if entry is None or entry.is_expired(now):
            return default
        return entry.value

    def remove(self, key: K) -> None:
        self._store.delete(key)

    def current_size(self) -> int:
        return self._store.size()

    def keys(self) -> List[K]:
        now = self._clock()
        self._store.purge_expired(now)
        return self._store.keys()

    def purge_expired(self) -> int:
        """Remove expired entries; shared by put/get and the reaper."""
        return self._store.purge_expired(self._clock())

    def shutdown(self) -> None:
        """Stop the reaper and drop all entries. Safe to call more than once."""
        self._reaper.stop()
        self._store.clear()

    def __enter__(self) -> "GenericCache[K, V]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def __len__(self) -> int:
        return self.current_size()

    def __contains__(self, key: object) -> bool:
        entry = self._store.lookup(key)  # type: ignore[arg-type]
        return entry is not None and not entry.is_expired(self._clock())


class CacheBuilder(Generic[K, V]):
    """Fluent builder for GenericCache.

    Example:
        cache = CacheBuilder(5, 2).cleanup_interval(1).build()
    """

    def __init__(self, max_size: int, global_timeout_seconds: int) -> None:
        self._max_size = max_size
        self._global_timeout = global_timeout_seconds
        self._cleanup_interval: Optional[int] = None
        self._clock: Optional[Clock] = None
        self._start_reaper = True

    @classmethod
    def from_env(cls) -> "CacheBuilder[K, V]":
        cfg = CacheConfig.from_env()
        return cls(cfg.max_size, cfg.global_timeout_seconds).cleanup_interval(
            cfg.cleanup_interval_seconds
        )

    def cleanup_interval(self, seconds: int) -> "CacheBuilder[K, V]":
        self._cleanup_interval = seconds
        return self

    def clock(self, fn: Clock) -> "CacheBuilder[K, V]":
        self._clock = fn
        return self

    def without_reaper(self) -> "CacheBuilder[K, V]":
        self._start_reaper = False
        return self

    def build(self) -> GenericCache[K, V]:
        return GenericCache(
            self._max_size,
            self._global_timeout,
            self._cleanup_interval,
            clock=self._clock,
            start_reaper=self._start_reaper,
        )
