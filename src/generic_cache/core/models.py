"""Immutable dataclasses for cache entries and cache settings.

CacheEntry pairs a stored value with its absolute expiry (epoch
milliseconds); CacheConfig holds the validated construction settings.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from generic_cache import config
from generic_cache.core.errors import ConfigurationError

V = TypeVar("V")


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[V]):
    # Stores value + absolute expiration time
    value: V
    expires_at: int  # epoch millis

    def is_expired(self, now: Optional[int] = None) -> bool:
        # Still valid at the exact expiry instant
        if now is None:
            now = now_millis()
        return now > self.expires_at


@dataclass(frozen=True)
class CacheConfig:
    """Construction settings for a cache.

    Field groups:
    - Capacity: max_size
    - Expiry: global_timeout_seconds, cleanup_interval_seconds
    """

    max_size: int
    global_timeout_seconds: int
    cleanup_interval_seconds: int = config.DEFAULT_CLEANUP_INTERVAL

    def __post_init__(self) -> None:
        if self.max_size <= 0:
            raise ConfigurationError(
                "Cache Configuration - Max number of objects should be greater than 0"
            )
        if self.cleanup_interval_seconds <= 0:
            raise ConfigurationError(
                "Cache Configuration - Clean up interval should be greater than 0"
            )

    @classmethod
    def from_env(cls) -> "CacheConfig":
        return cls(
            max_size=config.cache_max_size(),
            global_timeout_seconds=config.cache_global_timeout(),
            cleanup_interval_seconds=config.cache_cleanup_interval(),
        )
