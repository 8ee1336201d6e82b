from __future__ import annotations

from typing import Hashable


class GenericCacheError(Exception):
    """Base error for the cache."""


class ConfigurationError(GenericCacheError, ValueError):
    """Raised when the cache is constructed with invalid settings."""


class CacheOverflowError(GenericCacheError):
    """Raised when a put is rejected because the cache is at capacity."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"Cache is full, so not able to add the item:{key}")
