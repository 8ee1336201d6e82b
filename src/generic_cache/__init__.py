"""Bounded in-process key-value cache with TTL expiry and a background reaper."""

import logging

from generic_cache.cache import CacheBuilder, GenericCache
from generic_cache.core.errors import (
    CacheOverflowError,
    ConfigurationError,
    GenericCacheError,
)
from generic_cache.core.models import CacheConfig, CacheEntry

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CacheBuilder",
    "CacheConfig",
    "CacheEntry",
    "CacheOverflowError",
    "ConfigurationError",
    "GenericCache",
    "GenericCacheError",
]
