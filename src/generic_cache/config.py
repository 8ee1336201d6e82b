"""Configuration and environment helpers for the cache.

Provides a small helper to read typed environment variables and exposes
the default settings used when a cache is built from the environment
(CACHE_MAX_SIZE, CACHE_GLOBAL_TIMEOUT, CACHE_CLEANUP_INTERVAL).
"""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


# Reaper period when none is given
DEFAULT_CLEANUP_INTERVAL = 3


def cache_max_size() -> int:
    return _env_int("CACHE_MAX_SIZE", 1000)


def cache_global_timeout() -> int:
    return _env_int("CACHE_GLOBAL_TIMEOUT", 60)


def cache_cleanup_interval() -> int:
    return _env_int("CACHE_CLEANUP_INTERVAL", DEFAULT_CLEANUP_INTERVAL)
