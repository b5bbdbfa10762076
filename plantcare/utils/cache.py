"""
Simple caching utilities for weather lookups.

Weather is fetched per location and changes slowly, so responses are kept in
a time-based cache keyed by rounded coordinates.
"""

from __future__ import annotations
from cachetools import TTLCache
from typing import Callable, Any, Optional
from functools import wraps
import threading

# Cache configuration constants
WEATHER_CACHE_TTL_SECONDS = 600  # 10 minutes
WEATHER_CACHE_MAX_ENTRIES = 256

# ~1 km precision; nearby requests share an entry
COORDINATE_PRECISION = 2

# Thread-safe weather cache (10-minute TTL, max 256 entries)
# Key format: "weather:{lat}:{lon}"
_weather_cache = TTLCache(maxsize=WEATHER_CACHE_MAX_ENTRIES, ttl=WEATHER_CACHE_TTL_SECONDS)
_cache_lock = threading.Lock()


def configure_weather_cache(ttl: int = WEATHER_CACHE_TTL_SECONDS, maxsize: int = WEATHER_CACHE_MAX_ENTRIES) -> None:
    """
    Replace the weather cache with one using the given TTL and size.

    Called by create_app() with WEATHER_CACHE_TTL / WEATHER_CACHE_MAX_ENTRIES.
    """
    global _weather_cache
    with _cache_lock:
        _weather_cache = TTLCache(maxsize=maxsize, ttl=ttl)


def weather_cache_key(latitude: float, longitude: float) -> str:
    return f"weather:{round(latitude, COORDINATE_PRECISION)}:{round(longitude, COORDINATE_PRECISION)}"


def cache_weather_data(func: Callable) -> Callable:
    """
    Decorator to cache weather lookups by location.

    Failed lookups (None) are not cached so the next request retries.
    Thread-safe using lock to prevent race conditions.

    Usage:
        @cache_weather_data
        def fetch_weather(latitude, longitude):
            # Expensive HTTP call...
            return snapshot
    """
    @wraps(func)
    def wrapper(latitude: float, longitude: float) -> Optional[Any]:
        cache_key = weather_cache_key(latitude, longitude)

        # Try to get from cache (thread-safe)
        with _cache_lock:
            if cache_key in _weather_cache:
                return _weather_cache[cache_key]

        # Not in cache - call the function
        result = func(latitude, longitude)

        if result is not None:
            with _cache_lock:
                _weather_cache[cache_key] = result

        return result

    return wrapper


def clear_weather_cache() -> None:
    """
    Clear the entire weather cache.

    Useful for:
    - Testing
    - Manual cache invalidation
    """
    with _cache_lock:
        _weather_cache.clear()
