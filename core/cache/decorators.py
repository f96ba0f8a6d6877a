"""
Caching decorators for automatic cache management.

Checks the cache before execution, caches results after computation and
falls through to the wrapped function whenever the cache is unavailable.
"""

import functools
from collections.abc import Callable
from typing import TypeVar

from core.cache.cache_keys import CacheKeys
from core.cache.redis_client import cache
from core.logging import get_logger

logger = get_logger("cache.decorators")

T = TypeVar("T")


def cached(
    key: str | Callable[..., str],
    ttl: int | Callable[[], int] = CacheKeys.TTL_MEDIUM,
) -> Callable:
    """
    Decorator for caching JSON-object results.

    Args:
        key: Fixed cache key, or a callable taking the function's arguments
        ttl: Seconds to keep the value, or a callable returning them
            (read at call time so settings overrides apply)

    Usage:
        @cached(CacheKeys.FIREBASE_CERTS, ttl=lambda: get_settings().firebase_certs_ttl)
        def fetch_certs() -> dict:
            ...

    Notes:
        - None results are not cached
        - Cache failures are silent: the function always runs on a miss
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        def _key(*args, **kwargs) -> str:
            return key(*args, **kwargs) if callable(key) else key

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            cache_key = _key(*args, **kwargs)

            cached_result = cache.get_json(cache_key)
            if cached_result is not None:
                logger.debug("cache_hit", key=cache_key)
                return cached_result  # type: ignore[return-value]

            logger.debug("cache_miss", key=cache_key)
            result = func(*args, **kwargs)

            if isinstance(result, dict):
                cache.set_json(cache_key, result, ttl() if callable(ttl) else ttl)

            return result

        def invalidate(*args, **kwargs) -> bool:
            """Invalidate cache for specific arguments."""
            return cache.delete(_key(*args, **kwargs))

        wrapper.invalidate = invalidate  # type: ignore[attr-defined]
        return wrapper

    return decorator
