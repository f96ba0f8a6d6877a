"""
Redis Caching Layer.

Optional Redis-backed caching with connection pooling for:
- Catalog listings (invalidated when the catalog changes)
- Identity-provider signing certificates

Usage:
    from core.cache import cache, cached, CacheKeys

    cache.set_json(CacheKeys.skill_list(page=1), payload, ttl=CacheKeys.TTL_MEDIUM)
    cache.delete_pattern(CacheKeys.catalog_pattern())
"""

from core.cache.cache_keys import CacheKeys
from core.cache.decorators import cached
from core.cache.redis_client import RedisCache, cache

__all__ = [
    "RedisCache",
    "cache",
    "CacheKeys",
    "cached",
]
