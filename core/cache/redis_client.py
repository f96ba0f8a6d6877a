"""
Redis client with connection pooling.

Provides a singleton Redis client with:
- Connection pooling (max 50 connections)
- JSON serialization for catalog listings and signing certificates
- Graceful degradation when Redis is unavailable or disabled
"""

import json
from collections.abc import Callable
from typing import Any, Optional

import redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from core.config import get_settings
from core.logging import get_logger

logger = get_logger("cache")


class RedisCache:
    """
    Redis cache client with connection pooling.

    Every operation degrades to a miss (or a no-op) when Redis is disabled,
    unreachable or times out, so callers never fail because of the cache.

    Usage:
        from core.cache import cache

        cache.set_json("catalog:skills:abc", {"items": []}, ttl=300)
        data = cache.get_json("catalog:skills:abc")
    """

    _instance: Optional["RedisCache"] = None
    _pool: Optional[redis.ConnectionPool] = None
    _initialized: bool = False
    _available: bool = False

    def __new__(cls) -> "RedisCache":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        # Prevent re-initialization
        pass

    def initialize(self, force: bool = False) -> bool:
        """
        Initialize Redis connection pool.

        Args:
            force: Force re-initialization even if already initialized

        Returns:
            True if Redis is enabled and connected, False otherwise
        """
        if self._initialized and not force:
            return self._available

        settings = get_settings()
        if not settings.cache_enabled:
            logger.info("cache_disabled")
            self._available = False
            self._initialized = True
            return False

        try:
            self._pool = redis.ConnectionPool(
                host=settings.redis_host,
                port=settings.redis_port,
                db=settings.redis_db,
                password=settings.redis_password,
                max_connections=50,
                socket_timeout=2,
                socket_connect_timeout=2,
                decode_responses=False,  # We handle encoding ourselves
            )

            # Test connection
            client = redis.Redis(connection_pool=self._pool)
            client.ping()

            self._available = True
            self._initialized = True
            logger.info("redis_connected", host=settings.redis_host, port=settings.redis_port)
            return True

        except (ConnectionError, TimeoutError) as e:
            logger.warning("redis_connection_failed", error=str(e))
            self._available = False
            self._initialized = True
            return False
        except RedisError as e:
            logger.warning("redis_init_error", error=str(e))
            self._available = False
            self._initialized = True
            return False

    def reset(self) -> None:
        """Forget the pool so the next call re-reads settings."""
        if self._pool is not None:
            self._pool.disconnect()
        self._pool = None
        self._initialized = False
        self._available = False

    @property
    def client(self) -> Optional[redis.Redis]:
        """Get Redis client from pool."""
        if not self._initialized:
            self.initialize()

        if not self._available or self._pool is None:
            return None

        return redis.Redis(connection_pool=self._pool)

    @property
    def is_available(self) -> bool:
        """Check if Redis is available."""
        if not self._initialized:
            self.initialize()
        return self._available

    # =========================================================================
    # JSON Operations
    # =========================================================================

    def get_json(self, key: str) -> dict | None:
        """
        Get JSON data from cache.

        Returns:
            Parsed JSON object or None if not found/unavailable
        """
        client = self.client
        if client is None:
            return None

        try:
            data = client.get(key)
            if data is None:
                return None
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            parsed = json.loads(data)
            return parsed if isinstance(parsed, dict) else None
        except (json.JSONDecodeError, UnicodeDecodeError, RedisError) as e:
            logger.debug("cache_get_error", key=key, error=str(e))
            return None

    def set_json(self, key: str, value: dict, ttl: int = 3600) -> bool:
        """
        Store JSON data in cache.

        Args:
            key: Cache key
            value: Data to cache (must be JSON-serializable)
            ttl: Time-to-live in seconds (default: 1 hour)

        Returns:
            True if cached successfully, False otherwise
        """
        client = self.client
        if client is None:
            return False

        try:
            serialized = json.dumps(value, default=str).encode("utf-8")
            client.setex(key, ttl, serialized)
            return True
        except (TypeError, RedisError) as e:
            logger.debug("cache_set_error", key=key, error=str(e))
            return False

    def get_json_or_compute(
        self,
        key: str,
        compute_fn: Callable[[], dict[str, Any]],
        ttl: int = 3600,
    ) -> dict[str, Any]:
        """Get from cache or compute and cache the result."""
        result = self.get_json(key)
        if result is not None:
            logger.debug("cache_hit", key=key)
            return result

        result = compute_fn()
        if result is not None:
            self.set_json(key, result, ttl)
        return result

    # =========================================================================
    # Key Operations
    # =========================================================================

    def delete(self, key: str) -> bool:
        """Delete a key from cache."""
        client = self.client
        if client is None:
            return False

        try:
            client.delete(key)
            return True
        except RedisError:
            return False

    def delete_pattern(self, pattern: str) -> int:
        """
        Delete all keys matching a pattern.

        Args:
            pattern: Redis pattern (e.g., "catalog:*")

        Returns:
            Number of keys deleted
        """
        client = self.client
        if client is None:
            return 0

        try:
            keys = list(client.scan_iter(match=pattern, count=500))
            if not keys:
                return 0
            return int(client.delete(*keys))
        except RedisError as e:
            logger.warning("cache_invalidate_failed", pattern=pattern, error=str(e))
            return 0

    # =========================================================================
    # Health Check
    # =========================================================================

    def health_check(self) -> dict[str, Any]:
        """Get cache health status."""
        status: dict[str, Any] = {
            "available": self._available,
            "initialized": self._initialized,
        }

        client = self.client
        if client is None:
            status["status"] = "unavailable"
            return status

        try:
            client.ping()
            status["status"] = "healthy"
        except RedisError:
            status["status"] = "degraded"

        return status


# Global singleton instance
cache = RedisCache()
