"""
Async Redis client with connection pooling.

Provides the key-value store behind the cache-aside layer:
- Connection pooling (max 50 connections)
- String values (serialized response bodies)
- Graceful degradation when Redis is unavailable
"""

from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from proxy_core.config import Settings
from proxy_core.logging import get_logger

logger = get_logger("cache")


class RedisCache:
    """
    Async Redis cache client.

    One instance is created per application and carried on the proxy
    context; nothing here is a module-level singleton.

    Usage:
        cache = RedisCache.from_settings(settings)
        await cache.initialize()

        await cache.set("key", body, ttl=86400)
        body = await cache.get("key")
    """

    def __init__(
        self,
        url: str,
        enabled: bool = True,
        max_connections: int = 50,
        socket_timeout: float = 5,
    ):
        self.url = url
        self.enabled = enabled
        self.max_connections = max_connections
        self.socket_timeout = socket_timeout
        self._client: Optional[redis.Redis] = None
        self._initialized = False
        self._available = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisCache":
        return cls(settings.redis_url, enabled=settings.cache_enabled)

    async def initialize(self, force: bool = False) -> bool:
        """
        Create the connection pool and verify Redis answers.

        Args:
            force: Force re-initialization even if already initialized

        Returns:
            True if Redis is available and connected, False otherwise
        """
        if self._initialized and not force:
            return self._available

        self._initialized = True

        if not self.enabled:
            logger.info("redis_disabled")
            self._available = False
            return False

        try:
            self._client = redis.Redis.from_url(
                self.url,
                max_connections=self.max_connections,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_timeout,
                decode_responses=True,
            )
            await self._client.ping()
            self._available = True
            logger.info("redis_connected", url=self._redacted_url)
            return True

        except (ConnectionError, TimeoutError, OSError) as e:
            logger.warning("redis_connection_failed", error=str(e))
            self._available = False
            return False
        except RedisError as e:
            logger.warning("redis_init_error", error=str(e))
            self._available = False
            return False

    @property
    def _redacted_url(self) -> str:
        if "@" not in self.url:
            return self.url
        scheme, _, rest = self.url.partition("://")
        return f"{scheme}://***@{rest.split('@', 1)[1]}"

    @property
    def is_available(self) -> bool:
        """Check if Redis is available."""
        return self._available and self._client is not None

    # =========================================================================
    # Key Operations
    # =========================================================================

    async def get(self, key: str) -> Optional[str]:
        """
        Get a stored body.

        Returns:
            The stored string, or None if not found/unavailable
        """
        if not self.is_available:
            return None

        try:
            return await self._client.get(key)
        except (ConnectionError, TimeoutError) as e:
            logger.debug("cache_get_error", key=key, error=str(e))
            return None

    async def set(self, key: str, value: str, ttl: int) -> bool:
        """
        Store a body with an expiry.

        Returns:
            True if cached successfully, False otherwise
        """
        if not self.is_available:
            return False

        try:
            await self._client.set(key, value, ex=ttl)
            return True
        except (ConnectionError, TimeoutError) as e:
            logger.debug("cache_set_error", key=key, error=str(e))
            return False

    async def close(self) -> None:
        """Release the connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._available = False
        self._initialized = False

    # =========================================================================
    # Health Check
    # =========================================================================

    async def health_check(self) -> dict[str, Any]:
        """
        Get cache health status.

        Returns:
            Dictionary with health information
        """
        status: dict[str, Any] = {
            "available": self._available,
            "initialized": self._initialized,
        }

        if not self.is_available:
            status["status"] = "unavailable"
            return status

        try:
            memory_info = await self._client.info("memory")
            status["memory_used"] = memory_info.get("used_memory_human", "unknown")
            status["status"] = "healthy"
        except (ConnectionError, TimeoutError):
            status["status"] = "degraded"

        return status
