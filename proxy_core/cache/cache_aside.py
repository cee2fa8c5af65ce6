"""
Cache-aside access to the response store.

Reads are skipped on refresh, writes only happen after a successful
backend call, and store failures never escape to the request.
"""

from typing import Optional, Protocol

from redis.exceptions import RedisError

from proxy_core.cache.cache_keys import CacheKeys
from proxy_core.logging import get_logger

logger = get_logger("cache.aside")


class CacheStore(Protocol):
    """Async key-value store with per-key expiry."""

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str, ttl: int) -> bool: ...


class CacheAside:
    """
    Conditional read and write-on-success around a CacheStore.

    Usage:
        aside = CacheAside(cache, ttl=86400)

        body = await aside.try_read(key, refresh=request.refresh)
        if body is None:
            ...  # call the backend
            await aside.write_if_successful(key, body, response.is_success)
    """

    def __init__(self, store: Optional[CacheStore], ttl: int = CacheKeys.TTL_DAY):
        self.store = store
        self.ttl = ttl

    async def try_read(self, key: str, refresh: bool = False) -> Optional[str]:
        """
        Look up a cached body.

        Args:
            key: Cache key
            refresh: When set, the store is not consulted at all

        Returns:
            The stored body on a hit, None on a miss, bypass or store error
        """
        if refresh:
            logger.debug("cache_bypass", key=key)
            return None

        if self.store is None:
            return None

        try:
            cached = await self.store.get(key)
        except (RedisError, OSError) as e:
            logger.warning("cache_read_failed", key=key, error=str(e))
            return None

        if cached is None:
            logger.debug("cache_miss", key=key)
            return None

        logger.debug("cache_hit", key=key)
        return cached

    async def write_if_successful(self, key: str, body: str, backend_ok: bool) -> bool:
        """
        Store a body only when the backend call succeeded.

        Returns:
            True if the body was written, False if skipped or the store failed
        """
        if not backend_ok:
            logger.debug("cache_write_skipped", key=key)
            return False

        if self.store is None:
            return False

        try:
            return bool(await self.store.set(key, body, self.ttl))
        except (RedisError, OSError) as e:
            logger.warning("cache_write_failed", key=key, error=str(e))
            return False
