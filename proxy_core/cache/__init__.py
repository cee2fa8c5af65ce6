"""
Redis Caching Layer.

Provides cache-aside storage of serialized search responses:
- Canonical keys derived from pipe URL and parameters
- Async Redis client with connection pooling
- Read bypass on refresh, write only after a successful backend call

Usage:
    from proxy_core.cache import CacheAside, RedisCache, build_cache_key

    cache = RedisCache.from_settings(settings)
    aside = CacheAside(cache, ttl=settings.cache_ttl)

    key = build_cache_key(endpoint_url, params)
    body = await aside.try_read(key, refresh=False)
"""

from proxy_core.cache.cache_aside import CacheAside, CacheStore
from proxy_core.cache.cache_keys import CacheKeys, build_cache_key
from proxy_core.cache.redis_client import RedisCache

__all__ = [
    "RedisCache",
    "CacheAside",
    "CacheStore",
    "CacheKeys",
    "build_cache_key",
]
