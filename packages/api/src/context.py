"""
Proxy Context.

Everything a request needs, built once at startup from Settings and handed
to the handlers through FastAPI dependencies.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from packages.analytics.client import AnalyticsClient
from proxy_core.cache import CacheAside, CacheStore, RedisCache
from proxy_core.config import Settings

from .pipeline import QueryPipeline


@dataclass
class ProxyContext:
    """Configuration, cache handle and backend client for one application."""
    settings: Settings
    cache: Optional[CacheStore]
    analytics: AnalyticsClient
    pipeline: QueryPipeline

    @classmethod
    async def create(
        cls,
        settings: Settings,
        cache: Optional[CacheStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "ProxyContext":
        """
        Build the context.

        Args:
            settings: Application settings
            cache: Store to use instead of Redis
            http_client: HTTP client to use for the analytics API
        """
        if cache is None:
            redis_cache = RedisCache.from_settings(settings)
            await redis_cache.initialize()
            cache = redis_cache

        analytics = AnalyticsClient(
            settings.analytics_base_url,
            settings.tinybird_api_key,
            http_client=http_client,
            timeout=settings.backend_timeout,
        )
        await analytics.__aenter__()

        pipeline = QueryPipeline(analytics, CacheAside(cache, ttl=settings.cache_ttl))
        return cls(settings=settings, cache=cache, analytics=analytics, pipeline=pipeline)

    async def aclose(self) -> None:
        await self.analytics.aclose()
        if isinstance(self.cache, RedisCache):
            await self.cache.close()
