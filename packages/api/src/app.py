"""
API Application Factory.

Creates and configures the FastAPI application with:
- Domain routers
- Middleware
- Exception handlers
- Health checks
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from packages.api.src.context import ProxyContext
from packages.api.src.domains.recent import recent_router
from packages.api.src.domains.search import search_router
from packages.api.src.domains.timelines import timelines_router
from packages.api.src.error_handlers import register_exception_handlers
from packages.shared.types import HealthResponse
from proxy_core import __version__
from proxy_core.cache import CacheStore, RedisCache
from proxy_core.config import Settings, get_settings
from proxy_core.logging import RequestLoggingMiddleware, configure_logging, get_logger

logger = get_logger("api")


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[CacheStore] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        cache: Store to use instead of Redis
        http_client: HTTP client to use for the analytics API
    """
    settings = settings or get_settings()
    configure_logging(level=settings.effective_log_level, development=settings.is_development)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the proxy context for the lifetime of the app."""
        app.state.started_at = time.time()

        errors, warnings = settings.validate_production_config()
        for warning in warnings:
            logger.warning("config_warning", message=warning)
        for error in errors:
            logger.error("config_error", message=error)

        context = await ProxyContext.create(settings, cache=cache, http_client=http_client)
        app.state.context = context

        yield

        await context.aclose()

    app = FastAPI(
        title=settings.app_name,
        description="Caching proxy for replay search and analytics queries",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check(request: Request):
        """Check service health."""
        context: ProxyContext = request.app.state.context

        if isinstance(context.cache, RedisCache):
            cache_health = await context.cache.health_check()
        else:
            cache_health = {"available": context.cache is not None, "status": "external"}

        started_at = getattr(request.app.state, "started_at", None)
        uptime = time.time() - started_at if started_at else 0

        return {
            "status": "healthy" if cache_health.get("available") else "degraded",
            "version": __version__,
            "cache": cache_health,
            "uptime_seconds": round(uptime, 2),
        }

    app.include_router(search_router)
    app.include_router(timelines_router)
    app.include_router(recent_router)

    return app
