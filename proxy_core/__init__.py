"""
Replay Search Proxy Core Library.

This package provides the core of the proxy: configuration, logging,
and the cache-aside layer.

Usage:
    # Config
    from proxy_core.config import get_settings, Settings

    # Cache
    from proxy_core.cache import RedisCache, CacheAside, build_cache_key

    # Logging
    from proxy_core.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Users should import directly from submodules:
#   from proxy_core.config import get_settings
#   from proxy_core.logging import get_logger
