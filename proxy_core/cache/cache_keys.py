"""
Cache key management.

Cache keys are the fully-qualified pipe URL with its query string, minus
the API token. Parameters are sorted by name so logically identical
requests share a key regardless of how the caller ordered them.
"""

from collections.abc import Mapping
from urllib.parse import urlencode

from proxy_core.constants import TOKEN_PARAM


class CacheKeys:
    """
    Centralized cache key definitions.

    Naming convention: {analytics_base_url}/{pipe}.json?{sorted query string}

    Examples:
        - .../pipes/sc2_search.json?input=nova
        - .../pipes/sc2_recent_games.json
    """

    # TTLs (in seconds)
    TTL_DAY = 60 * 60 * 24    # 24 hours

    @staticmethod
    def pipe_endpoint(base_url: str, pipe: str) -> str:
        """Fully-qualified JSON endpoint for a pipe."""
        return f"{base_url.rstrip('/')}/{pipe}.json"

    @staticmethod
    def query_string(params: Mapping[str, str]) -> str:
        """Stable query string for a parameter mapping, token excluded."""
        items = sorted((key, value) for key, value in params.items() if key != TOKEN_PARAM)
        return urlencode(items)

    @staticmethod
    def search_result(endpoint_url: str, params: Mapping[str, str]) -> str:
        """Cache key for one pipe call."""
        query = CacheKeys.query_string(params)
        if not query:
            return endpoint_url
        return f"{endpoint_url}?{query}"


def build_cache_key(endpoint_url: str, params: Mapping[str, str]) -> str:
    """Build the canonical cache key for a pipe URL and normalized parameters."""
    return CacheKeys.search_result(endpoint_url, params)
