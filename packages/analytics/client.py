"""
Async Analytics API Client.

Features:
- Async HTTP with httpx
- Authorized pipe URLs with the API token appended last
- Connection pooling through a shared AsyncClient
- No retries: a failed call is reported once
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import httpx

from proxy_core.cache.cache_keys import CacheKeys
from proxy_core.constants import TOKEN_PARAM
from proxy_core.exceptions import BackendUnavailableError
from proxy_core.logging import get_logger

logger = get_logger("analytics")


@dataclass(frozen=True)
class BackendResponse:
    """Raw outcome of one pipe call."""
    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class AnalyticsClient:
    """
    Async client for Tinybird pipe endpoints.

    Example:
        async with AnalyticsClient(base_url, token) as client:
            response = await client.execute("sc2_search", {"input": "nova"})
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> "AnalyticsClient":
        """Create the HTTP client on context entry."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close the HTTP client on context exit."""
        await self.aclose()

    async def aclose(self) -> None:
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    def endpoint_url(self, pipe: str) -> str:
        """Fully-qualified JSON endpoint for a pipe."""
        return CacheKeys.pipe_endpoint(self.base_url, pipe)

    def authorized_url(self, unauthorized_url: str) -> str:
        """Append the API token as the last query parameter."""
        separator = "&" if "?" in unauthorized_url else "?"
        return f"{unauthorized_url}{separator}{TOKEN_PARAM}={quote(self.token, safe='')}"

    async def execute(self, pipe: str, params: Mapping[str, str]) -> BackendResponse:
        """
        Call a pipe once.

        Args:
            pipe: Pipe name (e.g., "sc2_search")
            params: Normalized query parameters

        Returns:
            Status code and body text of the backend response

        Raises:
            BackendUnavailableError: the backend could not be reached
        """
        if self._http_client is None:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        url = CacheKeys.search_result(self.endpoint_url(pipe), params)

        try:
            response = await self._http_client.get(self.authorized_url(url))
        except httpx.TimeoutException as e:
            logger.warning("backend_timeout", pipe=pipe)
            raise BackendUnavailableError(pipe, "timeout") from e
        except httpx.HTTPError as e:
            logger.error("backend_transport_error", pipe=pipe, error=str(e))
            raise BackendUnavailableError(pipe, type(e).__name__) from e

        logger.info("backend_call", pipe=pipe, status_code=response.status_code)
        return BackendResponse(status_code=response.status_code, body=response.text)
