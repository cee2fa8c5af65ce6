"""
FastAPI dependency injection module.

Provides the proxy context and the services built on it.
"""

from typing import TYPE_CHECKING

from fastapi import Depends, Request

from .context import ProxyContext

if TYPE_CHECKING:
    from .domains.search.service import SearchService


def get_context(request: Request) -> ProxyContext:
    """Get the ProxyContext built at startup."""
    return request.app.state.context


def get_search_service(context: ProxyContext = Depends(get_context)) -> "SearchService":
    """Get SearchService instance bound to the application's pipeline."""
    # Imported here: the domain packages import this module for their routes
    from .domains.search.service import SearchService

    return SearchService(context.pipeline, result_limit=context.settings.search_result_limit)
