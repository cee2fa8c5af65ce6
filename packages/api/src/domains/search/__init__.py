"""
Search Domain.

Handles replay search:
- Games (exact and fuzzy, reranked)
- Players, maps, events
- Builds
"""

from .handlers import router as search_router
from .service import SearchService

__all__ = ["search_router", "SearchService"]
