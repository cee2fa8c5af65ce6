"""
Timelines Domain.

Handles metric timelines:
- /timeline/{metric}
- /timeline/quantiles/{metric}
"""

from .handlers import router as timelines_router

__all__ = ["timelines_router"]
