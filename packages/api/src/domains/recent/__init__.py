"""
Recent Domain.

Handles the /recent aggregate of the latest replays, players, maps and events.
"""

from .handlers import router as recent_router

__all__ = ["recent_router"]
