"""
Shared Enumerations.

Defines enums used across all packages for type safety and consistency.
"""

from enum import Enum


class LogicalEndpoint(str, Enum):
    """Inbound endpoint a request was routed to."""
    GAMES = "games"
    PLAYERS = "players"
    MAPS = "maps"
    EVENTS = "events"
    BUILDS = "builds"
    TIMELINE = "timeline"
    TIMELINE_QUANTILES = "timeline_quantiles"
    RECENT = "recent"


class RowKind(str, Enum):
    """Shape of the rows a pipe returns."""
    REPLAY = "replay"
    TIMELINE = "timeline"
    GENERIC = "generic"
