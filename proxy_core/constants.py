"""
Application constants.

Pipe names, labels and HTTP header values shared by the cache layer,
the analytics client and the API handlers.
"""

from typing import Dict, Tuple

# =============================================================================
# HTTP
# =============================================================================

RESPONSE_HEADERS: Dict[str, str] = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}

# =============================================================================
# Request parameters
# =============================================================================

QUERY_PARAM = "q"
BACKEND_QUERY_PARAM = "input"
REFRESH_PARAM = "refresh"
FUZZY_PARAM = "fuzzy"
TOKEN_PARAM = "token"

# =============================================================================
# Pipes
# =============================================================================

GAME_SEARCH_PIPE = "sc2_search"
GAME_FUZZY_SEARCH_PIPE = "sc2_fuzzy_search"
PLAYER_SEARCH_PIPE = "sc2_player_search"
MAP_SEARCH_PIPE = "sc2_map_search"
EVENT_SEARCH_PIPE = "sc2_event_search"
BUILDS_PIPE = "sc2_builds"

TIMELINE_PIPE_PREFIX = "sc2_timeline_"
TIMELINE_QUANTILES_PIPE_PREFIX = "sc2_timeline_quantiles_"

RECENT_PIPE_PREFIX = "sc2_recent_"
RECENT_PIPES: Tuple[str, ...] = (
    "sc2_recent_games",
    "sc2_recent_players",
    "sc2_recent_maps",
    "sc2_recent_events",
)

# Recent sub-queries are merged under the pipe suffix, except games
RECENT_LABEL_OVERRIDES: Dict[str, str] = {
    "games": "replays",
}

# =============================================================================
# Results
# =============================================================================

DEFAULT_RESULT_LIMIT = 20
NESTED_JSON_FIELDS: Tuple[str, ...] = ("builds", "players")
