"""
Analytics Pipe Catalogue.

Maps logical endpoints to the Tinybird pipes that serve them.
"""

import re
from dataclasses import dataclass
from typing import Tuple

from proxy_core.constants import (
    BUILDS_PIPE,
    EVENT_SEARCH_PIPE,
    FUZZY_PARAM,
    GAME_FUZZY_SEARCH_PIPE,
    GAME_SEARCH_PIPE,
    MAP_SEARCH_PIPE,
    PLAYER_SEARCH_PIPE,
    RECENT_LABEL_OVERRIDES,
    RECENT_PIPE_PREFIX,
    RECENT_PIPES,
    TIMELINE_PIPE_PREFIX,
    TIMELINE_QUANTILES_PIPE_PREFIX,
)
from proxy_core.exceptions import InvalidPathError
from packages.shared.enums import LogicalEndpoint, RowKind
from packages.shared.types import QueryRequest

METRIC_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")

# Path segments under /timeline that are not metrics
RESERVED_METRICS = frozenset({"quantiles"})


@dataclass(frozen=True)
class Pipe:
    """A backend query and the kind of rows it returns."""
    name: str
    row_kind: RowKind = RowKind.GENERIC

    @property
    def label(self) -> str:
        """Key this pipe's rows are merged under in an aggregate response."""
        suffix = self.name
        if suffix.startswith(RECENT_PIPE_PREFIX):
            suffix = suffix[len(RECENT_PIPE_PREFIX):]
        return RECENT_LABEL_OVERRIDES.get(suffix, suffix)


_SEARCH_PIPES = {
    LogicalEndpoint.PLAYERS: Pipe(PLAYER_SEARCH_PIPE),
    LogicalEndpoint.MAPS: Pipe(MAP_SEARCH_PIPE),
    LogicalEndpoint.EVENTS: Pipe(EVENT_SEARCH_PIPE),
    LogicalEndpoint.BUILDS: Pipe(BUILDS_PIPE),
}

RECENT: Tuple[Pipe, ...] = tuple(
    Pipe(name, RowKind.REPLAY if name.endswith("_games") else RowKind.GENERIC)
    for name in RECENT_PIPES
)


def _timeline_pipe(prefix: str, metric: str | None, path: str) -> Pipe:
    if not metric or not METRIC_PATTERN.match(metric) or metric in RESERVED_METRICS:
        raise InvalidPathError(path)
    return Pipe(f"{prefix}{metric}", RowKind.TIMELINE)


def resolve_pipe(request: QueryRequest, path: str) -> Pipe:
    """
    Pick the pipe for a single-query request.

    Raises:
        InvalidPathError: the endpoint has no single pipe or the metric is unknown
    """
    endpoint = request.endpoint

    if endpoint == LogicalEndpoint.GAMES:
        name = GAME_FUZZY_SEARCH_PIPE if request.fuzzy else GAME_SEARCH_PIPE
        return Pipe(name, RowKind.REPLAY)

    if endpoint in _SEARCH_PIPES:
        return _SEARCH_PIPES[endpoint]

    if endpoint == LogicalEndpoint.TIMELINE:
        return _timeline_pipe(TIMELINE_PIPE_PREFIX, request.metric, path)

    if endpoint == LogicalEndpoint.TIMELINE_QUANTILES:
        return _timeline_pipe(TIMELINE_QUANTILES_PIPE_PREFIX, request.metric, path)

    raise InvalidPathError(path)


def forwarded_params(request: QueryRequest) -> dict[str, str]:
    """Normalized parameters for the request's pipe."""
    if request.endpoint == LogicalEndpoint.GAMES:
        return request.normalized_params(strip=(FUZZY_PARAM,))
    return request.normalized_params()
