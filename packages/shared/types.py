"""
Shared Pydantic Types/Schemas.

Contracts for data exchanged with callers and with the analytics API.
Backend rows are decoded defensively: unknown columns pass through and
nothing is rejected for its shape.
"""

import json
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from proxy_core.constants import (
    BACKEND_QUERY_PARAM,
    FUZZY_PARAM,
    NESTED_JSON_FIELDS,
    QUERY_PARAM,
    REFRESH_PARAM,
    TOKEN_PARAM,
)

from .enums import LogicalEndpoint


# =============================================================================
# Inbound Requests
# =============================================================================

class QueryRequest(BaseModel):
    """One inbound search or analytics request."""
    model_config = ConfigDict(frozen=True)

    endpoint: LogicalEndpoint
    params: Dict[str, str] = Field(default_factory=dict)
    metric: Optional[str] = None
    refresh: bool = False
    fuzzy: bool = False

    @classmethod
    def from_query_items(
        cls,
        endpoint: LogicalEndpoint,
        items: Iterable[tuple[str, str]],
        metric: Optional[str] = None,
    ) -> "QueryRequest":
        """Build a request from raw query items; the last value of a key wins."""
        params: Dict[str, str] = {}
        for key, value in items:
            params[key] = value
        return cls(
            endpoint=endpoint,
            params=params,
            metric=metric,
            refresh=REFRESH_PARAM in params,
            fuzzy=FUZZY_PARAM in params,
        )

    @property
    def search_text(self) -> Optional[str]:
        """Free-text query term, if any."""
        return self.params.get(QUERY_PARAM) or None

    def normalized_params(self, strip: Iterable[str] = ()) -> Dict[str, str]:
        """
        Parameters forwarded to the analytics API.

        Control flags and the token are dropped and `q` becomes `input`.
        """
        excluded = {REFRESH_PARAM, TOKEN_PARAM, *strip}
        normalized: Dict[str, str] = {}
        for key, value in self.params.items():
            if key in excluded:
                continue
            normalized[BACKEND_QUERY_PARAM if key == QUERY_PARAM else key] = value
        return normalized


# =============================================================================
# Analytics API
# =============================================================================

class SearchResponse(BaseModel):
    """
    Response envelope of a pipe call.

    Only `data` is consumed; metadata and statistics are carried untyped.
    """
    model_config = ConfigDict(extra="allow")

    meta: Any = Field(default_factory=list)
    data: List[Dict[str, Any]] = Field(default_factory=list)
    rows: Any = None
    statistics: Optional[Dict[str, Any]] = None


def _decode_nested(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


class BackendRow(BaseModel):
    """
    Row returned by a pipe.

    Columns are kept in the order the backend sent them.
    """
    model_config = ConfigDict(extra="allow")

    _columns: List[str] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def remember_column_order(cls, data: Any, handler: Any) -> Any:
        row = handler(data)
        if isinstance(data, Mapping):
            row._columns = list(data)
        return row

    def to_row(self) -> Dict[str, Any]:
        """Row as returned to the caller."""
        dumped = self.model_dump(exclude_unset=True)
        ordered = {column: dumped.pop(column) for column in self._columns if column in dumped}
        ordered.update(dumped)
        return ordered


class ReplayRecord(BackendRow):
    """
    Replay row from a game search.

    `builds` and `players` arrive as JSON-encoded strings and are decoded
    into structured values. Every other column is kept as received.
    """

    builds: Any = None
    players: Any = None

    @field_validator(*NESTED_JSON_FIELDS, mode="before")
    @classmethod
    def decode_nested_json(cls, v: Any) -> Any:
        """Second decode pass for JSON-encoded columns."""
        return _decode_nested(v)

    @property
    def player_names(self) -> List[str]:
        """Names of the players taking part in the replay."""
        players = self.players
        if isinstance(players, Mapping):
            players = list(players.values())
        if not isinstance(players, list):
            return []

        names = []
        for player in players:
            if isinstance(player, Mapping):
                name = player.get("name")
            else:
                name = player
            if isinstance(name, str):
                names.append(name)
        return names


class TimelineRow(BackendRow):
    """
    Row of a timeline or quantile series.

    Series columns serialized as JSON arrays are decoded; scalar columns
    pass through.
    """

    @model_validator(mode="before")
    @classmethod
    def decode_series(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        return {
            column: _decode_nested(value) if _is_json_array(value) else value
            for column, value in data.items()
        }


def _is_json_array(value: Any) -> bool:
    return isinstance(value, str) and value.lstrip().startswith("[")


# =============================================================================
# Health
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    cache: Dict[str, Any]
    uptime_seconds: float
