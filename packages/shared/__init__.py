"""
Shared Package.

Contains types and enums shared across all packages (api, analytics).

Usage:
    from packages.shared import QueryRequest, ReplayRecord
    from packages.shared.enums import LogicalEndpoint, RowKind
"""

from packages.shared.types import (
    BackendRow,
    HealthResponse,
    QueryRequest,
    ReplayRecord,
    SearchResponse,
    TimelineRow,
)
from packages.shared.enums import (
    LogicalEndpoint,
    RowKind,
)

__all__ = [
    # Types
    "BackendRow",
    "HealthResponse",
    "QueryRequest",
    "ReplayRecord",
    "SearchResponse",
    "TimelineRow",
    # Enums
    "LogicalEndpoint",
    "RowKind",
]
