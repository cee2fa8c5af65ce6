"""
Timeline Handlers.

API route handlers for per-metric game timelines.
"""

from fastapi import APIRouter, Depends, Request

from packages.shared.enums import LogicalEndpoint
from packages.shared.types import QueryRequest

from ...dependencies import get_search_service
from ...responses import json_response
from ..search.service import SearchService

router = APIRouter(prefix="/timeline", tags=["timelines"])


@router.get("/quantiles/{metric}")
async def get_timeline_quantiles(
    metric: str,
    request: Request,
    service: SearchService = Depends(get_search_service),
):
    """
    Quantile bands of a timeline metric.

    Unknown metric names answer 400 like any other invalid path.
    """
    query = QueryRequest.from_query_items(
        LogicalEndpoint.TIMELINE_QUANTILES,
        request.query_params.multi_items(),
        metric=metric,
    )
    result = await service.query(query, request.url.path)
    return json_response(result.body, result.status_code)


@router.get("/{metric}")
async def get_timeline(
    metric: str,
    request: Request,
    service: SearchService = Depends(get_search_service),
):
    """Per-game timeline of one metric."""
    query = QueryRequest.from_query_items(
        LogicalEndpoint.TIMELINE,
        request.query_params.multi_items(),
        metric=metric,
    )
    result = await service.query(query, request.url.path)
    return json_response(result.body, result.status_code)
