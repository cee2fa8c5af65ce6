"""
Recent Handlers.

API route handler for the recent activity aggregate.
"""

from fastapi import APIRouter, Depends, Request

from packages.analytics.results import serialize_body
from packages.shared.enums import LogicalEndpoint
from packages.shared.types import QueryRequest

from ...dependencies import get_search_service
from ...responses import json_response
from ..search.service import SearchService

router = APIRouter(tags=["recent"])


@router.get("/recent")
async def get_recent(request: Request, service: SearchService = Depends(get_search_service)):
    """
    Latest replays, players, maps and events.

    Always answers 200: a sub-query that fails contributes an empty list.
    """
    query = QueryRequest.from_query_items(LogicalEndpoint.RECENT, request.query_params.multi_items())
    merged = await service.recent(query)
    return json_response(serialize_body(merged))
