"""
Search Handlers.

API route handlers for the search endpoints.
"""

from fastapi import APIRouter, Depends, Request, Response

from packages.shared.enums import LogicalEndpoint
from packages.shared.types import QueryRequest

from ...dependencies import get_search_service
from ...responses import json_response
from .service import SearchService

router = APIRouter(tags=["search"])


async def _serve(endpoint: LogicalEndpoint, request: Request, service: SearchService) -> Response:
    query = QueryRequest.from_query_items(endpoint, request.query_params.multi_items())
    result = await service.query(query, request.url.path)
    return json_response(result.body, result.status_code)


@router.get("/games")
async def search_games(request: Request, service: SearchService = Depends(get_search_service)):
    """
    Search replays.

    Exact player-name matches come first and at most 20 replays are
    returned. `fuzzy` selects fuzzy matching.
    """
    return await _serve(LogicalEndpoint.GAMES, request, service)


@router.get("/players")
async def search_players(request: Request, service: SearchService = Depends(get_search_service)):
    """Search players."""
    return await _serve(LogicalEndpoint.PLAYERS, request, service)


@router.get("/maps")
async def search_maps(request: Request, service: SearchService = Depends(get_search_service)):
    """Search maps."""
    return await _serve(LogicalEndpoint.MAPS, request, service)


@router.get("/events")
async def search_events(request: Request, service: SearchService = Depends(get_search_service)):
    """Search events."""
    return await _serve(LogicalEndpoint.EVENTS, request, service)


@router.get("/builds")
async def search_builds(request: Request, service: SearchService = Depends(get_search_service)):
    return await _serve(LogicalEndpoint.BUILDS, request, service)
