"""
Search Service.

Business logic for the search, timeline and recent endpoints: pick the
pipe, normalize parameters, choose the post-processing and run the call
through the cache-aside pipeline.
"""

from functools import partial
from typing import Any, Dict, List

from packages.analytics.pipes import RECENT, Pipe, forwarded_params, resolve_pipe
from packages.analytics.results import process_game_search, process_rows
from packages.shared.enums import LogicalEndpoint
from packages.shared.types import QueryRequest
from proxy_core.constants import DEFAULT_RESULT_LIMIT

from ...pipeline import PipeResult, QueryPipeline, RowTransform


class SearchService:
    """Service for pipe-backed query endpoints."""

    def __init__(self, pipeline: QueryPipeline, result_limit: int = DEFAULT_RESULT_LIMIT):
        self.pipeline = pipeline
        self.result_limit = result_limit

    def _transform(self, request: QueryRequest, pipe: Pipe) -> RowTransform:
        # Reranking and the result cap only apply to game search
        if request.endpoint == LogicalEndpoint.GAMES:
            return partial(
                process_game_search,
                query=request.search_text,
                limit=self.result_limit,
            )
        return partial(process_rows, row_kind=pipe.row_kind)

    async def query(self, request: QueryRequest, path: str) -> PipeResult:
        """
        Serve a single-pipe endpoint.

        Raises:
            InvalidPathError: no pipe serves this request
            BackendUnavailableError: the analytics API could not be reached
        """
        pipe = resolve_pipe(request, path)
        return await self.pipeline.run(
            pipe,
            forwarded_params(request),
            request.refresh,
            self._transform(request, pipe),
        )

    async def recent(self, request: QueryRequest) -> Dict[str, List[Dict[str, Any]]]:
        """
        Fetch the latest replays, players, maps and events together.

        Returns:
            {"replays": [...], "players": [...], "maps": [...], "events": [...]}
        """
        return await self.pipeline.run_many(
            RECENT,
            request.normalized_params(),
            request.refresh,
            lambda pipe: partial(process_rows, row_kind=pipe.row_kind),
        )
