"""
Cache-aside request pipeline.

One pipe call runs through:
    cache lookup -> backend call -> post-process -> cache write -> respond

A cache hit skips everything after the lookup. Backend errors are passed
through untouched and never written to the cache.
"""

import asyncio
import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Dict, List

from fastapi import status

from packages.analytics.client import AnalyticsClient
from packages.analytics.pipes import Pipe
from packages.analytics.results import parse_envelope, serialize_body
from proxy_core.cache import CacheAside, build_cache_key
from proxy_core.exceptions import BackendUnavailableError
from proxy_core.logging import get_logger

logger = get_logger("pipeline")

RowTransform = Callable[[List[Dict[str, Any]]], List[Dict[str, Any]]]


@dataclass(frozen=True)
class PipeResult:
    """Response body and status for one pipe call."""
    body: str
    status_code: int

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def rows(self) -> List[Dict[str, Any]]:
        """Decoded row list of a successful result."""
        decoded = json.loads(self.body)
        return decoded if isinstance(decoded, list) else []


class QueryPipeline:
    """Runs pipe calls through the cache-aside protocol."""

    def __init__(self, client: AnalyticsClient, cache: CacheAside):
        self.client = client
        self.cache = cache

    async def run(
        self,
        pipe: Pipe,
        params: Mapping[str, str],
        refresh: bool,
        transform: RowTransform,
    ) -> PipeResult:
        """
        Serve one pipe call.

        Args:
            pipe: Backend pipe to call on a miss
            params: Normalized parameters, token excluded
            refresh: Skip the cache lookup
            transform: Post-processing applied to the backend rows

        Raises:
            BackendUnavailableError: the backend could not be reached or
                answered with an unreadable body
        """
        key = build_cache_key(self.client.endpoint_url(pipe.name), params)

        cached = await self.cache.try_read(key, refresh=refresh)
        if cached is not None:
            return PipeResult(body=cached, status_code=status.HTTP_200_OK)

        response = await self.client.execute(pipe.name, params)

        if response.is_success:
            envelope = parse_envelope(pipe.name, response.body)
            body = serialize_body(transform(envelope.data))
        else:
            logger.warning("backend_error", pipe=pipe.name, status_code=response.status_code)
            body = response.body

        await self.cache.write_if_successful(key, body, response.is_success)

        return PipeResult(body=body, status_code=response.status_code)

    async def run_many(
        self,
        pipes: Sequence[Pipe],
        params: Mapping[str, str],
        refresh: bool,
        transform_for: Callable[[Pipe], RowTransform],
    ) -> Dict[str, List[Dict[str, Any]]]:
        """
        Run independent pipe calls concurrently and merge them by label.

        A sub-query that fails contributes an empty list; the others are
        unaffected.
        """
        results = await asyncio.gather(
            *(self._run_labelled(pipe, params, refresh, transform_for(pipe)) for pipe in pipes)
        )
        return {pipe.label: rows for pipe, rows in zip(pipes, results)}

    async def _run_labelled(
        self,
        pipe: Pipe,
        params: Mapping[str, str],
        refresh: bool,
        transform: RowTransform,
    ) -> List[Dict[str, Any]]:
        try:
            result = await self.run(pipe, params, refresh, transform)
        except BackendUnavailableError as e:
            logger.warning("recent_subquery_failed", pipe=pipe.name, reason=e.reason)
            return []

        if not result.is_success:
            logger.warning("recent_subquery_failed", pipe=pipe.name, status_code=result.status_code)
            return []

        try:
            return result.rows()
        except json.JSONDecodeError:
            logger.warning("recent_subquery_unreadable", pipe=pipe.name)
            return []
