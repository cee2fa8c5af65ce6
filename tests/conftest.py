"""
Pytest fixtures for replay search proxy tests.

The analytics API is simulated with httpx.MockTransport and the cache with
an in-memory fake store, so no Redis or network access is needed.
"""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from packages.api.src.app import create_app
from proxy_core.config import Settings

BASE_URL = "https://api.us-east.tinybird.co/v0/pipes"
TEST_TOKEN = "test-token"


def envelope(rows: List[Dict[str, Any]]) -> str:
    """Pipe response body wrapping the given rows."""
    return json.dumps({
        "meta": [{"name": "id", "type": "UInt64"}],
        "data": rows,
        "rows": len(rows),
        "statistics": {"elapsed": 0.001, "rows_read": len(rows), "bytes_read": 128},
    })


def replay_row(replay_id: int, *player_names: str, builds: Optional[list] = None) -> Dict[str, Any]:
    """Replay row as the game search pipe returns it, nested columns JSON-encoded."""
    return {
        "id": replay_id,
        "map": "Altitude LE",
        "builds": json.dumps(builds if builds is not None else [[], []]),
        "players": json.dumps([{"name": name, "race": "Protoss"} for name in player_names]),
    }


class FakeCache:
    """In-memory cache store recording every call."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = False):
        self.data: Dict[str, str] = {}
        self.reads: List[str] = []
        self.writes: List[tuple] = []
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get(self, key: str) -> Optional[str]:
        self.reads.append(key)
        if self.fail_reads:
            raise ConnectionError("cache unreachable")
        return self.data.get(key)

    async def set(self, key: str, value: str, ttl: int) -> bool:
        self.writes.append((key, value, ttl))
        if self.fail_writes:
            raise ConnectionError("cache unreachable")
        self.data[key] = value
        return True


class FakeBackend:
    """Canned pipe responses keyed by pipe name."""

    def __init__(self):
        self.responses: Dict[str, tuple] = {}
        self.requests: List[httpx.Request] = []

    def respond(
        self,
        pipe: str,
        rows: Optional[List[Dict[str, Any]]] = None,
        status_code: int = 200,
        body: Optional[str] = None,
    ) -> None:
        self.responses[pipe] = (status_code, body if body is not None else envelope(rows or []))

    @staticmethod
    def pipe_of(request: httpx.Request) -> str:
        return request.url.path.rsplit("/", 1)[-1].removesuffix(".json")

    @property
    def pipes_called(self) -> List[str]:
        return [self.pipe_of(request) for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        pipe = self.pipe_of(request)
        if pipe not in self.responses:
            return httpx.Response(404, text='{"error": "The pipe has not been found"}')
        status_code, body = self.responses[pipe]
        return httpx.Response(status_code, text=body)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        TINYBIRD_API_KEY=TEST_TOKEN,
        ANALYTICS_BASE_URL=BASE_URL,
        CACHE_TTL=86400,
        SEARCH_RESULT_LIMIT=20,
    )


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(settings, fake_cache, backend):
    """TestClient wired to the fake cache and the fake analytics API."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(backend.handler))
    app = create_app(settings=settings, cache=fake_cache, http_client=http_client)
    with TestClient(app) as test_client:
        yield test_client
