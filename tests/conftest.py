"""Pytest configuration and fixtures for routecache.

Unit tests run against MemoryBackend; HTTP tests build a small FastAPI app
wrapped in ResponseCacheMiddleware and call it through httpx ASGITransport.
Redis-backed tests are marked requires_redis and skip without REDIS_URL.
"""

import os

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from httpx import ASGITransport, AsyncClient

from routecache.core.config import Settings
from routecache.domain.criteria import RequestData
from routecache.infrastructure.cache.memory_backend import MemoryBackend
from routecache.infrastructure.cache.response_cache import ResponseCache
from routecache.middleware.response_cache import (
    ResponseCacheMiddleware,
    request_data_from_request,
)

USER_CRITERIA = {"query": ["userId"]}


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults, ignoring any local .env."""
    return Settings(_env_file=None, cache_namespace="cache", cache_default_ttl=3600)


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def cache(backend: MemoryBackend, settings: Settings) -> ResponseCache:
    """ResponseCache over an in-memory backend."""
    return ResponseCache(backend, settings=settings)


@pytest.fixture
def request_data() -> RequestData:
    """Request for /api/users?userId=42 mounted under /api."""
    return RequestData(
        base_path="/api",
        path="/users",
        fields={
            "query": {"userId": "42", "page": "1"},
            "headers": {"accept-language": "en"},
        },
    )


@pytest.fixture
def calls() -> dict[str, int]:
    """Counts how often each endpoint actually ran."""
    return {"users": 0, "greet": 0}


@pytest.fixture
def cached_app(cache: ResponseCache, calls: dict[str, int]) -> FastAPI:
    """FastAPI app whose endpoints store their responses in cache."""
    app = FastAPI()

    @app.get("/users")
    async def list_users(request: Request, userId: str = "") -> dict:
        calls["users"] += 1
        body = {"userId": userId, "ids": [1, 2, 3]}
        await cache.store(
            None,
            body,
            60,
            criteria=USER_CRITERIA,
            request=request_data_from_request(request),
        )
        return body

    @app.get("/greet", response_class=PlainTextResponse)
    async def greet(request: Request) -> str:
        calls["greet"] += 1
        await cache.store(
            None, "hello", 60, criteria=USER_CRITERIA, request=request_data_from_request(request)
        )
        return "hello"

    app.add_middleware(ResponseCacheMiddleware, cache=cache, criteria=USER_CRITERIA)
    return app


@pytest.fixture
async def client(cached_app: FastAPI) -> AsyncClient:
    """Async HTTP client against the cached FastAPI app (ASGI)."""
    transport = ASGITransport(app=cached_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def redis_url() -> str:
    """REDIS_URL for integration tests; skips when unset."""
    url = os.environ.get("REDIS_URL")
    if not url:
        pytest.skip("Redis not configured: set REDIS_URL (e.g. redis://localhost:6379/15)")
    return url
