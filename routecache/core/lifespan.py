"""Application lifespan helper: connect and disconnect the cache backend.

Wiring only. Creates a Redis-backed ResponseCache from settings on startup,
exposes it as app.state.response_cache, and closes it on shutdown.
"""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator

from fastapi import FastAPI

from routecache.core.config import Settings, get_settings
from routecache.infrastructure.cache.redis_backend import RedisBackend
from routecache.infrastructure.cache.response_cache import ResponseCache

logger = logging.getLogger(__name__)


def create_lifespan(
    settings: Settings | None = None,
    backend: RedisBackend | None = None,
) -> Callable[[FastAPI], AsyncContextManager[None]]:
    """Return a FastAPI lifespan that owns the cache backend.

    Args:
        settings: Settings override; defaults to get_settings().
        backend: Pre-built backend (tests, shared clients).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        resolved = settings or get_settings()
        redis_backend = backend or RedisBackend.from_settings(resolved)
        await redis_backend.connect()
        app.state.response_cache = ResponseCache(redis_backend, settings=resolved)
        logger.info("Response cache ready (namespace=%s)", resolved.cache_namespace)

        yield

        await redis_backend.disconnect()
        app.state.response_cache = None

    return lifespan
