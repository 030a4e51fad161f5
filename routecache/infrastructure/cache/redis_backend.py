"""Redis-backed cache backend.

Async Redis GET / SETEX behind the CacheBackend protocol. Accepts a URI,
a host mapping, or an existing redis.asyncio client; only clients it
creates itself are closed on disconnect().
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import redis.asyncio as redis

from routecache.core.config import Settings, get_settings
from routecache.domain.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (redis.RedisError, OSError)


class RedisBackend:
    """Async Redis backend with TTL support.

    Call connect() at startup to verify the connection and disconnect() at
    shutdown. get/set do not require connect(); redis-py connects lazily.
    """

    def __init__(self, client: redis.Redis, owns_client: bool = False) -> None:
        """Initialize backend around a client.

        Args:
            client: redis.asyncio client (injected for DI and tests).
            owns_client: Close the client on disconnect().
        """
        self.redis = client
        self._owns_client = owns_client
        self._connected = False

    @classmethod
    def from_url(cls, url: str, socket_timeout: float | None = None) -> RedisBackend:
        """Create a backend with its own client from a redis:// URI."""
        client = redis.from_url(
            url,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client, owns_client=True)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> RedisBackend:
        """Create a backend from redis_url or redis_host/port/db settings."""
        settings = settings or get_settings()
        if settings.redis_url:
            return cls.from_url(settings.redis_url, settings.redis_socket_timeout)
        client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password.get_secret_value() if settings.redis_password else None,
            socket_timeout=settings.redis_socket_timeout,
            socket_connect_timeout=settings.redis_socket_timeout,
            socket_keepalive=True,
        )
        return cls(client, owns_client=True)

    @classmethod
    def from_target(cls, target: str | Mapping[str, Any] | redis.Redis) -> RedisBackend:
        """Create a backend from a URI, a connection mapping, or a client.

        Args:
            target: "redis://host:port/db", {"host": ..., "port": ...}, or
                an existing redis.asyncio.Redis (not owned).

        Raises:
            TypeError: If target is none of the above.
        """
        if isinstance(target, str):
            return cls.from_url(target)
        if isinstance(target, Mapping):
            if "host" not in target:
                raise TypeError("Redis connection mapping must include 'host'")
            return cls(redis.Redis(**dict(target)), owns_client=True)
        if isinstance(target, redis.Redis):
            return cls(target, owns_client=False)
        raise TypeError(f"Unsupported Redis target: {type(target).__name__}")

    async def connect(self) -> bool:
        """Ping Redis. Returns True if reachable; failures are logged, not raised."""
        try:
            await self.redis.ping()
            self._connected = True
            logger.info("Redis cache backend connected")
        except _TRANSPORT_ERRORS as e:
            logger.warning("Redis connection failed: %s. Responses will not be cached.", e)
            self._connected = False
        return self._connected

    async def disconnect(self) -> None:
        """Close the client if this backend created it."""
        if self._owns_client:
            await self.redis.aclose()
            logger.info("Redis cache backend disconnected")
        self._connected = False

    def is_available(self) -> bool:
        """Return True if the last connect() succeeded."""
        return self._connected

    async def get(self, key: str) -> bytes | str | None:
        """Return raw stored value or None.

        Raises:
            BackendUnavailableError: On any Redis or socket error.
        """
        try:
            return await self.redis.get(key)
        except _TRANSPORT_ERRORS as e:
            raise BackendUnavailableError("get", str(e)) from e

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """SETEX key with TTL.

        Raises:
            BackendUnavailableError: On any Redis or socket error.
        """
        try:
            await self.redis.setex(key, ttl_seconds, value)
        except _TRANSPORT_ERRORS as e:
            raise BackendUnavailableError("set", str(e)) from e
