"""Read-through / write-back response cache over a key-value backend.

ResponseCache owns the backend handle and key configuration. try_serve
looks up a stored response for a request and treats every read failure as
a miss; store writes a response under the same key and raises
CacheStoreError on failure. Both paths derive keys through key_for().
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar, Union

from pydantic import BaseModel, ValidationError, model_validator

from routecache.core.config import Settings, get_settings
from routecache.core.constants import CACHED_STATUS_CODE
from routecache.domain.criteria import CriteriaSpec, RequestData
from routecache.domain.exceptions import (
    BackendUnavailableError,
    CacheDecodeError,
    CacheStoreError,
)
from routecache.infrastructure.cache.cache_protocol import CacheBackend
from routecache.infrastructure.cache.keys import (
    HashAlgorithm,
    build_key,
    default_name,
    extract_criteria,
    get_hash_algorithm,
)
from routecache.infrastructure.cache.redis_backend import RedisBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")

CriteriaInput = Union[CriteriaSpec, Mapping[str, Any], None, bool]


class CacheEntry(BaseModel):
    """Persisted envelope. plain=True means data was a str and is sent raw."""

    data: Any = None
    plain: bool = False

    @model_validator(mode="after")
    def validate_plain_data(self) -> CacheEntry:
        """plain entries must carry a str body."""
        if self.plain and not isinstance(self.data, str):
            raise ValueError(f"plain entry data must be a string, got {type(self.data).__name__}")
        return self

    @classmethod
    def wrap(cls, data: Any) -> CacheEntry:
        return cls(data=data, plain=isinstance(data, str))


@dataclass(frozen=True)
class CachedResponse:
    """Hit result; callers send data raw if plain, else as JSON."""

    plain: bool
    data: Any
    status: int = CACHED_STATUS_CODE


class ResponseCache:
    """Response cache keyed by resource name and request criteria.

    Stateless apart from the injected backend and static configuration, so a
    single instance can serve concurrent requests.
    """

    def __init__(
        self,
        backend: CacheBackend,
        namespace: str | None = None,
        default_ttl: int | None = None,
        hash_algorithm: HashAlgorithm | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize response cache.

        Args:
            backend: Key-value backend (RedisBackend, MemoryBackend, ...).
            namespace: Key prefix; defaults to settings.cache_namespace.
            default_ttl: TTL for store() without ttl; defaults to settings.
            hash_algorithm: Key hash; defaults to settings.cache_key_hash.
            settings: Settings override (tests); defaults to get_settings().
        """
        settings = settings or get_settings()
        self.backend = backend
        self.namespace = namespace or settings.cache_namespace
        self.default_ttl = default_ttl if default_ttl is not None else settings.cache_default_ttl
        self.hash_algorithm = hash_algorithm or get_hash_algorithm(settings.cache_key_hash)

    @classmethod
    def from_target(cls, target: Any, **kwargs: Any) -> ResponseCache:
        """Build a cache over Redis from a URI, connection mapping or client."""
        return cls(RedisBackend.from_target(target), **kwargs)

    def key_for(
        self,
        name: str | None,
        criteria: CriteriaInput = None,
        request: RequestData | None = None,
    ) -> str:
        """Compute the backend key shared by the read and write paths.

        Raises:
            ValueError: If name is None, or criteria extracts request fields,
                and no request is given.
        """
        spec = CriteriaSpec.coerce(criteria)
        if name is None:
            if request is None:
                raise ValueError("A request is required when no resource name is given")
            name = default_name(request.base_path, request.path)
        extracted = None
        if spec is not None:
            if spec.needs_request and request is None:
                raise ValueError(
                    f"Criteria for {name!r} extract request fields; pass the request"
                )
            extracted = extract_criteria(spec, request or RequestData())
        return build_key(self.namespace, name, extracted, self.hash_algorithm)

    async def fetch(
        self,
        name: str | None,
        criteria: CriteriaInput = None,
        request: RequestData | None = None,
    ) -> CacheEntry | None:
        """Return the stored entry or None on miss.

        Raises:
            BackendUnavailableError: Backend get failed.
            CacheDecodeError: Stored value is not a valid envelope.
        """
        key = self.key_for(name, criteria, request)
        raw = await self.backend.get(key)
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            entry = CacheEntry.model_validate_json(raw)
        except ValidationError as e:
            raise CacheDecodeError(key, str(e)) from e
        logger.debug("Cache HIT: %s", key)
        return entry

    async def try_serve(
        self,
        name: str | None,
        criteria: CriteriaInput,
        request: RequestData,
    ) -> CachedResponse | None:
        """Return a CachedResponse on hit, None when the request should proceed.

        Backend and decode failures are logged and reported as a miss.
        """
        try:
            entry = await self.fetch(name, criteria, request)
        except (BackendUnavailableError, CacheDecodeError) as e:
            logger.warning("Cache read failed, treating as miss: %s", e.message)
            return None
        if entry is None:
            return None
        return CachedResponse(plain=entry.plain, data=entry.data)

    async def store(
        self,
        name: str | None,
        data: Any,
        ttl: int | None = None,
        criteria: CriteriaInput = None,
        request: RequestData | None = None,
    ) -> None:
        """Store a response payload with expiry.

        Args:
            name: Resource name; None uses the request path.
            data: str (returned raw) or JSON-serializable structure.
            ttl: Seconds until expiry; defaults to default_ttl.
            criteria: Same criteria given to try_serve.
            request: Request the criteria are extracted from.

        Raises:
            ValueError: If ttl is not positive.
            CacheStoreError: Serialization or backend set failed.
        """
        ttl = self.default_ttl if ttl is None else ttl
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got: {ttl}")
        key = self.key_for(name, criteria, request)
        try:
            serialized = CacheEntry.wrap(data).model_dump_json()
        except (TypeError, ValueError) as e:
            raise CacheStoreError(key, f"payload is not serializable: {e}") from e
        try:
            await self.backend.set(key, serialized, ttl)
        except BackendUnavailableError as e:
            raise CacheStoreError(key, e.message) from e
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def wrap(
        self,
        request: RequestData,
        proceed: Callable[[], Awaitable[T]],
        name: str | None = None,
        criteria: CriteriaInput = None,
    ) -> CachedResponse | T:
        """Serve from cache, or await proceed() on a miss."""
        cached = await self.try_serve(name, criteria, request)
        if cached is not None:
            return cached
        return await proceed()
