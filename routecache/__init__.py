"""Request-scoped response cache keyed by resource name and request criteria."""

from routecache.domain.criteria import CriteriaSpec, ExtractFields, Literal, RequestData
from routecache.domain.exceptions import (
    BackendUnavailableError,
    CacheDecodeError,
    CacheStoreError,
    RouteCacheException,
)
from routecache.infrastructure.cache import (
    CachedResponse,
    CacheEntry,
    MemoryBackend,
    RedisBackend,
    ResponseCache,
)
from routecache.middleware import ResponseCacheMiddleware

__all__ = [
    "BackendUnavailableError",
    "CacheDecodeError",
    "CacheEntry",
    "CacheStoreError",
    "CachedResponse",
    "CriteriaSpec",
    "ExtractFields",
    "Literal",
    "MemoryBackend",
    "RedisBackend",
    "RequestData",
    "ResponseCache",
    "ResponseCacheMiddleware",
    "RouteCacheException",
]
