"""Cache: backends, key builders and the response cache service.

ResponseCache uses routecache.core.config; key format is in keys.py.
"""

from routecache.infrastructure.cache.cache_protocol import CacheBackend
from routecache.infrastructure.cache.keys import (
    HashAlgorithm,
    RollingHash32,
    SHA256Algorithm,
    build_key,
    canonical_json,
    default_name,
    extract_criteria,
    get_hash_algorithm,
)
from routecache.infrastructure.cache.memory_backend import MemoryBackend
from routecache.infrastructure.cache.redis_backend import RedisBackend
from routecache.infrastructure.cache.response_cache import (
    CachedResponse,
    CacheEntry,
    ResponseCache,
)

__all__ = [
    "CacheBackend",
    "CacheEntry",
    "CachedResponse",
    "HashAlgorithm",
    "MemoryBackend",
    "RedisBackend",
    "ResponseCache",
    "RollingHash32",
    "SHA256Algorithm",
    "build_key",
    "canonical_json",
    "default_name",
    "extract_criteria",
    "get_hash_algorithm",
]
