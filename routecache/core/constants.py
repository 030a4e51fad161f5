"""Core constants: key structure and shared literal values."""

# Delimiter between namespace and name/hash
CACHE_KEY_SEP = ":"

DEFAULT_NAMESPACE = "cache"
DEFAULT_TTL_SECONDS = 3600

# Status code written for responses served from cache
CACHED_STATUS_CODE = 324

DEFAULT_KEY_HASH = "rolling32"
KEY_HASH_ALGORITHMS = frozenset({"rolling32", "sha256"})
