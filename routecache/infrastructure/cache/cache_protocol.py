"""Cache backend protocol. Any key-value store with TTL support fits."""

from typing import Protocol


class CacheBackend(Protocol):
    """Protocol for key-value backends used by ResponseCache.

    Implementations raise BackendUnavailableError on transport failure and
    are responsible for being safe under concurrent use.
    """

    async def get(self, key: str) -> bytes | str | None:
        """Return stored value or None if absent/expired."""
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store value with TTL in seconds (overwrites)."""
        ...
