"""In-process cache backend for tests and single-process development."""

import time
from collections.abc import Callable


class MemoryBackend:
    """Dict-backed CacheBackend with per-key expiry.

    Expired keys are dropped lazily on read. Not shared across processes.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: dict[str, tuple[str, float]] = {}

    async def get(self, key: str) -> str | None:
        item = self._data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._data[key] = (value, self._clock() + ttl_seconds)

    def __len__(self) -> int:
        return len(self._data)
