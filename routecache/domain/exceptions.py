"""Exceptions for the response cache.

Read-path errors (BackendUnavailableError, CacheDecodeError) are caught by
ResponseCache.try_serve and turned into a miss. CacheStoreError is raised to
the caller of ResponseCache.store, who decides whether to log and continue.
"""

from typing import Any


class RouteCacheException(Exception):
    """Base exception for all response cache errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. key, reason).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return error as a JSON-serializable dict (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class BackendUnavailableError(RouteCacheException):
    """Key-value backend call failed (connection, timeout, protocol)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Cache backend {operation} failed: {reason}",
            "BACKEND_UNAVAILABLE",
            {"operation": operation, "reason": reason},
        )


class CacheDecodeError(RouteCacheException):
    """Value stored at a key is not a valid cache entry envelope."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Cannot decode cache entry at {key}",
            "CACHE_DECODE_ERROR",
            {"key": key, "reason": reason},
        )


class CacheStoreError(RouteCacheException):
    """Writing a response to the cache failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to store cache entry at {key}",
            "CACHE_STORE_ERROR",
            {"key": key, "reason": reason},
        )
