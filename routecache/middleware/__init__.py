"""HTTP middleware: response cache lookup.

Import and add with app.add_middleware(ResponseCacheMiddleware, cache=...).
"""

from routecache.middleware.response_cache import (
    ResponseCacheMiddleware,
    build_response,
    request_data_from_request,
    request_data_from_scope,
)

__all__ = [
    "ResponseCacheMiddleware",
    "build_response",
    "request_data_from_request",
    "request_data_from_scope",
]
