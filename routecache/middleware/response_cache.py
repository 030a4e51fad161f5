"""Response cache middleware.

Serves a stored response (status 324) when one exists for the request's
name and criteria; otherwise calls the wrapped app. Storing is left to
the endpoint, which calls ResponseCache.store with the same name and
criteria once it has computed a response. Raw ASGI, no BaseHTTPMiddleware.
"""

from collections.abc import Iterable
from typing import Any, Callable

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from routecache.domain.criteria import CriteriaSpec, ExtractFields, RequestData
from routecache.infrastructure.cache.response_cache import (
    CachedResponse,
    CriteriaInput,
    ResponseCache,
)


def request_data_from_scope(scope: dict) -> RequestData:
    """Build RequestData from an ASGI HTTP scope.

    Sections: query (last value wins for repeated params), headers
    (lowercase names), cookies, path_params. path_params is only filled
    after routing, so it is usable from endpoints but not from middleware.

    Servers and routers disagree on whether path includes root_path; both
    forms yield the same base_path + path, so the default resource name is
    identical in middleware and in mounted endpoints.
    """
    request = Request(scope)
    root_path = scope.get("root_path", "")
    path = scope.get("path", "")
    if root_path and (path == root_path or path.startswith(root_path + "/")):
        path = path[len(root_path):]
    fields: dict[str, dict[str, Any]] = {
        "query": dict(request.query_params),
        "headers": dict(request.headers),
        "cookies": dict(request.cookies),
        "path_params": dict(scope.get("path_params") or {}),
    }
    return RequestData(
        base_path=root_path,
        path=path,
        fields=fields,
    )


def request_data_from_request(request: Request) -> RequestData:
    """Build RequestData from a FastAPI/Starlette Request (for endpoints calling store)."""
    return request_data_from_scope(request.scope)


def build_response(cached: CachedResponse) -> Response:
    """Raw text body for plain entries, JSON otherwise."""
    if cached.plain:
        return PlainTextResponse(content=cached.data, status_code=cached.status)
    return JSONResponse(content=cached.data, status_code=cached.status)


def ResponseCacheMiddleware(
    app: Callable,
    cache: ResponseCache,
    name: str | None = None,
    criteria: CriteriaInput = None,
    methods: Iterable[str] = ("GET",),
) -> Callable:
    """Serve cached responses for app before it runs. Raw ASGI.

    Args:
        app: Wrapped ASGI app.
        cache: ResponseCache to read from.
        name: Resource name; None uses root_path + path.
        criteria: Criteria spec (mapping or CriteriaSpec); None/False for none.
        methods: HTTP methods eligible for cache hits.

    Raises:
        ValueError: If criteria extract path_params, which are not set
            until routing runs inside the wrapped app.
    """
    spec = CriteriaSpec.coerce(criteria)
    if spec is not None and isinstance(spec.get("path_params"), ExtractFields):
        raise ValueError(
            "path_params are resolved after this middleware runs; "
            "key on query, headers or cookies instead"
        )
    allowed = {m.upper() for m in methods}

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("method", "GET").upper() not in allowed:
            await app(scope, receive, send)
            return
        cached = await cache.try_serve(name, spec, request_data_from_scope(scope))
        if cached is None:
            await app(scope, receive, send)
            return
        await build_response(cached)(scope, receive, send)

    return asgi_app
