"""Version negotiation middleware.

Resolves which cached version answers a request before the route runs:
key = prefix + request URL (or a fixed resource path), version = the app's
own version unless the vapic request header overrides it. The outcome is
stored on request.state (vapic_result or vapic_error); the request always
continues to the inner app, which decides how to respond.

Response headers: Cache-Control on success, vapic (resolved version) when
header negotiation is on, vapic-warning when the request header is unparsable.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming and background tasks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from vapic.core.constants import (
    CACHE_CONTROL_HEADER,
    STATE_CACHE_KEY,
    STATE_ERROR,
    STATE_RESULT,
    STATE_VERSION,
    VAPIC_HEADER,
    VAPIC_WARNING_HEADER,
)
from vapic.domain.exceptions import VapicException
from vapic.shared.utils.envelope import (
    EnvelopeDecodeError,
    version_envelope,
    version_from_envelope,
)

if TYPE_CHECKING:
    from vapic.application.services.versioned_cache import VersionedCache

logger = logging.getLogger(__name__)


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _original_url(scope: dict) -> str:
    """Return path plus query string, as received."""
    path = scope.get("path", "")
    query = scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path


def _under_prefix(path: str, prefix: str) -> bool:
    """True when path is prefix itself or a path segment below it."""
    base = prefix.rstrip("/")
    return not base or path == base or path.startswith(base + "/")


def _resolve_cache(scope: dict, cache: VersionedCache | None) -> VersionedCache | None:
    if cache is not None:
        return cache
    app = scope.get("app")
    state = getattr(app, "state", None)
    return getattr(state, "versioned_cache", None)


def VersionNegotiationMiddleware(
    app: Callable,
    cache: VersionedCache | None = None,
    resource_path: str | None = None,
    path_prefix: str | None = None,
) -> Callable:
    """Resolve the cached value for each HTTP request. Raw ASGI.

    Args:
        app: Inner ASGI app.
        cache: Versioned cache; when None, app.state.versioned_cache is used.
        resource_path: Fixed resource path instead of the request URL.
        path_prefix: Only requests at or below this path are negotiated.
    """
    warned_missing_cache = False

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        nonlocal warned_missing_cache
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        if path_prefix and not _under_prefix(scope.get("path", ""), path_prefix):
            await app(scope, receive, send)
            return
        versioned_cache = _resolve_cache(scope, cache)
        if versioned_cache is None:
            if not warned_missing_cache:
                logger.warning("Version negotiation skipped: no versioned cache configured")
                warned_missing_cache = True
            await app(scope, receive, send)
            return

        options = versioned_cache.options
        response_headers: list[tuple[bytes, bytes]] = []
        state = scope.setdefault("state", {})

        version = options.cache_version
        if options.read_version_from_header:
            raw = _get_header(scope, VAPIC_HEADER)
            if raw:
                try:
                    version = version_from_envelope(raw) or version
                except EnvelopeDecodeError:
                    logger.warning("Failed to parse vapic header: %r", raw)
                    response_headers.append(
                        (VAPIC_WARNING_HEADER.encode(), f"Unable to parse: {raw}".encode())
                    )

        try:
            cache_key = versioned_cache.cache_key_for(
                resource_path or _original_url(scope)
            )
            state[STATE_CACHE_KEY] = cache_key
            hit = await versioned_cache.get(cache_key=cache_key, version=version)
        except VapicException as e:
            state[STATE_ERROR] = e
            state[STATE_VERSION] = version
        else:
            state[STATE_RESULT] = hit.value
            state[STATE_VERSION] = hit.version
            response_headers.append(
                (
                    CACHE_CONTROL_HEADER.encode(),
                    f"public, max-age={options.permitted_age}".encode(),
                )
            )
            if options.read_version_from_header:
                response_headers.append(
                    (VAPIC_HEADER.encode(), version_envelope(hit.version).encode())
                )

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start" and response_headers:
                headers = list(message.get("headers", []))
                seen = {h[0].lower() for h in headers}
                for name_b, value_b in response_headers:
                    if name_b.lower() not in seen:
                        headers.append((name_b, value_b))
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
