"""Cached resources: served from the value resolved by VersionNegotiationMiddleware.

The middleware stores vapic_result or vapic_error on request.state; this
route turns that into a response. A real service would fall through to
live computation on error instead of returning it.
"""

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response

from vapic.core.constants import STATE_ERROR, STATE_RESULT
from vapic.core.exception_handlers import vapic_error_response

router = APIRouter()


@router.get("/{resource:path}")
async def get_resource(resource: str, request: Request) -> Response:
    """Return the cached value negotiated for this URL, or the resolution error."""
    value = getattr(request.state, STATE_RESULT, None)
    if value is not None:
        return PlainTextResponse(value)
    error = getattr(request.state, STATE_ERROR, None)
    if error is not None:
        return vapic_error_response(error)
    raise HTTPException(status_code=503, detail="Versioned cache is not configured")
