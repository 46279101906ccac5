"""FastAPI dependencies for the v1 API."""

from fastapi import HTTPException, Request

from vapic.application.services.versioned_cache import VersionedCache


def get_versioned_cache(request: Request) -> VersionedCache:
    """Return app.state.versioned_cache (set in lifespan); 503 when not configured."""
    cache = getattr(request.app.state, "versioned_cache", None)
    if cache is None:
        raise HTTPException(status_code=503, detail="Versioned cache is not configured")
    return cache
