"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter, Request

from vapic.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok plus the cache version when the cache is configured."""
    cache = getattr(request.app.state, "versioned_cache", None)
    if cache is None:
        return HealthResponse()
    is_available = getattr(cache.store, "is_available", None)
    return HealthResponse(
        cache_version=cache.options.cache_version,
        store_available=bool(is_available()) if callable(is_available) else True,
    )
