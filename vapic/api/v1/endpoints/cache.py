"""Versioned cache admin API: write, cull and list versions of a resource."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from vapic.api.v1.dependencies import get_versioned_cache
from vapic.application.services.versioned_cache import VersionedCache
from vapic.schemas.cache import (
    CacheCullRequest,
    CacheSetRequest,
    CullResponse,
    SetResponse,
    VersionsResponse,
)

router = APIRouter()


@router.put("", response_model=SetResponse)
async def set_cached_value(
    body: CacheSetRequest,
    cache: Annotated[VersionedCache, Depends(get_versioned_cache)],
) -> SetResponse:
    """Store a value under a version (optionally skipping identical content and culling)."""
    kwargs = {}
    if "max_versions" in body.model_fields_set:
        kwargs["max_versions"] = body.max_versions
    result = await cache.set(
        body.resource_path,
        body.value,
        version=body.version,
        match_type=body.match_type,
        **kwargs,
    )
    return SetResponse.model_validate(result)


@router.post("/cull", response_model=CullResponse)
async def cull_versions(
    body: CacheCullRequest,
    cache: Annotated[VersionedCache, Depends(get_versioned_cache)],
) -> CullResponse:
    """Delete the lowest versions beyond max_versions."""
    result = await cache.cull(body.resource_path, body.max_versions)
    return CullResponse.model_validate(result)


@router.get("/versions", response_model=VersionsResponse)
async def list_versions(
    resource_path: Annotated[str, Query(min_length=1)],
    cache: Annotated[VersionedCache, Depends(get_versioned_cache)],
) -> VersionsResponse:
    """Return the stored versions of a resource, ascending."""
    versions = await cache.list_versions(resource_path)
    return VersionsResponse(
        cache_key=cache.cache_key_for(resource_path),
        versions=versions,
    )
