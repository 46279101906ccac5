"""Versioned cache API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from vapic.domain.enums import WriteMatchType


class CacheSetRequest(BaseModel):
    """Request body for storing a value under a version."""

    resource_path: str = Field(..., min_length=1, max_length=2048)
    value: str = Field(..., min_length=1)
    version: str | None = Field(
        default=None, description="Version tag; defaults to the app's cache version"
    )
    match_type: WriteMatchType | None = None
    max_versions: int | None = Field(default=None, ge=1)


class CacheCullRequest(BaseModel):
    """Request body for culling old versions of a resource."""

    resource_path: str = Field(..., min_length=1, max_length=2048)
    max_versions: int = Field(..., ge=1)


class CullResponse(BaseModel):
    """Culling outcome (versions is the sorted list before deletion)."""

    model_config = ConfigDict(from_attributes=True)

    cache_key: str
    versions: list[str]
    versions_to_remove: list[str] | None = None
    removed_count: int | None = None


class SetResponse(BaseModel):
    """Write outcome; written is False when skipped as identical to latest."""

    model_config = ConfigDict(from_attributes=True)

    cache_key: str
    version: str
    written: bool
    cull: CullResponse | None = None
    versions: list[str] | None = None
    latest_cached_version: str | None = None
    equivalent_version: str | None = None


class VersionsResponse(BaseModel):
    """Stored versions of a resource, ascending."""

    cache_key: str
    versions: list[str]
