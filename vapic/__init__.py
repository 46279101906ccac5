"""vapic: version-aware cache layer.

Stores several versions of a value per resource in a Redis hash and
resolves reads by semantic-version ordering. VersionedCache holds the
get/set/cull engines; VersionNegotiationMiddleware resolves the version
per HTTP request.
"""

from vapic.application.dtos.cache_results import CacheHit, CullResult, SetResult
from vapic.application.services.versioned_cache import VersionedCache
from vapic.core.options import CacheOptions
from vapic.domain.enums import ReadMatchType, WriteMatchType
from vapic.domain.exceptions import (
    BackingStoreException,
    CacheMissException,
    InputException,
    InvalidParameterException,
    MalformedVersionException,
    NoQualifyingVersionException,
    VapicException,
)
from vapic.infrastructure.cache.redis_store import RedisHashStore
from vapic.middleware.version_negotiation import VersionNegotiationMiddleware

__all__ = [
    "BackingStoreException",
    "CacheHit",
    "CacheMissException",
    "CacheOptions",
    "CullResult",
    "InputException",
    "InvalidParameterException",
    "MalformedVersionException",
    "NoQualifyingVersionException",
    "ReadMatchType",
    "RedisHashStore",
    "SetResult",
    "VapicException",
    "VersionNegotiationMiddleware",
    "VersionedCache",
    "WriteMatchType",
]
