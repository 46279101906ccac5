"""Result types returned by the versioned cache engines."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheHit:
    """Successful read.

    version is the tag actually used for the lookup; with latest-up-to-current
    it may be lower than requested_version and is what clients should pin to.
    """

    cache_key: str
    requested_version: str
    version: str
    value: str


@dataclass(frozen=True)
class CullResult:
    """Outcome of culling one key.

    versions is the full sorted list before deletion. versions_to_remove and
    removed_count are None when the key was within its cap.
    """

    cache_key: str
    versions: tuple[str, ...]
    versions_to_remove: tuple[str, ...] | None = None
    removed_count: int | None = None


@dataclass(frozen=True)
class SetResult:
    """Outcome of a write.

    written is False only when skip-when-same-as-latest found the value
    identical to the latest stored one; then versions, latest_cached_version
    and equivalent_version describe the aliasing and nothing was culled.
    """

    cache_key: str
    version: str
    written: bool = True
    cull: CullResult | None = None
    versions: tuple[str, ...] | None = None
    latest_cached_version: str | None = None
    equivalent_version: str | None = None
