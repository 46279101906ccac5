"""Versioned cache engines: get, set and cull over a hash-per-key store.

Each cache key holds one hash whose fields are semantic-version tags.
Reads resolve a version exactly or as the latest stored version not above
the requested one; writes can skip content identical to the latest version
and can cap the number of retained versions.

Every step is a separate store round-trip. Sequences (list then get,
get-compare-set, set then cull) are not atomic: concurrent writers to one
key may leave more than max_versions fields until a later write culls.
"""

from __future__ import annotations

import logging

from vapic.application.dtos.cache_results import CacheHit, CullResult, SetResult
from vapic.core.options import (
    CacheOptions,
    coerce_read_match_type,
    coerce_write_match_type,
    validate_max_versions,
)
from vapic.domain.enums import ReadMatchType, WriteMatchType
from vapic.domain.exceptions import (
    BackingStoreException,
    CacheMissException,
    InputException,
    NoQualifyingVersionException,
)
from vapic.domain.value_objects.version import (
    parse_version_tag,
    select_latest_up_to,
    sort_version_tags,
)
from vapic.infrastructure.cache.keys import resolve_cache_key
from vapic.infrastructure.cache.store_protocol import HashStoreProtocol
from vapic.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

# Marks "use options.max_versions" (None explicitly disables culling).
_DEFAULT = object()


class VersionedCache:
    """Version-aware cache over an injected hash store.

    Args:
        store: Backing store (e.g. RedisHashStore).
        options: Defaults for prefix, version, match types and culling.
    """

    def __init__(self, store: HashStoreProtocol, options: CacheOptions) -> None:
        self.store = store
        self.options = options

    def cache_key_for(
        self,
        resource_path: str | None = None,
        cache_key: str | None = None,
        prefix: str | None = None,
    ) -> str:
        """Return cache_key if given, else prefix + resource_path.

        Raises:
            InputException: If neither yields a non-empty key.
        """
        if cache_key:
            return cache_key
        if not resource_path:
            raise InputException("cache key unspecified", field="resource_path")
        return resolve_cache_key(prefix or self.options.prefix, resource_path)

    async def _sorted_versions(self, cache_key: str) -> list[str]:
        return sort_version_tags(await self.store.hkeys(cache_key))

    async def list_versions(
        self,
        resource_path: str | None = None,
        *,
        cache_key: str | None = None,
        prefix: str | None = None,
    ) -> list[str]:
        """Return the stored version tags of a key, ascending.

        Raises:
            InputException: If no key can be resolved.
            MalformedVersionException: If a stored field is not semver.
            BackingStoreException: If the store fails.
        """
        key = self.cache_key_for(resource_path, cache_key, prefix)
        return await self._sorted_versions(key)

    # ---- Get ----

    @traced("vapic.get")
    async def get(
        self,
        resource_path: str | None = None,
        *,
        cache_key: str | None = None,
        version: str | None = None,
        match_type: ReadMatchType | str | None = None,
        prefix: str | None = None,
    ) -> CacheHit:
        """Resolve a read to a stored value.

        Args:
            resource_path: Resource path; combined with prefix into the key.
            cache_key: Explicit key (takes precedence over resource_path).
            version: Requested version (default options.cache_version).
            match_type: 'exact' or 'latestUpToCurrent' (default from options).
            prefix: Key prefix override.

        Returns:
            CacheHit with the version actually used.

        Raises:
            InputException: Missing key or unrecognized match type.
            CacheMissException: Exact lookup found nothing or the store failed.
            NoQualifyingVersionException: No stored version <= requested.
            MalformedVersionException: Requested or stored version is not semver.
            BackingStoreException: Listing versions failed.
        """
        mode = coerce_read_match_type(match_type or self.options.read_match_type)
        key = self.cache_key_for(resource_path, cache_key, prefix)
        requested = version or self.options.cache_version
        if mode is ReadMatchType.EXACT:
            parse_version_tag(requested)
            value = await self._get_exact(key, requested)
            return CacheHit(key, requested, requested, value)
        return await self._get_latest_up_to(key, requested)

    async def _get_exact(self, cache_key: str, version: str) -> str:
        """HGET one version; any miss is logged through options.logger."""
        underlying: BaseException | None = None
        value: str | None = None
        try:
            value = await self.store.hget(cache_key, version)
        except BackingStoreException as e:
            underlying = e
        if underlying is not None or not value:
            self.options.logger.error(
                "Cache miss on redis: cache_key=%s cache_version=%s err=%s",
                cache_key,
                version,
                underlying,
            )
            raise CacheMissException(cache_key, version, underlying) from underlying
        logger.debug("Cache HIT: %s @ %s", cache_key, version)
        return value

    async def _get_latest_up_to(self, cache_key: str, requested: str) -> CacheHit:
        versions = await self._sorted_versions(cache_key)
        selected = select_latest_up_to(versions, requested)
        if selected is None:
            raise NoQualifyingVersionException(cache_key, requested, versions)
        add_span_attributes(**{"vapic.resolved_version": selected})
        value = await self._get_exact(cache_key, selected)
        return CacheHit(cache_key, requested, selected, value)

    # ---- Set ----

    @traced("vapic.set")
    async def set(
        self,
        resource_path: str | None = None,
        value: str | None = None,
        *,
        cache_key: str | None = None,
        version: str | None = None,
        match_type: WriteMatchType | str | None = None,
        max_versions: int | None | object = _DEFAULT,
        prefix: str | None = None,
    ) -> SetResult:
        """Write a value under a version, then cull when a cap is set.

        Inputs are validated before any store access. When culling fails the
        write has already landed; the failure is still raised, so callers
        must treat a failed capped write as "value may be present".

        Args:
            resource_path: Resource path; combined with prefix into the key.
            value: Payload (non-empty string).
            cache_key: Explicit key (takes precedence over resource_path).
            version: Version tag to write (default options.cache_version).
            match_type: 'exact' or 'skipWhenSameAsLatest' (default from options).
            max_versions: Retention cap; omitted uses options.max_versions,
                None disables culling.
            prefix: Key prefix override.

        Returns:
            SetResult (written=False when skipped as identical to latest).

        Raises:
            InputException: Missing key/value or unrecognized match type.
            InvalidParameterException: max_versions is not a positive int.
            MalformedVersionException: version or a stored version is not semver.
            CacheMissException: The latest version vanished during skip detection.
            BackingStoreException: The store failed.
        """
        if not resource_path and not cache_key:
            raise InputException("url unspecified", field="resource_path")
        if not value:
            raise InputException("value unspecified", field="value")
        mode = coerce_write_match_type(match_type or self.options.write_match_type)
        cap = self.options.max_versions if max_versions is _DEFAULT else max_versions
        if cap is not None:
            cap = validate_max_versions(cap)
        target = version or self.options.cache_version
        parse_version_tag(target)
        key = self.cache_key_for(resource_path, cache_key, prefix)

        if mode is WriteMatchType.SKIP_WHEN_SAME_AS_LATEST:
            versions = await self._sorted_versions(key)
            if versions:
                latest = versions[-1]
                existing = await self._get_exact(key, latest)
                if existing == value:
                    logger.debug(
                        "Cache SET skipped: %s @ %s same as %s", key, target, latest
                    )
                    return SetResult(
                        cache_key=key,
                        version=target,
                        written=False,
                        versions=tuple(versions),
                        latest_cached_version=latest,
                        equivalent_version=target,
                    )
        return await self._set_exact(key, target, value, cap)

    async def _set_exact(
        self, cache_key: str, version: str, value: str, max_versions: int | None
    ) -> SetResult:
        await self.store.hset(cache_key, version, value)
        logger.debug("Cache SET: %s @ %s", cache_key, version)
        cull = None
        if max_versions is not None:
            cull = await self._cull(cache_key, max_versions)
        return SetResult(cache_key=cache_key, version=version, cull=cull)

    # ---- Cull ----

    @traced("vapic.cull")
    async def cull(
        self,
        resource_path: str | None = None,
        max_versions: int | None = None,
        *,
        cache_key: str | None = None,
        prefix: str | None = None,
    ) -> CullResult:
        """Keep only the max_versions highest versions of a key.

        Raises:
            InputException: If no key can be resolved.
            InvalidParameterException: max_versions is not a positive int.
            MalformedVersionException: A stored field is not semver.
            BackingStoreException: The store failed.
        """
        cap = validate_max_versions(max_versions)
        key = self.cache_key_for(resource_path, cache_key, prefix)
        return await self._cull(key, cap)

    async def _cull(self, cache_key: str, max_versions: int) -> CullResult:
        versions = await self._sorted_versions(cache_key)
        if len(versions) <= max_versions:
            return CullResult(cache_key=cache_key, versions=tuple(versions))
        to_remove = versions[: len(versions) - max_versions]
        removed = await self.store.hdel(cache_key, *to_remove)
        logger.debug(
            "Cache CULL: %s removed %s of %s versions",
            cache_key,
            removed,
            len(versions),
        )
        return CullResult(
            cache_key=cache_key,
            versions=tuple(versions),
            versions_to_remove=tuple(to_remove),
            removed_count=removed,
        )
