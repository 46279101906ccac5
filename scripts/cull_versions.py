"""Cull old versions of cached resources.

Usage:
    python -m scripts.cull_versions <max_versions> <resource_path> [resource_path ...]
Keeps the <max_versions> highest versions of each resource and deletes the rest.
Requires Redis (REDIS_HOST / REDIS_PORT etc.) and uses CACHE_PREFIX from config.
"""

import asyncio
import sys

from vapic.application.services.versioned_cache import VersionedCache
from vapic.core.config import get_settings
from vapic.domain.exceptions import VapicException
from vapic.infrastructure.cache.redis_store import RedisHashStore


async def main() -> None:
    """For each resource path, cull versions beyond max_versions."""
    if len(sys.argv) < 3:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    try:
        max_versions = int(sys.argv[1])
    except ValueError:
        print(f"max_versions must be an integer, got {sys.argv[1]!r}", file=sys.stderr)
        sys.exit(2)

    settings = get_settings()
    store = RedisHashStore(settings=settings)
    try:
        await store.connect()
    except VapicException as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)

    cache = VersionedCache(store, settings.to_cache_options())
    total_removed = 0
    failed = False
    try:
        for resource_path in sys.argv[2:]:
            try:
                result = await cache.cull(resource_path, max_versions)
            except VapicException as e:
                print(f"{resource_path}: {e.message}", file=sys.stderr)
                failed = True
                continue
            removed = result.removed_count or 0
            total_removed += removed
            if removed:
                print(f"{result.cache_key}: removed {', '.join(result.versions_to_remove)}")
            else:
                print(f"{result.cache_key}: {len(result.versions)} version(s), nothing to remove")
    finally:
        await store.disconnect()

    print(f"Done. Total removed: {total_removed}")
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
