"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: Redis hash store connection and
the VersionedCache placed on app.state for routes and middleware.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from vapic.application.services.versioned_cache import VersionedCache
from vapic.core.config import get_settings
from vapic.domain.exceptions import BackingStoreException
from vapic.infrastructure.cache.redis_store import RedisHashStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect the store and build the cache, yield, then disconnect.

    An app that already has app.state.versioned_cache (e.g. set by tests)
    keeps it. When Redis is disabled or unreachable the cache stays None and
    negotiation passes requests through.
    """
    settings = get_settings()
    store: RedisHashStore | None = None

    # ---- Startup ----
    if getattr(app.state, "versioned_cache", None) is None:
        app.state.versioned_cache = None
        if settings.redis_enabled:
            # Invalid cache configuration fails startup before any connection is opened.
            options = settings.to_cache_options()
            store = RedisHashStore(settings=settings)
            try:
                await store.connect()
            except BackingStoreException as e:
                logger.warning("Redis connection failed: %s. Versioned cache disabled.", e)
                store = None
            else:
                app.state.versioned_cache = VersionedCache(store, options)
                logger.info(
                    "Versioned cache ready (version %s)",
                    app.state.versioned_cache.options.cache_version,
                )

    yield

    # ---- Shutdown ----
    if store is not None:
        await store.disconnect()
        app.state.versioned_cache = None
        logger.info("Versioned cache closed")
