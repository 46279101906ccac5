"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
See vapic.core.lifespan and vapic.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI

from vapic.api.v1 import api_router
from vapic.application.services.versioned_cache import VersionedCache
from vapic.core.config import get_settings
from vapic.core.exception_handlers import register_exception_handlers
from vapic.core.lifespan import create_lifespan
from vapic.middleware import VersionNegotiationMiddleware
from vapic.shared.telemetry import setup_logging


def create_app(versioned_cache: VersionedCache | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        versioned_cache: Pre-built cache (tests, embedding); when None the
            lifespan connects Redis and builds one from settings.
    """
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.versioned_cache = versioned_cache

    register_exception_handlers(app)

    app.add_middleware(
        VersionNegotiationMiddleware,
        path_prefix=settings.negotiation_path_prefix,
    )

    app.include_router(api_router, prefix="/api/v1")

    return app
