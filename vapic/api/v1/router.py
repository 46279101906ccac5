"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags.
"""

from fastapi import APIRouter

from vapic.api.v1.endpoints import cache, health, resources

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(cache.router, prefix="/cache", tags=["cache"])
api_router.include_router(resources.router, prefix="/resources", tags=["resources"])
