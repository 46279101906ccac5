"""API v1: health, cache admin and negotiated resources."""

from vapic.api.v1.router import api_router

__all__ = ["api_router"]
