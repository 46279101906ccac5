"""Application DTOs: results of versioned cache operations."""

from vapic.application.dtos.cache_results import CacheHit, CullResult, SetResult

__all__ = ["CacheHit", "CullResult", "SetResult"]
