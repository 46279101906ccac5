"""Application services: versioned cache engines."""

from vapic.application.services.versioned_cache import VersionedCache

__all__ = ["VersionedCache"]
