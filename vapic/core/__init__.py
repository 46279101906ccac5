"""Core: config, options, constants and application bootstrap.

Single place for settings and shared constants.
"""

from vapic.core.config import Settings, get_settings
from vapic.core.options import CacheOptions

__all__ = ["CacheOptions", "Settings", "get_settings"]
