"""Domain enumerations for vapic.

Match types select how a read resolves a version and how a write treats
content that already exists under the latest version.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ReadMatchType(_ValuesMixin, str, Enum):
    """How a get resolves the requested version.

    EXACT reads the requested tag only; LATEST_UP_TO_CURRENT reads the
    highest stored tag that does not exceed the requested one.
    """

    EXACT = "exact"
    LATEST_UP_TO_CURRENT = "latestUpToCurrent"


class WriteMatchType(_ValuesMixin, str, Enum):
    """How a set stores a value.

    EXACT always writes; SKIP_WHEN_SAME_AS_LATEST does not write when the
    value is identical to the one stored under the latest version.
    """

    EXACT = "exact"
    SKIP_WHEN_SAME_AS_LATEST = "skipWhenSameAsLatest"
