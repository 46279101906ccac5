"""Backing store protocol: per-key hash maps (DIP).

RedisHashStore is the production implementation; tests use an in-memory
fake. Each command is atomic on its own; sequences of commands are not.
"""

from typing import Protocol


class HashStoreProtocol(Protocol):
    """Hash-map operations the versioned cache engines depend on."""

    async def hset(self, key: str, field: str, value: str) -> int:
        """Set one field; return 1 if the field is new, 0 if overwritten."""
        ...

    async def hget(self, key: str, field: str) -> str | None:
        """Return the field value or None if the field (or key) is missing."""
        ...

    async def hkeys(self, key: str) -> list[str]:
        """Return all field names of the hash (empty if the key is missing)."""
        ...

    async def hdel(self, key: str, *fields: str) -> int:
        """Delete fields in one command; return the number removed."""
        ...
