"""Redis-backed hash store for the versioned cache.

Thin adapter over redis.asyncio: one Redis hash per cache key, fields are
version tags. Redis errors are wrapped in BackingStoreException with the
operation and key; there is no retry or fallback at this level.
"""

from __future__ import annotations

import logging

import redis.asyncio as redis

from vapic.core.config import Settings, get_settings
from vapic.domain.exceptions import BackingStoreException

logger = logging.getLogger(__name__)


class RedisHashStore:
    """Async Redis hash store implementing HashStoreProtocol.

    Uses vapic.core.config for connection settings. Call connect() at
    startup and disconnect() at shutdown, or pass a ready client.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish the Redis connection. Call on app startup.

        Raises:
            BackingStoreException: If Redis cannot be reached.
        """
        if self.redis is not None:
            return
        password = self.settings.redis_password
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=self.settings.redis_socket_timeout,
            socket_timeout=self.settings.redis_socket_timeout,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except redis.RedisError as e:
            await client.aclose()
            raise BackingStoreException("ping", "", e) from e
        self.redis = client
        self._connected = True
        logger.info(
            "Redis hash store connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close the Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis hash store disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    def _client(self, operation: str, key: str) -> redis.Redis:
        if self.redis is None:
            raise BackingStoreException(
                operation, key, ConnectionError("Redis hash store is not connected")
            )
        return self.redis

    async def hset(self, key: str, field: str, value: str) -> int:
        """HSET key field value."""
        client = self._client("hset", key)
        try:
            return int(await client.hset(key, field, value))
        except redis.RedisError as e:
            raise BackingStoreException("hset", key, e) from e

    async def hget(self, key: str, field: str) -> str | None:
        """HGET key field; None when missing."""
        client = self._client("hget", key)
        try:
            return await client.hget(key, field)
        except redis.RedisError as e:
            raise BackingStoreException("hget", key, e) from e

    async def hkeys(self, key: str) -> list[str]:
        """HKEYS key."""
        client = self._client("hkeys", key)
        try:
            return list(await client.hkeys(key))
        except redis.RedisError as e:
            raise BackingStoreException("hkeys", key, e) from e

    async def hdel(self, key: str, *fields: str) -> int:
        """HDEL key field [field ...] as a single command."""
        if not fields:
            return 0
        client = self._client("hdel", key)
        try:
            return int(await client.hdel(key, *fields))
        except redis.RedisError as e:
            raise BackingStoreException("hdel", key, e) from e
