"""Pytest configuration and fixtures for vapic.

InMemoryHashStore implements HashStoreProtocol over dicts so engine and
middleware tests run without Redis. HTTP tests use create_app() with an
injected VersionedCache (ASGITransport does not run the lifespan).
"""

import logging
from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from vapic.application.services.versioned_cache import VersionedCache
from vapic.core.options import CacheOptions
from vapic.domain.exceptions import BackingStoreException

APP_VERSION = "1.0.0"


class InMemoryHashStore:
    """Dict-backed hash store. Operations named in fail_on raise BackingStoreException."""

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.fail_on: set[str] = set()
        self.calls: list[str] = []

    def _enter(self, operation: str, key: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise BackingStoreException(operation, key, ConnectionError("store down"))

    def seed(self, key: str, versions: list[str]) -> None:
        """Store 'value for <version>' under each version."""
        for version in versions:
            self.hashes.setdefault(key, {})[version] = f"value for {version}"

    def fields(self, key: str) -> set[str]:
        return set(self.hashes.get(key, {}))

    async def hset(self, key: str, field: str, value: str) -> int:
        self._enter("hset", key)
        entry = self.hashes.setdefault(key, {})
        is_new = field not in entry
        entry[field] = value
        return int(is_new)

    async def hget(self, key: str, field: str) -> str | None:
        self._enter("hget", key)
        return self.hashes.get(key, {}).get(field)

    async def hkeys(self, key: str) -> list[str]:
        self._enter("hkeys", key)
        return list(self.hashes.get(key, {}))

    async def hdel(self, key: str, *fields: str) -> int:
        self._enter("hdel", key)
        entry = self.hashes.get(key, {})
        removed = 0
        for field in fields:
            if entry.pop(field, None) is not None:
                removed += 1
        return removed


@pytest.fixture
def store() -> InMemoryHashStore:
    return InMemoryHashStore()


@pytest.fixture
def miss_logger() -> MagicMock:
    """Logger double recording cache-miss diagnostics."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def options(miss_logger: MagicMock) -> CacheOptions:
    return CacheOptions(cache_version=APP_VERSION, logger=miss_logger)


@pytest.fixture
def cache(store: InMemoryHashStore, options: CacheOptions) -> VersionedCache:
    return VersionedCache(store, options)


def make_client(versioned_cache: VersionedCache | None) -> AsyncClient:
    """Async HTTP client against a fresh app wired to versioned_cache."""
    from vapic.main import create_app

    app = create_app(versioned_cache)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def client(cache: VersionedCache) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with the in-memory cache."""
    async with make_client(cache) as ac:
        yield ac
