"""Cache infrastructure: key resolution, store protocol and Redis hash store.

The engines in vapic.application.services depend on HashStoreProtocol
only; RedisHashStore is wired in vapic.core.lifespan.
"""

from vapic.infrastructure.cache.keys import resolve_cache_key
from vapic.infrastructure.cache.redis_store import RedisHashStore
from vapic.infrastructure.cache.store_protocol import HashStoreProtocol

__all__ = [
    "HashStoreProtocol",
    "RedisHashStore",
    "resolve_cache_key",
]
