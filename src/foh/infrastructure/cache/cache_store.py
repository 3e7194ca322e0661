from __future__ import annotations

from foh.application.ports.cache import CacheStore
from foh.infrastructure.cache.redis_client import RedisConnection


class RedisCacheStore(CacheStore):
    def __init__(self, connection: RedisConnection) -> None:
        self._connection = connection

    def get(self, key: str) -> str | None:
        value = self._connection.client.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._connection.client.set(name=key, value=value, ex=ttl_seconds)

    def delete(self, key: str) -> None:
        self._connection.client.delete(key)


class NullCacheStore(CacheStore):
    """Used when no REDIS_URL is configured: every read misses."""

    def get(self, key: str) -> str | None:
        return None

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        return None

    def delete(self, key: str) -> None:
        return None


def build_cache_store(connection: RedisConnection) -> CacheStore:
    if connection.configured:
        return RedisCacheStore(connection)
    return NullCacheStore()
