from __future__ import annotations

import logging

import redis

logger = logging.getLogger(__name__)


class RedisNotConfiguredError(RuntimeError):
    pass


class RedisConnection:
    """Lifecycle holder for the synchronous Redis client, mirroring Database."""

    def __init__(self, url: str | None, timeout_seconds: float = 1.0) -> None:
        self._url = url
        self._timeout_seconds = timeout_seconds
        self._client: redis.Redis | None = None

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def configured(self) -> bool:
        return bool(self._url)

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            raise RedisNotConfiguredError("redis is not configured or not open")
        return self._client

    def open(self) -> None:
        if self._client is not None or not self._url:
            return
        self._client = redis.Redis.from_url(
            self._url,
            socket_connect_timeout=self._timeout_seconds,
            socket_timeout=self._timeout_seconds,
        )

    def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except Exception:
            logger.warning("redis_ping_failed", exc_info=True)
            return False
