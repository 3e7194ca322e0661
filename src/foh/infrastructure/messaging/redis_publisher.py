from __future__ import annotations

from foh.application.ports.publisher import EventPublisher
from foh.infrastructure.cache.redis_client import RedisConnection


class RedisEventPublisher(EventPublisher):
    def __init__(self, connection: RedisConnection) -> None:
        self._connection = connection

    def publish(self, channel: str, message: str) -> None:
        self._connection.client.publish(channel, message)


class NullEventPublisher(EventPublisher):
    def publish(self, channel: str, message: str) -> None:
        return None


def build_publisher(connection: RedisConnection) -> EventPublisher:
    if connection.configured:
        return RedisEventPublisher(connection)
    return NullEventPublisher()
