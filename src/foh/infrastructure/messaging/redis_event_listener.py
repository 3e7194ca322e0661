from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from redis import asyncio as redis_asyncio

from foh.application.use_cases.view_refresh import VIEW_CHANNEL_PREFIX, VIEWS

logger = logging.getLogger(__name__)

VIEW_PATTERN = f"{VIEW_CHANNEL_PREFIX}*"
MAX_BACKOFF_SECONDS = 5.0

Broadcast = Callable[[str, str], Awaitable[None]]


def _text(value: bytes | str | None) -> str | None:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def view_from_channel(channel: str) -> str | None:
    """`views:kitchen` -> `kitchen`; None for channels no dashboard listens on."""
    if not channel.startswith(VIEW_CHANNEL_PREFIX):
        return None
    view = channel[len(VIEW_CHANNEL_PREFIX):]
    return view if view in VIEWS else None


async def _relay(pubsub: redis_asyncio.client.PubSub, broadcast: Broadcast) -> None:
    async for message in pubsub.listen():
        if message.get("type") != "pmessage":
            continue
        channel = _text(message.get("channel")) or ""
        payload = _text(message.get("data"))
        view = view_from_channel(channel)
        if view is None or not payload:
            logger.debug("redis_fanout_skipped", extra={"channel": channel})
            continue
        await broadcast(view, payload)


async def start_redis_fanout(redis_url: str | None, broadcast: Broadcast) -> None:
    """Relay dashboard refresh messages from Redis to websocket clients until cancelled.

    Connection failures are retried with a capped exponential backoff so a
    Redis restart does not need an app restart.
    """
    if not redis_url:
        logger.warning("redis_fanout_not_started", extra={"reason": "REDIS_URL missing"})
        return

    backoff_seconds = 1.0
    while True:
        client = redis_asyncio.from_url(redis_url)
        pubsub = client.pubsub()
        try:
            await pubsub.psubscribe(VIEW_PATTERN)
            logger.info("redis_fanout_subscribed", extra={"pattern": VIEW_PATTERN})
            backoff_seconds = 1.0
            await _relay(pubsub, broadcast)
        except asyncio.CancelledError:
            logger.info("redis_fanout_cancelled")
            raise
        except Exception:
            logger.exception("redis_fanout_error", extra={"backoff_seconds": backoff_seconds})
            await asyncio.sleep(backoff_seconds)
            backoff_seconds = min(backoff_seconds * 2, MAX_BACKOFF_SECONDS)
        finally:
            await pubsub.aclose()
            await client.aclose()
