from __future__ import annotations

import logging
from functools import lru_cache

import redis

from cuebook.application.ports.publisher import EventPublisher

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _client(redis_url: str, timeout_seconds: float) -> redis.Redis:
    return redis.Redis.from_url(
        redis_url,
        socket_connect_timeout=timeout_seconds,
        socket_timeout=timeout_seconds,
    )


class RedisEventPublisher(EventPublisher):
    """Publishes booking lifecycle envelopes to Redis pub/sub."""

    def __init__(self, redis_url: str, timeout_seconds: float = 1.0) -> None:
        self._redis_url = redis_url
        self._timeout_seconds = timeout_seconds

    def publish(self, channel: str, message: str) -> None:
        _client(self._redis_url, self._timeout_seconds).publish(channel, message)

    def is_reachable(self) -> bool:
        try:
            return bool(_client(self._redis_url, self._timeout_seconds).ping())
        except redis.RedisError:
            return False


class NullEventPublisher(EventPublisher):
    """Used when no broker is configured; events are only logged at debug level."""

    def publish(self, channel: str, message: str) -> None:
        logger.debug("event_dropped_no_broker", extra={"channel": channel})


def build_event_publisher(redis_url: str | None) -> EventPublisher:
    if redis_url:
        return RedisEventPublisher(redis_url)
    return NullEventPublisher()
