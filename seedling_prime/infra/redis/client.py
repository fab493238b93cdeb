"""Redis client for the scan lock and the quote cache."""

from functools import lru_cache

import redis

from seedling_prime.domain.config import RedisConfig, get_config


def build_redis(config: RedisConfig) -> redis.Redis:
    """Client with string replies. Connects lazily on first command.

    A connection idle longer than `health_check_interval` is pinged before
    reuse, since scans run 15 minutes apart and the server may have closed it.
    """
    return redis.Redis.from_url(
        config.url,
        decode_responses=True,
        socket_connect_timeout=config.connect_timeout,
        socket_timeout=config.socket_timeout,
        health_check_interval=config.health_check_interval,
        retry_on_timeout=True,
    )


@lru_cache
def get_redis() -> redis.Redis:
    """Process-wide client. Tests call get_redis.cache_clear() to rebuild it."""
    return build_redis(get_config().redis)
