"""Redis infrastructure — client, typed cache, single-flight lock."""

from .cache import TypedCache
from .client import build_redis, get_redis
from .lock import redis_lock

__all__ = [
    "build_redis",
    "get_redis",
    "TypedCache",
    "redis_lock",
]
