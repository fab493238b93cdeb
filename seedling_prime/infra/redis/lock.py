"""Single-flight lock — SET NX EX on a Redis key, owned by a token.

Usage:
    with redis_lock(get_redis(), "lock:alert-scan", ttl=600) as acquired:
        if not acquired:
            return
        ...
"""

import contextlib
import logging
import uuid
from collections.abc import Iterator

import redis

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def redis_lock(client: redis.Redis, key: str, ttl: int, token: str | None = None) -> Iterator[bool]:
    """Yield True when the lock was taken, False when another holder has it.

    The key holds the holder's token. The TTL bounds a crashed holder, and
    release only deletes the key while it still holds this token, so a holder
    that outlived its TTL cannot drop a lock taken by the next one.
    """
    token = token or uuid.uuid4().hex
    acquired = bool(client.set(key, token, nx=True, ex=ttl))
    if not acquired:
        logger.info("Lock %s held by another process", key)
    try:
        yield acquired
    finally:
        if acquired:
            with contextlib.suppress(redis.RedisError):
                _release(client, key, token)


def _release(client: redis.Redis, key: str, token: str) -> None:
    with client.pipeline() as pipe:
        pipe.watch(key)
        held = pipe.get(key)
        if isinstance(held, bytes):
            held = held.decode()
        if held != token:
            pipe.unwatch()
            logger.warning("Lock %s expired and was taken over, not releasing", key)
            return
        pipe.multi()
        pipe.delete(key)
        pipe.execute()
