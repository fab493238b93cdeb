"""TypedCache — Redis cache keyed by Pydantic models.

Usage:
    from seedling_prime.domain import Quote
    cache = TypedCache(redis_client, "quote:AAPL", Quote, ttl=900)
    cache.set(quote)
    q = cache.get()  # -> Quote | None
"""

import logging
from typing import Generic, TypeVar

import redis
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class TypedCache(Generic[T]):
    """Redis string cache that round-trips a Pydantic model as JSON."""

    def __init__(
        self,
        client: redis.Redis,
        key: str,
        model_class: type[T],
        ttl: int | None = None,
    ):
        self._client = client
        self._key = key
        self._model_class = model_class
        self._ttl = ttl

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> T | None:
        """Read the cached value. None when missing or unparsable."""
        raw = self._client.get(self._key)
        if raw is None:
            return None
        try:
            return self._model_class.model_validate_json(raw)
        except ValidationError:
            logger.warning("Cache parse failed for key=%s", self._key)
            return None

    def set(self, value: T) -> None:
        data = value.model_dump_json()
        if self._ttl:
            self._client.setex(self._key, self._ttl, data)
        else:
            self._client.set(self._key, data)

    def delete(self) -> None:
        self._client.delete(self._key)

    def exists(self) -> bool:
        return bool(self._client.exists(self._key))
