"""Quote fetcher — one batch of distinct symbols, resolved in parallel.

Each symbol is looked up independently; any failure drops that symbol only.
Resolved quotes are cached in Redis (``quote:{SYMBOL}``) so back-to-back passes
do not hit Finnhub again inside the TTL.
"""

import contextvars
import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

import redis

from seedling_prime.domain import Quote
from seedling_prime.domain.config import get_config
from seedling_prime.infra.finnhub.client import FinnhubClient
from seedling_prime.infra.redis.cache import TypedCache

logger = logging.getLogger(__name__)

QUOTE_CACHE_PREFIX = "quote:"


class QuoteFetcher:
    """Batch quote lookup over FinnhubClient.

    Usage:
        fetcher = QuoteFetcher(FinnhubClient(), get_redis())
        quotes = fetcher.fetch({"AAPL", "MSFT"})  # -> {"AAPL": Quote, ...}
    """

    def __init__(
        self,
        client: FinnhubClient,
        redis_client: redis.Redis | None = None,
        *,
        max_workers: int | None = None,
        cache_ttl: int | None = None,
    ):
        config = get_config().alerts
        self._client = client
        self._redis = redis_client
        self._max_workers = max_workers or config.quote_max_workers
        self._cache_ttl = cache_ttl if cache_ttl is not None else config.quote_cache_ttl

    def fetch(self, symbols: Iterable[str]) -> dict[str, Quote]:
        """Resolve every symbol that has a usable price.

        Returns:
            Partial mapping symbol -> Quote. Symbols that failed or came back
            with no price are absent.
        """
        wanted = sorted({s.strip().upper() for s in symbols if s and s.strip()})
        if not wanted:
            return {}

        if not self._client.has_api_key:
            logger.error("FINNHUB_API_KEY not configured, skipping quote fetch for %d symbols", len(wanted))
            return {}

        quotes: dict[str, Quote] = {}

        def fetch_one(symbol: str) -> tuple[str, Quote | None]:
            cached = self._cache_get(symbol)
            if cached is not None:
                return symbol, cached
            try:
                quote = self._client.get_quote(symbol)
            except Exception as e:
                logger.warning("[%s] quote failed: %s", symbol, e)
                return symbol, None
            if quote is not None:
                self._cache_set(quote)
            return symbol, quote

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(wanted))) as pool:
            # each lookup logs under the caller's bound scan context
            futures = [pool.submit(contextvars.copy_context().run, fetch_one, symbol) for symbol in wanted]
            for future in futures:
                symbol, quote = future.result()
                if quote is not None and quote.has_data:
                    quotes[symbol] = quote

        logger.info("Quotes resolved: %d/%d", len(quotes), len(wanted))
        return quotes

    # --- Cache ---

    def _cache(self, symbol: str) -> TypedCache[Quote] | None:
        if self._redis is None or not self._cache_ttl:
            return None
        return TypedCache(self._redis, f"{QUOTE_CACHE_PREFIX}{symbol}", Quote, ttl=self._cache_ttl)

    def _cache_get(self, symbol: str) -> Quote | None:
        cache = self._cache(symbol)
        if cache is None:
            return None
        try:
            return cache.get()
        except redis.RedisError as e:
            logger.warning("[%s] quote cache read failed: %s", symbol, e)
            return None

    def _cache_set(self, quote: Quote) -> None:
        cache = self._cache(quote.symbol)
        if cache is None:
            return
        try:
            cache.set(quote)
        except redis.RedisError as e:
            logger.warning("[%s] quote cache write failed: %s", quote.symbol, e)
