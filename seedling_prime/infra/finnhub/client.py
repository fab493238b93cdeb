"""Finnhub HTTP client — /quote endpoint mapped onto the Quote domain model.

Finnhub answers unknown or halted symbols with HTTP 200 and ``c = 0``; that
sentinel is treated as "no data".
"""

import logging
from datetime import UTC, datetime

import httpx
from pydantic import ValidationError

from seedling_prime.domain import Quote, QuoteFetchError
from seedling_prime.domain.config import get_config

logger = logging.getLogger(__name__)

HEALTH_CHECK_SYMBOL = "AAPL"


class FinnhubClient:
    """Finnhub REST client.

    Usage:
        with FinnhubClient() as client:
            quote = client.get_quote("AAPL")  # -> Quote | None
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        config = get_config().finnhub
        self._api_key = api_key if api_key is not None else config.api_key
        self._base_url = (base_url or config.base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else config.timeout
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=self._timeout,
            headers={"Accept": "application/json"},
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def get_quote(self, symbol: str) -> Quote | None:
        """Current quote for one symbol.

        Returns:
            Quote, or None when Finnhub has no price for the symbol.

        Raises:
            httpx.HTTPError: transport failure, timeout or non-2xx status.
            QuoteFetchError: payload is not a Finnhub quote object.
        """
        symbol = symbol.strip().upper()
        resp = self._client.get("/quote", params={"symbol": symbol, "token": self._api_key})
        resp.raise_for_status()

        data = resp.json()
        if not isinstance(data, dict) or data.get("c") is None:
            raise QuoteFetchError(f"Malformed quote payload for {symbol}")

        try:
            quote = Quote(
                symbol=symbol,
                current_price=data["c"],
                change=data.get("d") or 0.0,
                percent_change=data.get("dp") or 0.0,
                high=data.get("h") or 0.0,
                low=data.get("l") or 0.0,
                open=data.get("o") or 0.0,
                previous_close=data.get("pc") or 0.0,
                timestamp=datetime.fromtimestamp(data["t"], tz=UTC) if data.get("t") else None,
            )
        except (ValidationError, TypeError, ValueError, OverflowError, OSError) as e:
            raise QuoteFetchError(f"Malformed quote payload for {symbol}: {e}") from e

        if not quote.has_data:
            logger.debug("[%s] Finnhub returned no price", symbol)
            return None
        return quote

    def health(self) -> bool:
        """Finnhub reachable and the API key accepted."""
        if not self._api_key:
            return False
        try:
            resp = self._client.get("/quote", params={"symbol": HEALTH_CHECK_SYMBOL, "token": self._api_key})
            return resp.status_code == 200
        except httpx.HTTPError:
            return False

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
