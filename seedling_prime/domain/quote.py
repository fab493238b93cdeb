"""Market quote model — one symbol's snapshot at fetch time."""

from datetime import datetime

from pydantic import BaseModel

from .types import Symbol


class Quote(BaseModel):
    """Finnhub /quote response, renamed. Never persisted in the DB."""

    symbol: Symbol
    current_price: float
    change: float = 0.0
    percent_change: float = 0.0
    high: float = 0.0
    low: float = 0.0
    open: float = 0.0
    previous_close: float = 0.0
    timestamp: datetime | None = None

    @property
    def has_data(self) -> bool:
        """Finnhub returns c=0 for unknown or halted symbols."""
        return self.current_price != 0
