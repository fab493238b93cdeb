"""Alert notification and scan result models."""

from datetime import datetime

from pydantic import BaseModel

from .enums import PriceDirection
from .types import PositivePrice


class PriceAlertEmail(BaseModel):
    """Everything the notifier needs to render one price alert email."""

    email: str
    name: str
    symbol: str
    company: str
    current_price: PositivePrice
    target_price: PositivePrice
    direction: PriceDirection
    timestamp: datetime


class AlertOutcome(BaseModel):
    """Notify + commit result for one triggered alert."""

    alert_id: str
    symbol: str
    success: bool
    error: str | None = None


class ScanSummary(BaseModel):
    """Result of one alert scan pass."""

    success: bool = True
    message: str = ""
    alerts_checked: int = 0
    symbols_fetched: int = 0
    quotes_resolved: int = 0
    alerts_skipped: int = 0
    alerts_triggered: int = 0
    results: list[AlertOutcome] = []

    @property
    def notified(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)
