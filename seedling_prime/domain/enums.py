"""Enumerations shared across the alert pipeline."""

from enum import StrEnum


class AlertType(StrEnum):
    """Kind of alert as stored on the alert row."""

    PRICE_UPPER = "price_upper"
    PRICE_LOWER = "price_lower"
    VOLUME = "volume"  # recognized, no evaluation path (quote source has no volume)


class PriceDirection(StrEnum):
    """Which side of the target a price alert fires on."""

    UPPER = "upper"
    LOWER = "lower"


PRICE_ALERT_TYPES = frozenset({AlertType.PRICE_UPPER, AlertType.PRICE_LOWER})
