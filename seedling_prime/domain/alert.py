"""Alert models — stored alert record and its trigger condition.

The row keeps flat columns (alert_type, target_price, volume_multiplier).
`Alert.condition` turns them into a tagged union so evaluation only ever sees
the parameter that applies to the alert's kind.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from .enums import PRICE_ALERT_TYPES, AlertType, PriceDirection
from .errors import InvalidAlertError
from .types import Symbol, VolumeMultiplier

DEFAULT_VOLUME_MULTIPLIER = 2.0


class PriceCondition(BaseModel):
    """Fires when the price crosses target_price in `direction`."""

    kind: Literal["price"] = "price"
    direction: PriceDirection
    target_price: float | None = None  # None: threshold unreachable


class VolumeCondition(BaseModel):
    """Volume spike vs. average. No evaluation path yet."""

    kind: Literal["volume"] = "volume"
    multiplier: VolumeMultiplier = DEFAULT_VOLUME_MULTIPLIER


AlertCondition = Annotated[PriceCondition | VolumeCondition, Field(discriminator="kind")]


class Alert(BaseModel):
    """Alert record as read from the store."""

    id: str
    user_id: str
    symbol: Symbol
    company: str = ""
    alert_type: AlertType
    target_price: float | None = None
    volume_multiplier: float | None = None
    is_active: bool = True
    is_triggered: bool = False
    triggered_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @property
    def condition(self) -> PriceCondition | VolumeCondition:
        if self.alert_type == AlertType.VOLUME:
            return VolumeCondition(multiplier=self.volume_multiplier or DEFAULT_VOLUME_MULTIPLIER)
        direction = PriceDirection.UPPER if self.alert_type == AlertType.PRICE_UPPER else PriceDirection.LOWER
        return PriceCondition(direction=direction, target_price=self.target_price)


def validate_alert_params(
    alert_type: AlertType,
    target_price: float | None,
    volume_multiplier: float | None,
) -> tuple[float | None, float | None]:
    """Check kind-specific parameters and drop the one that does not apply.

    Returns:
        (target_price, volume_multiplier) — exactly one is set.

    Raises:
        InvalidAlertError: price alert without a positive target, or volume
            alert without a positive multiplier.
    """
    if alert_type in PRICE_ALERT_TYPES:
        if target_price is None or target_price <= 0:
            raise InvalidAlertError("Target price is required for price alerts")
        return float(target_price), None

    if volume_multiplier is None:
        volume_multiplier = DEFAULT_VOLUME_MULTIPLIER
    if volume_multiplier <= 0:
        raise InvalidAlertError("Volume multiplier is required for volume alerts")
    return None, float(volume_multiplier)
