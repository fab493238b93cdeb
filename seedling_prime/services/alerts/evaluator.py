"""Condition evaluator — pure functions over one alert and one price sample.

No hysteresis: a single sample at or beyond the threshold fires.
"""

from seedling_prime.domain import Alert, PriceCondition, PriceDirection


def is_supported(alert: Alert) -> bool:
    """False for kinds that have no evaluation path (volume)."""
    return isinstance(alert.condition, PriceCondition)


def has_reachable_target(condition: PriceCondition) -> bool:
    """A missing or non-positive target can never be notified on."""
    return condition.target_price is not None and condition.target_price > 0


def should_trigger(alert: Alert, current_price: float) -> bool:
    """Whether `current_price` satisfies the alert's condition.

    price_upper: current >= target. price_lower: current <= target.
    A price alert without a positive target and any volume alert never fire.
    """
    condition = alert.condition
    if not isinstance(condition, PriceCondition):
        return False
    if not has_reachable_target(condition):
        return False
    if condition.direction == PriceDirection.UPPER:
        return current_price >= condition.target_price
    return current_price <= condition.target_price
