"""seedling-prime domain models — contracts shared by the alert pipeline.

Usage:
    from seedling_prime.domain import Alert, AlertType, Quote
    from seedling_prime.domain.config import AppConfig
"""

# --- Types ---
from .types import PositivePrice, Symbol, VolumeMultiplier

# --- Enums ---
from .enums import PRICE_ALERT_TYPES, AlertType, PriceDirection

# --- Errors ---
from .errors import (
    AlertAlreadyTriggeredError,
    AlertError,
    AlertNotFoundError,
    InvalidAlertError,
    NotificationError,
    QuoteFetchError,
)

# --- Alert ---
from .alert import (
    DEFAULT_VOLUME_MULTIPLIER,
    Alert,
    AlertCondition,
    PriceCondition,
    VolumeCondition,
    validate_alert_params,
)

# --- Quote ---
from .quote import Quote

# --- User ---
from .user import UserContact

# --- Notification ---
from .notification import AlertOutcome, PriceAlertEmail, ScanSummary

# --- Health ---
from .health import DependencyHealth, HealthStatus

__all__ = [
    # Types
    "Symbol",
    "PositivePrice",
    "VolumeMultiplier",
    # Enums
    "AlertType",
    "PriceDirection",
    "PRICE_ALERT_TYPES",
    # Errors
    "AlertError",
    "InvalidAlertError",
    "AlertNotFoundError",
    "AlertAlreadyTriggeredError",
    "QuoteFetchError",
    "NotificationError",
    # Alert
    "Alert",
    "AlertCondition",
    "PriceCondition",
    "VolumeCondition",
    "DEFAULT_VOLUME_MULTIPLIER",
    "validate_alert_params",
    # Quote
    "Quote",
    # User
    "UserContact",
    # Notification
    "PriceAlertEmail",
    "AlertOutcome",
    "ScanSummary",
    # Health
    "DependencyHealth",
    "HealthStatus",
]
