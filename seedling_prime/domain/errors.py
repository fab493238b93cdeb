"""Alert pipeline exceptions."""


class AlertError(Exception):
    """Base class for alert pipeline errors."""


class InvalidAlertError(AlertError):
    """Alert parameters do not match its kind (missing/non-positive target or multiplier)."""


class AlertNotFoundError(AlertError):
    """No alert with the given id (or not owned by the given user)."""

    def __init__(self, alert_id: str):
        super().__init__(f"Alert not found: {alert_id}")
        self.alert_id = alert_id


class AlertAlreadyTriggeredError(AlertError):
    """Conditional commit lost: the alert is no longer eligible."""

    def __init__(self, alert_id: str):
        super().__init__(f"Alert already triggered or inactive: {alert_id}")
        self.alert_id = alert_id


class QuoteFetchError(AlertError):
    """Upstream quote lookup failed for one symbol."""


class NotificationError(AlertError):
    """Outbound notification could not be delivered."""
