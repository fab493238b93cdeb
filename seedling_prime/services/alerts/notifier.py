"""Price alert email — rendering and delivery through SmtpMailer."""

import logging
import zoneinfo
from datetime import UTC, datetime

from seedling_prime.domain import NotificationError, PriceAlertEmail, PriceDirection
from seedling_prime.domain.config import get_config
from seedling_prime.infra.mail.mailer import SmtpMailer
from seedling_prime.infra.mail.templates import render_price_alert_html

logger = logging.getLogger(__name__)


def format_usd(value: float) -> str:
    """1234.5 -> "$1,234.50"."""
    return f"${value:,.2f}"


def format_timestamp(ts: datetime, tz: zoneinfo.ZoneInfo) -> str:
    """Medium date, short time: "Oct 18, 2026, 3:45 PM". Naive input is taken as UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    local = ts.astimezone(tz)
    hour = local.hour % 12 or 12
    return f"{local:%b} {local.day}, {local.year}, {hour}:{local:%M} {local:%p}"


def build_subject(alert: PriceAlertEmail) -> str:
    side = "Above" if alert.direction == PriceDirection.UPPER else "Below"
    return f"Price Alert: {alert.symbol} {side} {format_usd(alert.target_price)}"


def build_text(alert: PriceAlertEmail) -> str:
    movement = "reached above" if alert.direction == PriceDirection.UPPER else "dropped below"
    return (
        f"{alert.symbol} has {movement} your target price of {format_usd(alert.target_price)}. "
        f"Current price: {format_usd(alert.current_price)}"
    )


class EmailNotifier:
    """Sends one email per triggered price alert.

    Usage:
        notifier = EmailNotifier(SmtpMailer())
        message_id = notifier.send_price_alert(PriceAlertEmail(...))
    """

    def __init__(self, mailer: SmtpMailer, *, display_timezone: str | None = None):
        self._mailer = mailer
        self._tz = zoneinfo.ZoneInfo(display_timezone or get_config().alerts.display_timezone)

    def send_price_alert(self, alert: PriceAlertEmail) -> str:
        """Render and send. Returns the transport's message id.

        Raises:
            NotificationError: the transport could not deliver the message.
        """
        html = render_price_alert_html(
            upper=alert.direction == PriceDirection.UPPER,
            name=alert.name,
            symbol=alert.symbol,
            company=alert.company,
            current_price=format_usd(alert.current_price),
            target_price=format_usd(alert.target_price),
            timestamp=format_timestamp(alert.timestamp, self._tz),
        )
        try:
            message_id = self._mailer.send(alert.email, build_subject(alert), build_text(alert), html)
        except NotificationError:
            logger.error("[%s] Price alert email failed: to=%s", alert.symbol, alert.email)
            raise

        logger.info(
            "[%s] Price alert email sent: to=%s direction=%s id=%s",
            alert.symbol,
            alert.email,
            alert.direction,
            message_id,
        )
        return message_id
