"""EmailNotifier tests — rendering and delivery via a mocked mailer."""

import zoneinfo
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from seedling_prime.domain import NotificationError, PriceAlertEmail, PriceDirection
from seedling_prime.services.alerts.notifier import (
    EmailNotifier,
    build_subject,
    build_text,
    format_timestamp,
    format_usd,
)

NY = zoneinfo.ZoneInfo("America/New_York")


def _make_email(**overrides) -> PriceAlertEmail:
    defaults = {
        "email": "ada@example.com",
        "name": "Ada",
        "symbol": "AAPL",
        "company": "Apple Inc.",
        "current_price": 160.0,
        "target_price": 150.0,
        "direction": PriceDirection.UPPER,
        "timestamp": datetime(2026, 10, 18, 19, 45, tzinfo=UTC),
    }
    defaults.update(overrides)
    return PriceAlertEmail(**defaults)


class TestFormatting:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(150, "$150.00"), (1234.5, "$1,234.50"), (0.1234, "$0.12"), (1_000_000, "$1,000,000.00")],
    )
    def test_usd(self, value, expected):
        assert format_usd(value) == expected

    def test_timestamp_new_york(self):
        ts = datetime(2026, 10, 18, 19, 45, tzinfo=UTC)
        assert format_timestamp(ts, NY) == "Oct 18, 2026, 3:45 PM"

    def test_timestamp_morning_no_padding(self):
        ts = datetime(2026, 1, 5, 14, 5, tzinfo=UTC)
        assert format_timestamp(ts, NY) == "Jan 5, 2026, 9:05 AM"

    def test_naive_timestamp_taken_as_utc(self):
        assert format_timestamp(datetime(2026, 10, 18, 16, 0), NY) == "Oct 18, 2026, 12:00 PM"

    def test_subject_upper(self):
        assert build_subject(_make_email()) == "Price Alert: AAPL Above $150.00"

    def test_subject_lower(self):
        email = _make_email(direction=PriceDirection.LOWER, current_price=95.0, target_price=100.0)
        assert build_subject(email) == "Price Alert: AAPL Below $100.00"

    def test_text_upper(self):
        assert build_text(_make_email()) == (
            "AAPL has reached above your target price of $150.00. Current price: $160.00"
        )

    def test_text_lower(self):
        email = _make_email(direction=PriceDirection.LOWER, current_price=95.5, target_price=100.0)
        assert build_text(email) == "AAPL has dropped below your target price of $100.00. Current price: $95.50"


class TestSendPriceAlert:
    def test_sends_rendered_message(self):
        mailer = MagicMock()
        mailer.send.return_value = "<id@seedling.test>"
        notifier = EmailNotifier(mailer, display_timezone="America/New_York")

        message_id = notifier.send_price_alert(_make_email())

        assert message_id == "<id@seedling.test>"
        to, subject, text, html = mailer.send.call_args.args
        assert to == "ada@example.com"
        assert subject == "Price Alert: AAPL Above $150.00"
        assert "Current price: $160.00" in text
        assert "Hi Ada" in html
        assert "risen above" in html
        assert "Oct 18, 2026, 3:45 PM" in html

    def test_lower_template(self):
        mailer = MagicMock()
        EmailNotifier(mailer).send_price_alert(
            _make_email(direction=PriceDirection.LOWER, current_price=95.0, target_price=100.0)
        )
        html = mailer.send.call_args.args[3]
        assert "dropped below" in html
        assert "Price Below Target" in html

    def test_html_escapes_user_fields(self):
        mailer = MagicMock()
        EmailNotifier(mailer).send_price_alert(_make_email(name="<script>", company="A&B Corp"))
        html = mailer.send.call_args.args[3]
        assert "<script>" not in html
        assert "A&amp;B Corp" in html

    def test_transport_failure_propagates(self):
        mailer = MagicMock()
        mailer.send.side_effect = NotificationError("smtp down")

        with pytest.raises(NotificationError):
            EmailNotifier(mailer).send_price_alert(_make_email())
