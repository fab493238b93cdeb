"""E2E fixtures — mock Finnhub over httpx.MockTransport, captured SMTP,
FakeRedis and SQLite in-memory DB (from tests/conftest.py).

The whole pipeline runs with its real collaborators: FinnhubClient,
QuoteFetcher, TypedCache, EmailNotifier, SmtpMailer and the repositories.
"""

from __future__ import annotations

import os
import smtplib
from dataclasses import dataclass, field
from email import message_from_string
from email.message import Message
from unittest.mock import patch

import httpx
import pytest

from seedling_prime.infra.finnhub.client import FinnhubClient
from seedling_prime.infra.mail.mailer import SmtpMailer

# ---------------------------------------------------------------------------
# Config patching
# ---------------------------------------------------------------------------

_TEST_ENV = {
    "APP_ENV": "test",
    "FINNHUB_API_KEY": "test-key",
    "FINNHUB_BASE_URL": "http://finnhub.mock",
    "MAIL_SMTP_HOST": "smtp.mock",
    "MAIL_SMTP_PORT": "2525",
    "MAIL_USERNAME": "alerts@seedling.test",
    "MAIL_PASSWORD": "pw",
    "ALERTS_QUOTE_MAX_WORKERS": "4",
    "ALERTS_DISPLAY_TIMEZONE": "America/New_York",
}


@pytest.fixture(autouse=True)
def _patch_env():
    with patch.dict(os.environ, _TEST_ENV, clear=False):
        yield


# ---------------------------------------------------------------------------
# Mock Finnhub
# ---------------------------------------------------------------------------


@dataclass
class FinnhubState:
    """Mutable upstream state — tests set prices and failures directly."""

    prices: dict[str, float] = field(default_factory=dict)
    failing: set[str] = field(default_factory=set)
    requests: list[str] = field(default_factory=list)


def create_mock_transport(state: FinnhubState) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path != "/quote":
            return httpx.Response(404, json={"error": "not found"})
        if request.url.params.get("token") != "test-key":
            return httpx.Response(401, json={"error": "Invalid API key"})

        symbol = request.url.params["symbol"]
        state.requests.append(symbol)
        if symbol in state.failing:
            return httpx.Response(500, json={"error": "upstream error"})

        price = state.prices.get(symbol, 0)
        return httpx.Response(
            200,
            json={"c": price, "d": 0, "dp": 0, "h": price, "l": price, "o": price, "pc": price, "t": 1760816700},
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def finnhub_state() -> FinnhubState:
    return FinnhubState()


@pytest.fixture
def finnhub_client(finnhub_state: FinnhubState) -> FinnhubClient:
    """FinnhubClient over MockTransport (no network)."""
    client = FinnhubClient()
    client._client.close()
    client._client = httpx.Client(transport=create_mock_transport(finnhub_state), base_url="http://finnhub.mock")
    yield client
    client.close()


# ---------------------------------------------------------------------------
# Captured SMTP
# ---------------------------------------------------------------------------


class SmtpOutbox:
    """Records delivered messages; addresses in `reject` raise SMTPRecipientsRefused."""

    def __init__(self):
        self.messages: list[Message] = []
        self.reject: set[str] = set()

    def to(self, address: str) -> list[Message]:
        return [m for m in self.messages if m["To"] == address]


@pytest.fixture
def outbox() -> SmtpOutbox:
    box = SmtpOutbox()

    class _FakeSMTP:
        def __init__(self, host, port, timeout=None):
            self.host = host
            self.port = port

        def __enter__(self):
            return self

        def __exit__(self, *args):
            return False

        def starttls(self):
            pass

        def login(self, username, password):
            pass

        def sendmail(self, from_addr, to_addrs, raw):
            refused = {a: (550, b"rejected") for a in to_addrs if a in box.reject}
            if refused:
                raise smtplib.SMTPRecipientsRefused(refused)
            box.messages.append(message_from_string(raw))

    with patch("seedling_prime.infra.mail.mailer.smtplib.SMTP", _FakeSMTP):
        yield box


@pytest.fixture
def mailer(outbox: SmtpOutbox) -> SmtpMailer:
    return SmtpMailer()
