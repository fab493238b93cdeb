"""Alert scan orchestrator — one pass over every eligible alert.

Stages:
  1. Load eligible alerts
  2. Reduce to distinct symbols
  3. Fetch quotes (one batch call)
  4. Evaluate each alert against its symbol's price
  5. Notify, then mark triggered (per alert, isolated)

A failed notification leaves the alert eligible so the next pass retries it.
A failed user lookup is reported per alert. A failed trigger commit aborts
the pass and propagates to the caller.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime

import redis
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from seedling_prime.domain import (
    Alert,
    AlertAlreadyTriggeredError,
    AlertNotFoundError,
    AlertOutcome,
    PriceAlertEmail,
    PriceCondition,
    Quote,
    ScanSummary,
)
from seedling_prime.domain.config import get_config
from seedling_prime.infra.database.repositories import AlertRepository, UserRepository
from seedling_prime.infra.finnhub.client import FinnhubClient
from seedling_prime.infra.mail.mailer import SmtpMailer
from seedling_prime.infra.observability.logging import scan_context
from seedling_prime.infra.redis.lock import redis_lock

from seedling_prime.services.alerts.evaluator import has_reachable_target, is_supported, should_trigger
from seedling_prime.services.alerts.notifier import EmailNotifier
from seedling_prime.services.alerts.quotes import QuoteFetcher

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AlertScanner:
    """Runs the evaluation pipeline against one DB session.

    Usage:
        scanner = AlertScanner(session, QuoteFetcher(finnhub, redis), EmailNotifier(mailer))
        summary = scanner.run()
    """

    def __init__(
        self,
        session: Session,
        fetcher: QuoteFetcher,
        notifier: EmailNotifier,
        *,
        clock: Callable[[], datetime] = _utcnow,
        dry_run: bool = False,
    ):
        self._session = session
        self._fetcher = fetcher
        self._notifier = notifier
        self._clock = clock
        self._dry_run = dry_run

    def run(self) -> ScanSummary:
        # --- Stage 1: Load ---
        alerts = self._load_alerts()
        if not alerts:
            logger.info("No active alerts to check")
            return ScanSummary(message="No active alerts to check")

        # --- Stage 2: Symbol reduction ---
        symbols = {a.symbol for a in alerts}

        # --- Stage 3: Quote fetch ---
        quotes = self._fetcher.fetch(symbols)
        logger.info(
            "Alert scan: %d alerts, %d symbols, %d quotes",
            len(alerts),
            len(symbols),
            len(quotes),
        )

        # --- Stage 4: Evaluate ---
        skipped = 0
        triggered: list[tuple[Alert, Quote]] = []
        for alert in alerts:
            quote = quotes.get(alert.symbol)
            if quote is None:
                logger.info("[%s] No quote, skipping alert %s", alert.symbol, alert.id)
                skipped += 1
                continue
            if not is_supported(alert):
                logger.info("[%s] %s alerts are not evaluated, skipping %s", alert.symbol, alert.alert_type, alert.id)
                skipped += 1
                continue
            if should_trigger(alert, quote.current_price):
                logger.info(
                    "[%s] Alert %s triggered: %s target=%s current=%.2f",
                    alert.symbol,
                    alert.id,
                    alert.alert_type,
                    alert.target_price,
                    quote.current_price,
                )
                triggered.append((alert, quote))

        # --- Stage 5: Notify & commit ---
        if self._dry_run:
            logger.info("Dry run: %d alerts would be notified", len(triggered))
            results = []
        else:
            results = [self._notify_and_commit(alert, quote) for alert, quote in triggered]

        summary = ScanSummary(
            message=f"Checked {len(alerts)} alerts, triggered {len(triggered)}",
            alerts_checked=len(alerts),
            symbols_fetched=len(symbols),
            quotes_resolved=len(quotes),
            alerts_skipped=skipped,
            alerts_triggered=len(triggered),
            results=results,
        )
        logger.info(
            "Alert scan complete: checked=%d triggered=%d notified=%d failed=%d skipped=%d",
            summary.alerts_checked,
            summary.alerts_triggered,
            summary.notified,
            summary.failed,
            summary.alerts_skipped,
        )
        return summary

    def _load_alerts(self) -> list[Alert]:
        alerts: list[Alert] = []
        for row in AlertRepository.list_eligible(self._session):
            try:
                alerts.append(Alert.model_validate(row))
            except ValidationError as e:
                logger.warning("Unreadable alert row %s: %s", row.id, e)
        return alerts

    def _notify_and_commit(self, alert: Alert, quote: Quote) -> AlertOutcome:
        """Notify the owner, then commit the trigger.

        Failures before the commit are reported per alert and leave it eligible.
        Only a failed commit raises.
        """
        condition = alert.condition
        if not isinstance(condition, PriceCondition) or not has_reachable_target(condition):
            logger.warning("[%s] Alert %s has no notifiable condition", alert.symbol, alert.id)
            return AlertOutcome(alert_id=alert.id, symbol=alert.symbol, success=False, error="unsupported_condition")

        try:
            contact = UserRepository.get_contact(self._session, alert.user_id)
        except SQLAlchemyError:
            logger.exception("[%s] User lookup failed for alert %s", alert.symbol, alert.id)
            self._session.rollback()
            return AlertOutcome(alert_id=alert.id, symbol=alert.symbol, success=False, error="user_lookup_failed")
        if contact is None:
            logger.warning("[%s] No email for user %s, alert %s left active", alert.symbol, alert.user_id, alert.id)
            return AlertOutcome(alert_id=alert.id, symbol=alert.symbol, success=False, error="user_not_found")

        try:
            self._notifier.send_price_alert(
                PriceAlertEmail(
                    email=contact.email,
                    name=contact.name,
                    symbol=alert.symbol,
                    company=alert.company,
                    current_price=quote.current_price,
                    target_price=condition.target_price,
                    direction=condition.direction,
                    timestamp=self._clock(),
                )
            )
        except Exception as e:
            logger.exception("[%s] Failed to notify alert %s", alert.symbol, alert.id)
            return AlertOutcome(alert_id=alert.id, symbol=alert.symbol, success=False, error=str(e)[:200])

        try:
            AlertRepository.mark_triggered(self._session, alert.id, now=self._clock())
        except AlertAlreadyTriggeredError:
            logger.warning("[%s] Alert %s already triggered by another pass", alert.symbol, alert.id)
            return AlertOutcome(alert_id=alert.id, symbol=alert.symbol, success=False, error="already_triggered")
        except AlertNotFoundError:
            logger.warning("[%s] Alert %s deleted during the pass", alert.symbol, alert.id)
            return AlertOutcome(alert_id=alert.id, symbol=alert.symbol, success=False, error="alert_not_found")
        return AlertOutcome(alert_id=alert.id, symbol=alert.symbol, success=True)


# ─── Single-flight entry point ───────────────────────────────────

SCAN_LOCK_KEY = "lock:alert-scan"


def run_alert_scan(
    session: Session,
    redis_client: redis.Redis,
    finnhub: FinnhubClient,
    mailer: SmtpMailer,
    *,
    dry_run: bool = False,
) -> ScanSummary:
    """One pass under the Redis scan lock.

    The pass id tags its log records and owns the lock key.
    Returns a failed summary without scanning when another pass holds the lock.
    Database errors propagate.
    """
    config = get_config().alerts
    scan_id = uuid.uuid4().hex[:12]
    with scan_context(scan_id, dry_run=dry_run):
        with redis_lock(redis_client, SCAN_LOCK_KEY, ttl=config.scan_lock_ttl, token=scan_id) as acquired:
            if not acquired:
                return ScanSummary(success=False, message="Alert scan already running")

            scanner = AlertScanner(
                session,
                QuoteFetcher(finnhub, redis_client),
                EmailNotifier(mailer, display_timezone=config.display_timezone),
                dry_run=dry_run,
            )
            return scanner.run()
