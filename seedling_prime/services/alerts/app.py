"""Alerts job service — scheduled stock alert checks.

Airflow DAG `stock_alerts_check` posts to /jobs/check-stock-alerts every 15
minutes during US market hours. The same endpoint serves on-demand runs.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import redis
from fastapi import Depends, Response
from sqlmodel import Session

from seedling_prime.domain import ScanSummary
from seedling_prime.domain.config import get_config
from seedling_prime.infra.finnhub.client import FinnhubClient
from seedling_prime.infra.mail.mailer import SmtpMailer
from seedling_prime.infra.observability.logging import setup_logging
from seedling_prime.services.base import create_app
from seedling_prime.services.deps import get_db_session, get_finnhub_client, get_mailer, get_redis_client

from seedling_prime.services.alerts.scanner import run_alert_scan

logger = logging.getLogger(__name__)

SERVICE_NAME = "alerts-job"


# ─── Lifespan ────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app) -> AsyncIterator[None]:
    config = get_config()
    setup_logging(SERVICE_NAME, log_level=config.log_level, json_output=config.json_logs)
    if not config.finnhub.api_key:
        logger.warning("FINNHUB_API_KEY is not set; scans will resolve no quotes")
    yield


# ─── App ─────────────────────────────────────────────────────────

app = create_app(SERVICE_NAME, version="1.0.0", lifespan=lifespan, dependencies=["redis", "db"])


@app.post("/jobs/check-stock-alerts")
def check_stock_alerts(
    response: Response,
    session: Session = Depends(get_db_session),
    redis_client: redis.Redis = Depends(get_redis_client),
    finnhub: FinnhubClient = Depends(get_finnhub_client),
    mailer: SmtpMailer = Depends(get_mailer),
) -> ScanSummary:
    """Run one alert scan pass.

    Store or lock failures return success=False with HTTP 500 so the
    scheduler's retry policy applies. Per-alert failures are reported in
    `results` with HTTP 200.
    """
    try:
        return run_alert_scan(session, redis_client, finnhub, mailer)
    except Exception as e:
        logger.exception("Alert scan failed")
        response.status_code = 500
        return ScanSummary(success=False, message=str(e)[:200])
