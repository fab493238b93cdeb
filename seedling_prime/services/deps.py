"""FastAPI Depends factories shared by the services.

Usage:
    from seedling_prime.services.deps import get_db_session, get_redis_client

    @app.post("/jobs/check-stock-alerts")
    def check(session: Session = Depends(get_db_session)):
        ...
"""

from collections.abc import Generator
from functools import lru_cache

import redis
from sqlmodel import Session

from seedling_prime.infra.database.engine import get_session
from seedling_prime.infra.finnhub.client import FinnhubClient
from seedling_prime.infra.mail.mailer import SmtpMailer
from seedling_prime.infra.redis.client import get_redis


def get_db_session() -> Generator[Session, None, None]:
    """Request-scoped DB session."""
    yield from get_session()


def get_redis_client() -> redis.Redis:
    return get_redis()


@lru_cache
def get_finnhub_client() -> FinnhubClient:
    """Finnhub HTTP client (singleton)."""
    return FinnhubClient()


@lru_cache
def get_mailer() -> SmtpMailer:
    return SmtpMailer()
