"""Shared fixtures — config cache, SQLite in-memory DB, FakeRedis."""

from collections.abc import Iterator
from datetime import UTC, datetime
from unittest.mock import patch

import fakeredis
import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from seedling_prime.domain.config import get_config
from seedling_prime.infra.database.engine import get_engine
from seedling_prime.infra.database.models import AlertDB, UserDB


@pytest.fixture(autouse=True)
def _clear_config_cache():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


# ---------------------------------------------------------------------------
# SQLite in-memory DB
# ---------------------------------------------------------------------------


@pytest.fixture
def test_engine():
    """SQLite in-memory engine shared across threads; patched into get_engine."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    get_engine.cache_clear()
    with patch("seedling_prime.infra.database.engine.get_engine", return_value=engine):
        yield engine
    get_engine.cache_clear()
    engine.dispose()


@pytest.fixture
def session(test_engine) -> Iterator[Session]:
    with Session(test_engine) as s:
        yield s


@pytest.fixture
def make_user(session: Session):
    """Insert a user row."""

    def _factory(user_id: str = "u1", email: str | None = "u1@example.com", name: str | None = "Ada") -> UserDB:
        user = UserDB(id=user_id, email=email, name=name)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _factory


@pytest.fixture
def make_alert(session: Session):
    """Insert an alert row directly, bypassing parameter validation."""

    def _factory(
        alert_id: str | None = None,
        user_id: str = "u1",
        symbol: str = "AAPL",
        alert_type: str = "price_upper",
        target_price: float | None = 150.0,
        volume_multiplier: float | None = None,
        is_active: bool = True,
        is_triggered: bool = False,
        created_at: datetime | None = None,
    ) -> AlertDB:
        kwargs = {}
        if alert_id:
            kwargs["id"] = alert_id
        if created_at:
            kwargs["created_at"] = created_at
        alert = AlertDB(
            user_id=user_id,
            symbol=symbol,
            company=f"{symbol} Inc.",
            alert_type=alert_type,
            target_price=target_price,
            volume_multiplier=volume_multiplier,
            is_active=is_active,
            is_triggered=is_triggered,
            triggered_at=datetime.now(UTC) if is_triggered else None,
            **kwargs,
        )
        session.add(alert)
        session.commit()
        session.refresh(alert)
        return alert

    return _factory


# ---------------------------------------------------------------------------
# FakeRedis
# ---------------------------------------------------------------------------


@pytest.fixture
def test_redis() -> Iterator[fakeredis.FakeRedis]:
    r = fakeredis.FakeRedis(version=(7,), decode_responses=True)
    yield r
    r.flushall()
    r.close()
