"""SQLModel table definitions — single source of truth for the DB schema.

Tables map 1:1 onto the domain models in seedling_prime.domain, with DB-only
fields (created_at/updated_at) added.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Index
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return uuid.uuid4().hex


# ─── Users ───────────────────────────────────────────────────────


class UserDB(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(primary_key=True, max_length=64)
    email: str | None = Field(default=None, max_length=255)
    name: str | None = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=_utcnow)


# ─── Alerts ──────────────────────────────────────────────────────


class AlertDB(SQLModel, table=True):
    __tablename__ = "alerts"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=32)
    user_id: str = Field(max_length=64, index=True)
    symbol: str = Field(max_length=20)  # always uppercase
    company: str = Field(max_length=200)
    alert_type: str = Field(max_length=20)  # price_upper | price_lower | volume
    target_price: float | None = None
    volume_multiplier: float | None = None
    is_active: bool = Field(default=True)
    is_triggered: bool = Field(default=False)
    triggered_at: datetime | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    __table_args__ = (
        Index("ix_alerts_user_symbol", "user_id", "symbol"),
        Index("ix_alerts_active_triggered", "is_active", "is_triggered"),
    )
