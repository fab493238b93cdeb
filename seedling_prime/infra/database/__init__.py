"""Database infrastructure — SQLModel engine, session, table models, repositories."""

from .engine import get_engine, get_session
from .models import AlertDB, UserDB
from .repositories import AlertRepository, UserRepository

__all__ = [
    "get_engine",
    "get_session",
    "AlertDB",
    "UserDB",
    "AlertRepository",
    "UserRepository",
]
