"""SQLModel engine & session factory."""

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy import event
from sqlmodel import Session, create_engine

from seedling_prime.domain.config import get_config


@lru_cache
def get_engine():
    """Process-wide SQLAlchemy Engine (singleton).

    Tests call get_engine.cache_clear() and patch in their own engine.
    """
    config = get_config()
    url = config.db.url
    if url.startswith("sqlite"):
        return create_engine(url, echo=config.debug, connect_args={"check_same_thread": False})

    engine = create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        echo=config.debug,
    )

    # MySQL: force utf8mb4 (company names)
    @event.listens_for(engine, "connect")
    def _set_charset(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("SET NAMES utf8mb4")
        cursor.close()

    return engine


def get_session() -> Generator[Session, None, None]:
    """Session factory for FastAPI Depends().

    Usage:
        @app.post("/jobs/check-stock-alerts")
        def check(session: Session = Depends(get_session)):
            ...
    """
    engine = get_engine()
    with Session(engine) as session:
        yield session
