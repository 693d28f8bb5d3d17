"""Database engine and session factory."""

import logging
from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine suited to the database backend.

    MySQL gets a checked connection pool; SQLite connections may be shared
    across the threads FastAPI runs sync endpoints on.

    Args:
        url: SQLAlchemy database URL.
        echo: Log every SQL statement.

    Returns:
        Engine: Configured engine.
    """
    if url.startswith("sqlite"):
        return create_engine(url, echo=echo, connect_args={"check_same_thread": False})
    return create_engine(url, echo=echo, pool_pre_ping=True, pool_size=5, max_overflow=10)


engine = build_engine(settings.database_url, echo=settings.debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a session that is closed once the request finishes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create missing tables when running in debug mode.

    Deployed databases are managed with Alembic (``alembic upgrade head``).
    """
    from app.db.models import Base

    if settings.debug:
        logger.info("Debug mode: creating missing tables")
        Base.metadata.create_all(bind=engine)
