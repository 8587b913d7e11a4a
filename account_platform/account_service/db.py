"""
SQLAlchemy engine and per-request sessions for the user store.
"""
from contextlib import contextmanager
from typing import Generator, Iterator
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from .config import settings

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    **_engine_options(settings.DATABASE_URL)
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Open a session and always close it, even if the caller raises."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    # FastAPI dependency: one session per request
    with session_scope() as db:
        yield db


def init_db() -> None:
    """Create the users table if it is missing. Runs at startup."""
    from .models import User  # noqa: F401  registers the table on Base

    Base.metadata.create_all(bind=engine)
    logger.info(f"User store ready: tables={sorted(Base.metadata.tables)}")


def check_db_connection() -> bool:
    """True when the user store answers a trivial query."""
    with session_scope() as db:
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"User store unreachable: {e}")
            return False
    return True
