"""
Database Session Management

One lazily created engine per process. PostgreSQL when DATABASE_URL is
set, a SQLite file otherwise; tests swap in an in-memory database with
configure_engine("sqlite://").
"""

import os
import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

from src.utils.config import get_settings
from .models import Base

logger = logging.getLogger(__name__)

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")

# =============================================================================
# DATABASE URL CONFIGURATION
# =============================================================================

def get_database_url() -> str:
    """DATABASE_URL from settings or environment, else the SQLite file at SQLITE_PATH."""
    settings = get_settings()
    url = settings.DATABASE_URL or os.getenv("DATABASE_URL")
    if not url:
        return f"sqlite:///{settings.SQLITE_PATH}"

    # SQLAlchemy only accepts the postgresql:// scheme
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


# =============================================================================
# ENGINE CONFIGURATION
# =============================================================================

def _echo_sql() -> bool:
    return os.getenv("SQL_DEBUG", "false").lower() == "true"


def _postgres_engine(url: str) -> Engine:
    engine = create_engine(
        url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_recycle=1800,
        pool_pre_ping=True,
        echo=_echo_sql(),
    )
    logger.info("Created PostgreSQL engine")
    return engine


def _sqlite_engine(url: str) -> Engine:
    options = {"connect_args": {"check_same_thread": False}, "echo": _echo_sql()}
    if url in IN_MEMORY_URLS:
        # Every session must see the same in-memory database
        options["poolclass"] = StaticPool
    engine = create_engine(url, **options)

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    logger.info(f"Created SQLite engine for {url}")
    return engine


def create_db_engine(url: Optional[str] = None) -> Engine:
    """Build an engine for the given (or configured) database URL."""
    url = url or get_database_url()
    if url.startswith("postgresql"):
        return _postgres_engine(url)
    return _sqlite_engine(url)


_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Shared engine, created on first use."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def configure_engine(url: Optional[str] = None) -> Engine:
    """Dispose the shared engine and replace it with one for `url`."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = create_db_engine(url)
    _session_factory = None
    return _engine


# =============================================================================
# SESSION MANAGEMENT
# =============================================================================

def get_session_factory() -> sessionmaker:
    """Session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _session_factory


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Transactional session: commits on success, rolls back on error.

    Usage:
        with get_db_context() as db:
            db.add(Niche(name="golf"))
    """
    db = get_session_factory()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# =============================================================================
# DATABASE INITIALIZATION
# =============================================================================

def init_db() -> None:
    """Create the niches and competitor_stores tables if missing."""
    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables ready")


def check_db_connection() -> bool:
    """True when a trivial query succeeds."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
    return True
