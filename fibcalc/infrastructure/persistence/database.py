"""
Durable Store Database Management.

SQLAlchemy engine, session factory and table model for the append-only
record of submitted indices.

Responsibility:
    - Singleton engine with pool_pre_ping (stale connections are replaced)
    - Session factory for repositories
    - Table creation at startup (create_all, no migrations)
    - Connectivity check for /health

Architecture Notes:
    - Infrastructure Layer (external dependency on PostgreSQL via psycopg2;
      any SQLAlchemy URL works, tests use SQLite)
    - Thread-safe lazy singleton, same pattern as the Redis pool
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from fibcalc.shared.settings import get_settings

logger = logging.getLogger(__name__)

# SQLAlchemy base
Base = declarative_base()


class SubmittedIndexRecord(Base):
    """One accepted submission (append-only row)."""

    __tablename__ = "submitted_indices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"SubmittedIndexRecord(id={self.id}, number={self.number})"


_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None
_engine_lock = threading.Lock()


def get_engine(url: Optional[str] = None) -> Engine:
    """
    Get the process-wide SQLAlchemy engine (created on first call).

    Args:
        url: Database URL (default: DATABASE_URL / PG* settings)
    """
    global _engine

    if _engine is None:
        with _engine_lock:
            if _engine is None:
                db_url = url or get_settings().database.url
                logger.info(f"Creating database engine for {_safe_url(db_url)}")
                _engine = create_engine(db_url, pool_pre_ping=True)
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory

    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


def init_db(engine: Optional[Engine] = None) -> None:
    """Create the submitted_indices table if it does not exist."""
    Base.metadata.create_all(engine or get_engine())
    logger.info("Database tables ready")


def check_connection() -> bool:
    """Check if database connection is working (never raises)."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


def dispose_engine() -> None:
    """Dispose the engine and reset the singleton (idempotent)."""
    global _engine, _session_factory

    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
            logger.info("Database engine disposed")
        _engine = None
        _session_factory = None


def _safe_url(url: str) -> str:
    return make_url(url).render_as_string(hide_password=True)
