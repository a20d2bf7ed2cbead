"""Database connection and session management.

Provides the SQLAlchemy engine, the session factory, the FastAPI session
dependency and startup/shutdown helpers.

Usage:
    from app.db.database import get_db

    def my_endpoint(db: Session = Depends(get_db)):
        db.execute(select(Workspace))
"""

import re
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.settings import SUPABASE_DIRECT_PORT, settings
from app.utils import get_logger

logger = get_logger(__name__)


def _mask_url(url: str) -> str:
    """Hide the password part of a connection URL."""
    return re.sub(r":[^:@/]+@", ":****@", url)


def _build_engine_kwargs(url: str) -> dict[str, Any]:
    """Engine options for the configured backend."""
    kwargs: dict[str, Any] = {
        "echo": settings.debug and settings.environment == "local-dev",
    }

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            # One shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        return kwargs

    kwargs.update(
        {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_pre_ping": settings.db_pool_pre_ping,
            "pool_recycle": settings.db_pool_recycle,
        }
    )

    if url.startswith("postgresql"):
        connect_args: dict[str, Any] = {
            "connect_timeout": settings.db_connect_timeout,
            "application_name": "momu-backend",
            "options": f"-c statement_timeout={settings.db_statement_timeout_ms}",
        }
        if "supabase.co" in url:
            connect_args["sslmode"] = "require"
        kwargs["connect_args"] = connect_args
    elif url.startswith("mysql"):
        kwargs["connect_args"] = {"connect_timeout": settings.db_connect_timeout}

    return kwargs


def create_db_engine(url: str | None = None) -> Engine:
    """Create an engine for `url` (defaults to the configured database)."""
    raw_url = settings.supabase_pool_url or settings.database_url
    if url is None and "supabase.co" in raw_url and SUPABASE_DIRECT_PORT in raw_url:
        logger.warning("DATABASE_URL uses Supabase port 5432, switching to the pooler (6543)")

    url = url or settings.get_database_url_auto()
    if url.startswith("sqlite"):
        logger.info(f"Using SQLite database: {url}")
    else:
        logger.info(f"Using database: {_mask_url(url)}")

    return create_engine(url, **_build_engine_kwargs(url))


engine: Engine = create_db_engine()

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """Get database session for dependency injection.

    Yields:
        Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection() -> bool:
    """Check if database connection is working."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


def init_db() -> None:
    """Create tables if they do not exist. Called on application startup."""
    from app.db.models import Base

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def close_db() -> None:
    """Dispose pooled connections. Called on application shutdown."""
    engine.dispose()
    logger.info("Database connections closed")
