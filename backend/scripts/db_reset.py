#!/usr/bin/env python3
"""Database reset script.

Drops every table (or the SQLite file) and recreates the schema for
workspaces, items and files. Development and test environments only.

Usage:
    cd backend
    python scripts/db_reset.py
"""

import sys
from pathlib import Path

# Allow running from backend/ without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.db.database import engine
from app.db.models import Base
from app.settings import settings
from app.utils import get_logger

logger = get_logger(__name__)


def reset_database():
    """Drop and recreate the schema."""

    # Never touch a production database
    if settings.environment not in ["local-dev", "test"]:
        logger.error("❌ Database reset is only allowed in local-dev or test environment")
        logger.error(f"   Current environment: {settings.environment}")
        sys.exit(1)

    url = settings.get_database_url_auto()
    if settings.is_supabase():
        logger.error("❌ Refusing to reset a Supabase database")
        sys.exit(1)

    logger.info(f"🗄️  Database type: {settings.database_type}")

    if url.startswith("sqlite"):
        sqlite_path = settings.get_sqlite_path()
        if str(sqlite_path) == ":memory:":
            logger.info("ℹ️  Using in-memory database (no file to delete)")
        elif sqlite_path.exists():
            engine.dispose()
            sqlite_path.unlink()
            logger.info(f"✅ Deleted SQLite database: {sqlite_path}")
    else:
        logger.info("⚠️  Dropping all tables...")
        Base.metadata.drop_all(bind=engine)
        logger.info("✅ All tables dropped")

    logger.info("📝 Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info(f"✅ Created tables: {', '.join(sorted(Base.metadata.tables))}")

    logger.info("🎉 Database reset completed!")


if __name__ == "__main__":
    reset_database()
