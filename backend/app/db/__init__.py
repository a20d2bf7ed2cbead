"""Database module for the MOMU backend.

Components:
- database: engine, session factory and lifecycle helpers
- models: ORM schema for workspaces and both item families
"""

from app.db.database import (
    SessionLocal,
    check_connection,
    close_db,
    create_db_engine,
    engine,
    get_db,
    init_db,
)
from app.db.models import (
    FILE_TYPES,
    ITEM_TYPES,
    AIChat,
    Base,
    File,
    FileFolder,
    FileNote,
    FileVideo,
    Item,
    Workspace,
    WorkspaceShare,
)

__all__ = [
    # Connection
    "engine",
    "SessionLocal",
    "create_db_engine",
    "get_db",
    "init_db",
    "close_db",
    "check_connection",
    # Models
    "Base",
    "Workspace",
    "WorkspaceShare",
    "Item",
    "File",
    "FileNote",
    "FileVideo",
    "FileFolder",
    "AIChat",
    "ITEM_TYPES",
    "FILE_TYPES",
]
