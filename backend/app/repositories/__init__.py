"""Repository layer for database access.

This module provides repository classes that abstract database operations.
The item and file repositories also implement the sync store contract used
by the sync engine.

Usage:
    from app.repositories import item_repository, workspace_repository

    # Check ownership
    workspace = workspace_repository.get_by_id(db, workspace_id)

    # List the live items of a workspace
    items = item_repository.list_active(db, workspace_id)
"""

from app.repositories.ai_chat import AIChatRepository, ai_chat_repository
from app.repositories.file import FileRepository, file_repository
from app.repositories.item import ItemRepository, item_repository
from app.repositories.workspace import WorkspaceRepository, workspace_repository

__all__ = [
    "WorkspaceRepository",
    "workspace_repository",
    "ItemRepository",
    "item_repository",
    "FileRepository",
    "file_repository",
    "AIChatRepository",
    "ai_chat_repository",
]
