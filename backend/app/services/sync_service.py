"""Sync engines bound to each item family."""

from app.components.sync import OwnershipGuard, SyncEngine
from app.repositories import file_repository, item_repository, workspace_repository

_guard = OwnershipGuard(workspace_repository)

# Single-table items (/folders/{id}/sync)
item_sync_engine = SyncEngine(item_repository, guard=_guard)

# Base + companion files (/workspaces/{id}/sync, /workspaces/sync)
file_sync_engine = SyncEngine(file_repository, guard=_guard)
