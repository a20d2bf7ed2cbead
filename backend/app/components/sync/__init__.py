"""Offline sync reconciliation.

Usage:
    from app.components.sync import SyncEngine

    engine = SyncEngine(item_repository)
    result = engine.sync_workspace(db, caller_id, workspace_id, operations)
    return result.to_dict()
"""

from app.components.sync.aggregator import SyncResult, SyncResultAggregator
from app.components.sync.engine import SyncEngine
from app.components.sync.guard import (
    MissingCallerError,
    OwnershipGuard,
    SyncAuthorizationError,
    WorkspaceAccessDeniedError,
    WorkspaceNotFoundError,
    WorkspaceScope,
)
from app.components.sync.identity import IdentityMap
from app.components.sync.mutators import MutationOutcome, OperationSkipped
from app.components.sync.operations import Operation, OperationKind, classify, order_operations
from app.components.sync.store import UNSET, ItemDraft, ItemPatch, SyncStore, UnsupportedFieldError

__all__ = [
    "SyncEngine",
    "SyncResult",
    "SyncResultAggregator",
    "OwnershipGuard",
    "WorkspaceScope",
    "SyncAuthorizationError",
    "MissingCallerError",
    "WorkspaceNotFoundError",
    "WorkspaceAccessDeniedError",
    "IdentityMap",
    "MutationOutcome",
    "OperationSkipped",
    "Operation",
    "OperationKind",
    "classify",
    "order_operations",
    "UNSET",
    "ItemDraft",
    "ItemPatch",
    "SyncStore",
    "UnsupportedFieldError",
]
