"""Offline sync reconciliation engine.

Applies a batch of client operations against one item family:

    guard -> order -> (resolve ids -> mutate -> record) per operation

Operations run sequentially and each commits on its own, so one failing
operation never undoes the ones before it.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.components.sync.aggregator import SyncResult, SyncResultAggregator
from app.components.sync.guard import OwnershipGuard, WorkspaceScope
from app.components.sync.identity import IdentityMap
from app.components.sync.mutators import OperationSkipped, build_mutators
from app.components.sync.operations import order_operations
from app.components.sync.store import SyncStore
from app.utils import get_logger

logger = get_logger(__name__)


class SyncEngine:
    """Reconciles client batches against a `SyncStore`."""

    def __init__(
        self,
        store: SyncStore,
        guard: OwnershipGuard | None = None,
        temp_prefix: str | None = None,
    ):
        self.store = store
        self.guard = guard or OwnershipGuard()
        self.temp_prefix = temp_prefix
        self._mutators = build_mutators(store)

    def sync_workspace(
        self,
        db: Session,
        caller_id: str | None,
        workspace_id: str,
        payloads: Iterable[Mapping[str, Any]] | None,
    ) -> SyncResult:
        """Sync a batch confined to one workspace owned by the caller.

        Raises:
            SyncAuthorizationError: Caller missing, workspace missing or not owned
        """
        scope = self.guard.authorize_workspace(db, caller_id, workspace_id)
        return self.run(db, scope, payloads)

    def sync_all(
        self,
        db: Session,
        caller_id: str | None,
        payloads: Iterable[Mapping[str, Any]] | None,
    ) -> SyncResult:
        """Sync a batch that may touch any workspace the caller owns."""
        scope = self.guard.authorize_caller(db, caller_id)
        return self.run(db, scope, payloads)

    def run(
        self,
        db: Session,
        scope: WorkspaceScope,
        payloads: Iterable[Mapping[str, Any]] | None,
    ) -> SyncResult:
        """Apply an already authorized batch."""
        identities = IdentityMap(self.temp_prefix)
        aggregator = SyncResultAggregator(identities)

        operations = order_operations(payloads or [])
        logger.info(
            f"Sync [{self.store.family}] started: {len(operations)} operation(s) "
            f"for user {scope.caller_id} in {len(scope.workspace_ids)} workspace(s)"
        )

        for operation in operations:
            mutator = self._mutators[operation.kind]
            try:
                outcome = mutator.apply(db, operation, scope, identities)
            except OperationSkipped as e:
                logger.info(f"Skipping {e.reason}")
                aggregator.record_skip(operation)
                continue
            except Exception as e:
                db.rollback()
                logger.error(f"Failed to process {operation.kind.value} {operation.id}: {e}", exc_info=True)
                aggregator.record_failure(operation, e)
                continue

            logger.debug(f"Applied {operation.kind.value} {operation.id}")
            aggregator.record_success(operation, item=outcome.item, item_id=outcome.item_id)

        result = aggregator.build()
        logger.info(
            f"Sync [{self.store.family}] finished: synced={result.synced} "
            f"failed={result.failed} skipped={result.skipped} mapped={len(result.temp_id_map)}"
        )
        return result
