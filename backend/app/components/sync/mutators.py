"""Per-kind mutators.

Each mutator turns one `Operation` into a store call after resolving the
identifiers it carries. A mutator either returns a `MutationOutcome`, raises
`OperationSkipped` (not counted), or lets any other exception escape
(counted as a failure by the engine).
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from app.components.sync.guard import WorkspaceScope
from app.components.sync.identity import IdentityMap
from app.components.sync.operations import Operation, OperationKind
from app.components.sync.store import ItemDraft, ItemPatch, SyncStore
from app.utils import extract_youtube_id, get_logger

logger = get_logger(__name__)


class OperationSkipped(Exception):
    """The operation has nothing to act on and is dropped silently."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


@dataclass
class MutationOutcome:
    item: dict[str, Any] | None = None
    item_id: str | None = None


class Mutator:
    """Base class holding the store a mutator writes to."""

    kind: OperationKind

    def __init__(self, store: SyncStore):
        self.store = store

    def apply(
        self,
        db: Session,
        operation: Operation,
        scope: WorkspaceScope,
        identities: IdentityMap,
    ) -> MutationOutcome:
        raise NotImplementedError

    def _resolve_owned_target(
        self,
        db: Session,
        operation: Operation,
        scope: WorkspaceScope,
        identities: IdentityMap,
    ) -> str:
        """Durable id of the operation target, checked against the scope."""
        target_id = identities.resolve_target(operation.id)
        if target_id is None:
            raise OperationSkipped(f"{operation.kind.value} {operation.id}: temporary id was never created")

        workspace_id = self.store.workspace_of(db, target_id)
        if workspace_id is None:
            raise OperationSkipped(f"{operation.kind.value} {operation.id}: {target_id} not found")
        if not scope.allows(workspace_id):
            logger.warning(f"{operation.kind.value} {operation.id}: {target_id} is outside workspace scope")
            raise OperationSkipped(f"{operation.kind.value} {operation.id}: workspace not owned")
        return target_id


class CreateMutator(Mutator):
    kind = OperationKind.CREATE

    def apply(self, db, operation, scope, identities):
        workspace_id = scope.workspace_for_create(operation.workspace_id)
        if workspace_id is None:
            logger.warning(f"CREATE {operation.id}: workspace {operation.workspace_id} is outside scope")
            raise OperationSkipped(f"CREATE {operation.id}: workspace not owned")

        data = operation.data
        item_type = data.get("type")
        if not item_type:
            raise ValueError("type is required")

        parent_id = identities.resolve(operation.parent_ref)
        order_index = operation.order_index
        if order_index is None:
            order_index = self.store.next_order_index(db, workspace_id, parent_id)

        youtube_url = data.get("youtube_url")
        active = data.get("active")
        draft = ItemDraft(
            type=item_type,
            order_index=int(order_index),
            parent_id=parent_id,
            title=data.get("title"),
            content=data.get("content"),
            youtube_url=youtube_url,
            youtube_id=extract_youtube_id(youtube_url),
            description=data.get("description"),
            active=True if active is None else bool(active),
        )

        record = self.store.insert(db, workspace_id, draft)
        identities.register(operation.id, record["id"])
        logger.debug(f"CREATE {operation.id} -> {record['id']}")
        return MutationOutcome(item=record)


class UpdateMutator(Mutator):
    kind = OperationKind.UPDATE

    def apply(self, db, operation, scope, identities):
        target_id = self._resolve_owned_target(db, operation, scope, identities)

        value = operation.value
        if operation.field == "parent_id":
            value = identities.resolve(value)
        patch = ItemPatch.from_field(operation.field, value)

        record = self.store.apply_patch(db, target_id, patch)
        if record is None:
            raise OperationSkipped(f"UPDATE {operation.id}: {target_id} not found")
        return MutationOutcome(item=record)


class DeleteMutator(Mutator):
    kind = OperationKind.DELETE

    def apply(self, db, operation, scope, identities):
        target_id = self._resolve_owned_target(db, operation, scope, identities)

        deleted_id = self.store.soft_delete(db, target_id)
        if deleted_id is None:
            raise OperationSkipped(f"DELETE {operation.id}: {target_id} not found")
        return MutationOutcome(item_id=deleted_id)


class ReorderMutator(Mutator):
    kind = OperationKind.REORDER

    def apply(self, db, operation, scope, identities):
        target_id = self._resolve_owned_target(db, operation, scope, identities)

        order_index = operation.order_index
        if order_index is None:
            raise ValueError("order_index is required")
        parent_id = identities.resolve(operation.parent_ref)

        record = self.store.move(db, target_id, int(order_index), parent_id)
        if record is None:
            raise OperationSkipped(f"UPDATE_ORDER {operation.id}: {target_id} not found")
        return MutationOutcome(item=record)


def build_mutators(store: SyncStore) -> dict[OperationKind, Mutator]:
    """One mutator per operation kind, all bound to `store`."""
    return {
        mutator.kind: mutator
        for mutator in (
            CreateMutator(store),
            UpdateMutator(store),
            DeleteMutator(store),
            ReorderMutator(store),
        )
    }
