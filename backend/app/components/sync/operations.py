"""Batch operations: classification and application order.

Creates run first so later operations can reference the durable ids they
produce; Deletes run before Reorders so a batch cannot reorder a node it
just deleted.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from enum import Enum
from typing import Any

from app.utils import get_logger

logger = get_logger(__name__)


class OperationKind(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    REORDER = "UPDATE_ORDER"

    @property
    def rank(self) -> int:
        return _KIND_RANK[self]


_KIND_RANK = {
    OperationKind.CREATE: 0,
    OperationKind.UPDATE: 1,
    OperationKind.DELETE: 2,
    OperationKind.REORDER: 3,
}


@dataclass(frozen=True)
class Operation:
    """One pending client mutation.

    `id` is both the operation id reported back to the client and the
    target identifier (temporary for nodes created offline).
    """

    id: str
    kind: OperationKind
    timestamp: float = 0
    workspace_id: str | None = None
    field: str | None = None
    value: Any = None
    data: Mapping[str, Any] = dataclass_field(default_factory=dict)

    @property
    def sort_key(self) -> tuple[int, float]:
        return (self.kind.rank, self.timestamp)

    @property
    def parent_ref(self) -> str | None:
        """Parent reference for Create and Reorder (legacy top-level `parentId` as fallback)."""
        if "parent_id" in self.data:
            return self.data["parent_id"]
        return self.data.get("parentId")

    @property
    def order_index(self) -> int | None:
        """Explicit order index, if the client sent one."""
        value = self.data.get("order_index")
        if value is None:
            value = self.data.get("orderIndex")
        return value

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Operation | None":
        """Build an operation from a decoded wire payload.

        Returns None for an unknown kind tag.

        Raises:
            ValueError: If the payload has no id
        """
        op_id = payload.get("id")
        if not op_id:
            raise ValueError("Operation id is required")

        try:
            kind = OperationKind(payload.get("type"))
        except ValueError:
            return None

        data = dict(payload.get("data") or {})
        # Legacy reorder format carried these at the top level
        for legacy_key in ("orderIndex", "parentId"):
            if payload.get(legacy_key) is not None and legacy_key not in data:
                data[legacy_key] = payload[legacy_key]

        return cls(
            id=str(op_id),
            kind=kind,
            timestamp=payload.get("timestamp") or 0,
            workspace_id=payload.get("workspaceId"),
            field=payload.get("field"),
            value=payload.get("value"),
            data=data,
        )


def classify(payloads: Iterable[Mapping[str, Any]]) -> dict[OperationKind, list[Operation]]:
    """Partition raw payloads by kind, dropping unknown kinds.

    Submission order is kept inside each group.
    """
    groups: dict[OperationKind, list[Operation]] = {kind: [] for kind in OperationKind}
    for payload in payloads:
        operation = Operation.from_payload(payload)
        if operation is None:
            logger.warning(f"Dropping operation {payload.get('id')} with unknown type {payload.get('type')!r}")
            continue
        groups[operation.kind].append(operation)
    return groups


def order_operations(payloads: Iterable[Mapping[str, Any]]) -> list[Operation]:
    """Application order: CREATE, UPDATE, DELETE, UPDATE_ORDER, each by timestamp.

    The sort is stable, so equal timestamps keep submission order.
    """
    groups = classify(payloads)
    operations = [operation for kind in OperationKind for operation in groups[kind]]
    return sorted(operations, key=lambda operation: operation.sort_key)
