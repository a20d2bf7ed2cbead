"""Collects per-operation outcomes into the batch response."""

from dataclasses import dataclass, field
from typing import Any

from app.components.sync.identity import IdentityMap
from app.components.sync.operations import Operation, OperationKind


@dataclass
class SyncResult:
    synced: int = 0
    failed: int = 0
    skipped: int = 0
    results: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    temp_id_map: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict[str, Any]:
        """Wire representation (camelCase keys)."""
        return {
            "success": self.success,
            "synced": self.synced,
            "failed": self.failed,
            "results": list(self.results),
            "errors": list(self.errors),
            "tempIdMap": dict(self.temp_id_map),
        }


class SyncResultAggregator:
    def __init__(self, identities: IdentityMap):
        self._identities = identities
        self._result = SyncResult()

    def record_success(
        self,
        operation: Operation,
        item: dict[str, Any] | None = None,
        item_id: str | None = None,
    ) -> None:
        entry: dict[str, Any] = {"operationId": operation.id, "type": operation.kind.value}
        if operation.kind is OperationKind.DELETE:
            entry["itemId"] = item_id
        else:
            entry["item"] = item
        self._result.results.append(entry)
        self._result.synced += 1

    def record_failure(self, operation: Operation, error: Exception) -> None:
        self._result.errors.append(f"Failed to process {operation.kind.value} {operation.id}: {error}")
        self._result.failed += 1

    def record_skip(self, operation: Operation) -> None:
        self._result.skipped += 1

    def build(self) -> SyncResult:
        self._result.temp_id_map = self._identities.as_dict()
        return self._result
