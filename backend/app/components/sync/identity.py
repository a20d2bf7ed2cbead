"""Temporary -> durable identifier resolution for one sync batch."""

from app.settings import settings


class IdentityMap:
    """Batch-scoped mapping from client temporary ids to server ids.

    Filled only by successful Creates and thrown away when the batch ends.
    """

    def __init__(self, temp_prefix: str | None = None):
        self._prefix = temp_prefix or settings.temp_id_prefix
        self._mapping: dict[str, str] = {}

    def is_temporary(self, ref: str | None) -> bool:
        return isinstance(ref, str) and ref.startswith(self._prefix)

    def register(self, temp_id: str, durable_id: str) -> None:
        self._mapping[temp_id] = durable_id

    def resolve(self, ref: str | None) -> str | None:
        """Resolve a reference such as a parent id.

        An unmapped temporary id resolves to None so the node lands at root
        level instead of pointing at something that was never persisted.
        """
        if not ref:
            return None
        if not self.is_temporary(ref):
            return ref
        return self._mapping.get(ref)

    def resolve_target(self, ref: str) -> str | None:
        """Resolve the node an operation mutates.

        None means the target is a temporary id with nothing durable behind
        it, and the operation must be skipped.
        """
        if ref in self._mapping:
            return self._mapping[ref]
        if self.is_temporary(ref):
            return None
        return ref

    def as_dict(self) -> dict[str, str]:
        return dict(self._mapping)
