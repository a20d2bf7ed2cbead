"""Store contract used by the sync mutators.

The engine never builds SQL. It hands typed values to a `SyncStore`
(one implementation per item family) which translates them into
parameterized statements.
"""

from dataclasses import dataclass, fields
from typing import Any, Protocol

from sqlalchemy.orm import Session

from app.utils import extract_youtube_id


class _Unset:
    """Marker for a patch field the client did not send."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


class UnsupportedFieldError(ValueError):
    """Raised when a patch names a field the target cannot store."""

    def __init__(self, field: str, target: str = "items"):
        self.field = field
        super().__init__(f"Field '{field}' is not supported for {target}")


@dataclass(frozen=True)
class ItemDraft:
    """Everything needed to insert a new node. References are already resolved."""

    type: str
    order_index: int
    parent_id: str | None = None
    title: str | None = None
    content: str | None = None
    youtube_url: str | None = None
    youtube_id: str | None = None
    description: str | None = None
    active: bool = True


@dataclass(frozen=True)
class ItemPatch:
    """Partial update: only fields that are not UNSET are written."""

    title: Any = UNSET
    content: Any = UNSET
    youtube_url: Any = UNSET
    youtube_id: Any = UNSET
    description: Any = UNSET
    completed: Any = UNSET
    active: Any = UNSET
    parent_id: Any = UNSET
    order_index: Any = UNSET

    # youtube_id is derived, never patched directly by clients
    PATCHABLE_FIELDS = frozenset(
        {"title", "content", "youtube_url", "description", "completed", "active", "parent_id", "order_index"}
    )
    BOOLEAN_FIELDS = frozenset({"completed", "active"})

    @classmethod
    def from_field(cls, field: str | None, value: Any) -> "ItemPatch":
        """Build a single-field patch from the legacy `{field, value}` format.

        Raises:
            UnsupportedFieldError: If the field is missing or not patchable
            ValueError: If a boolean field gets anything but true or false
        """
        if not field or field not in cls.PATCHABLE_FIELDS:
            raise UnsupportedFieldError(field or "<missing>")
        if field in cls.BOOLEAN_FIELDS and not isinstance(value, bool):
            raise ValueError(f"Field '{field}' must be a boolean, got {value!r}")

        if field == "youtube_url":
            return cls(youtube_url=value, youtube_id=extract_youtube_id(value))
        return cls(**{field: value})

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "ItemPatch":
        """Build a patch from a partial body (single-item PATCH endpoints).

        An explicit youtube_id wins over the one derived from youtube_url.
        """
        unknown = set(values) - cls.PATCHABLE_FIELDS - {"youtube_id"}
        if unknown:
            raise UnsupportedFieldError(sorted(unknown)[0])

        kwargs = dict(values)
        if "youtube_url" in kwargs and "youtube_id" not in kwargs:
            kwargs["youtube_id"] = extract_youtube_id(kwargs["youtube_url"])
        return cls(**kwargs)

    def changes(self) -> dict[str, Any]:
        """Fields to write, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}

    def is_empty(self) -> bool:
        return not self.changes()


class SyncStore(Protocol):
    """Read-modify-write operations the mutators need from an item family.

    Every mutating method commits its own work. Records are plain dicts with
    base and type-specific fields merged.
    """

    family: str

    def workspace_of(self, db: Session, item_id: str) -> str | None:
        """Workspace id of an item (deleted or not), None if it does not exist."""
        ...

    def next_order_index(self, db: Session, workspace_id: str, parent_id: str | None) -> int:
        """max(order_index) + 1 among active siblings, 0 for an empty scope."""
        ...

    def insert(self, db: Session, workspace_id: str, draft: ItemDraft) -> dict[str, Any]:
        ...

    def apply_patch(self, db: Session, item_id: str, patch: ItemPatch) -> dict[str, Any] | None:
        ...

    def soft_delete(self, db: Session, item_id: str) -> str | None:
        ...

    def move(self, db: Session, item_id: str, order_index: int, parent_id: str | None) -> dict[str, Any] | None:
        ...
