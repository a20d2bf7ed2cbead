"""Item repository: the single-table item family.

Also the `SyncStore` the items sync engine writes through.
"""

from typing import Any

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from app.components.sync.store import ItemDraft, ItemPatch
from app.db.models import ITEM_TYPES, Item
from app.repositories.base import BaseRepository
from app.utils import generate_id, get_timestamp_ms

DEFAULT_ITEM_TITLE = "New item"

_RECORD_FIELDS = (
    "id",
    "workspace_id",
    "parent_id",
    "type",
    "title",
    "content",
    "youtube_url",
    "youtube_id",
    "description",
    "completed",
    "completed_at",
    "order_index",
    "active",
    "deleted_at",
    "created_at",
    "updated_at",
)


def _is_live():
    """Row filter for items that are neither soft-deleted nor deactivated."""
    return (Item.deleted_at.is_(None), or_(Item.active.is_(None), Item.active.is_(True)))


class ItemRepository(BaseRepository[Item]):
    """Repository for Item entity operations."""

    family = "items"

    def __init__(self):
        super().__init__(Item)

    @staticmethod
    def to_record(item: Item) -> dict[str, Any]:
        return {name: getattr(item, name) for name in _RECORD_FIELDS}

    def get_record(self, db: Session, item_id: str) -> dict[str, Any] | None:
        item = self.get_by_id(db, item_id)
        return self.to_record(item) if item else None

    def list_active(self, db: Session, workspace_id: str) -> list[Item]:
        """Items of a workspace that are not deleted, by order index."""
        stmt = (
            select(Item)
            .where(Item.workspace_id == workspace_id, *_is_live())
            .order_by(Item.order_index.asc(), Item.created_at.asc())
        )
        return list(db.execute(stmt).scalars().all())

    def list_trash(self, db: Session, workspace_id: str) -> list[Item]:
        """Soft-deleted items of a workspace, most recently deleted first."""
        stmt = (
            select(Item)
            .where(Item.workspace_id == workspace_id, Item.deleted_at.is_not(None))
            .order_by(Item.deleted_at.desc())
        )
        return list(db.execute(stmt).scalars().all())

    # Sync store contract

    def workspace_of(self, db: Session, item_id: str) -> str | None:
        return db.execute(select(Item.workspace_id).where(Item.id == item_id)).scalar_one_or_none()

    def next_order_index(self, db: Session, workspace_id: str, parent_id: str | None) -> int:
        """Next free order index among live siblings (0 when there are none)."""
        parent_filter = Item.parent_id.is_(None) if parent_id is None else Item.parent_id == parent_id
        stmt = select(func.coalesce(func.max(Item.order_index), -1) + 1).where(
            Item.workspace_id == workspace_id,
            parent_filter,
            *_is_live(),
        )
        return int(db.execute(stmt).scalar_one())

    def insert(self, db: Session, workspace_id: str, draft: ItemDraft) -> dict[str, Any]:
        """Insert a new item.

        Raises:
            ValueError: If the type is not an item type
        """
        if draft.type not in ITEM_TYPES:
            raise ValueError(f"Invalid item type: {draft.type}")

        now = get_timestamp_ms()
        item_data = {
            "id": generate_id("item"),
            "workspace_id": workspace_id,
            "parent_id": draft.parent_id,
            "type": draft.type,
            "title": draft.title or DEFAULT_ITEM_TITLE,
            "content": draft.content,
            "youtube_url": draft.youtube_url,
            "youtube_id": draft.youtube_id,
            "description": draft.description,
            "completed": False,
            "order_index": draft.order_index,
            "active": draft.active,
            "created_at": now,
            "updated_at": now,
        }
        return self.to_record(self.create(db, item_data))

    def apply_patch(self, db: Session, item_id: str, patch: ItemPatch) -> dict[str, Any] | None:
        """Write the fields set in `patch`. Returns None if the item does not exist.

        Raises:
            ValueError: If the patch is empty
        """
        if patch.is_empty():
            raise ValueError("No fields to update")

        item = self.get_by_id(db, item_id)
        if item is None:
            return None

        changes = patch.changes()
        now = get_timestamp_ms()
        if "completed" in changes:
            changes["completed_at"] = now if changes["completed"] else None
        changes["updated_at"] = now
        return self.to_record(self.update(db, item, changes))

    def soft_delete(self, db: Session, item_id: str) -> str | None:
        """Mark an item deleted.

        Only the first delete stamps deleted_at and updated_at; a repeated
        delete leaves the row unchanged.
        """
        now = get_timestamp_ms()
        stmt = (
            update(Item)
            .where(Item.id == item_id, Item.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        db.execute(stmt)
        db.commit()
        return item_id if self.workspace_of(db, item_id) else None

    def move(self, db: Session, item_id: str, order_index: int, parent_id: str | None) -> dict[str, Any] | None:
        stmt = (
            update(Item)
            .where(Item.id == item_id)
            .values(order_index=order_index, parent_id=parent_id, updated_at=get_timestamp_ms())
            .execution_options(synchronize_session="fetch")
        )
        result = db.execute(stmt)
        db.commit()
        if not result.rowcount:
            return None
        return self.get_record(db, item_id)

    # Trash

    def restore(self, db: Session, item_id: str) -> dict[str, Any] | None:
        item = self.get_by_id(db, item_id)
        if item is None:
            return None
        restored = self.update(db, item, {"deleted_at": None, "active": True, "updated_at": get_timestamp_ms()})
        return self.to_record(restored)

    def purge(self, db: Session, item_id: str) -> bool:
        """Permanently delete an item."""
        return self.delete(db, item_id)


# Singleton instance
item_repository = ItemRepository()
