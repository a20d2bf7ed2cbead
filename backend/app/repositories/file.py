"""File repository: the base + companion table item family.

A file is a row in `files` plus exactly one companion row (`files_note`,
`files_video` or `files_folder`) holding its type-specific payload. Reads
return one denormalized record with absent payload fields set to None.
"""

from typing import Any

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session, selectinload

from app.components.sync.store import ItemDraft, ItemPatch, UnsupportedFieldError
from app.db.models import FILE_TYPES, File, FileFolder, FileNote, FileVideo
from app.repositories.base import BaseRepository
from app.utils import generate_id, get_timestamp_ms

# type -> (companion model, relationship attribute, payload columns)
_COMPANIONS = {
    "note": (FileNote, "note", ("title", "content")),
    "video": (FileVideo, "video", ("title", "youtube_url", "youtube_id")),
    "folder": (FileFolder, "folder", ("title", "description")),
}

_BASE_FIELDS = ("id", "workspace_id", "type", "parent_id", "order_index", "active", "deleted_at", "created_at", "updated_at")
_PAYLOAD_FIELDS = ("title", "content", "youtube_url", "youtube_id", "description")
_BASE_PATCHABLE = frozenset({"active", "parent_id", "order_index"})


def _with_companions(stmt):
    return stmt.options(selectinload(File.note), selectinload(File.video), selectinload(File.folder))


class FileRepository(BaseRepository[File]):
    """Repository for File entity operations."""

    family = "files"

    def __init__(self):
        super().__init__(File)

    @staticmethod
    def to_record(file: File) -> dict[str, Any]:
        record = {name: getattr(file, name) for name in _BASE_FIELDS}
        record.update(dict.fromkeys(_PAYLOAD_FIELDS))

        _, attr, columns = _COMPANIONS[file.type]
        companion = getattr(file, attr)
        if companion is not None:
            for column in columns:
                record[column] = getattr(companion, column)
        return record

    def get_record(self, db: Session, file_id: str) -> dict[str, Any] | None:
        file = self.get_by_id(db, file_id)
        return self.to_record(file) if file else None

    def list_active(self, db: Session, workspace_id: str) -> list[dict[str, Any]]:
        """Active files of a workspace, by order index."""
        return self.list_for_workspaces(db, [workspace_id])

    def list_for_workspaces(self, db: Session, workspace_ids: list[str]) -> list[dict[str, Any]]:
        """Active files across several workspaces (initial client sync)."""
        if not workspace_ids:
            return []
        stmt = _with_companions(
            select(File)
            .where(File.workspace_id.in_(workspace_ids), File.active.is_(True))
            .order_by(File.order_index.asc(), File.created_at.asc())
        )
        return [self.to_record(file) for file in db.execute(stmt).scalars().all()]

    # Sync store contract

    def workspace_of(self, db: Session, item_id: str) -> str | None:
        return db.execute(select(File.workspace_id).where(File.id == item_id)).scalar_one_or_none()

    def next_order_index(self, db: Session, workspace_id: str, parent_id: str | None) -> int:
        parent_filter = File.parent_id.is_(None) if parent_id is None else File.parent_id == parent_id
        stmt = select(func.coalesce(func.max(File.order_index), -1) + 1).where(
            File.workspace_id == workspace_id,
            parent_filter,
            File.active.is_(True),
        )
        return int(db.execute(stmt).scalar_one())

    def insert(self, db: Session, workspace_id: str, draft: ItemDraft) -> dict[str, Any]:
        """Insert the base row and its companion row in one commit.

        Raises:
            ValueError: If the type is not a file type
        """
        if draft.type not in FILE_TYPES:
            raise ValueError(f"Invalid file type: {draft.type}")

        now = get_timestamp_ms()
        file = File(
            id=generate_id("file"),
            workspace_id=workspace_id,
            type=draft.type,
            parent_id=draft.parent_id,
            order_index=draft.order_index,
            active=draft.active,
            created_at=now,
            updated_at=now,
        )

        model, attr, columns = _COMPANIONS[draft.type]
        payload = {column: getattr(draft, column) for column in columns}
        payload["title"] = draft.title or f"New {draft.type}"
        setattr(file, attr, model(updated_at=now, **payload))

        db.add(file)
        db.commit()
        db.refresh(file)
        return self.to_record(file)

    def apply_patch(self, db: Session, item_id: str, patch: ItemPatch) -> dict[str, Any] | None:
        """Route each patched field to the base row or the companion row.

        Raises:
            UnsupportedFieldError: If the file type has no column for a field
            ValueError: If the patch is empty
        """
        if patch.is_empty():
            raise ValueError("No fields to update")

        file = self.get_by_id(db, item_id)
        if file is None:
            return None

        changes = patch.changes()

        _, attr, columns = _COMPANIONS[file.type]
        base_changes: dict[str, Any] = {}
        companion_changes: dict[str, Any] = {}
        for name, value in changes.items():
            if name in _BASE_PATCHABLE:
                base_changes[name] = value
            elif name in columns:
                companion_changes[name] = value
            else:
                raise UnsupportedFieldError(name, f"{file.type} files")

        now = get_timestamp_ms()
        if companion_changes:
            companion = getattr(file, attr)
            if companion is None:
                raise ValueError(f"File {item_id} has no {file.type} data")
            for name, value in companion_changes.items():
                setattr(companion, name, value)
            companion.updated_at = now

        base_changes["updated_at"] = now
        return self.to_record(self.update(db, file, base_changes))

    def soft_delete(self, db: Session, item_id: str) -> str | None:
        """Deactivate a file.

        A repeated delete leaves the row unchanged, so the first deletion
        time and the matching updated_at survive.
        """
        now = get_timestamp_ms()
        stmt = (
            update(File)
            .where(File.id == item_id, or_(File.deleted_at.is_(None), File.active.is_(True)))
            .values(active=False, deleted_at=func.coalesce(File.deleted_at, now), updated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        db.execute(stmt)
        db.commit()
        return item_id if self.workspace_of(db, item_id) else None

    def move(self, db: Session, item_id: str, order_index: int, parent_id: str | None) -> dict[str, Any] | None:
        stmt = (
            update(File)
            .where(File.id == item_id)
            .values(order_index=order_index, parent_id=parent_id, updated_at=get_timestamp_ms())
            .execution_options(synchronize_session="fetch")
        )
        result = db.execute(stmt)
        db.commit()
        if not result.rowcount:
            return None
        return self.get_record(db, item_id)

    def restore(self, db: Session, file_id: str) -> dict[str, Any] | None:
        file = self.get_by_id(db, file_id)
        if file is None:
            return None
        restored = self.update(db, file, {"active": True, "deleted_at": None, "updated_at": get_timestamp_ms()})
        return self.to_record(restored)


# Singleton instance
file_repository = FileRepository()
