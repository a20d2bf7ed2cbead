"""Workspace repository for database operations."""

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.db.models import Workspace, WorkspaceShare
from app.repositories.base import BaseRepository
from app.utils import generate_id, get_timestamp_ms

WORKSPACE_UPDATABLE_FIELDS = ("title", "description", "is_public", "cover_color")


class WorkspaceRepository(BaseRepository[Workspace]):
    """Repository for Workspace entity operations."""

    def __init__(self):
        super().__init__(Workspace)

    def get_for_user(self, db: Session, user_id: str) -> list[Workspace]:
        """Workspaces owned by or shared with a user, newest first.

        Args:
            db: Database session
            user_id: Caller ID

        Returns:
            List of workspaces
        """
        shared_ids = select(WorkspaceShare.workspace_id).where(WorkspaceShare.shared_with_user_id == user_id)
        stmt = (
            select(Workspace)
            .where(or_(Workspace.user_id == user_id, Workspace.id.in_(shared_ids)))
            .order_by(Workspace.created_at.desc())
        )
        return list(db.execute(stmt).scalars().all())

    def get_owned(self, db: Session, user_id: str) -> list[Workspace]:
        stmt = select(Workspace).where(Workspace.user_id == user_id).order_by(Workspace.created_at.desc())
        return list(db.execute(stmt).scalars().all())

    def get_owned_ids(self, db: Session, user_id: str) -> list[str]:
        """IDs of the workspaces a user owns (sharing never grants write access)."""
        stmt = select(Workspace.id).where(Workspace.user_id == user_id)
        return list(db.execute(stmt).scalars().all())

    def can_read(self, db: Session, workspace: Workspace, user_id: str) -> bool:
        """Owner, or a user the workspace was shared with."""
        if workspace.user_id == user_id:
            return True
        stmt = select(WorkspaceShare.id).where(
            WorkspaceShare.workspace_id == workspace.id,
            WorkspaceShare.shared_with_user_id == user_id,
        )
        return db.execute(stmt).first() is not None

    def create_workspace(
        self,
        db: Session,
        user_id: str,
        title: str,
        description: str | None = None,
        is_public: bool = False,
        cover_color: str | None = None,
    ) -> Workspace:
        """Create a new workspace.

        Args:
            db: Database session
            user_id: Owner ID
            title: Workspace title
            description: Optional description
            is_public: Visibility flag
            cover_color: Optional cover color

        Returns:
            Created workspace
        """
        now = get_timestamp_ms()
        workspace_data = {
            "id": generate_id("ws"),
            "user_id": user_id,
            "title": title,
            "description": description,
            "is_public": is_public,
            "cover_color": cover_color,
            "created_at": now,
            "updated_at": now,
        }
        return self.create(db, workspace_data)

    def update_workspace(self, db: Session, workspace: Workspace, changes: dict) -> Workspace:
        """Apply the updatable fields present in `changes` and stamp updated_at."""
        values = {key: value for key, value in changes.items() if key in WORKSPACE_UPDATABLE_FIELDS}
        values["updated_at"] = get_timestamp_ms()
        return self.update(db, workspace, values)

    def share(self, db: Session, workspace_id: str, user_id: str) -> WorkspaceShare:
        share = WorkspaceShare(
            id=generate_id("share"),
            workspace_id=workspace_id,
            shared_with_user_id=user_id,
            created_at=get_timestamp_ms(),
        )
        db.add(share)
        db.commit()
        db.refresh(share)
        return share


# Singleton instance
workspace_repository = WorkspaceRepository()
