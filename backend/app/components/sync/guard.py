"""Ownership checks that gate a whole sync batch."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.repositories.workspace import WorkspaceRepository, workspace_repository
from app.utils import get_logger

logger = get_logger(__name__)


class SyncAuthorizationError(Exception):
    """Batch-level rejection; no operation of the batch runs."""


class MissingCallerError(SyncAuthorizationError):
    def __init__(self):
        super().__init__("User ID is required")


class WorkspaceNotFoundError(SyncAuthorizationError):
    def __init__(self, workspace_id: str):
        self.workspace_id = workspace_id
        super().__init__("Workspace not found")


class WorkspaceAccessDeniedError(SyncAuthorizationError):
    def __init__(self, workspace_id: str, caller_id: str):
        self.workspace_id = workspace_id
        self.caller_id = caller_id
        super().__init__("Workspace does not belong to user")


@dataclass(frozen=True)
class WorkspaceScope:
    """Workspaces a batch is allowed to write to.

    `default_workspace_id` is used by Creates that do not name a workspace.
    """

    caller_id: str
    workspace_ids: frozenset[str]
    default_workspace_id: str | None = None

    def allows(self, workspace_id: str | None) -> bool:
        return workspace_id is not None and workspace_id in self.workspace_ids

    def workspace_for_create(self, requested: str | None) -> str | None:
        """Workspace a Create should land in, None if it is outside the scope."""
        workspace_id = requested or self.default_workspace_id
        return workspace_id if self.allows(workspace_id) else None


class OwnershipGuard:
    """Validates that the caller owns what a batch is about to mutate."""

    def __init__(self, workspace_repo: WorkspaceRepository = workspace_repository):
        self._workspace_repo = workspace_repo

    def authorize_workspace(self, db: Session, caller_id: str | None, workspace_id: str) -> WorkspaceScope:
        """Scope limited to one workspace owned by the caller.

        Raises:
            MissingCallerError: No caller identifier
            WorkspaceNotFoundError: Workspace does not exist
            WorkspaceAccessDeniedError: Workspace belongs to someone else
        """
        if not caller_id:
            raise MissingCallerError()

        workspace = self._workspace_repo.get_by_id(db, workspace_id)
        if workspace is None:
            logger.warning(f"Workspace not found: {workspace_id}")
            raise WorkspaceNotFoundError(workspace_id)
        if workspace.user_id != caller_id:
            logger.warning(f"Workspace {workspace_id} does not belong to user {caller_id}")
            raise WorkspaceAccessDeniedError(workspace_id, caller_id)

        return WorkspaceScope(
            caller_id=caller_id,
            workspace_ids=frozenset({workspace_id}),
            default_workspace_id=workspace_id,
        )

    def authorize_caller(self, db: Session, caller_id: str | None) -> WorkspaceScope:
        """Scope covering every workspace the caller owns.

        Raises:
            MissingCallerError: No caller identifier
        """
        if not caller_id:
            raise MissingCallerError()

        workspace_ids = frozenset(self._workspace_repo.get_owned_ids(db, caller_id))
        logger.info(f"Found {len(workspace_ids)} workspace(s) for user {caller_id}")
        return WorkspaceScope(caller_id=caller_id, workspace_ids=workspace_ids)
