"""Workspace API endpoints.

Also hosts the workspace-scoped routes of the files family, including both
file sync entry points.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.deps import (
    AuthenticatedCaller,
    get_caller,
    get_optional_caller,
    require_owned_workspace,
    require_readable_workspace,
)
from app.components.sync import ItemDraft
from app.db import get_db
from app.models.schemas import (
    FileCreate,
    FileOut,
    SyncRequest,
    SyncResponse,
    WorkspaceCreate,
    WorkspaceFilesOut,
    WorkspaceOut,
    WorkspaceUpdate,
)
from app.repositories import file_repository, workspace_repository
from app.services import file_sync_engine
from app.utils import extract_youtube_id, get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=list[WorkspaceOut])
def list_workspaces(
    caller: AuthenticatedCaller | None = Depends(get_optional_caller),
    db: Session = Depends(get_db),
):
    """Workspaces owned by or shared with the caller, newest first."""
    if caller is None:
        return []
    return workspace_repository.get_for_user(db, caller.user_id)


@router.post("", response_model=WorkspaceOut, status_code=status.HTTP_201_CREATED)
def create_workspace(
    body: WorkspaceCreate,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    workspace = workspace_repository.create_workspace(
        db,
        user_id=caller.user_id,
        title=body.title,
        description=body.description,
        is_public=body.is_public,
        cover_color=body.cover_color,
    )
    logger.info(f"Created workspace {workspace.id} for user {caller.user_id}")
    return workspace


@router.get("/sync-files", response_model=WorkspaceFilesOut)
def get_sync_files(
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Everything an offline client needs for its first sync."""
    workspaces = workspace_repository.get_owned(db, caller.user_id)
    files = file_repository.list_for_workspaces(db, [workspace.id for workspace in workspaces])
    logger.info(f"Initial sync for user {caller.user_id}: {len(workspaces)} workspace(s), {len(files)} file(s)")
    return {"workspaces": [WorkspaceOut.model_validate(workspace) for workspace in workspaces], "files": files}


@router.post("/sync", response_model=SyncResponse)
def sync_all_files(
    body: SyncRequest,
    caller: AuthenticatedCaller | None = Depends(get_optional_caller),
    db: Session = Depends(get_db),
):
    """Apply a batch of offline file operations across all the caller's workspaces.

    Each Create names its target with `workspaceId`.
    """
    payloads = [operation.model_dump() for operation in body.operations or []]
    result = file_sync_engine.sync_all(db, caller.user_id if caller else None, payloads)
    return result.to_dict()


@router.patch("/{workspace_id}", response_model=WorkspaceOut)
def update_workspace(
    workspace_id: str,
    body: WorkspaceUpdate,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    workspace = require_owned_workspace(db, workspace_id, caller)
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    return workspace_repository.update_workspace(db, workspace, changes)


@router.get("/{workspace_id}/files", response_model=list[FileOut])
def list_files(
    workspace_id: str,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Active files of a workspace, ordered by order_index."""
    require_readable_workspace(db, workspace_id, caller)
    return file_repository.list_active(db, workspace_id)


@router.post("/{workspace_id}/files", response_model=FileOut, status_code=status.HTTP_201_CREATED)
def create_file(
    workspace_id: str,
    body: FileCreate,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_owned_workspace(db, workspace_id, caller)

    order_index = body.order_index
    if order_index is None:
        order_index = file_repository.next_order_index(db, workspace_id, body.parent_id)

    draft = ItemDraft(
        type=body.type,
        order_index=order_index,
        parent_id=body.parent_id,
        title=body.title,
        content=body.content,
        youtube_url=body.youtube_url,
        youtube_id=extract_youtube_id(body.youtube_url),
        description=body.description,
    )
    record = file_repository.insert(db, workspace_id, draft)
    logger.info(f"Created {body.type} file {record['id']} in workspace {workspace_id}")
    return record


@router.post("/{workspace_id}/sync", response_model=SyncResponse)
def sync_workspace_files(
    workspace_id: str,
    body: SyncRequest,
    caller: AuthenticatedCaller | None = Depends(get_optional_caller),
    db: Session = Depends(get_db),
):
    """Apply a batch of offline file operations to one workspace."""
    payloads = [operation.model_dump() for operation in body.operations or []]
    result = file_sync_engine.sync_workspace(db, caller.user_id if caller else None, workspace_id, payloads)
    return result.to_dict()
