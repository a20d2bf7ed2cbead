"""Item API endpoints (single-table item family).

Routes are mounted under /folders for compatibility with the offline
client: /folders/{workspace_id}/... address a workspace, /folders/items/...
address one item.
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
from app.components.sync import ItemDraft, ItemPatch, UnsupportedFieldError
from app.db import Item, get_db
from app.models.schemas import ItemCreate, ItemOrderUpdate, ItemOut, ItemUpdate, SyncRequest, SyncResponse
from app.repositories import item_repository
from app.services import item_sync_engine
from app.utils import extract_youtube_id, get_logger

logger = get_logger(__name__)

router = APIRouter()


def _get_owned_item(db: Session, item_id: str, caller: AuthenticatedCaller) -> Item:
    item = item_repository.get_by_id(db, item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    require_owned_workspace(db, item.workspace_id, caller)
    return item


@router.get("/{workspace_id}/items", response_model=list[ItemOut])
def list_items(
    workspace_id: str,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Live items of a workspace, ordered by order_index."""
    require_readable_workspace(db, workspace_id, caller)
    items = item_repository.list_active(db, workspace_id)
    return [item_repository.to_record(item) for item in items]


@router.post("/{workspace_id}/items", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
def create_item(
    workspace_id: str,
    body: ItemCreate,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Create one item, appended after its siblings unless order_index is given."""
    require_owned_workspace(db, workspace_id, caller)

    order_index = body.order_index
    if order_index is None:
        order_index = item_repository.next_order_index(db, workspace_id, body.parent_id)

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
    record = item_repository.insert(db, workspace_id, draft)
    logger.info(f"Created item {record['id']} in workspace {workspace_id}")
    return record


@router.post("/{workspace_id}/sync", response_model=SyncResponse)
def sync_items(
    workspace_id: str,
    body: SyncRequest,
    caller: AuthenticatedCaller | None = Depends(get_optional_caller),
    db: Session = Depends(get_db),
):
    """Apply a batch of offline operations to one workspace."""
    payloads = [operation.model_dump() for operation in body.operations or []]
    result = item_sync_engine.sync_workspace(db, caller.user_id if caller else None, workspace_id, payloads)
    return result.to_dict()


@router.get("/{workspace_id}/trash", response_model=list[ItemOut])
def list_trash(
    workspace_id: str,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Soft-deleted items, most recently deleted first."""
    require_readable_workspace(db, workspace_id, caller)
    items = item_repository.list_trash(db, workspace_id)
    return [item_repository.to_record(item) for item in items]


@router.patch("/items/{item_id}", response_model=ItemOut)
def update_item(
    item_id: str,
    body: ItemUpdate,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    _get_owned_item(db, item_id, caller)

    try:
        patch = ItemPatch.from_mapping(body.model_dump(exclude_unset=True))
    except UnsupportedFieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    if patch.is_empty():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    return item_repository.apply_patch(db, item_id, patch)


@router.patch("/items/{item_id}/order", response_model=ItemOut)
def update_item_order(
    item_id: str,
    body: ItemOrderUpdate,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Move an item: new order_index and parent (omitted parent = root)."""
    _get_owned_item(db, item_id, caller)
    return item_repository.move(db, item_id, body.order_index, body.parent_id)


@router.delete("/items/{item_id}")
def delete_item(
    item_id: str,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Move an item to the trash."""
    _get_owned_item(db, item_id, caller)
    item_repository.soft_delete(db, item_id)
    logger.info(f"Moved item {item_id} to trash")
    return {"success": True, "id": item_id}


@router.post("/items/{item_id}/restore", response_model=ItemOut)
def restore_item(
    item_id: str,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    _get_owned_item(db, item_id, caller)
    return item_repository.restore(db, item_id)


@router.delete("/items/{item_id}/permanent")
def purge_item(
    item_id: str,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Permanently delete an item."""
    _get_owned_item(db, item_id, caller)
    item_repository.purge(db, item_id)
    logger.info(f"Permanently deleted item {item_id}")
    return {"success": True, "id": item_id}
