"""Single-file API endpoints (base + companion file family)."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.deps import AuthenticatedCaller, get_caller, require_owned_workspace
from app.components.sync import ItemPatch, UnsupportedFieldError
from app.db import File, get_db
from app.models.schemas import FileOut, ItemUpdate
from app.repositories import file_repository
from app.utils import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _get_owned_file(db: Session, file_id: str, caller: AuthenticatedCaller) -> File:
    file = file_repository.get_by_id(db, file_id)
    if file is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    require_owned_workspace(db, file.workspace_id, caller)
    return file


@router.get("/{file_id}", response_model=FileOut)
def get_file(
    file_id: str,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    file = _get_owned_file(db, file_id, caller)
    return file_repository.to_record(file)


@router.patch("/{file_id}", response_model=FileOut)
def update_file(
    file_id: str,
    body: ItemUpdate,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Patch base and payload fields; fields the file type lacks are rejected."""
    _get_owned_file(db, file_id, caller)

    patch = ItemPatch.from_mapping(body.model_dump(exclude_unset=True))
    if patch.is_empty():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    try:
        return file_repository.apply_patch(db, file_id, patch)
    except UnsupportedFieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.delete("/{file_id}")
def delete_file(
    file_id: str,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Soft delete (active = false)."""
    _get_owned_file(db, file_id, caller)
    file_repository.soft_delete(db, file_id)
    logger.info(f"Deactivated file {file_id}")
    return {"success": True, "id": file_id}


@router.post("/{file_id}/restore", response_model=FileOut)
def restore_file(
    file_id: str,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    _get_owned_file(db, file_id, caller)
    return file_repository.restore(db, file_id)
