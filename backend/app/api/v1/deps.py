"""Shared FastAPI dependencies for v1 endpoints.

The caller is identified by the `x-user-id` header and trusted as-is.
"""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.db import Workspace, get_db
from app.repositories import workspace_repository


@dataclass(frozen=True)
class AuthenticatedCaller:
    user_id: str


def get_optional_caller(x_user_id: str | None = Header(None)) -> AuthenticatedCaller | None:
    if not x_user_id:
        return None
    return AuthenticatedCaller(user_id=x_user_id)


def get_caller(caller: AuthenticatedCaller | None = Depends(get_optional_caller)) -> AuthenticatedCaller:
    """Require a caller.

    Raises:
        HTTPException: 401 if the header is missing
    """
    if caller is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User ID is required")
    return caller


def require_owned_workspace(db: Session, workspace_id: str, caller: AuthenticatedCaller) -> Workspace:
    """Fetch a workspace the caller owns.

    Raises:
        HTTPException: 404 if missing, 403 if owned by someone else
    """
    workspace = workspace_repository.get_by_id(db, workspace_id)
    if workspace is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workspace not found")
    if workspace.user_id != caller.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Workspace does not belong to user")
    return workspace


def require_readable_workspace(db: Session, workspace_id: str, caller: AuthenticatedCaller) -> Workspace:
    """Fetch a workspace the caller owns or that was shared with them."""
    workspace = workspace_repository.get_by_id(db, workspace_id)
    if workspace is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workspace not found")
    if not workspace_repository.can_read(db, workspace, caller.user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Workspace is not accessible")
    return workspace
