from .schemas import (
    AIChatCreate,
    AIChatOut,
    AIChatUpdate,
    AIGenerateRequest,
    AIGenerateResponse,
    FileCreate,
    FileOut,
    ItemCreate,
    ItemOrderUpdate,
    ItemOut,
    ItemUpdate,
    SyncOperationIn,
    SyncRequest,
    SyncResponse,
    WorkspaceCreate,
    WorkspaceFilesOut,
    WorkspaceOut,
    WorkspaceUpdate,
)

__all__ = [
    "WorkspaceCreate",
    "WorkspaceUpdate",
    "WorkspaceOut",
    "WorkspaceFilesOut",
    "ItemCreate",
    "FileCreate",
    "ItemUpdate",
    "ItemOrderUpdate",
    "ItemOut",
    "FileOut",
    "SyncOperationIn",
    "SyncRequest",
    "SyncResponse",
    "AIGenerateRequest",
    "AIGenerateResponse",
    "AIChatCreate",
    "AIChatUpdate",
    "AIChatOut",
]
