"""Pydantic models matching the frontend TypeScript types.

Stored records keep their snake_case column names; sync envelopes use the
camelCase keys the offline client sends.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ItemType = Literal["note", "video", "folder", "task", "section"]
FileType = Literal["note", "video", "folder"]


# ==================== Workspaces ====================


class WorkspaceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    is_public: bool = False
    cover_color: str | None = None


class WorkspaceUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    is_public: bool | None = None
    cover_color: str | None = None

    @field_validator("title", "is_public")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class WorkspaceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: str | None = None
    is_public: bool
    cover_color: str | None = None
    created_at: int
    updated_at: int


# ==================== Items & files ====================


class ItemCreate(BaseModel):
    type: ItemType
    title: str | None = None
    content: str | None = None
    youtube_url: str | None = None
    description: str | None = None
    parent_id: str | None = None
    order_index: int | None = Field(None, ge=0)  # appended when omitted


class FileCreate(BaseModel):
    type: FileType
    title: str | None = None
    content: str | None = None
    youtube_url: str | None = None
    description: str | None = None
    parent_id: str | None = None
    order_index: int | None = Field(None, ge=0)


class ItemUpdate(BaseModel):
    """Partial update. Only the fields present in the body are written."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    content: str | None = None
    youtube_url: str | None = None
    description: str | None = None
    completed: bool | None = None
    active: bool | None = None

    @field_validator("title", "completed", "active")
    @classmethod
    def reject_null(cls, v, info):
        # Omit a field to leave it unchanged; these columns are NOT NULL
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class ItemOrderUpdate(BaseModel):
    order_index: int = Field(..., ge=0)
    parent_id: str | None = None


class ItemOut(BaseModel):
    id: str
    workspace_id: str
    parent_id: str | None = None
    type: str
    title: str
    content: str | None = None
    youtube_url: str | None = None
    youtube_id: str | None = None
    description: str | None = None
    completed: bool = False
    completed_at: int | None = None
    order_index: int
    active: bool | None = True
    deleted_at: int | None = None
    created_at: int
    updated_at: int


class FileOut(BaseModel):
    id: str
    workspace_id: str
    type: str
    parent_id: str | None = None
    order_index: int
    active: bool
    deleted_at: int | None = None
    created_at: int
    updated_at: int
    title: str | None = None
    content: str | None = None
    youtube_url: str | None = None
    youtube_id: str | None = None
    description: str | None = None


class WorkspaceFilesOut(BaseModel):
    workspaces: list[WorkspaceOut]
    files: list[FileOut]


# ==================== Sync ====================


class SyncOperationIn(BaseModel):
    """One pending offline mutation.

    `type` is kept as a plain string so unknown kinds reach the engine
    (which drops them) instead of failing the whole batch.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    type: str
    timestamp: float | None = None
    workspaceId: str | None = None
    field: str | None = None
    value: Any = None
    data: dict[str, Any] | None = None
    # Legacy reorder format
    orderIndex: int | None = None
    parentId: str | None = None


class SyncRequest(BaseModel):
    operations: list[SyncOperationIn] | None = None

    @field_validator("operations", mode="before")
    @classmethod
    def default_operations(cls, v):
        return v or []


class SyncResponse(BaseModel):
    success: bool
    synced: int
    failed: int
    results: list[dict[str, Any]]
    errors: list[str]
    tempIdMap: dict[str, str]


# ==================== AI ====================


class AIGenerateRequest(BaseModel):
    topic: str | None = None
    workspaceId: str | None = None
    userId: str | None = None


class AIGenerateResponse(BaseModel):
    success: bool = True
    rawResponse: str
    fullResponse: dict[str, Any]
    message: str = "AI response received"


class AIChatCreate(BaseModel):
    workspaceId: str | None = None
    title: str | None = Field(None, max_length=255)
    messages: list[Any] = Field(default_factory=list)


class AIChatUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=255)
    messages: list[Any] | None = None

    @field_validator("title", "messages")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class AIChatOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    workspace_id: str
    title: str
    messages: list[Any]
    created_at: int
    updated_at: int
