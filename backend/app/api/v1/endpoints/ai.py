"""AI endpoints: content generation and saved chat history."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.v1.deps import AuthenticatedCaller, get_caller, require_readable_workspace
from app.db import AIChat, get_db
from app.models.schemas import AIChatCreate, AIChatOut, AIChatUpdate, AIGenerateRequest, AIGenerateResponse
from app.repositories import ai_chat_repository
from app.services import AIService, AIServiceError, get_ai_service
from app.utils import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _missing_fields(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Missing required fields", "message": message},
    )


def _get_own_chat(db: Session, chat_id: str, caller: AuthenticatedCaller) -> AIChat:
    chat = ai_chat_repository.get_by_id(db, chat_id)
    if chat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")
    if chat.user_id != caller.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Chat does not belong to user")
    return chat


@router.post("/generate", response_model=AIGenerateResponse)
async def generate(body: AIGenerateRequest, ai: AIService = Depends(get_ai_service)):
    """Generate Markdown content about a topic."""
    if not body.topic or not body.workspaceId or not body.userId:
        return _missing_fields("topic, workspaceId, and userId are required")

    try:
        result = await ai.generate(body.topic)
    except AIServiceError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    return AIGenerateResponse(rawResponse=result["rawResponse"], fullResponse=result["fullResponse"])


@router.get("/health")
async def ai_health(ai: AIService = Depends(get_ai_service)):
    return await ai.check_health()


# ==================== Chat history ====================


@router.get("/chats", response_model=list[AIChatOut])
def list_chats(
    workspace_id: str | None = Query(None, alias="workspaceId"),
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """The caller's chats in a workspace, most recently updated first."""
    if not workspace_id:
        return _missing_fields("workspaceId is required")
    require_readable_workspace(db, workspace_id, caller)
    return ai_chat_repository.list_for_user(db, caller.user_id, workspace_id)


@router.post("/chats", response_model=AIChatOut, status_code=status.HTTP_201_CREATED)
def create_chat(
    body: AIChatCreate,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    if not body.workspaceId or not body.title:
        return _missing_fields("workspaceId and title are required")
    require_readable_workspace(db, body.workspaceId, caller)

    chat = ai_chat_repository.create_chat(
        db,
        user_id=caller.user_id,
        workspace_id=body.workspaceId,
        title=body.title,
        messages=body.messages,
    )
    logger.info(f"Created AI chat {chat.id} for user {caller.user_id} in workspace {body.workspaceId}")
    return chat


@router.put("/chats/{chat_id}", response_model=AIChatOut)
def update_chat(
    chat_id: str,
    body: AIChatUpdate,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Replace the title and/or the whole message list."""
    chat = _get_own_chat(db, chat_id, caller)
    try:
        return ai_chat_repository.update_chat(db, chat, body.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.delete("/chats/{chat_id}")
def delete_chat(
    chat_id: str,
    caller: AuthenticatedCaller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    _get_own_chat(db, chat_id, caller)
    ai_chat_repository.delete(db, chat_id)
    logger.info(f"Deleted AI chat {chat_id}")
    return {"success": True, "message": "Chat deleted successfully"}
