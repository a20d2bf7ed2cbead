"""AI chat repository: saved conversations per (user, workspace)."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models import AIChat
from app.repositories.base import BaseRepository
from app.utils import generate_id, get_timestamp_ms

AI_CHAT_UPDATABLE_FIELDS = ("title", "messages")


class AIChatRepository(BaseRepository[AIChat]):
    """Repository for AIChat entity operations."""

    def __init__(self):
        super().__init__(AIChat)

    def list_for_user(self, db: Session, user_id: str, workspace_id: str) -> list[AIChat]:
        """Chats of one user in one workspace, most recently updated first."""
        stmt = (
            select(AIChat)
            .where(AIChat.user_id == user_id, AIChat.workspace_id == workspace_id)
            .order_by(AIChat.updated_at.desc(), AIChat.created_at.desc())
        )
        return list(db.execute(stmt).scalars().all())

    def create_chat(
        self,
        db: Session,
        user_id: str,
        workspace_id: str,
        title: str,
        messages: list[Any] | None = None,
    ) -> AIChat:
        now = get_timestamp_ms()
        chat_data = {
            "id": generate_id("chat"),
            "user_id": user_id,
            "workspace_id": workspace_id,
            "title": title,
            "messages": list(messages or []),
            "created_at": now,
            "updated_at": now,
        }
        return self.create(db, chat_data)

    def update_chat(self, db: Session, chat: AIChat, changes: dict[str, Any]) -> AIChat:
        """Replace title and/or messages and stamp updated_at.

        Raises:
            ValueError: If `changes` holds no updatable field
        """
        values = {key: value for key, value in changes.items() if key in AI_CHAT_UPDATABLE_FIELDS}
        if not values:
            raise ValueError("At least one field (title or messages) must be provided")
        values["updated_at"] = get_timestamp_ms()
        return self.update(db, chat, values)


# Singleton instance
ai_chat_repository = AIChatRepository()
