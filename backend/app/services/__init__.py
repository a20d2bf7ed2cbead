from .ai_service import AIService, AIServiceError, ai_service, get_ai_service
from .sync_service import file_sync_engine, item_sync_engine

__all__ = [
    "AIService",
    "AIServiceError",
    "ai_service",
    "get_ai_service",
    "item_sync_engine",
    "file_sync_engine",
]
