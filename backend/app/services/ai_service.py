"""AI content generation through an OpenAI-compatible chat completion API.

API Flow:
1. POST {openrouter_url}/chat/completions with a system + user prompt
2. choices[0].message.content is returned untouched as `rawResponse`

Upstream timeouts (client side, or a 504/524 from the provider) surface as
504 so the frontend can tell them apart from real failures.
"""

from typing import Any

import httpx

from app.settings import settings
from app.utils import get_logger

logger = get_logger(__name__)

MAX_ERROR_TEXT = 500
TIMEOUT_STATUS_CODES = (504, 524)

SYSTEM_PROMPT = (
    "You are a helpful assistant. Provide content about the requested subject, "
    "split into important topics using Markdown. Use relevant emojis to make the "
    "content more visual. IMPORTANT: return ONLY Markdown text. Do NOT return JSON "
    "structures and do NOT create folders or files."
)

USER_PROMPT_TEMPLATE = (
    'Provide content about: "{topic}". Split it into important topics using Markdown '
    "(headings, lists, paragraphs) and illustrate each section with relevant emojis. "
    "Return ONLY Markdown text, without JSON structures or references to folders/files."
)


class AIServiceError(Exception):
    """Upstream failure carrying the HTTP status to answer with."""

    def __init__(self, status_code: int, error: str, message: str):
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.error, "message": self.message}


class AIService:
    """Client for the AI provider."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.openrouter_url).rstrip("/")
        self.api_key = settings.openrouter_api_key if api_key is None else api_key
        self.model = model or settings.openrouter_model
        self.timeout = timeout or settings.ai_timeout
        self._transport = transport

    def _get_headers(self) -> dict:
        headers = {
            "Content-Type": "application/json",
            "HTTP-Referer": settings.openrouter_referrer,
            "X-Title": settings.ai_app_title,
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout)

    async def generate(self, topic: str) -> dict[str, Any]:
        """Generate Markdown content about a topic.

        Returns:
            {"rawResponse": str, "fullResponse": dict}

        Raises:
            AIServiceError: On timeout, upstream error or empty content
        """
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT_TEMPLATE.format(topic=topic)},
            ],
            "temperature": 0.7,
        }

        logger.info(f"Calling AI provider with topic: {topic!r} (model={self.model})")
        try:
            async with self._client() as client:
                resp = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=self._get_headers(),
                )
        except httpx.TimeoutException as e:
            logger.warning(f"AI request timed out after {self.timeout}s: {e}")
            raise AIServiceError(
                504,
                "Request timeout",
                "The request took too long to answer. Try again or use a simpler topic.",
            ) from e

        if resp.is_error:
            error_text = resp.text
            logger.error(f"AI provider error {resp.status_code}: {error_text[:MAX_ERROR_TEXT]}")
            if resp.status_code in TIMEOUT_STATUS_CODES or "timeout" in error_text.lower():
                raise AIServiceError(
                    504,
                    "Request timeout",
                    "The AI provider took too long to answer. Try again with a simpler topic.",
                )
            raise AIServiceError(
                resp.status_code,
                "AI service error",
                f"Failed to generate content: {error_text[:MAX_ERROR_TEXT]}",
            )

        data = resp.json()
        choices = data.get("choices") or [{}]
        content = ((choices[0] or {}).get("message") or {}).get("content") or ""
        if not content:
            logger.error(f"AI provider returned no content: {data}")
            message = (data.get("error") or {}).get("message") or "AI did not return any content."
            raise AIServiceError(500, "Invalid AI response", message)

        if '"type"' in content and ('"folder"' in content or '"note"' in content):
            logger.warning("AI response looks like a JSON folder/file structure instead of Markdown")

        logger.info(f"Received AI response ({len(content)} characters)")
        return {"rawResponse": content, "fullResponse": data}

    async def check_health(self) -> dict[str, str]:
        """Probe the provider with a minimal completion request."""
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": "test"}],
            "max_tokens": 5,
        }
        try:
            async with self._client() as client:
                resp = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=self._get_headers(),
                )
        except httpx.HTTPError as e:
            return {
                "status": "unavailable",
                "message": "Cannot connect to AI provider",
                "error": str(e),
            }

        if resp.is_error:
            return {"status": "unavailable", "message": "AI provider is not responding"}
        return {"status": "available", "message": "AI provider is running"}


ai_service = AIService()


def get_ai_service() -> AIService:
    """FastAPI dependency returning the shared AI client."""
    return ai_service
