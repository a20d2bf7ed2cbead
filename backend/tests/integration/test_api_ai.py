"""Integration tests for the AI proxy.

The upstream provider is replaced with httpx.MockTransport.
"""

import json

import httpx
import pytest

from app.main import app
from app.services import AIService, get_ai_service

GENERATE_BODY = {"topic": "Photosynthesis", "workspaceId": "ws_1", "userId": "user_owner"}


@pytest.fixture
def use_provider(client):
    """Route AI calls to a handler; returns the list of captured requests."""
    captured: list[httpx.Request] = []

    def install(handler):
        def recording_handler(request: httpx.Request):
            captured.append(request)
            return handler(request)

        service = AIService(
            base_url="https://ai.test/api/v1",
            api_key="sk-test",
            model="test-model",
            transport=httpx.MockTransport(recording_handler),
        )
        app.dependency_overrides[get_ai_service] = lambda: service
        return captured

    return install


def _completion(content):
    return {"id": "gen-1", "choices": [{"message": {"role": "assistant", "content": content}}]}


class TestGenerate:
    def test_success(self, client, use_provider):
        captured = use_provider(lambda request: httpx.Response(200, json=_completion("# 🌱 Photosynthesis")))

        response = client.post("/api/v1/ai/generate", json=GENERATE_BODY)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["rawResponse"] == "# 🌱 Photosynthesis"
        assert data["fullResponse"]["id"] == "gen-1"
        assert data["message"] == "AI response received"

        request = captured[0]
        assert str(request.url) == "https://ai.test/api/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        payload = json.loads(request.content)
        assert payload["model"] == "test-model"
        assert payload["temperature"] == 0.7
        assert [m["role"] for m in payload["messages"]] == ["system", "user"]
        assert "Photosynthesis" in payload["messages"][1]["content"]

    @pytest.mark.parametrize("missing", ["topic", "workspaceId", "userId"])
    def test_missing_fields(self, client, use_provider, missing):
        use_provider(lambda request: httpx.Response(200, json=_completion("x")))
        body = {key: value for key, value in GENERATE_BODY.items() if key != missing}

        response = client.post("/api/v1/ai/generate", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_client_timeout_is_504(self, client, use_provider):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        use_provider(handler)
        response = client.post("/api/v1/ai/generate", json=GENERATE_BODY)

        assert response.status_code == 504
        assert response.json()["error"] == "Request timeout"

    @pytest.mark.parametrize("status_code", [504, 524])
    def test_upstream_timeout_is_504(self, client, use_provider, status_code):
        use_provider(lambda request: httpx.Response(status_code, text="gateway"))
        assert client.post("/api/v1/ai/generate", json=GENERATE_BODY).status_code == 504

    def test_upstream_error_keeps_status_and_truncates(self, client, use_provider):
        use_provider(lambda request: httpx.Response(429, text="x" * 2000))

        response = client.post("/api/v1/ai/generate", json=GENERATE_BODY)

        assert response.status_code == 429
        data = response.json()
        assert data["error"] == "AI service error"
        assert data["message"] == "Failed to generate content: " + "x" * 500

    def test_empty_content_is_500(self, client, use_provider):
        use_provider(lambda request: httpx.Response(200, json={"choices": []}))

        response = client.post("/api/v1/ai/generate", json=GENERATE_BODY)

        assert response.status_code == 500
        assert response.json()["error"] == "Invalid AI response"


class TestAIHealth:
    def test_available(self, client, use_provider):
        captured = use_provider(lambda request: httpx.Response(200, json=_completion("ok")))

        assert client.get("/api/v1/ai/health").json()["status"] == "available"
        assert json.loads(captured[0].content)["max_tokens"] == 5

    def test_unavailable_on_error_status(self, client, use_provider):
        use_provider(lambda request: httpx.Response(401, json={"error": {"message": "bad key"}}))
        assert client.get("/api/v1/ai/health").json()["status"] == "unavailable"

    def test_unavailable_on_connection_error(self, client, use_provider):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        use_provider(handler)
        data = client.get("/api/v1/ai/health").json()
        assert data["status"] == "unavailable"
        assert "refused" in data["error"]
