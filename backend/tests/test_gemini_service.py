"""
MoodLog Backend — Gemini Service Unit Tests (Mocked)
======================================================

What:  Tests for GeminiService against a scripted generateContent endpoint.
Why:   Tests should not make real API calls (costs money, requires network).
How:   FakeGemini (conftest) sits behind httpx.MockTransport.

What we test:
    ✅ Request envelope, model path and key parameter
    ✅ Candidate text is returned; missing text → fixed fallback
    ✅ Non-2xx, transport errors and non-JSON bodies → GenerativeTextError
    ✅ Empty message → ValidationError with the "response" envelope, no call
    ❌ Real API calls
"""

import json

import httpx
import pytest

from app.exceptions import GenerativeTextError, ValidationError
from app.services.gemini_service import GeminiService


@pytest.fixture
def gemini(fake_gemini):
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_gemini))
    return GeminiService(
        http_client=client,
        api_key="gm-key",
        model="gemini-2.0-flash",
        base_url="https://gemini.test/v1beta/",
    )


class TestConverse:

    @pytest.mark.asyncio
    async def test_success(self, gemini, fake_gemini):
        fake_gemini.reply_text("You sound tired. Rest well.")

        result = await gemini.converse("I slept badly")

        assert result.response == "You sound tired. Rest well."
        request = fake_gemini.requests[0]
        assert request.method == "POST"
        assert request.url.host == "gemini.test"
        assert request.url.path == "/v1beta/models/gemini-2.0-flash:generateContent"
        assert request.url.params["key"] == "gm-key"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {
            "contents": [{"role": "user", "parts": [{"text": "I slept badly"}]}]
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"candidates": []},
            {"candidates": [{"finishReason": "SAFETY"}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
        ],
    )
    async def test_missing_text_falls_back(self, gemini, fake_gemini, payload):
        fake_gemini.payload = payload
        result = await gemini.converse("hello")
        assert result.response == "No response from Gemini."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 403, 429, 500, 503])
    async def test_error_status(self, gemini, fake_gemini, status):
        fake_gemini.status_code = status
        fake_gemini.payload = {"error": {"code": status, "message": "API key not valid"}}

        with pytest.raises(GenerativeTextError) as exc_info:
            await gemini.converse("hello")

        assert exc_info.value.to_content() == {
            "response": "Oops! Something went wrong. Check your API key or connection."
        }
        assert exc_info.value.context["status"] == status

    @pytest.mark.asyncio
    async def test_transport_failure(self, gemini, fake_gemini):
        fake_gemini.error = httpx.ConnectError("connection refused")
        with pytest.raises(GenerativeTextError):
            await gemini.converse("hello")

    @pytest.mark.asyncio
    async def test_non_json_body(self, gemini, fake_gemini):
        fake_gemini.payload = "<html>not json</html>"
        with pytest.raises(GenerativeTextError):
            await gemini.converse("hello")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [None, ""])
    async def test_empty_message_rejected_without_call(self, gemini, fake_gemini, message):
        with pytest.raises(ValidationError) as exc_info:
            await gemini.converse(message)

        assert exc_info.value.to_content() == {"response": "No message provided."}
        assert fake_gemini.requests == []

    @pytest.mark.asyncio
    async def test_non_string_message_sent_as_text(self, gemini, fake_gemini):
        await gemini.converse(42)
        sent = json.loads(fake_gemini.requests[0].content)
        assert sent["contents"][0]["parts"][0]["text"] == "42"


class TestExtractText:

    def test_first_candidate_first_part(self):
        payload = {
            "candidates": [
                {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
                {"content": {"parts": [{"text": "other"}]}},
            ]
        }
        assert GeminiService.extract_text(payload) == "first"

    def test_non_dict_payload(self):
        assert GeminiService.extract_text(["not", "a", "dict"]) is None
