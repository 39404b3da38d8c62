"""
MoodLog Backend — Google Gemini Proxy Service
===============================================

What:  Forwards a free-text message to the Gemini generateContent REST API and
       returns the first candidate's text.
Who:   Instantiated once by the composition root; called by POST /gemini.

Wire format:
    POST {base}/models/{model}:generateContent?key=<GEMINI_API_KEY>
    {"contents": [{"role": "user", "parts": [{"text": <message>}]}]}

    Response text lives at candidates[0].content.parts[0].text. Any hole in
    that path (blocked prompt, empty candidate list) yields the fixed
    "No response from Gemini." answer instead of an error.

Resilience:
    One attempt per request. No retries, no circuit breaker: a failure is
    logged with the provider's error payload and reported to the client as a
    fixed 500 message.
"""

import logging
import time
from typing import Any, Dict, Optional

import httpx

from app.exceptions import GenerativeTextError, ValidationError
from app.middleware.request_id import new_request_id, request_id_var
from app.schemas.gemini import GeminiResponse

logger = logging.getLogger(__name__)


class GeminiService:
    """Single-turn Gemini text generation over REST."""

    NO_MESSAGE = "No message provided."
    NO_RESPONSE = "No response from Gemini."

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
    ):
        self._http = http_client
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")

        logger.info("GeminiService initialized with model=%s", self.model)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    @staticmethod
    def build_request(message: str) -> Dict[str, Any]:
        return {"contents": [{"role": "user", "parts": [{"text": message}]}]}

    @staticmethod
    def extract_text(payload: Any) -> Optional[str]:
        """First candidate's first part text, or None when the path is absent."""
        try:
            text = payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        return text if isinstance(text, str) else None

    async def converse(self, message: Any) -> GeminiResponse:
        """
        Send `message` to Gemini and return its answer. Non-string messages
        are sent as their text form (42 becomes "42").

        Raises:
            ValidationError: message absent or empty ({"response": ...} envelope)
            GenerativeTextError: transport failure, non-2xx status or non-JSON body
        """
        if not message:
            raise ValidationError(message=self.NO_MESSAGE, field="message", envelope_key="response")

        request_id = request_id_var.get("") or new_request_id()
        prompt = message if isinstance(message, str) else str(message)
        start_time = time.time()

        try:
            response = await self._http.post(
                self.endpoint,
                params={"key": self.api_key},
                json=self.build_request(prompt),
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "[%s] Gemini API error (status %d): %s",
                request_id,
                e.response.status_code,
                self._error_payload(e.response),
            )
            raise GenerativeTextError(
                context={"request_id": request_id, "status": e.response.status_code},
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error("[%s] Gemini API call failed: %s", request_id, str(e) or type(e).__name__)
            raise GenerativeTextError(
                context={"request_id": request_id, "error_type": type(e).__name__},
            )

        duration_ms = (time.time() - start_time) * 1000
        text = self.extract_text(payload)
        if not text:
            logger.warning("[%s] Gemini returned no candidate text", request_id)
            text = self.NO_RESPONSE

        logger.info(
            "[%s] Gemini call completed in %.0fms, %d chars",
            request_id,
            duration_ms,
            len(text),
        )
        return GeminiResponse(response=text)

    @staticmethod
    def _error_payload(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text
