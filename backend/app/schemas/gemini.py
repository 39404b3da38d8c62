"""
Pydantic schemas for the generative-text proxy (/gemini).
Success and failure bodies share one shape: {"response": <text>}.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class GeminiRequest(BaseModel):
    """
    `message` accepts any JSON value. Non-string values are forwarded as their
    text form, so a numeric message gets an answer rather than a schema error.
    """

    message: Optional[Any] = Field(default=None, description="Free-text prompt")


class GeminiResponse(BaseModel):
    response: str
