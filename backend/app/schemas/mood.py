"""
Pydantic schemas for mood logging (/mood, /mood/{userId}).
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class MoodRequest(BaseModel):
    """
    What:  Body of POST /mood.
    Why optional fields: missing userId/mood must produce the accessor's own
           400 {"error": ...} envelope, not FastAPI's 422.
    """

    userId: Optional[str] = Field(default=None, description="Client-supplied user identifier")
    mood: Optional[str] = Field(default=None, description="Mood label, e.g. 'happy'")
    timestamp: Optional[Union[str, float]] = Field(
        default=None,
        description="When the mood was felt (ISO 8601 or epoch ms). Defaults to now.",
    )


class MoodRecord(BaseModel):
    """Latest mood for a user, timestamp rendered as ISO 8601 (UTC, ms, 'Z')."""

    userId: str
    mood: str
    timestamp: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
