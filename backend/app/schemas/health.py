"""Pydantic schema for GET /health."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    What:  Liveness report for load balancers and container probes.
    Note:  No provider round-trip is made; a healthy process may still have an
           unreachable Firestore or Gemini.
    """

    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    store_backend: str = Field(description="Configured document store: firestore or memory")
    gemini_configured: bool = Field(description="Whether a Gemini API key is set")
    uptime_seconds: float = Field(description="Seconds since service started")
