"""
MoodLog Backend — Gemini Proxy Route
======================================

What:  POST /gemini — forwards {"message"} to Gemini, answers {"response"}.
       Errors use the same {"response": ...} envelope (400 and 500).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.dependencies import get_gemini_service
from app.schemas.gemini import GeminiRequest, GeminiResponse
from app.services.gemini_service import GeminiService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Gemini"])


@router.post(
    "/gemini",
    response_model=GeminiResponse,
    responses={
        200: {"description": "Model answer", "model": GeminiResponse},
        400: {"description": "No message provided", "model": GeminiResponse},
        500: {"description": "Gemini unreachable or rejected the call", "model": GeminiResponse},
    },
    summary="Ask Gemini a single-turn question",
)
async def converse(
    payload: Optional[GeminiRequest] = None,
    gemini: GeminiService = Depends(get_gemini_service),
) -> GeminiResponse:
    payload = payload or GeminiRequest()
    return await gemini.converse(payload.message)
