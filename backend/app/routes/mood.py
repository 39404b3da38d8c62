"""
MoodLog Backend — Mood Route Handlers
=======================================

What:  POST /mood (record) and GET /mood/{user_id} (latest mood).
Why:   The mobile client logs a mood after each check-in and shows the most
       recent one on its home screen.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.dependencies import get_mood_service
from app.schemas.mood import ErrorResponse, MessageResponse, MoodRecord, MoodRequest
from app.services.mood_service import MoodService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Mood"])


@router.post(
    "/mood",
    status_code=201,
    response_model=MessageResponse,
    responses={
        201: {"description": "Mood recorded", "model": MessageResponse},
        400: {"description": "userId or mood missing", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Record a mood entry",
)
async def record_mood(
    payload: Optional[MoodRequest] = None,
    moods: MoodService = Depends(get_mood_service),
) -> MessageResponse:
    payload = payload or MoodRequest()
    return await moods.record_mood(payload.userId, payload.mood, payload.timestamp)


@router.get(
    "/mood/{user_id}",
    response_model=MoodRecord,
    responses={
        200: {"description": "Most recent mood", "model": MoodRecord},
        400: {"description": "userId missing", "model": ErrorResponse},
        404: {"description": "No mood recorded for this user"},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Get the latest mood for a user",
)
async def latest_mood(
    user_id: str,
    moods: MoodService = Depends(get_mood_service),
) -> MoodRecord:
    return await moods.latest_mood(user_id)
