"""
MoodLog Backend — Journal Route Handlers
==========================================

What:  GET /jentries (list), GET /jentry/{entry_id} (detail), POST /jlog (append).

Caching:
    Entries are immutable once written, so the detail route is cacheable
    (private: journal text is personal). The list changes on every append and
    is not cached.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response

from app.dependencies import get_journal_service
from app.schemas.journal import JournalEntry, JournalEntryCreated, JournalEntryRequest
from app.schemas.mood import ErrorResponse
from app.services.journal_service import JournalService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Journal"])


@router.get(
    "/jentries",
    response_model=List[JournalEntry],
    responses={
        404: {"description": "Journal is empty"},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="List all journal entries, newest first",
)
async def list_entries(
    journal: JournalService = Depends(get_journal_service),
) -> List[JournalEntry]:
    return await journal.list_entries()


@router.get(
    "/jentry/{entry_id}",
    response_model=JournalEntry,
    responses={
        404: {"description": "Entry not found"},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Get a single journal entry",
)
async def get_entry(
    entry_id: str,
    response: Response,
    journal: JournalService = Depends(get_journal_service),
) -> JournalEntry:
    entry = await journal.get_entry(entry_id)
    response.headers["Cache-Control"] = "private, max-age=3600"
    return entry


@router.post(
    "/jlog",
    status_code=201,
    response_model=JournalEntryCreated,
    responses={
        201: {"description": "Entry stored", "model": JournalEntryCreated},
        400: {"description": "text or date missing", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Append a journal entry",
)
async def append_entry(
    payload: Optional[JournalEntryRequest] = None,
    journal: JournalService = Depends(get_journal_service),
) -> JournalEntryCreated:
    payload = payload or JournalEntryRequest()
    return await journal.append_entry(payload.text, payload.date)
