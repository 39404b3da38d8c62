"""
Pydantic schemas for journal entries (/jentries, /jentry/{id}, /jlog).

An entry carries two datetimes on purpose:
    date       the entry's logical day, chosen by the client (display)
    timestamp  assigned by the store when the entry is written (ordering)
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class JournalEntryRequest(BaseModel):
    text: Optional[str] = Field(default=None, description="Journal entry body")
    date: Optional[Union[str, float]] = Field(
        default=None,
        description="Logical date of the entry (ISO 8601 or epoch ms)",
    )


class JournalEntry(BaseModel):
    id: str = Field(description="Store-assigned document id")
    text: Optional[str] = None
    date: Optional[str] = Field(default=None, description="Client-supplied date (ISO 8601)")
    timestamp: Optional[str] = Field(default=None, description="Store write time (ISO 8601)")


class JournalEntryCreated(BaseModel):
    message: str = Field(default="Journal entry added")
    id: str
