"""
MoodLog Backend — Journal Service
===================================

What:  Lists, fetches and appends journal entries.
Who:   Called by the /jentries, /jentry/{id} and /jlog route handlers.

Ordering:
    Entries are listed newest-first by `timestamp`, which the store assigns at
    write time (server clock, not the caller's). The client-supplied `date` is
    display data only and never used for ordering.

Empty listing:
    An empty collection is reported as 404, not as an empty array. Existing
    clients branch on that status.
"""

import logging
from typing import List, Optional, Union

from app.exceptions import NotFoundError, StoreError, ValidationError
from app.schemas.journal import JournalEntry, JournalEntryCreated
from app.services.store_base import Document, DocumentStore, Ordering
from app.services.timestamps import parse_client_datetime, to_iso

logger = logging.getLogger(__name__)


def _to_entry(doc: Document) -> JournalEntry:
    return JournalEntry(
        id=doc.id,
        text=doc.data.get("text"),
        date=to_iso(doc.data.get("date")),
        timestamp=to_iso(doc.data.get("timestamp")),
    )


class JournalService:

    def __init__(self, store: DocumentStore, collection: str = "journal"):
        self.store = store
        self.collection = collection

    async def list_entries(self) -> List[JournalEntry]:
        """
        All entries, newest first.

        Raises:
            NotFoundError: the journal is empty
            StoreError: the query failed
        """
        try:
            docs = await self.store.query(
                self.collection,
                orderings=[Ordering("timestamp", descending=True)],
            )
        except Exception as e:
            logger.error("Error listing journal entries: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to fetch journal entries",
                context={"error_type": type(e).__name__},
            )

        if not docs:
            raise NotFoundError(message="No journal entries found")

        return [_to_entry(doc) for doc in docs]

    async def get_entry(self, entry_id: str) -> JournalEntry:
        """
        Raises:
            NotFoundError: no entry with that id
            StoreError: the lookup failed
        """
        try:
            doc = await self.store.get(self.collection, entry_id)
        except Exception as e:
            logger.error("Error fetching journal entry %s: %s", entry_id, str(e), exc_info=True)
            raise StoreError(
                message="Failed to fetch journal entry",
                context={"entry_id": entry_id, "error_type": type(e).__name__},
            )

        if doc is None:
            raise NotFoundError(message="Entry not found", context={"entry_id": entry_id})

        return _to_entry(doc)

    async def append_entry(
        self,
        text: Optional[str],
        date: Optional[Union[str, float]],
    ) -> JournalEntryCreated:
        """
        Store a new entry; `timestamp` is stamped by the store at write time.

        Raises:
            ValidationError: text or date missing, or date unparseable
            StoreError: the write failed
        """
        if not text or not date:
            raise ValidationError(message="Missing required fields")

        entry = {
            "text": text,
            "date": parse_client_datetime(date, field="date"),
            "timestamp": self.store.server_timestamp(),
        }
        try:
            entry_id = await self.store.add(self.collection, entry)
        except Exception as e:
            logger.error("Error adding journal entry: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to add journal entry",
                context={"error_type": type(e).__name__},
            )

        logger.info("Journal entry %s added", entry_id)
        return JournalEntryCreated(message="Journal entry added", id=entry_id)
