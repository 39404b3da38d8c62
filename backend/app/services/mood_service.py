"""
MoodLog Backend — Mood Service
================================

What:  Records mood entries and looks up a user's most recent mood.
Who:   Called by the /mood route handlers.

Latest-mood query:
    WHERE userId == :uid ORDER BY userId, timestamp DESC LIMIT 1

    The leading ORDER BY userId is there for Firestore's composite index rules
    (an equality-filtered field may lead the ordering); semantically the query
    is "newest mood for this user".

Error Handling Strategy:
    Missing fields raise ValidationError before the store is touched.
    Store failures are logged with traceback and wrapped in StoreError so the
    client only sees a generic message.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Union

from app.exceptions import NotFoundError, StoreError, ValidationError
from app.schemas.mood import MessageResponse, MoodRecord
from app.services.store_base import DocumentStore, Filter, Ordering
from app.services.timestamps import parse_client_datetime, to_iso

logger = logging.getLogger(__name__)


class MoodService:
    """Append-only mood log keyed by a client-supplied user id."""

    def __init__(self, store: DocumentStore, collection: str = "moods"):
        self.store = store
        self.collection = collection

    async def record_mood(
        self,
        user_id: Optional[str],
        mood: Optional[str],
        timestamp: Optional[Union[str, float]] = None,
    ) -> MessageResponse:
        """
        Append a mood entry. `timestamp` defaults to the time the request was
        received.

        Raises:
            ValidationError: userId or mood missing, or timestamp unparseable
            StoreError: the write failed
        """
        if not user_id or not mood:
            raise ValidationError(message="User ID and Mood are required")

        if timestamp:
            recorded_at = parse_client_datetime(timestamp, field="timestamp")
        else:
            recorded_at = datetime.now(timezone.utc)

        entry = {"userId": user_id, "mood": mood, "timestamp": recorded_at}
        try:
            await self.store.add(self.collection, entry)
        except Exception as e:
            logger.error("Error recording mood: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to record mood",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        logger.info("Mood recorded for user %s", user_id)
        return MessageResponse(message="Mood recorded successfully")

    async def latest_mood(self, user_id: Optional[str]) -> MoodRecord:
        """
        Most recent mood for `user_id`, by timestamp.

        Raises:
            ValidationError: user_id missing
            NotFoundError: the user has no mood entries
            StoreError: the query failed
        """
        if not user_id:
            raise ValidationError(message="User ID is required")

        try:
            docs = await self.store.query(
                self.collection,
                filters=[Filter("userId", "==", user_id)],
                orderings=[Ordering("userId"), Ordering("timestamp", descending=True)],
                limit=1,
            )
        except Exception as e:
            logger.error("Error fetching mood: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to fetch mood",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        if not docs:
            raise NotFoundError(message="No mood found for this user", context={"user_id": user_id})

        data = docs[0].data
        return MoodRecord(
            userId=data.get("userId", user_id),
            mood=data.get("mood", ""),
            timestamp=to_iso(data.get("timestamp")),
        )
