"""
MoodLog Backend — Mood Service Unit Tests
===========================================

What we test:
    ✅ Missing userId/mood → ValidationError, no store write
    ✅ Timestamp defaults to "now" and parses client values
    ✅ Latest mood is the newest by timestamp, per user
    ✅ Store failures become StoreError with a generic message
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from app.exceptions import NotFoundError, StoreError, ValidationError
from app.services.mood_service import MoodService
from app.services.store_base import Filter, Ordering


class TestRecordMood:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "user_id, mood",
        [(None, "happy"), ("", "happy"), ("u1", None), ("u1", ""), (None, None)],
    )
    async def test_missing_fields_rejected_without_write(self, user_id, mood):
        store = AsyncMock()
        service = MoodService(store)

        with pytest.raises(ValidationError, match="User ID and Mood are required"):
            await service.record_mood(user_id, mood)

        store.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_timestamp_defaults_to_now(self, memory_store):
        service = MoodService(memory_store)
        before = datetime.now(timezone.utc)

        result = await service.record_mood("u1", "happy")

        assert result.message == "Mood recorded successfully"
        docs = await memory_store.query("moods")
        assert len(docs) == 1
        assert docs[0].data["userId"] == "u1"
        assert docs[0].data["mood"] == "happy"
        assert before <= docs[0].data["timestamp"] <= datetime.now(timezone.utc)

    @pytest.mark.asyncio
    async def test_client_timestamp_is_parsed(self, memory_store):
        service = MoodService(memory_store)
        await service.record_mood("u1", "calm", "2024-05-01T08:30:00Z")

        docs = await memory_store.query("moods")
        assert docs[0].data["timestamp"] == datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_invalid_timestamp_rejected_without_write(self):
        store = AsyncMock()
        with pytest.raises(ValidationError, match="Invalid timestamp"):
            await MoodService(store).record_mood("u1", "calm", "yesterday-ish")
        store.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_wrapped(self):
        store = AsyncMock()
        store.add.side_effect = RuntimeError("deadline exceeded")

        with pytest.raises(StoreError) as exc_info:
            await MoodService(store).record_mood("u1", "happy")

        assert exc_info.value.message == "Failed to record mood"
        assert "deadline" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_uses_configured_collection(self, memory_store):
        await MoodService(memory_store, collection="moods_test").record_mood("u1", "happy")
        assert len(await memory_store.query("moods_test")) == 1
        assert await memory_store.query("moods") == []


class TestLatestMood:

    @pytest.mark.asyncio
    async def test_missing_user_id_rejected(self):
        store = AsyncMock()
        with pytest.raises(ValidationError, match="User ID is required"):
            await MoodService(store).latest_mood("")
        store.query.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_issues_composite_ordering_query(self):
        store = AsyncMock()
        store.query.return_value = []
        with pytest.raises(NotFoundError):
            await MoodService(store).latest_mood("u1")

        store.query.assert_awaited_once_with(
            "moods",
            filters=[Filter("userId", "==", "u1")],
            orderings=[Ordering("userId"), Ordering("timestamp", descending=True)],
            limit=1,
        )

    @pytest.mark.asyncio
    async def test_no_mood_raises_not_found(self, memory_store):
        with pytest.raises(NotFoundError, match="No mood found for this user"):
            await MoodService(memory_store).latest_mood("nobody")

    @pytest.mark.asyncio
    async def test_returns_newest_by_timestamp_not_insertion(self, memory_store):
        service = MoodService(memory_store)
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)

        await service.record_mood("u1", "tired", (base + timedelta(hours=3)).isoformat())
        await service.record_mood("u2", "angry", (base + timedelta(hours=9)).isoformat())
        await service.record_mood("u1", "sleepy", (base + timedelta(hours=1)).isoformat())
        await service.record_mood("u2", "calm", (base + timedelta(hours=5)).isoformat())

        latest = await service.latest_mood("u1")

        assert latest.userId == "u1"
        assert latest.mood == "tired"
        assert latest.timestamp == "2024-05-01T03:00:00.000Z"

    @pytest.mark.asyncio
    async def test_store_failure_wrapped(self):
        store = AsyncMock()
        store.query.side_effect = RuntimeError("index missing")

        with pytest.raises(StoreError, match="Failed to fetch mood"):
            await MoodService(store).latest_mood("u1")
