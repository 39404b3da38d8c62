"""
MoodLog Backend — In-Memory Store Unit Tests
==============================================

The in-memory store stands in for Firestore everywhere else in the suite, so
the Firestore behaviours the accessors depend on are pinned down here:
generated ids, server timestamps, filter/order/limit semantics.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.services.memory_store import SERVER_TIMESTAMP, InMemoryStore
from app.services.store_base import Filter, Ordering


class TestAddAndGet:

    def setup_method(self):
        self.store = InMemoryStore()

    @pytest.mark.asyncio
    async def test_add_returns_generated_id(self):
        doc_id = await self.store.add("journal", {"text": "hi"})
        assert len(doc_id) == 20
        assert doc_id.isalnum()

    @pytest.mark.asyncio
    async def test_get_returns_stored_document(self):
        doc_id = await self.store.add("journal", {"text": "hi"})
        doc = await self.store.get("journal", doc_id)
        assert doc.id == doc_id
        assert doc.data == {"text": "hi"}

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self):
        assert await self.store.get("journal", "does-not-exist") is None

    @pytest.mark.asyncio
    async def test_collections_are_isolated(self):
        doc_id = await self.store.add("moods", {"mood": "calm"})
        assert await self.store.get("journal", doc_id) is None

    @pytest.mark.asyncio
    async def test_stored_data_is_copied(self):
        data = {"tags": ["a"]}
        doc_id = await self.store.add("journal", data)
        data["tags"].append("b")
        doc = await self.store.get("journal", doc_id)
        assert doc.data["tags"] == ["a"]

    @pytest.mark.asyncio
    async def test_server_timestamp_is_replaced_at_write(self):
        before = datetime.now(timezone.utc)
        doc_id = await self.store.add("journal", {"timestamp": self.store.server_timestamp()})
        doc = await self.store.get("journal", doc_id)
        assert self.store.server_timestamp() is SERVER_TIMESTAMP
        assert isinstance(doc.data["timestamp"], datetime)
        assert doc.data["timestamp"] >= before

    @pytest.mark.asyncio
    async def test_server_timestamps_strictly_increase(self):
        stamps = []
        for _ in range(50):
            doc_id = await self.store.add("journal", {"timestamp": self.store.server_timestamp()})
            stamps.append((await self.store.get("journal", doc_id)).data["timestamp"])
        assert all(a < b for a, b in zip(stamps, stamps[1:]))


class TestQuery:

    def setup_method(self):
        self.store = InMemoryStore()
        self.base = datetime(2024, 5, 1, tzinfo=timezone.utc)

    async def _seed(self, user_id, mood, minutes):
        return await self.store.add(
            "moods",
            {"userId": user_id, "mood": mood, "timestamp": self.base + timedelta(minutes=minutes)},
        )

    @pytest.mark.asyncio
    async def test_equality_filter(self):
        await self._seed("u1", "happy", 1)
        await self._seed("u2", "sad", 2)
        docs = await self.store.query("moods", filters=[Filter("userId", "==", "u1")])
        assert [d.data["mood"] for d in docs] == ["happy"]

    @pytest.mark.asyncio
    async def test_descending_order_and_limit(self):
        await self._seed("u1", "first", 1)
        await self._seed("u1", "third", 3)
        await self._seed("u1", "second", 2)
        docs = await self.store.query(
            "moods",
            orderings=[Ordering("timestamp", descending=True)],
            limit=2,
        )
        assert [d.data["mood"] for d in docs] == ["third", "second"]

    @pytest.mark.asyncio
    async def test_multi_key_ordering(self):
        await self._seed("b", "b-old", 1)
        await self._seed("a", "a-old", 2)
        await self._seed("b", "b-new", 3)
        await self._seed("a", "a-new", 4)
        docs = await self.store.query(
            "moods",
            orderings=[Ordering("userId"), Ordering("timestamp", descending=True)],
        )
        assert [d.data["mood"] for d in docs] == ["a-new", "a-old", "b-new", "b-old"]

    @pytest.mark.asyncio
    async def test_documents_missing_order_field_are_excluded(self):
        await self._seed("u1", "stamped", 1)
        await self.store.add("moods", {"userId": "u1", "mood": "unstamped"})
        docs = await self.store.query("moods", orderings=[Ordering("timestamp")])
        assert [d.data["mood"] for d in docs] == ["stamped"]

    @pytest.mark.asyncio
    async def test_empty_collection(self):
        assert await self.store.query("journal") == []

    @pytest.mark.asyncio
    async def test_unsupported_operator_raises(self):
        await self._seed("u1", "happy", 1)
        with pytest.raises(ValueError, match="Unsupported"):
            await self.store.query("moods", filters=[Filter("userId", "array-contains", "u1")])
