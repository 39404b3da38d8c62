"""
MoodLog Backend — In-Memory Document Store
============================================

What:  DocumentStore implementation that keeps collections in a dict.
Why:   Local development without Google Cloud credentials, and a faithful
       stand-in for Firestore in the test suite.
How:   Mirrors the Firestore behaviours the accessors depend on:
       - generated 20-character document ids
       - server timestamps stamped at write time (strictly increasing, so two
         writes in the same microsecond still order correctly)
       - documents missing an ordering field are excluded from ordered queries

Not for production: data lives only as long as the process and is not shared
between workers.
"""

import copy
import logging
import operator
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from app.services.store_base import Document, DocumentStore, Filter, Ordering

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_letters + string.digits

_OPERATORS = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class _ServerTimestamp:
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


class InMemoryStore(DocumentStore):
    """Process-local document store."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._last_stamp: Optional[datetime] = None

    def _now(self) -> datetime:
        now = datetime.now(timezone.utc)
        if self._last_stamp is not None and now <= self._last_stamp:
            now = self._last_stamp + timedelta(microseconds=1)
        self._last_stamp = now
        return now

    @staticmethod
    def _new_id() -> str:
        return "".join(secrets.choice(_ID_ALPHABET) for _ in range(20))

    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        docs = self._collections.setdefault(collection, {})
        doc_id = self._new_id()
        stored = {
            key: (self._now() if value is SERVER_TIMESTAMP else copy.deepcopy(value))
            for key, value in data.items()
        }
        docs[doc_id] = stored
        logger.debug("Added document %s/%s", collection, doc_id)
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        data = self._collections.get(collection, {}).get(doc_id)
        if data is None:
            return None
        return Document(id=doc_id, data=copy.deepcopy(data))

    async def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        orderings: Sequence[Ordering] = (),
        limit: Optional[int] = None,
    ) -> List[Document]:
        docs = [
            Document(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in self._collections.get(collection, {}).items()
        ]

        for f in filters:
            try:
                compare = _OPERATORS[f.op]
            except KeyError:
                raise ValueError(f"Unsupported filter operator: {f.op!r}")
            docs = [d for d in docs if f.field in d.data and compare(d.data[f.field], f.value)]

        for o in orderings:
            docs = [d for d in docs if o.field in d.data]
        # Stable sorts applied from the last key to the first
        for o in reversed(orderings):
            docs.sort(key=lambda d, name=o.field: d.data[name], reverse=o.descending)

        if limit is not None:
            docs = docs[:limit]
        return docs

    def server_timestamp(self) -> Any:
        return SERVER_TIMESTAMP

    async def close(self) -> None:
        self._collections.clear()
