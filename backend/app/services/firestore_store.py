"""
MoodLog Backend — Google Cloud Firestore Store
================================================

What:  DocumentStore implementation backed by Firestore (async client).
Why:   Firestore is the managed store the mobile client's data lives in.
How:   Translates Filter/Ordering into FieldFilter/order_by calls and maps
       DocumentSnapshots into Document objects.

Client lifecycle:
    The AsyncClient resolves Application Default Credentials when it is built,
    so it is created lazily on first use. Importing or constructing the app
    therefore never needs credentials (tests and health checks work offline).

Composite index note:
    The latest-mood query filters on userId and orders by userId then
    timestamp DESC. Firestore needs a composite index (userId ASC,
    timestamp DESC) on the moods collection for it; the first run logs a link
    to create it.
"""

import inspect
import logging
from typing import Any, Dict, List, Optional, Sequence

from google.cloud import firestore

from app.services.store_base import Document, DocumentStore, Filter, Ordering

logger = logging.getLogger(__name__)


class FirestoreStore(DocumentStore):
    """Firestore-backed document store."""

    def __init__(self, project: Optional[str] = None):
        self._project = project or None
        self._client: Optional[firestore.AsyncClient] = None

    @property
    def client(self) -> firestore.AsyncClient:
        if self._client is None:
            logger.info("Initializing Firestore client for project: %s", self._project or "<default>")
            self._client = firestore.AsyncClient(project=self._project)
        return self._client

    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        _, doc_ref = await self.client.collection(collection).add(data)
        logger.debug("Added document %s/%s", collection, doc_ref.id)
        return doc_ref.id

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        snapshot = await self.client.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            return None
        return Document(id=snapshot.id, data=snapshot.to_dict() or {})

    async def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        orderings: Sequence[Ordering] = (),
        limit: Optional[int] = None,
    ) -> List[Document]:
        query = self.client.collection(collection)
        for f in filters:
            query = query.where(filter=firestore.FieldFilter(f.field, f.op, f.value))
        for o in orderings:
            direction = firestore.Query.DESCENDING if o.descending else firestore.Query.ASCENDING
            query = query.order_by(o.field, direction=direction)
        if limit is not None:
            query = query.limit(limit)

        snapshots = await query.get()
        return [Document(id=s.id, data=s.to_dict() or {}) for s in snapshots]

    def server_timestamp(self) -> Any:
        return firestore.SERVER_TIMESTAMP

    async def close(self) -> None:
        if self._client is None:
            return
        # AsyncClient.close() is sync in some SDK releases, a coroutine in others
        result = self._client.close()
        if inspect.isawaitable(result):
            await result
        self._client = None
        logger.info("Firestore client closed")
