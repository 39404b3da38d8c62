"""
MoodLog Backend — Abstract Document Store Interface
=====================================================

What:  Abstract base class defining the document store capabilities the
       accessors rely on: append, get-by-id, composite ordering query, and a
       server-assigned write timestamp.
Why:   Handlers are written against this contract only, so Firestore can be
       swapped for another backend (or the in-memory store used in tests and
       local development) without touching MoodService or JournalService.
How:   Concrete backends inherit from DocumentStore and implement every method.

Query model:
    query(collection, filters=[Filter(...)], orderings=[Ordering(...)], limit=n)
    - filters are AND-ed equality/comparison predicates
    - orderings are applied in sequence (first = primary sort key)
    - documents lacking an ordering field are excluded (Firestore semantics)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class Filter:
    """Single field predicate, e.g. Filter("userId", "==", "u-1")."""

    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class Ordering:
    """Sort key for a query."""

    field: str
    descending: bool = False


@dataclass
class Document:
    """A stored record: its store-assigned id plus its field data."""

    id: str
    data: Dict[str, Any] = field(default_factory=dict)


class DocumentStore(ABC):
    """
    Abstract interface for the collection-oriented document store.

    Contract:
        - add() appends a new document and returns its generated id
        - get() returns None for a missing id (never raises for "not found")
        - query() returns documents in the requested order, at most `limit`
        - server_timestamp() returns a write-time sentinel; the backend replaces
          it with its own clock when the document is written
        - Backend errors propagate unchanged; accessors translate them
    """

    @abstractmethod
    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        """Append a document to `collection` and return its generated id."""
        ...

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Fetch a single document by id, or None if it does not exist."""
        ...

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        orderings: Sequence[Ordering] = (),
        limit: Optional[int] = None,
    ) -> List[Document]:
        """Run a filtered, ordered, optionally limited query."""
        ...

    @abstractmethod
    def server_timestamp(self) -> Any:
        """Sentinel value stamped with the store's clock at write time."""
        ...

    async def close(self) -> None:
        """Release backend resources. Called once at application shutdown."""
        return None
