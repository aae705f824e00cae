"""Abstract base class for vector-store service providers.

Defines the collection-level contract the retrieval pipeline needs from a
vector database: inspect / create / delete a named collection, upsert
points, run a similarity search and scroll through stored points.  The
concrete implementation wraps Qdrant; the adapter keeps the services
independent of the chosen backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ragdocs.models.rag import StoredRecord, VectorHit, VectorPoint


# Concrete implementation: QdrantProvider (ragdocs/providers/vector_store/)
class IVectorStoreProvider(ABC):
    """Contract for vector-store services used by the retrieval pipeline.

    All methods are async.  Failures surface as
    :class:`~ragdocs.utils.errors.StoreUnavailableError`, or its subclass
    :class:`~ragdocs.utils.errors.CollectionMissingError` when the named
    collection does not exist.
    """

    @abstractmethod
    async def list_collections(self) -> list[str]:
        """Return the names of all collections.

        Also serves as the connectivity probe: an unreachable store raises
        ``StoreUnavailableError``.
        """

    @abstractmethod
    async def create_collection(self, name: str, vector_size: int) -> None:
        """Create collection *name* with cosine distance and *vector_size* dimensions."""

    @abstractmethod
    async def get_collection_size(self, name: str) -> int | None:
        """Return the configured vector size of *name*.

        Returns ``None`` when the configuration cannot be read (e.g. the
        collection uses named vectors).
        """

    @abstractmethod
    async def delete_collection(self, name: str) -> None:
        """Delete collection *name* together with all of its points."""

    @abstractmethod
    async def upsert(self, name: str, points: list[VectorPoint], wait: bool = True) -> None:
        """Insert or replace *points*.

        With ``wait=True`` the call returns only once the store has durably
        applied the write.
        """

    @abstractmethod
    async def search(self, name: str, vector: list[float], limit: int) -> list[VectorHit]:
        """Return up to *limit* nearest points with payloads, best first."""

    @abstractmethod
    async def scroll(
        self,
        name: str,
        limit: int = 256,
        offset: Any = None,
    ) -> tuple[list[StoredRecord], Any]:
        """Return one page of stored points with payloads and the next cursor.

        The cursor is ``None`` once the collection is exhausted.
        """

    @abstractmethod
    async def count(self, name: str) -> int:
        """Return the exact number of points in *name*."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying client connection."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"qdrant"``."""
