"""Qdrant vector store provider adapter.

Wraps ``qdrant_client.AsyncQdrantClient`` to implement
:class:`IVectorStoreProvider`.  Collections are single-vector, cosine
distance.  ``location=":memory:"`` runs Qdrant's embedded local mode, which
the test-suite uses in place of a server.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from qdrant_client import AsyncQdrantClient, models
from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse

from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
from ragdocs.models.rag import StoredRecord, VectorHit, VectorPoint
from ragdocs.utils.errors import CollectionMissingError, StoreUnavailableError

logger = structlog.get_logger(logger_name=__name__)

# Exceptions the client raises for transport failures, HTTP error statuses,
# and (local mode) missing collections.
_CLIENT_ERRORS = (UnexpectedResponse, ResponseHandlingException, httpx.HTTPError, ValueError)


class QdrantProvider(IVectorStoreProvider):
    """Vector store provider backed by Qdrant.

    Parameters
    ----------
    url:
        Qdrant server URL, e.g. ``http://127.0.0.1:6333``.
    api_key:
        Optional Qdrant API key.
    location:
        ``":memory:"`` for an embedded in-process store; overrides *url*.
    client:
        Pre-built client, mainly for tests.
    """

    def __init__(
        self,
        url: str = "http://127.0.0.1:6333",
        api_key: str | None = None,
        location: str | None = None,
        client: AsyncQdrantClient | None = None,
    ) -> None:
        if client is not None:
            self._client = client
        elif location == ":memory:":
            self._client = AsyncQdrantClient(location=":memory:")
        else:
            self._client = AsyncQdrantClient(url=url, api_key=api_key or None)
        self._target = location or url

    # ------------------------------------------------------------------
    # Collection management
    # ------------------------------------------------------------------

    async def list_collections(self) -> list[str]:
        try:
            response = await self._client.get_collections()
        except _CLIENT_ERRORS as exc:
            raise StoreUnavailableError(
                message=f"Failed to connect to Qdrant at {self._target}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        return [collection.name for collection in response.collections]

    async def create_collection(self, name: str, vector_size: int) -> None:
        try:
            await self._client.create_collection(
                collection_name=name,
                vectors_config=models.VectorParams(
                    size=vector_size,
                    distance=models.Distance.COSINE,
                ),
            )
        except _CLIENT_ERRORS as exc:
            raise self._store_error(exc, "create collection", name) from exc
        logger.info("qdrant_collection_created", collection=name, vector_size=vector_size)

    async def get_collection_size(self, name: str) -> int | None:
        try:
            info = await self._client.get_collection(collection_name=name)
        except _CLIENT_ERRORS as exc:
            raise self._store_error(exc, "read collection", name) from exc

        params = getattr(getattr(info, "config", None), "params", None)
        vectors = getattr(params, "vectors", None)
        # Named-vector collections expose a dict here; treat as unreadable.
        size = getattr(vectors, "size", None)
        return size if isinstance(size, int) else None

    async def delete_collection(self, name: str) -> None:
        try:
            await self._client.delete_collection(collection_name=name)
        except _CLIENT_ERRORS as exc:
            raise self._store_error(exc, "delete collection", name) from exc
        logger.info("qdrant_collection_deleted", collection=name)

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------

    async def upsert(self, name: str, points: list[VectorPoint], wait: bool = True) -> None:
        if not points:
            return
        structs = [
            models.PointStruct(id=point.id, vector=list(point.vector), payload=dict(point.payload))
            for point in points
        ]
        try:
            await self._client.upsert(collection_name=name, points=structs, wait=wait)
        except _CLIENT_ERRORS as exc:
            raise self._store_error(exc, "upsert into", name) from exc

    async def search(self, name: str, vector: list[float], limit: int) -> list[VectorHit]:
        if limit <= 0:
            return []
        try:
            response = await self._client.query_points(
                collection_name=name,
                query=list(vector),
                limit=limit,
                with_payload=True,
            )
        except _CLIENT_ERRORS as exc:
            raise self._store_error(exc, "search", name) from exc

        return [
            VectorHit(id=str(point.id), score=float(point.score), payload=point.payload)
            for point in response.points
        ]

    async def scroll(
        self,
        name: str,
        limit: int = 256,
        offset: Any = None,
    ) -> tuple[list[StoredRecord], Any]:
        try:
            records, next_offset = await self._client.scroll(
                collection_name=name,
                limit=limit,
                offset=offset,
                with_payload=True,
                with_vectors=False,
            )
        except _CLIENT_ERRORS as exc:
            raise self._store_error(exc, "scroll", name) from exc

        return [StoredRecord(id=str(r.id), payload=r.payload) for r in records], next_offset

    async def count(self, name: str) -> int:
        try:
            result = await self._client.count(collection_name=name, exact=True)
        except _CLIENT_ERRORS as exc:
            raise self._store_error(exc, "count", name) from exc
        return result.count

    async def close(self) -> None:
        await self._client.close()

    def get_provider_name(self) -> str:
        return "qdrant"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _store_error(self, exc: Exception, action: str, name: str) -> StoreUnavailableError:
        """Translate a client exception, singling out a missing collection."""
        missing = (isinstance(exc, UnexpectedResponse) and exc.status_code == 404) or (
            isinstance(exc, ValueError) and "not found" in str(exc)
        )
        if missing:
            return CollectionMissingError(
                message=f"Collection {name!r} does not exist (during {action})",
                provider_name=self.get_provider_name(),
            )
        return StoreUnavailableError(
            message=f"Failed to {action} {name!r}: {exc}",
            provider_name=self.get_provider_name(),
        )
