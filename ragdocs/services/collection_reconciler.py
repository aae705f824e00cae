"""Keeps the vector-store collection in step with the active embedding provider.

A collection has one configured vector size.  Vectors produced by a
provider of another size are geometrically incomparable with what is
stored, so on a mismatch the collection is **deleted and recreated** --
every stored chunk is lost.  This is the intended policy: one vector space
per collection, consistency over retention when the provider changes.

Between the delete and the create the collection does not exist;
operations that hit that window fail with ``CollectionMissingError``.
Within this process, reconciliation and provider swaps are serialised by
a single :class:`asyncio.Lock`.
"""

from __future__ import annotations

import asyncio

import structlog

from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
from ragdocs.models.rag import ReconcileOutcome
from ragdocs.services.embedding_service import EmbeddingService
from ragdocs.utils.errors import CollectionMissingError, StoreUnavailableError

logger = structlog.get_logger(logger_name=__name__)


class CollectionReconciler:
    """Ensures the named collection exists and matches the provider's vector size.

    Parameters
    ----------
    vector_store:
        Store holding the collection.
    embedding_service:
        Source of the required vector size.
    collection_name:
        Name of the managed collection.
    """

    def __init__(
        self,
        vector_store: IVectorStoreProvider,
        embedding_service: EmbeddingService,
        collection_name: str,
    ) -> None:
        self._store = vector_store
        self._embedding_service = embedding_service
        self._collection_name = collection_name
        self._lock = asyncio.Lock()

    @property
    def collection_name(self) -> str:
        return self._collection_name

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def ensure_collection(self) -> ReconcileOutcome:
        """Create or recreate the collection as needed.  Idempotent.

        Raises
        ------
        StoreUnavailableError
            If the store is unreachable or a create/delete fails.
        """
        async with self._lock:
            return await self._reconcile()

    async def activate(self, provider: IEmbeddingProvider) -> ReconcileOutcome:
        """Swap *provider* in and reconcile the collection to its vector size.

        If reconciliation fails the previous provider is restored, so the
        active provider never disagrees with a collection this call failed
        to build.
        """
        async with self._lock:
            previous = self._embedding_service.swap(provider)
            try:
                return await self._reconcile()
            except StoreUnavailableError:
                self._embedding_service.swap(previous)
                raise

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _reconcile(self) -> ReconcileOutcome:
        name = self._collection_name
        required = self._embedding_service.vector_size()

        # Doubles as the connectivity check.
        existing = await self._store.list_collections()
        logger.debug("qdrant_collections_listed", collections=existing)

        if name not in existing:
            logger.info("collection_creating", collection=name, vector_size=required)
            await self._store.create_collection(name, required)
            return ReconcileOutcome.CREATED

        try:
            current = await self._store.get_collection_size(name)
        except CollectionMissingError:
            logger.warning("collection_vanished", collection=name)
            await self._store.create_collection(name, required)
            return ReconcileOutcome.CREATED

        if current is None:
            logger.warning("collection_size_unknown", collection=name)
            await self._recreate(required)
            return ReconcileOutcome.RECREATED

        if current != required:
            logger.warning(
                "collection_size_mismatch",
                collection=name,
                current=current,
                required=required,
            )
            await self._recreate(required)
            return ReconcileOutcome.RECREATED

        return ReconcileOutcome.UNCHANGED

    async def _recreate(self, vector_size: int) -> None:
        name = self._collection_name
        try:
            dropped = await self._store.count(name)
            await self._store.delete_collection(name)
            await self._store.create_collection(name, vector_size)
        except StoreUnavailableError as exc:
            raise StoreUnavailableError(
                message=f"Failed to recreate collection: {exc}",
                provider_name=exc.provider_name,
            ) from exc
        logger.info(
            "collection_recreated",
            collection=name,
            vector_size=vector_size,
            dropped_points=dropped,
        )
