"""Orchestrator for page ingestion.

Pipeline stages: **render -> chunk -> embed -> store**.

The :class:`IngestionService` coordinates four collaborators (page renderer,
chunker, embedding service, vector store) without any of them knowing about
each other.  Chunks are embedded and upserted strictly one at a time, each
upsert waiting for the store to apply it before the next chunk is embedded.

A failure at any stage aborts the whole URL and propagates to the caller.
Chunks already upserted for that URL are **not** rolled back.
"""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING

import structlog

from ragdocs.models.rag import DocumentChunk, IngestionResult, VectorPoint
from ragdocs.services.ingestion.chunker import TextChunker
from ragdocs.utils.errors import RagDocsError

if TYPE_CHECKING:
    from ragdocs.interfaces.page_renderer import IPageRenderer
    from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
    from ragdocs.services.embedding_service import EmbeddingService

logger = structlog.get_logger(logger_name=__name__)


def generate_point_id() -> str:
    """Return a fresh unique point identifier."""
    return str(uuid.uuid4())


class IngestionService:
    """Turns one documentation URL into stored, embedded chunks.

    Parameters
    ----------
    page_renderer:
        Fetches and cleans the page.
    chunker:
        Splits the page text into bounded chunks.
    embedding_service:
        Holds the active embedding provider.
    vector_store:
        Receives one point per chunk.
    collection_name:
        Target collection.
    """

    def __init__(
        self,
        page_renderer: IPageRenderer,
        chunker: TextChunker,
        embedding_service: EmbeddingService,
        vector_store: IVectorStoreProvider,
        collection_name: str,
    ) -> None:
        self._page_renderer = page_renderer
        self._chunker = chunker
        self._embedding_service = embedding_service
        self._vector_store = vector_store
        self._collection_name = collection_name

    async def ingest_url(self, url: str) -> IngestionResult:
        """Render, chunk, embed and upsert *url*.

        Returns
        -------
        IngestionResult
            Statistics about the run; ``chunks_created`` is the chunk count.

        Raises
        ------
        PageFetchError, EmbeddingError, StoreUnavailableError
            From whichever stage failed.  Earlier chunks stay stored.
        """
        start = time.monotonic()
        page = await self._page_renderer.render(url)
        texts = self._chunker.chunk(page.text)

        # Every chunk of one page is embedded by the same provider, even if
        # another invocation swaps the active one mid-way.
        provider = self._embedding_service.provider

        stored = 0
        try:
            for text in texts:
                chunk = DocumentChunk(text=text, url=url, title=page.title)
                vector = await provider.embed(text)
                point = VectorPoint(
                    id=generate_point_id(),
                    vector=vector,
                    payload=chunk.to_payload(),
                )
                await self._vector_store.upsert(self._collection_name, [point], wait=True)
                stored += 1
        except RagDocsError as exc:
            logger.error(
                "ingestion_aborted",
                url=url,
                chunks_total=len(texts),
                chunks_stored=stored,
                error=str(exc),
            )
            raise

        elapsed = time.monotonic() - start
        logger.info(
            "ingestion_complete",
            url=url,
            title=page.title,
            chunks=stored,
            provider=provider.get_provider_name(),
            elapsed_s=round(elapsed, 3),
        )
        return IngestionResult(
            url=url,
            title=page.title,
            chunks_created=stored,
            ingestion_time=elapsed,
        )
