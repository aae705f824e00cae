"""Retrieval engine -- query embedding, similarity search and result formatting.

Every hit's payload is decoded with :func:`decode_payload`.  A payload that
is not a document chunk means the store is inconsistent, so the whole
search fails with ``DataCorruptionError`` instead of quietly dropping it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ragdocs.models.rag import SearchHit, decode_payload

if TYPE_CHECKING:
    from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
    from ragdocs.services.embedding_service import EmbeddingService

logger = structlog.get_logger(logger_name=__name__)

NO_RESULTS_MESSAGE = "No results found."
RESULT_SEPARATOR = "\n---\n"


def format_results(hits: list[SearchHit]) -> str:
    """Render *hits* as text blocks separated by ``---`` lines."""
    if not hits:
        return NO_RESULTS_MESSAGE
    return RESULT_SEPARATOR.join(hit.render() for hit in hits)


class RetrievalService:
    """Ranks stored chunks by cosine similarity to a natural-language query.

    Parameters
    ----------
    embedding_service:
        Embeds the query with the active provider.
    vector_store:
        Store searched for nearest neighbours.
    collection_name:
        Collection to search.
    default_limit:
        Number of results when the caller gives none.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        vector_store: IVectorStoreProvider,
        collection_name: str,
        default_limit: int = 5,
    ) -> None:
        self._embedding_service = embedding_service
        self._vector_store = vector_store
        self._collection_name = collection_name
        self.default_limit = default_limit

    async def search(self, query: str, limit: int | None = None) -> list[SearchHit]:
        """Return up to *limit* validated hits, most similar first.

        Raises
        ------
        EmbeddingError
            If the query cannot be embedded.
        StoreUnavailableError
            If the similarity search fails.
        DataCorruptionError
            If any hit carries a payload that is not a document chunk.
        """
        limit = limit or self.default_limit
        vector = await self._embedding_service.embed(query)
        raw_hits = await self._vector_store.search(self._collection_name, vector, limit)

        hits = [SearchHit(chunk=decode_payload(hit.payload), score=hit.score) for hit in raw_hits]
        logger.info("search_complete", query=query[:80], limit=limit, hits=len(hits))
        return hits

    async def search_text(self, query: str, limit: int | None = None) -> str:
        """Same as :meth:`search` but returns the formatted text block."""
        return format_results(await self.search(query, limit))
