"""Source registry -- the distinct pages represented in the collection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ragdocs.models.rag import decode_payload
from ragdocs.utils.errors import DataCorruptionError

if TYPE_CHECKING:
    from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider

logger = structlog.get_logger(logger_name=__name__)

NO_SOURCES_MESSAGE = "No documentation sources found."


class SourceRegistry:
    """Derives the deduplicated ``"title (url)"`` list from stored points.

    Scrolls the whole collection page by page, following the store's
    cursor.  Points whose payload is not a document chunk are skipped.
    Order is first-seen order.
    """

    def __init__(
        self,
        vector_store: IVectorStoreProvider,
        collection_name: str,
        page_size: int = 256,
    ) -> None:
        self._vector_store = vector_store
        self._collection_name = collection_name
        self._page_size = page_size

    async def list_sources(self) -> list[str]:
        sources: dict[str, None] = {}
        skipped = 0
        offset = None
        while True:
            records, offset = await self._vector_store.scroll(
                self._collection_name,
                limit=self._page_size,
                offset=offset,
            )
            for record in records:
                try:
                    chunk = decode_payload(record.payload)
                except DataCorruptionError:
                    skipped += 1
                    continue
                sources.setdefault(chunk.source_label(), None)
            if offset is None:
                break

        if skipped:
            logger.warning("sources_invalid_payloads_skipped", skipped=skipped)
        return list(sources)

    async def list_sources_text(self) -> str:
        sources = await self.list_sources()
        return "\n".join(sources) or NO_SOURCES_MESSAGE
