"""The four documentation tools, independent of any transport.

:class:`DocumentationTools` is what the MCP server, the HTTP API and the
CLI all call.  Each operation returns a :class:`ToolResponse`; failures of
the page renderer, the embedding provider or the vector store inside an
operation become an error-flagged response.  Missing arguments, bad
provider configuration, failed collection reconciliation and corrupt
stored payloads are raised instead, and each front end renders them as
error text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from ragdocs.models.embedding import ProviderKind
from ragdocs.models.tools import ToolResponse
from ragdocs.services.embedding_service import build_provider
from ragdocs.utils.errors import (
    EmbeddingError,
    InvalidInputError,
    PageFetchError,
    StoreUnavailableError,
)

if TYPE_CHECKING:
    from ragdocs.config.settings import Settings
    from ragdocs.interfaces.page_renderer import IPageRenderer
    from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
    from ragdocs.services.collection_reconciler import CollectionReconciler
    from ragdocs.services.embedding_service import EmbeddingService
    from ragdocs.services.ingestion.ingestion_service import IngestionService
    from ragdocs.services.retrieval_service import RetrievalService
    from ragdocs.services.source_registry import SourceRegistry

logger = structlog.get_logger(logger_name=__name__)

# Failures caught at the operation boundary and turned into error text.
_OPERATION_ERRORS = (PageFetchError, EmbeddingError, StoreUnavailableError)

# Older clients call the configure tool by this name.
TOOL_ALIASES = {"test_ollama": "configure_and_test_embeddings"}


def _require_text(arguments: dict[str, Any], key: str, label: str) -> str:
    value = arguments.get(key)
    if not value or not isinstance(value, str):
        raise InvalidInputError(f"{label} is required")
    return value


def _optional_limit(value: Any) -> int | None:
    if value in (None, ""):
        return None
    try:
        limit = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid limit: {value!r}") from exc
    if limit < 0:
        raise InvalidInputError(f"Limit must not be negative, got {limit}")
    return limit or None


class DocumentationTools:
    """Implements ``add_documentation``, ``search_documentation``,
    ``list_sources`` and ``configure_and_test_embeddings``.
    """

    def __init__(
        self,
        settings: Settings,
        embedding_service: EmbeddingService,
        reconciler: CollectionReconciler,
        ingestion_service: IngestionService,
        retrieval_service: RetrievalService,
        source_registry: SourceRegistry,
        page_renderer: IPageRenderer,
        vector_store: IVectorStoreProvider,
    ) -> None:
        self._settings = settings
        self._embedding_service = embedding_service
        self._reconciler = reconciler
        self._ingestion = ingestion_service
        self._retrieval = retrieval_service
        self._sources = source_registry
        self._page_renderer = page_renderer
        self._vector_store = vector_store

    @property
    def embedding_service(self) -> EmbeddingService:
        return self._embedding_service

    @property
    def vector_store(self) -> IVectorStoreProvider:
        return self._vector_store

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    async def add_documentation(self, url: str) -> ToolResponse:
        if not url:
            raise InvalidInputError("URL is required")
        await self._reconciler.ensure_collection()
        try:
            result = await self._ingestion.ingest_url(url)
        except _OPERATION_ERRORS as exc:
            logger.error("add_documentation_failed", url=url, error=str(exc))
            return ToolResponse.error(f"Failed to add documentation: {exc}")
        return ToolResponse.ok(
            f"Successfully added documentation from {url} "
            f"({result.chunks_created} chunks processed)"
        )

    async def search_documentation(self, query: str, limit: int | None = None) -> ToolResponse:
        if not query:
            raise InvalidInputError("Query is required")
        await self._reconciler.ensure_collection()
        try:
            text = await self._retrieval.search_text(query, limit)
        except _OPERATION_ERRORS as exc:
            logger.error("search_documentation_failed", query=query[:80], error=str(exc))
            return ToolResponse.error(f"Search failed: {exc}")
        return ToolResponse.ok(text)

    async def list_sources(self) -> ToolResponse:
        await self._reconciler.ensure_collection()
        try:
            text = await self._sources.list_sources_text()
        except _OPERATION_ERRORS as exc:
            logger.error("list_sources_failed", error=str(exc))
            return ToolResponse.error(f"Failed to list sources: {exc}")
        return ToolResponse.ok(text)

    async def configure_and_test_embeddings(
        self,
        text: str,
        provider: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
    ) -> ToolResponse:
        """Try a provider on *text*; on success make it active and reconcile.

        The candidate provider is only swapped in after it has produced an
        embedding, so a failed test leaves the active provider untouched.
        """
        if not text:
            raise InvalidInputError("Text is required")

        config = self._settings.embedding_config(provider=provider, model=model, api_key=api_key)
        kind = ProviderKind.parse(config.provider)
        candidate = build_provider(config)

        try:
            embedding = await candidate.embed(text)
            await self._reconciler.activate(candidate)
        except _OPERATION_ERRORS as exc:
            logger.error(
                "embedding_test_failed",
                provider=candidate.get_provider_name(),
                error=str(exc),
            )
            return ToolResponse.error(f"Failed to test embeddings: {exc}")

        return ToolResponse.ok(
            f"Successfully configured {kind.label} embeddings ({candidate.get_model_name()}).\n"
            f"Vector size: {len(embedding)}\n"
            "Qdrant collection updated to match new vector size."
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResponse:
        """Dispatch a named tool invocation with JSON-style *arguments*.

        Raises
        ------
        InvalidInputError
            If *name* is not a known tool or a required argument is missing.
        """
        arguments = arguments or {}
        name = TOOL_ALIASES.get(name, name)
        logger.debug("tool_called", tool=name, arguments=sorted(arguments))

        if name == "add_documentation":
            return await self.add_documentation(_require_text(arguments, "url", "URL"))
        if name == "search_documentation":
            return await self.search_documentation(
                _require_text(arguments, "query", "Query"),
                _optional_limit(arguments.get("limit")),
            )
        if name == "list_sources":
            return await self.list_sources()
        if name == "configure_and_test_embeddings":
            return await self.configure_and_test_embeddings(
                _require_text(arguments, "text", "Text"),
                provider=arguments.get("provider"),
                api_key=arguments.get("apiKey") or arguments.get("api_key"),
                model=arguments.get("model"),
            )
        raise InvalidInputError(f"Unknown tool: {name}")

    async def aclose(self) -> None:
        """Release the page renderer and the vector store client."""
        await self._page_renderer.close()
        await self._vector_store.close()
        logger.info("tools_closed")
