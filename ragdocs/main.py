"""ragdocs composition root.

Wires providers and services into a :class:`DocumentationTools` instance,
and builds the FastAPI application around it.  The MCP server and the CLI
obtain their tools from :func:`build_tools` as well, so every front end
runs the same object graph.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from ragdocs import __version__
from ragdocs.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from ragdocs.api.routes import router as api_router
from ragdocs.config.loader import load_settings
from ragdocs.config.settings import Settings
from ragdocs.interfaces.page_renderer import IPageRenderer
from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
from ragdocs.providers.page.web_page_provider import WebPageProvider
from ragdocs.providers.vector_store.qdrant_provider import QdrantProvider
from ragdocs.services.collection_reconciler import CollectionReconciler
from ragdocs.services.documentation_tools import DocumentationTools
from ragdocs.services.embedding_service import EmbeddingService
from ragdocs.services.ingestion.chunker import TextChunker
from ragdocs.services.ingestion.ingestion_service import IngestionService
from ragdocs.services.retrieval_service import RetrievalService
from ragdocs.services.source_registry import SourceRegistry
from ragdocs.utils.logging import configure_logging

_logger: structlog.BoundLogger = structlog.get_logger(logger_name=__name__)


# ---------------------------------------------------------------------------
# Component factory
# ---------------------------------------------------------------------------


def _build_all(
    app_settings: Settings,
    *,
    vector_store: IVectorStoreProvider | None = None,
    page_renderer: IPageRenderer | None = None,
    embedding_service: EmbeddingService | None = None,
) -> dict[str, Any]:
    """Construct every provider and service from *app_settings*.

    Any collaborator passed in explicitly is used as-is instead of being
    built from settings.  Returns a flat dict of named components.
    """
    if embedding_service is None:
        embedding_service = EmbeddingService.from_config(app_settings.embedding_config())
    if vector_store is None:
        vector_store = QdrantProvider(
            url=app_settings.qdrant_url,
            api_key=app_settings.qdrant_api_key or None,
        )
    if page_renderer is None:
        page_renderer = WebPageProvider(timeout=app_settings.fetch_timeout)

    collection = app_settings.qdrant_collection
    reconciler = CollectionReconciler(vector_store, embedding_service, collection)
    ingestion_service = IngestionService(
        page_renderer=page_renderer,
        chunker=TextChunker(app_settings.chunk_size),
        embedding_service=embedding_service,
        vector_store=vector_store,
        collection_name=collection,
    )
    retrieval_service = RetrievalService(
        embedding_service,
        vector_store,
        collection,
        default_limit=app_settings.search_default_limit,
    )
    source_registry = SourceRegistry(
        vector_store,
        collection,
        page_size=app_settings.scroll_page_size,
    )

    tools = DocumentationTools(
        settings=app_settings,
        embedding_service=embedding_service,
        reconciler=reconciler,
        ingestion_service=ingestion_service,
        retrieval_service=retrieval_service,
        source_registry=source_registry,
        page_renderer=page_renderer,
        vector_store=vector_store,
    )

    _logger.info(
        "components_built",
        embedding=embedding_service.describe(),
        vector_store=vector_store.get_provider_name(),
        page_renderer=page_renderer.get_provider_name(),
        collection=collection,
    )

    return {
        "settings": app_settings,
        "embedding_service": embedding_service,
        "vector_store": vector_store,
        "page_renderer": page_renderer,
        "reconciler": reconciler,
        "ingestion_service": ingestion_service,
        "retrieval_service": retrieval_service,
        "source_registry": source_registry,
        "tools": tools,
    }


def build_tools(app_settings: Settings | None = None, **overrides: Any) -> DocumentationTools:
    """Return a fully wired :class:`DocumentationTools`.

    *overrides* accepts ``vector_store``, ``page_renderer`` and
    ``embedding_service``.
    """
    return _build_all(app_settings or load_settings(), **overrides)["tools"]


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------


def create_app(
    tools: DocumentationTools | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    When *tools* is given it is served as-is and left open on shutdown;
    otherwise the tools are built from *app_settings* (or the loaded
    settings) at startup and closed at shutdown.
    """

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        owned = tools is None
        application.state.tools = build_tools(app_settings) if owned else tools
        _logger.info("app_startup", version=__version__)
        yield
        if owned:
            await application.state.tools.aclose()
        _logger.info("app_shutdown")

    application = FastAPI(
        title="ragdocs API",
        version=__version__,
        description=(
            "Ingest documentation pages into a Qdrant collection and search "
            "them by semantic similarity."
        ),
        lifespan=_lifespan,
    )

    # Last added runs first: logging wraps error handling.
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(api_router)
    return application


def run_api(
    app_settings: Settings | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Serve the HTTP API with uvicorn."""
    if app_settings is None:
        app_settings = load_settings()
        configure_logging(app_settings.log_level)
    uvicorn.run(
        create_app(app_settings=app_settings),
        host=host or app_settings.app_host,
        port=port or app_settings.app_port,
    )


if __name__ == "__main__":
    run_api()
