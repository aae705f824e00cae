"""Business-logic services of the retrieval pipeline.

Services depend only on the abstract interfaces in ``ragdocs.interfaces``;
concrete providers are wired in by ``ragdocs.main``.
"""

from ragdocs.services.collection_reconciler import CollectionReconciler
from ragdocs.services.documentation_tools import DocumentationTools
from ragdocs.services.embedding_service import EmbeddingService, build_provider
from ragdocs.services.ingestion import IngestionService, TextChunker
from ragdocs.services.retrieval_service import RetrievalService, format_results
from ragdocs.services.source_registry import SourceRegistry

__all__ = [
    "CollectionReconciler",
    "DocumentationTools",
    "EmbeddingService",
    "IngestionService",
    "RetrievalService",
    "SourceRegistry",
    "TextChunker",
    "build_provider",
    "format_results",
]
