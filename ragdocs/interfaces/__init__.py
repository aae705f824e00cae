"""Abstract provider interfaces for the ragdocs retrieval pipeline."""

from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
from ragdocs.interfaces.page_renderer import IPageRenderer, RenderedPage
from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "IEmbeddingProvider",
    "IPageRenderer",
    "IVectorStoreProvider",
    "RenderedPage",
]
