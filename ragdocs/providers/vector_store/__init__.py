"""Vector store provider implementations."""

from ragdocs.providers.vector_store.qdrant_provider import QdrantProvider

__all__ = ["QdrantProvider"]
