"""Abstract base class for text-embedding service providers.

Defines the contract for turning text into a fixed-size vector.  The two
concrete variants wrap a local Ollama model and the hosted OpenAI
embeddings API; new backends are added as new subclasses without touching
the collection reconciler or the ingestion/retrieval services.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations:
#   OllamaEmbeddingProvider -- nomic-embed-text via Ollama (local, 768-dim)
#   OpenAIEmbeddingProvider -- text-embedding-3-small (hosted, 1536-dim)
# Located in: ragdocs/providers/embedding/
class IEmbeddingProvider(ABC):
    """Contract for text-embedding services used by the retrieval pipeline."""

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Generate an embedding vector for *text*.

        Returns
        -------
        list[float]
            The embedding vector; its length always equals :meth:`get_dimension`.

        Raises
        ------
        ragdocs.utils.errors.EmbeddingError
            If the underlying call fails or returns a malformed vector.  The
            message names the provider and the underlying cause.
        """

    @abstractmethod
    def get_dimension(self) -> int:
        """Return the dimensionality of the embedding vectors.

        This is a declared constant for the configured model, not something
        queried from the backend, and it must stay fixed for the lifetime of
        the provider instance.  Example values: ``768`` (``nomic-embed-text``),
        ``1536`` (``text-embedding-3-small``).
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"ollama_embedding"``."""

    @abstractmethod
    def get_model_name(self) -> str:
        """Return the model identifier the provider sends to its backend."""
