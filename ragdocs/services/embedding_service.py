"""Embedding service -- owner of the active embedding provider.

The service holds exactly one :class:`IEmbeddingProvider` at a time and
delegates :meth:`embed` / :meth:`vector_size` to it.  The provider can be
replaced at runtime (the ``configure_and_test_embeddings`` tool does this);
ingestion and retrieval receive the service by reference, so a swap is seen
by every later operation.

Swaps go through :meth:`CollectionReconciler.activate`, which serialises
them with collection reconciliation.
"""

from __future__ import annotations

import structlog

from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
from ragdocs.models.embedding import EmbeddingConfig, ProviderKind
from ragdocs.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from ragdocs.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from ragdocs.utils.errors import InvalidConfigurationError

logger = structlog.get_logger(logger_name=__name__)


def build_provider(config: EmbeddingConfig) -> IEmbeddingProvider:
    """Construct the provider *config* asks for.

    Raises
    ------
    InvalidConfigurationError
        If the provider kind is unknown, or a hosted provider has no API key.
    """
    kind = ProviderKind.parse(config.provider)
    if kind is ProviderKind.LOCAL:
        return OllamaEmbeddingProvider(config)
    if not config.api_key:
        raise InvalidConfigurationError(
            "OpenAI API key is required",
            provider_name="openai_embedding",
        )
    return OpenAIEmbeddingProvider(config)


class EmbeddingService:
    """Delegates embedding calls to the currently active provider."""

    def __init__(self, provider: IEmbeddingProvider) -> None:
        self._provider = provider

    @classmethod
    def from_config(cls, config: EmbeddingConfig) -> EmbeddingService:
        """Build a service around the provider described by *config*."""
        return cls(build_provider(config))

    @property
    def provider(self) -> IEmbeddingProvider:
        return self._provider

    async def embed(self, text: str) -> list[float]:
        return await self._provider.embed(text)

    def vector_size(self) -> int:
        return self._provider.get_dimension()

    def swap(self, provider: IEmbeddingProvider) -> IEmbeddingProvider:
        """Make *provider* active and return the one it replaced."""
        previous = self._provider
        self._provider = provider
        logger.info(
            "embedding_provider_swapped",
            previous=previous.get_provider_name(),
            current=provider.get_provider_name(),
            model=provider.get_model_name(),
            vector_size=provider.get_dimension(),
        )
        return previous

    def describe(self) -> str:
        return f"{self._provider.get_provider_name()} ({self._provider.get_model_name()})"
