"""OpenAI-compatible embedding provider adapter.

Wraps the ``openai`` async client to implement :class:`IEmbeddingProvider`.
Supports both real OpenAI and OpenAI-compatible hosts via a custom
``base_url``.  Hosted APIs do not expose a model's dimension through a
metadata call, so it comes from the known-models table or the caller.
"""

from __future__ import annotations

import openai
import structlog

from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
from ragdocs.models.embedding import EmbeddingConfig
from ragdocs.utils.errors import EmbeddingError

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_OPENAI_MODEL = "text-embedding-3-small"

# Known embedding model dimensions.
_MODEL_DIMENSIONS: dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
    "BAAI/bge-base-en-v1.5": 768,
    "BAAI/bge-large-en-v1.5": 1024,
}


class OpenAIEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by an OpenAI-compatible embeddings API.

    Uses ``text-embedding-3-small`` (1536 dims) by default.  Unknown model
    ids fall back to 1536 dimensions unless ``dimension`` is declared.
    """

    def __init__(self, config: EmbeddingConfig) -> None:
        # No client without a key; embed() reports the missing credential.
        self._client: openai.AsyncOpenAI | None = None
        if config.api_key:
            client_kwargs: dict = {"api_key": config.api_key}
            if config.openai_base_url:
                client_kwargs["base_url"] = config.openai_base_url
            self._client = openai.AsyncOpenAI(**client_kwargs)

        self._model = config.model or DEFAULT_OPENAI_MODEL
        self._dimension = config.dimension or _MODEL_DIMENSIONS.get(self._model, 1536)
        self._provider_label = (
            "openai-compatible_embedding" if config.openai_base_url else "openai_embedding"
        )

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def embed(self, text: str) -> list[float]:
        if self._client is None:
            raise EmbeddingError(
                message="OpenAI API key is not configured",
                provider_name=self.get_provider_name(),
            )

        logger.debug("openai_embedding_request", model=self._model, preview=text[:50])
        try:
            response = await self._client.embeddings.create(input=text, model=self._model)
        except openai.APIError as exc:
            raise EmbeddingError(
                message=f"Failed to generate embeddings with OpenAI: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        try:
            embedding = list(response.data[0].embedding)
        except (AttributeError, IndexError, TypeError) as exc:
            raise EmbeddingError(
                message=f"Malformed OpenAI embedding response: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if len(embedding) != self._dimension:
            raise EmbeddingError(
                message=(
                    f"OpenAI model {self._model} returned {len(embedding)} dimensions, "
                    f"expected {self._dimension}"
                ),
                provider_name=self.get_provider_name(),
            )

        logger.info(
            "openai_embedding_generated",
            model=self._model,
            provider=self._provider_label,
            size=len(embedding),
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return embedding

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return self._provider_label

    def get_model_name(self) -> str:
        return self._model
