"""Ollama embedding provider adapter (local/free).

Wraps the Ollama OpenAI-compatible endpoint to implement
:class:`IEmbeddingProvider`.  Defaults to ``nomic-embed-text`` (768
dimensions).  The dimension is declared, not discovered: Ollama does not
report it before the first call.
"""

from __future__ import annotations

import openai
import structlog

from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
from ragdocs.models.embedding import EmbeddingConfig
from ragdocs.utils.errors import EmbeddingError

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_OLLAMA_MODEL = "nomic-embed-text"

# Known embedding model dimensions for common Ollama models.
_MODEL_DIMENSIONS: dict[str, int] = {
    "nomic-embed-text": 768,
    "mxbai-embed-large": 1024,
    "all-minilm": 384,
    "snowflake-arctic-embed": 1024,
    "bge-m3": 1024,
}


class OllamaEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by a model served through Ollama.

    Communicates through the OpenAI-compatible ``/v1`` endpoint that Ollama
    exposes.  Unknown model ids fall back to 768 dimensions unless the
    caller declares ``dimension`` explicitly.
    """

    def __init__(self, config: EmbeddingConfig) -> None:
        self._base_url = config.ollama_base_url.rstrip("/")
        self._client = openai.AsyncOpenAI(
            base_url=f"{self._base_url}/v1",
            api_key="ollama",  # Ollama doesn't require a real key
        )
        self._model = config.model or DEFAULT_OLLAMA_MODEL
        # Tags such as "nomic-embed-text:latest" share the base model's size.
        base_model = self._model.split(":", 1)[0]
        self._dimension = config.dimension or _MODEL_DIMENSIONS.get(base_model, 768)

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def embed(self, text: str) -> list[float]:
        logger.debug("ollama_embedding_request", model=self._model, preview=text[:50])
        try:
            response = await self._client.embeddings.create(input=text, model=self._model)
        except openai.APIError as exc:
            raise EmbeddingError(
                message=f"Failed to generate embeddings with Ollama: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        try:
            embedding = list(response.data[0].embedding)
        except (AttributeError, IndexError, TypeError) as exc:
            raise EmbeddingError(
                message=f"Malformed Ollama embedding response: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if len(embedding) != self._dimension:
            raise EmbeddingError(
                message=(
                    f"Ollama model {self._model} returned {len(embedding)} dimensions, "
                    f"expected {self._dimension}"
                ),
                provider_name=self.get_provider_name(),
            )

        logger.info("ollama_embedding_generated", model=self._model, size=len(embedding))
        return embedding

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return "ollama_embedding"

    def get_model_name(self) -> str:
        return self._model
