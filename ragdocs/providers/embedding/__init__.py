"""Embedding provider implementations (local Ollama, hosted OpenAI)."""

from ragdocs.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from ragdocs.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider

__all__ = ["OllamaEmbeddingProvider", "OpenAIEmbeddingProvider"]
