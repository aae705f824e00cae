"""Unit tests for embedding provider adapters -- Ollama (local), OpenAI (hosted)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from ragdocs.models.embedding import EmbeddingConfig
from ragdocs.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from ragdocs.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from ragdocs.utils.errors import EmbeddingError


def _response(vector: list[float], tokens: int = 7) -> MagicMock:
    response = MagicMock()
    response.data = [MagicMock(embedding=vector)]
    response.usage = MagicMock(total_tokens=tokens)
    return response


def _mock_client(response=None, error: Exception | None = None) -> AsyncMock:
    client = AsyncMock()
    if error is not None:
        client.embeddings.create = AsyncMock(side_effect=error)
    else:
        client.embeddings.create = AsyncMock(return_value=response)
    return client


def _connection_error() -> openai.APIConnectionError:
    return openai.APIConnectionError(request=httpx.Request("POST", "http://localhost/v1/embeddings"))


# ======================================================================
# Ollama Embedding Provider
# ======================================================================


class TestOllamaEmbeddingProvider:
    def test_defaults(self) -> None:
        provider = OllamaEmbeddingProvider(EmbeddingConfig())
        assert provider.get_model_name() == "nomic-embed-text"
        assert provider.get_dimension() == 768
        assert provider.get_provider_name() == "ollama_embedding"

    @pytest.mark.parametrize(
        ("model", "dimension"),
        [
            ("mxbai-embed-large", 1024),
            ("all-minilm", 384),
            ("nomic-embed-text:latest", 768),
            ("unknown-model", 768),
        ],
    )
    def test_known_dimensions(self, model: str, dimension: int) -> None:
        provider = OllamaEmbeddingProvider(EmbeddingConfig(model=model))
        assert provider.get_dimension() == dimension

    def test_explicit_dimension_wins(self) -> None:
        provider = OllamaEmbeddingProvider(EmbeddingConfig(model="custom", dimension=512))
        assert provider.get_dimension() == 512

    def test_client_targets_v1_endpoint(self) -> None:
        with patch(
            "ragdocs.providers.embedding.ollama_embedding_provider.openai.AsyncOpenAI"
        ) as client_cls:
            OllamaEmbeddingProvider(EmbeddingConfig(ollama_base_url="http://gpu-box:11434/"))
        assert client_cls.call_args.kwargs["base_url"] == "http://gpu-box:11434/v1"

    @pytest.mark.asyncio
    async def test_embed_success(self) -> None:
        client = _mock_client(_response([0.5] * 768))
        with patch(
            "ragdocs.providers.embedding.ollama_embedding_provider.openai.AsyncOpenAI",
            return_value=client,
        ):
            provider = OllamaEmbeddingProvider(EmbeddingConfig())
            vector = await provider.embed("hello")

        assert len(vector) == 768
        client.embeddings.create.assert_awaited_once_with(input="hello", model="nomic-embed-text")

    @pytest.mark.asyncio
    async def test_api_error_becomes_embedding_error(self) -> None:
        client = _mock_client(error=_connection_error())
        with patch(
            "ragdocs.providers.embedding.ollama_embedding_provider.openai.AsyncOpenAI",
            return_value=client,
        ):
            provider = OllamaEmbeddingProvider(EmbeddingConfig())
            with pytest.raises(EmbeddingError) as exc_info:
                await provider.embed("hello")

        assert exc_info.value.provider_name == "ollama_embedding"
        assert "Failed to generate embeddings with Ollama" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_malformed_response(self) -> None:
        response = MagicMock()
        response.data = []
        with patch(
            "ragdocs.providers.embedding.ollama_embedding_provider.openai.AsyncOpenAI",
            return_value=_mock_client(response),
        ):
            provider = OllamaEmbeddingProvider(EmbeddingConfig())
            with pytest.raises(EmbeddingError, match="Malformed"):
                await provider.embed("hello")

    @pytest.mark.asyncio
    async def test_wrong_vector_length(self) -> None:
        with patch(
            "ragdocs.providers.embedding.ollama_embedding_provider.openai.AsyncOpenAI",
            return_value=_mock_client(_response([0.1] * 10)),
        ):
            provider = OllamaEmbeddingProvider(EmbeddingConfig())
            with pytest.raises(EmbeddingError, match="expected 768"):
                await provider.embed("hello")


# ======================================================================
# OpenAI Embedding Provider
# ======================================================================


class TestOpenAIEmbeddingProvider:
    def test_defaults(self) -> None:
        provider = OpenAIEmbeddingProvider(EmbeddingConfig(provider="openai", api_key="sk-test"))
        assert provider.get_model_name() == "text-embedding-3-small"
        assert provider.get_dimension() == 1536
        assert provider.get_provider_name() == "openai_embedding"

    def test_large_model_dimension(self) -> None:
        config = EmbeddingConfig(provider="openai", api_key="sk", model="text-embedding-3-large")
        assert OpenAIEmbeddingProvider(config).get_dimension() == 3072

    def test_compatible_host_label(self) -> None:
        config = EmbeddingConfig(
            provider="openai",
            api_key="sk",
            openai_base_url="https://api.together.xyz/v1",
        )
        assert OpenAIEmbeddingProvider(config).get_provider_name() == "openai-compatible_embedding"

    @pytest.mark.asyncio
    async def test_missing_key_fails_at_embed(self) -> None:
        with patch(
            "ragdocs.providers.embedding.openai_embedding_provider.openai.AsyncOpenAI"
        ) as client_cls:
            provider = OpenAIEmbeddingProvider(EmbeddingConfig(provider="openai", api_key=""))
        client_cls.assert_not_called()
        with pytest.raises(EmbeddingError, match="API key"):
            await provider.embed("hello")

    @pytest.mark.asyncio
    async def test_embed_success(self) -> None:
        client = _mock_client(_response([0.2] * 1536, tokens=3))
        with patch(
            "ragdocs.providers.embedding.openai_embedding_provider.openai.AsyncOpenAI",
            return_value=client,
        ):
            provider = OpenAIEmbeddingProvider(EmbeddingConfig(provider="openai", api_key="sk"))
            vector = await provider.embed("hello")

        assert vector == [0.2] * 1536

    @pytest.mark.asyncio
    async def test_api_error_becomes_embedding_error(self) -> None:
        with patch(
            "ragdocs.providers.embedding.openai_embedding_provider.openai.AsyncOpenAI",
            return_value=_mock_client(error=_connection_error()),
        ):
            provider = OpenAIEmbeddingProvider(EmbeddingConfig(provider="openai", api_key="sk"))
            with pytest.raises(EmbeddingError) as exc_info:
                await provider.embed("hello")

        assert str(exc_info.value).startswith("[openai_embedding] Failed to generate embeddings")
