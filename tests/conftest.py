"""Shared pytest fixtures for the ragdocs test suite."""

from __future__ import annotations

import hashlib
import math

import pytest

from ragdocs.config.settings import Settings
from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
from ragdocs.interfaces.page_renderer import IPageRenderer, RenderedPage
from ragdocs.providers.vector_store.qdrant_provider import QdrantProvider
from ragdocs.utils.errors import EmbeddingError, PageFetchError

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeEmbeddingProvider(IEmbeddingProvider):
    """Deterministic bag-of-words embedder.

    Each word is hashed into one of ``dimension`` buckets; the vector is
    L2-normalised, so texts sharing words have a high cosine similarity.
    """

    def __init__(self, dimension: int = 8, name: str = "fake", fail: bool = False) -> None:
        self._dimension = dimension
        self._name = name
        self._fail = fail
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self._fail:
            raise EmbeddingError("embedding backend down", provider_name=self.get_provider_name())
        vector = [0.01] * self._dimension
        for word in text.lower().split():
            bucket = int(hashlib.md5(word.encode()).hexdigest(), 16) % self._dimension
            vector[bucket] += 1.0
        norm = math.sqrt(sum(v * v for v in vector))
        return [v / norm for v in vector]

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return f"{self._name}_embedding"

    def get_model_name(self) -> str:
        return f"{self._name}-model"


class FakePageRenderer(IPageRenderer):
    """Serves canned pages; any other URL fails like an unreachable host."""

    def __init__(self, pages: dict[str, RenderedPage] | None = None) -> None:
        self.pages = dict(pages or {})
        self.closed = False

    async def render(self, url: str) -> RenderedPage:
        page = self.pages.get(url)
        if page is None:
            raise PageFetchError(
                f"Failed to fetch URL {url}: connection refused",
                provider_name=self.get_provider_name(),
            )
        return page

    async def close(self) -> None:
        self.closed = True

    def get_provider_name(self) -> str:
        return "fake_page"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def make_settings(**overrides) -> Settings:
    defaults = {
        "embedding_provider": "ollama",
        "embedding_model": "",
        "embedding_dimension": 0,
        "openai_api_key": "",
        "openai_base_url": "",
        "qdrant_collection": "test_docs",
        "chunk_size": 1000,
        "search_default_limit": 5,
        "scroll_page_size": 256,
    }
    defaults.update(overrides)
    return Settings(**defaults)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider(dimension=8)


@pytest.fixture
def memory_store() -> QdrantProvider:
    """A Qdrant store running in local in-memory mode."""
    return QdrantProvider(location=":memory:")


@pytest.fixture
def two_chunk_page() -> RenderedPage:
    """A page whose text splits into exactly two chunks at size 1000."""
    first = " ".join(["asyncio"] * 125)  # 999 chars; "event" then closes chunk one
    second = " ".join(["event", "loop", "tasks", "coroutines"] * 20)
    return RenderedPage(
        url="https://docs.example.com/asyncio",
        title="Asyncio Guide",
        text=f"{first} {second}",
    )
