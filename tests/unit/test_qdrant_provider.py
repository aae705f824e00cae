"""Unit tests for QdrantProvider using Qdrant's in-memory local mode."""

from __future__ import annotations

import uuid
from unittest.mock import AsyncMock

import httpx
import pytest

from ragdocs.models.rag import DocumentChunk, VectorPoint
from ragdocs.providers.vector_store.qdrant_provider import QdrantProvider
from ragdocs.utils.errors import CollectionMissingError, StoreUnavailableError


def _point(vector: list[float], title: str = "T") -> VectorPoint:
    chunk = DocumentChunk(text=f"text {title}", url=f"https://x/{title}", title=title)
    return VectorPoint(id=str(uuid.uuid4()), vector=vector, payload=chunk.to_payload())


class TestCollections:
    @pytest.mark.asyncio
    async def test_create_list_size_delete(self, memory_store: QdrantProvider) -> None:
        await memory_store.create_collection("docs", 4)
        assert "docs" in await memory_store.list_collections()
        assert await memory_store.get_collection_size("docs") == 4

        await memory_store.delete_collection("docs")
        assert "docs" not in await memory_store.list_collections()

    @pytest.mark.asyncio
    async def test_missing_collection(self, memory_store: QdrantProvider) -> None:
        with pytest.raises(CollectionMissingError):
            await memory_store.get_collection_size("absent")

    @pytest.mark.asyncio
    async def test_unreachable_server(self) -> None:
        client = AsyncMock()
        client.get_collections.side_effect = httpx.ConnectError("refused")
        store = QdrantProvider(url="http://qdrant:6333", client=client)

        with pytest.raises(StoreUnavailableError, match="Failed to connect to Qdrant"):
            await store.list_collections()


class TestPoints:
    @pytest.mark.asyncio
    async def test_search_ranks_by_cosine(self, memory_store: QdrantProvider) -> None:
        await memory_store.create_collection("docs", 3)
        await memory_store.upsert(
            "docs",
            [_point([1.0, 0.0, 0.0], "x"), _point([0.0, 1.0, 0.0], "y")],
        )

        hits = await memory_store.search("docs", [0.9, 0.1, 0.0], limit=2)

        assert [hit.payload["title"] for hit in hits] == ["x", "y"]
        assert hits[0].score > hits[1].score

    @pytest.mark.asyncio
    async def test_scroll_pages_until_exhausted(self, memory_store: QdrantProvider) -> None:
        await memory_store.create_collection("docs", 2)
        await memory_store.upsert("docs", [_point([1.0, 0.5], str(i)) for i in range(5)])

        seen: list[str] = []
        offset = None
        while True:
            records, offset = await memory_store.scroll("docs", limit=2, offset=offset)
            seen.extend(record.id for record in records)
            if offset is None:
                break

        assert len(seen) == 5
        assert await memory_store.count("docs") == 5

    @pytest.mark.asyncio
    async def test_upsert_into_missing_collection(self, memory_store: QdrantProvider) -> None:
        with pytest.raises(StoreUnavailableError):
            await memory_store.upsert("absent", [_point([1.0, 0.0])])

    @pytest.mark.asyncio
    async def test_search_with_zero_limit(self, memory_store: QdrantProvider) -> None:
        assert await memory_store.search("docs", [1.0], limit=0) == []
