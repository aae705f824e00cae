"""Pydantic data models for the ragdocs retrieval pipeline."""

from ragdocs.models.embedding import EmbeddingConfig, ProviderKind
from ragdocs.models.rag import (
    DOCUMENT_CHUNK_TYPE,
    DocumentChunk,
    IngestionResult,
    ReconcileOutcome,
    SearchHit,
    StoredPayload,
    StoredRecord,
    VectorHit,
    VectorPoint,
    decode_payload,
    is_document_payload,
)
from ragdocs.models.tools import ToolResponse

__all__ = [
    "DOCUMENT_CHUNK_TYPE",
    "DocumentChunk",
    "EmbeddingConfig",
    "IngestionResult",
    "ProviderKind",
    "ReconcileOutcome",
    "SearchHit",
    "StoredPayload",
    "StoredRecord",
    "ToolResponse",
    "VectorHit",
    "VectorPoint",
    "decode_payload",
    "is_document_payload",
]
