"""Retrieval pipeline data models for the documentation knowledge base.

Defines Pydantic v2 models for document chunks, stored payloads, vector
store points and hits, search results and ingestion summaries.  All models
use frozen config: a chunk is immutable once produced by the ingestion
pipeline and is owned by the vector store after it has been persisted.

Payloads read back from the store are untyped dicts.  They are narrowed to
:class:`DocumentChunk` only through :func:`decode_payload`, which checks the
``_type`` discriminator and the field types and raises
:class:`~ragdocs.utils.errors.DataCorruptionError` otherwise.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ragdocs.utils.errors import DataCorruptionError

DOCUMENT_CHUNK_TYPE = "DocumentChunk"


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# DocumentChunk -- the unit of embedding and storage.
# ---------------------------------------------------------------------------
class DocumentChunk(BaseModel):
    """A bounded-size slice of a documentation page, ready for embedding."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="The chunk's textual content.")
    url: str = Field(description="URL of the page the chunk was taken from.")
    title: str = Field(description="Title of the source page.")
    timestamp: str = Field(
        default_factory=utc_timestamp,
        description="ISO-8601 time at which the chunk was produced.",
    )

    def to_payload(self) -> dict[str, Any]:
        """Return the store payload: the chunk fields plus the ``_type`` tag."""
        return StoredPayload(
            doc_type=DOCUMENT_CHUNK_TYPE,
            text=self.text,
            url=self.url,
            title=self.title,
            timestamp=self.timestamp,
        ).model_dump(by_alias=True)

    def source_label(self) -> str:
        """Return the ``"title (url)"`` label used by the source listing."""
        return f"{self.title} ({self.url})"


class StoredPayload(DocumentChunk):
    """Shape of a document chunk payload as persisted in the vector store.

    Validation is strict: numbers are not coerced to strings, and a payload
    without ``_type == "DocumentChunk"`` is rejected.  Unknown extra keys
    are ignored.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    doc_type: Literal["DocumentChunk"] = Field(alias="_type")
    timestamp: str

    def to_chunk(self) -> DocumentChunk:
        return DocumentChunk(
            text=self.text,
            url=self.url,
            title=self.title,
            timestamp=self.timestamp,
        )


def decode_payload(payload: Any) -> DocumentChunk:
    """Narrow an untyped store payload to a :class:`DocumentChunk`.

    Raises
    ------
    DataCorruptionError
        If *payload* is not a mapping, lacks the discriminator tag, or has
        a missing / mistyped field.
    """
    if not isinstance(payload, dict):
        raise DataCorruptionError(
            f"Invalid payload type: expected a mapping, got {type(payload).__name__}"
        )
    try:
        return StoredPayload.model_validate(payload).to_chunk()
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) or "<root>" for err in exc.errors()
        )
        raise DataCorruptionError(f"Invalid payload type: bad field(s) {fields}") from exc


def is_document_payload(payload: Any) -> bool:
    """Return ``True`` when *payload* decodes to a :class:`DocumentChunk`."""
    try:
        decode_payload(payload)
    except DataCorruptionError:
        return False
    return True


# ---------------------------------------------------------------------------
# Vector store records
# ---------------------------------------------------------------------------
class VectorPoint(BaseModel):
    """A point written to the vector store: id, vector and payload."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique point identifier (UUID string).")
    vector: list[float] = Field(description="Embedding vector of the chunk text.")
    payload: dict[str, Any] = Field(default_factory=dict)


class VectorHit(BaseModel):
    """A raw similarity-search hit, before its payload has been validated."""

    model_config = ConfigDict(frozen=True)

    id: str
    score: float = Field(description="Cosine similarity between query and point.")
    payload: dict[str, Any] | None = None


class StoredRecord(BaseModel):
    """A point returned by a scroll pass (payload only, no vector)."""

    model_config = ConfigDict(frozen=True)

    id: str
    payload: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
class SearchHit(BaseModel):
    """A validated search result: the chunk and its similarity score."""

    model_config = ConfigDict(frozen=True)

    chunk: DocumentChunk
    score: float

    def render(self) -> str:
        """Format the hit as title link, score and chunk text."""
        return (
            f"[{self.chunk.title}]({self.chunk.url})\n"
            f"Score: {self.score}\n"
            f"Content: {self.chunk.text}\n"
        )


class IngestionResult(BaseModel):
    """Summary of one page ingestion run."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="URL that was ingested.")
    title: str = Field(default="", description="Title of the ingested page.")
    chunks_created: int = Field(default=0, ge=0, description="Number of points upserted.")
    ingestion_time: float = Field(
        default=0.0,
        ge=0.0,
        description="Wall-clock time in seconds for the ingestion run.",
    )


class ReconcileOutcome(str, Enum):
    """What :meth:`CollectionReconciler.ensure_collection` had to do."""

    CREATED = "created"
    RECREATED = "recreated"
    UNCHANGED = "unchanged"
