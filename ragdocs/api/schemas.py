"""Pydantic request/response schemas for the ragdocs HTTP API.

Tool results travel as :class:`ToolResponseBody`, the same text-plus-flag
shape the MCP server returns.  Errors use that shape too.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ToolResponseBody(BaseModel):
    """Text result of one tool call."""

    text: str
    is_error: bool = False


class AddDocumentationRequest(BaseModel):
    """URL of a documentation page to ingest."""

    url: str = Field(..., min_length=1, description="URL of the documentation to fetch")


class ConfigureEmbeddingsRequest(BaseModel):
    """Provider settings to test and, on success, activate."""

    text: str = Field(..., min_length=1, description="Text to generate embeddings for")
    provider: str | None = Field(default=None, description="ollama or openai")
    api_key: str | None = Field(default=None, description="OpenAI API key")
    model: str | None = Field(default=None, description="Model to use for embeddings")


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    embedding: str
    vector_store: str
