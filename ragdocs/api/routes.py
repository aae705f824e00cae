"""FastAPI routes exposing the documentation tools over HTTP.

# Endpoint                          Method  Tool
# ──────────────────────────────────────────────────────────────────
# /api/v1/documentation             POST    add_documentation
# /api/v1/search                    GET     search_documentation
# /api/v1/sources                   GET     list_sources
# /api/v1/embeddings/configure      POST    configure_and_test_embeddings
# /api/v1/health                    GET     health check

The :class:`DocumentationTools` instance is read from ``app.state`` (set
by the lifespan in ``ragdocs.main``) through an ``Annotated`` dependency.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from ragdocs import __version__
from ragdocs.api.schemas import (
    AddDocumentationRequest,
    ConfigureEmbeddingsRequest,
    HealthResponse,
    ToolResponseBody,
)
from ragdocs.models.tools import ToolResponse
from ragdocs.services.documentation_tools import DocumentationTools

router = APIRouter(prefix="/api/v1", tags=["documentation"])


def _get_tools(request: Request) -> DocumentationTools:
    return request.app.state.tools


ToolsDep = Annotated[DocumentationTools, Depends(_get_tools)]


def _body(response: ToolResponse) -> ToolResponseBody:
    return ToolResponseBody(text=response.text, is_error=response.is_error)


@router.post(
    "/documentation",
    response_model=ToolResponseBody,
    summary="Add documentation from a URL",
)
async def add_documentation(payload: AddDocumentationRequest, tools: ToolsDep) -> ToolResponseBody:
    return _body(await tools.add_documentation(payload.url))


@router.get(
    "/search",
    response_model=ToolResponseBody,
    summary="Search through stored documentation",
)
async def search_documentation(
    tools: ToolsDep,
    query: Annotated[str, Query(min_length=1)],
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> ToolResponseBody:
    return _body(await tools.search_documentation(query, limit))


@router.get(
    "/sources",
    response_model=ToolResponseBody,
    summary="List all documentation sources currently stored",
)
async def list_sources(tools: ToolsDep) -> ToolResponseBody:
    return _body(await tools.list_sources())


@router.post(
    "/embeddings/configure",
    response_model=ToolResponseBody,
    summary="Test an embedding provider and make it active",
)
async def configure_embeddings(
    payload: ConfigureEmbeddingsRequest,
    tools: ToolsDep,
) -> ToolResponseBody:
    return _body(
        await tools.configure_and_test_embeddings(
            payload.text,
            provider=payload.provider,
            api_key=payload.api_key,
            model=payload.model,
        )
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(tools: ToolsDep) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        embedding=tools.embedding_service.describe(),
        vector_store=tools.vector_store.get_provider_name(),
    )
