"""MCP stdio server exposing the documentation tools.

Built on the low-level :class:`mcp.server.Server`.  Each tool call is
dispatched to :meth:`DocumentationTools.call` and its text is returned as a
single ``TextContent`` block.  An error-flagged result, or a ``RagDocsError``
raised by the tool layer, is raised out of the handler so that the MCP
server marks the result with ``isError``; the caller only ever sees text.

stdout carries the protocol, so logging must already be routed to stderr
(see :func:`ragdocs.utils.logging.configure_logging`).
"""

from __future__ import annotations

import asyncio

import mcp.types as types
import structlog
from mcp.server import Server
from mcp.server.stdio import stdio_server

from ragdocs.config.loader import load_settings
from ragdocs.main import build_tools
from ragdocs.services.documentation_tools import DocumentationTools
from ragdocs.utils.errors import RagDocsError
from ragdocs.utils.logging import configure_logging

logger = structlog.get_logger(logger_name=__name__)

SERVER_NAME = "ragdocs"


class ToolCallFailed(Exception):
    """Carries the text of an error-flagged tool result to the MCP layer."""


_EMBEDDING_TOOL_SCHEMA = {
    "type": "object",
    "properties": {
        "text": {
            "type": "string",
            "description": "Text to generate embeddings for",
        },
        "provider": {
            "type": "string",
            "description": "Embedding provider to use (local/ollama or hosted/openai)",
            "enum": ["local", "hosted", "ollama", "openai"],
        },
        "apiKey": {
            "type": "string",
            "description": "API key (required if provider is hosted or openai)",
        },
        "model": {
            "type": "string",
            "description": "Model to use for embeddings",
        },
    },
    "required": ["text"],
}

TOOLS: list[types.Tool] = [
    types.Tool(
        name="add_documentation",
        description="Add documentation from a URL to the RAG database",
        inputSchema={
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "URL of the documentation to fetch"},
            },
            "required": ["url"],
        },
    ),
    types.Tool(
        name="search_documentation",
        description="Search through stored documentation",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query"},
                "limit": {
                    "type": "number",
                    "description": "Maximum number of results to return",
                    "default": 5,
                },
            },
            "required": ["query"],
        },
    ),
    types.Tool(
        name="list_sources",
        description="List all documentation sources currently stored",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="configure_and_test_embeddings",
        description="Test an embedding provider and make it the active one",
        inputSchema=_EMBEDDING_TOOL_SCHEMA,
    ),
    types.Tool(
        name="test_ollama",
        description="Test embeddings functionality",
        inputSchema=_EMBEDDING_TOOL_SCHEMA,
    ),
]


def create_server(tools: DocumentationTools) -> Server:
    """Return an MCP server whose tool handlers delegate to *tools*."""
    server: Server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return TOOLS

    @server.call_tool()
    async def call_tool(name: str, arguments: dict | None) -> list[types.TextContent]:
        try:
            response = await tools.call(name, arguments or {})
        except RagDocsError as exc:
            logger.error("tool_call_rejected", tool=name, error=str(exc))
            raise ToolCallFailed(exc.message) from exc
        if response.is_error:
            raise ToolCallFailed(response.text)
        return [types.TextContent(type="text", text=response.text)]

    return server


async def serve(tools: DocumentationTools) -> None:
    """Run the MCP server over stdio until the client disconnects."""
    server = create_server(tools)
    logger.info("mcp_server_starting", name=SERVER_NAME)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await tools.aclose()
        logger.info("mcp_server_stopped")


def main() -> None:
    """Console entry point: ``ragdocs``."""
    app_settings = load_settings()
    configure_logging(app_settings.log_level)
    asyncio.run(serve(build_tools(app_settings)))


if __name__ == "__main__":
    main()
