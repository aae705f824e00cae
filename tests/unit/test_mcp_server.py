"""Unit tests for the MCP server tool handlers."""

from __future__ import annotations

from unittest.mock import AsyncMock

import mcp.types as types
import pytest

from ragdocs.models.tools import ToolResponse
from ragdocs.server.mcp_server import TOOLS, create_server
from ragdocs.utils.errors import InvalidInputError


async def _call(server, name: str, arguments: dict) -> types.CallToolResult:
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    result = await handler(request)
    return result.root


class TestToolList:
    def test_tool_names(self) -> None:
        assert [tool.name for tool in TOOLS] == [
            "add_documentation",
            "search_documentation",
            "list_sources",
            "configure_and_test_embeddings",
            "test_ollama",
        ]

    @pytest.mark.asyncio
    async def test_list_tools_handler(self) -> None:
        server = create_server(AsyncMock())
        handler = server.request_handlers[types.ListToolsRequest]
        result = await handler(types.ListToolsRequest(method="tools/list"))
        assert len(result.root.tools) == len(TOOLS)


class TestCallTool:
    @pytest.mark.asyncio
    async def test_success_is_text_content(self) -> None:
        tools = AsyncMock()
        tools.call.return_value = ToolResponse.ok("No documentation sources found.")

        result = await _call(create_server(tools), "list_sources", {})

        assert result.isError is False
        assert result.content[0].text == "No documentation sources found."
        tools.call.assert_awaited_once_with("list_sources", {})

    @pytest.mark.asyncio
    async def test_error_response_sets_is_error(self) -> None:
        tools = AsyncMock()
        tools.call.return_value = ToolResponse.error("Failed to add documentation: boom")

        result = await _call(create_server(tools), "add_documentation", {"url": "https://x"})

        assert result.isError is True
        assert "Failed to add documentation: boom" in result.content[0].text

    @pytest.mark.asyncio
    async def test_raised_error_is_rendered_as_text(self) -> None:
        tools = AsyncMock()
        tools.call.side_effect = InvalidInputError("URL is required")

        result = await _call(create_server(tools), "add_documentation", {"url": ""})

        assert result.isError is True
        assert "URL is required" in result.content[0].text


class TestInputSchema:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider", ["local", "hosted", "ollama", "openai"])
    async def test_every_provider_kind_reaches_tools(self, provider: str) -> None:
        tools = AsyncMock()
        tools.call.return_value = ToolResponse.ok("Successfully configured")
        server = create_server(tools)
        await server.request_handlers[types.ListToolsRequest](
            types.ListToolsRequest(method="tools/list")
        )
        arguments = {"text": "hi", "provider": provider, "apiKey": "k"}

        result = await _call(server, "configure_and_test_embeddings", arguments)

        assert result.isError is False
        tools.call.assert_awaited_once_with("configure_and_test_embeddings", arguments)

    @pytest.mark.asyncio
    async def test_unknown_provider_is_rejected_by_schema(self) -> None:
        tools = AsyncMock()
        server = create_server(tools)
        await server.request_handlers[types.ListToolsRequest](
            types.ListToolsRequest(method="tools/list")
        )

        result = await _call(
            server, "configure_and_test_embeddings", {"text": "hi", "provider": "cohere"}
        )

        assert result.isError is True
        assert tools.call.await_count == 0
