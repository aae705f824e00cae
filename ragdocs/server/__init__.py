"""MCP stdio transport for the documentation tools."""

from ragdocs.server.mcp_server import TOOLS, create_server, serve

__all__ = ["TOOLS", "create_server", "serve"]
