# =============================================================================
# ragdocs/cli/commands.py -- Operator CLI
# =============================================================================
#
# Runs the documentation tools from a shell, without an MCP client:
#
#   add      -- Ingest one documentation URL
#   search   -- Semantic search over the stored chunks
#   sources  -- List every "title (url)" stored in the collection
#   serve    -- Run the MCP stdio server
#   api      -- Run the HTTP API with uvicorn
#
# Usage examples:
#   ragdocs-cli add https://docs.python.org/3/library/asyncio.html
#   ragdocs-cli search "how do I cancel a task" --limit 3
#   ragdocs-cli sources
# =============================================================================

"""Command-line interface for the ragdocs documentation store."""

from __future__ import annotations

import argparse
import asyncio
import sys

from ragdocs.config.loader import load_settings
from ragdocs.config.settings import Settings
from ragdocs.main import build_tools, run_api
from ragdocs.models.tools import ToolResponse
from ragdocs.server.mcp_server import serve
from ragdocs.utils.errors import RagDocsError
from ragdocs.utils.logging import configure_logging


def _print_response(response: ToolResponse) -> int:
    stream = sys.stderr if response.is_error else sys.stdout
    print(response.text, file=stream)
    return 1 if response.is_error else 0


async def _run_tool(app_settings: Settings, args: argparse.Namespace) -> int:
    try:
        tools = build_tools(app_settings)
    except RagDocsError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    try:
        if args.command == "add":
            response = await tools.add_documentation(args.url)
        elif args.command == "search":
            response = await tools.search_documentation(args.query, args.limit)
        else:
            response = await tools.list_sources()
    except RagDocsError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    finally:
        await tools.aclose()
    return _print_response(response)


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ragdocs CLI."""
    parser = argparse.ArgumentParser(
        prog="ragdocs-cli",
        description="Manage and search the ragdocs documentation store.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML settings file (default: config/config.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    add_parser = subparsers.add_parser("add", help="Add documentation from a URL")
    add_parser.add_argument("url", help="URL of the documentation to fetch")

    search_parser = subparsers.add_parser("search", help="Search stored documentation")
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of results (default: search_default_limit)",
    )

    subparsers.add_parser("sources", help="List stored documentation sources")
    subparsers.add_parser("serve", help="Run the MCP stdio server")

    api_parser = subparsers.add_parser("api", help="Run the HTTP API")
    api_parser.add_argument("--host", default=None, help="Bind address")
    api_parser.add_argument("--port", type=int, default=None, help="Bind port")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: ``ragdocs-cli``."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    app_settings = load_settings(args.config)
    configure_logging(app_settings.log_level)

    if args.command == "api":
        run_api(app_settings, host=args.host, port=args.port)
        return

    if args.command == "serve":
        asyncio.run(serve(build_tools(app_settings)))
        return

    sys.exit(asyncio.run(_run_tool(app_settings, args)))
