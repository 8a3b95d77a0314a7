"""Main MCP server for Wiki.js integration."""

import asyncio
import logging
from typing import Any

import mcp.server.stdio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from wikijs_mcp.mcp_server.client import WikiJsClient
from wikijs_mcp.mcp_server.config import Config
from wikijs_mcp.mcp_server.errors import ToolExecutionError
from wikijs_mcp.mcp_server.service import WikiService
from wikijs_mcp.mcp_server.tools import ToolRegistry, build_registry

logger = logging.getLogger(__name__)


def create_server(registry: ToolRegistry, config: Config) -> Server:
    """Create the MCP server and bind the registry's tools to it."""
    server = Server(config.mcp_server_name, version=config.mcp_server_version)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """List available MCP tools."""
        return registry.list_tools()

    @server.call_tool()
    async def handle_call_tool(
        name: str, arguments: dict[str, Any] | None
    ) -> list[types.TextContent]:
        """Handle MCP tool calls.

        Failures are re-raised as ``ToolExecutionError``; the MCP server turns
        them into an error result for the caller.
        """
        try:
            text = await registry.call(name, arguments)
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}")
            raise ToolExecutionError(f"Tool execution failed: {e}") from e

        return [types.TextContent(type="text", text=text)]

    return server


def initialization_options(server: Server, config: Config) -> InitializationOptions:
    return InitializationOptions(
        server_name=config.mcp_server_name,
        server_version=config.mcp_server_version,
        capabilities=server.get_capabilities(
            notification_options=NotificationOptions(),
            experimental_capabilities={},
        ),
    )


def build(config: Config) -> tuple[WikiService, Server]:
    """Wire client, service, tool registry and MCP server together."""
    client = WikiJsClient(config)
    service = WikiService(client)
    registry = build_registry(service)
    logger.info(f"Registered tools: {', '.join(registry.names)}")
    return service, create_server(registry, config)


async def run_stdio(server: Server, config: Config) -> None:
    """Serve a single session over stdin/stdout until the client disconnects."""
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            initialization_options(server, config),
        )


async def main(config: Config) -> None:
    """Main entry point for the stdio MCP server."""
    logger.info(f"WikiService initialized with base URL: {config.wiki_js_base_url}")
    service, server = build(config)

    if await service.test_connection():
        logger.info("Successfully connected to Wiki.js")
    else:
        logger.warning("Wiki.js not reachable - tool calls will report upstream errors")

    logger.info(f"{config.mcp_server_name} started with Wiki.JS integration (stdio)")
    await run_stdio(server, config)


def run_http(config: Config) -> None:
    """Serve the streamable HTTP transport with uvicorn."""
    import uvicorn

    from wikijs_mcp.mcp_server.http import create_app

    _, server = build(config)
    app = create_app(server, config)
    logger.info(f"{config.mcp_server_name} listening on {config.host}:{config.port} (http)")
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


def cli_main(config: Config) -> None:
    """Synchronous entry point selecting the configured transport."""
    if config.mcp_transport == "http":
        run_http(config)
    else:
        asyncio.run(main(config))
