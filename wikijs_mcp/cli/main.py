"""Main CLI entry point for the Wiki.js MCP server."""

import asyncio

import click

from wikijs_mcp.cli.utils import (
    console,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    mask_secret,
)
from wikijs_mcp.core.logging import setup_logging
from wikijs_mcp.mcp_server.client import WikiJsClient
from wikijs_mcp.mcp_server.config import Config
from wikijs_mcp.mcp_server.errors import ConfigurationError, WikiMcpError
from wikijs_mcp.mcp_server.main import cli_main
from wikijs_mcp.mcp_server.service import WikiService


def load_config(ctx: click.Context, **overrides) -> Config:
    """Load configuration or terminate with a diagnostic."""
    overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        return Config.load(**overrides)
    except ConfigurationError as e:
        echo_error(f"Failed to initialize Wiki.JS service: {e}")
        ctx.exit(1)


@click.group(invoke_without_command=True)
@click.option("-v", "--version", is_flag=True, help="Show version information")
@click.pass_context
def cli(ctx, version):
    """Wiki.js MCP server - search and read Wiki.js pages from MCP clients.

    Examples:
        wikijs-mcp serve                         # stdio transport
        wikijs-mcp serve --transport http        # streamable HTTP on $PORT
        wikijs-mcp check                         # verify Wiki.js access
    """
    if version:
        from wikijs_mcp import __version__

        console.print(f"Wiki.js MCP server v{__version__}")
        ctx.exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit()


@cli.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default=None,
    help="Transport to serve (default: $MCP_TRANSPORT or stdio)",
)
@click.option("--port", type=int, default=None, help="HTTP port (default: $PORT or 3000)")
@click.pass_context
def serve(ctx, transport, port):
    """Run the MCP server.

    Requires WIKI_JS_BASE_URL and WIKI_JS_API_KEY; exits before serving if
    either is missing.
    """
    config = load_config(ctx, mcp_transport=transport, port=port)
    setup_logging(config.log_level)
    try:
        cli_main(config)
    except KeyboardInterrupt:
        echo_info("MCP server stopped by user")


async def run_check(config: Config) -> bool:
    """Probe Wiki.js and report what was found."""
    service = WikiService(WikiJsClient(config))

    if not await service.test_connection():
        echo_error("System info query failed")
        return False
    echo_success("System info query successful")

    try:
        result = await service.list_pages(page=1, limit=1)
    except WikiMcpError as e:
        echo_error(str(e))
        return False

    echo_success("Pages query successful")
    echo_info(f"Total pages: {result.total}")
    if result.pages:
        echo_info(f"Sample page: {result.pages[0].title}")
    return True


@cli.command()
@click.pass_context
def check(ctx):
    """Test the Wiki.js GraphQL connection with the current configuration."""
    config = load_config(ctx)
    setup_logging("ERROR")

    echo_info(f"GraphQL URL: {config.graphql_url}")
    echo_info(f"API Key: {mask_secret(config.wiki_js_api_key)}")

    if asyncio.run(run_check(config)):
        echo_success("Wiki.js is reachable")
        return

    echo_warning("Troubleshooting tips:")
    console.print("1. Verify WIKI_JS_BASE_URL is correct")
    console.print("2. Verify WIKI_JS_API_KEY is valid and has proper permissions")
    console.print("3. Check if Wiki.js instance is running and accessible")
    console.print("4. Ensure GraphQL API is enabled in Wiki.js")
    ctx.exit(1)


if __name__ == "__main__":
    cli()
