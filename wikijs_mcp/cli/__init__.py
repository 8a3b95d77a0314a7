"""Command-line interface for the Wiki.js MCP server."""

from wikijs_mcp import __version__

__all__ = ["__version__"]
