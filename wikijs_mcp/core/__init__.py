"""Core utilities for the Wiki.js MCP server."""
