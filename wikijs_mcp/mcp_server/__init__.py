"""MCP Server for Wiki.js integration.

This module provides a Model Context Protocol (MCP) server that exposes the
Wiki.js GraphQL API as tools, enabling Claude to search, list and read wiki
pages.
"""

__version__ = "1.0.0"
