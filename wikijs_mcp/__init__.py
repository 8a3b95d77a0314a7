"""
Wiki.js MCP Server: Model Context Protocol access to a Wiki.js knowledge base.

Exposes Wiki.js search, listing and page retrieval as MCP tools over stdio or
streamable HTTP, backed by the Wiki.js GraphQL API.
"""

__version__ = "1.0.0"
