"""Centralized model definitions for the Wiki.js MCP server.

This package contains all Pydantic models organized by domain:
- api/: Wiki.js GraphQL payload shapes and HTTP endpoint models
- domain/: Canonical wiki page models
"""

from wikijs_mcp.models.api.system import *
from wikijs_mcp.models.api.wiki import *
from wikijs_mcp.models.domain.pages import *

__all__ = [
    # API models
    "HealthResponse",
    "RawSearchResult",
    "RawSearchResponse",
    "RawPageListItem",
    "RawPage",
    # Domain models
    "WikiAuthor",
    "WikiPage",
    "WikiPageList",
]
