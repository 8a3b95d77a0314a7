"""Wiki.js payload shapes and HTTP endpoint models."""

from wikijs_mcp.models.api.system import *
from wikijs_mcp.models.api.wiki import *

__all__ = [
    "HealthResponse",
    "RawSearchResult",
    "RawSearchResponse",
    "RawPageListItem",
    "RawPage",
]
