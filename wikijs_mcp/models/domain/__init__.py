"""Canonical domain models for wiki pages."""

from wikijs_mcp.models.domain.pages import *

__all__ = ["WikiAuthor", "WikiPage", "WikiPageList"]
