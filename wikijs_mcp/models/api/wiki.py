"""Wiki.js GraphQL payload models.

These mirror what Wiki.js returns and are deliberately permissive: every field
is optional and unknown fields are kept. Conversion to the canonical
``WikiPage`` happens in the service layer.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _RawModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class RawSearchResult(_RawModel):
    """Entry of ``pages.search.results``."""

    id: str | int | None = None
    title: str | None = None
    description: str | None = None
    path: str | None = None
    locale: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")


class RawSearchResponse(_RawModel):
    """Payload of ``pages.search``."""

    results: list[RawSearchResult] | None = None
    total_hits: int | None = Field(default=None, alias="totalHits")


class RawPageListItem(_RawModel):
    """Entry of ``pages.list``."""

    id: str | int | None = None
    title: str | None = None
    description: str | None = None
    path: str | None = None
    locale: str | None = None
    content_type: str | None = Field(default=None, alias="contentType")
    is_published: bool | None = Field(default=None, alias="isPublished")
    is_private: bool | None = Field(default=None, alias="isPrivate")
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    tags: Any = None


class RawPage(RawPageListItem):
    """Payload of ``pages.single`` / ``pages.singleByPath``."""

    content: str | None = None
    author_id: str | int | None = Field(default=None, alias="authorId")
    author_name: str | None = Field(default=None, alias="authorName")
    author_email: str | None = Field(default=None, alias="authorEmail")


__all__ = ["RawSearchResult", "RawSearchResponse", "RawPageListItem", "RawPage"]
