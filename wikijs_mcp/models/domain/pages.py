"""Wiki page domain models."""

from datetime import datetime

from pydantic import BaseModel, Field


class WikiAuthor(BaseModel):
    """Author of a wiki page."""

    id: str = "0"
    name: str = "Unknown"
    email: str = ""


class WikiPage(BaseModel):
    """A wiki page in canonical form.

    ``content`` is only filled by single page retrieval; search and listing
    always leave it empty.
    """

    id: str
    title: str
    description: str = ""
    path: str
    locale: str
    content: str = ""
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None
    author: WikiAuthor = Field(default_factory=WikiAuthor)
    tags: list[str] = Field(default_factory=list)


class WikiPageList(BaseModel):
    """One client-side page of wiki pages.

    ``total`` counts every upstream match, not just the returned slice.
    """

    pages: list[WikiPage] = Field(default_factory=list)
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    limit: int = Field(ge=1)


__all__ = ["WikiAuthor", "WikiPage", "WikiPageList"]
