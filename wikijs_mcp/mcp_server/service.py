"""Wiki.js content adapter.

Maps tool arguments onto Wiki.js GraphQL queries and normalizes the results
into ``WikiPage`` models. Wiki.js has no server-side paging for search or
listing, so both fetch the full result set and slice it locally.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, TypeVar

from wikijs_mcp.mcp_server.client import WikiJsClient
from wikijs_mcp.mcp_server.config import DEFAULT_CONFIG
from wikijs_mcp.mcp_server.errors import AdapterError, NotFoundError, WikiMcpError
from wikijs_mcp.models.api.wiki import (
    RawPage,
    RawPageListItem,
    RawSearchResponse,
    RawSearchResult,
)
from wikijs_mcp.models.domain.pages import WikiAuthor, WikiPage, WikiPageList

logger = logging.getLogger(__name__)

T = TypeVar("T")

NUMERIC_ID = re.compile(r"[0-9]+")

SEARCH_QUERY = """
query SearchPages($query: String!) {
  pages {
    search(query: $query) {
      results {
        id
        title
        description
        path
        locale
      }
      totalHits
    }
  }
}
"""

LIST_QUERY = """
query ListPages {
  pages {
    list {
      id
      title
      description
      path
      locale
      contentType
      isPublished
      isPrivate
      createdAt
      updatedAt
      tags
    }
  }
}
"""

_PAGE_FIELDS = """
        id
        title
        description
        path
        locale
        content
        contentType
        isPublished
        isPrivate
        createdAt
        updatedAt
        tags {
          id
          title
        }
        authorId
        authorName
        authorEmail
"""

GET_BY_ID_QUERY = f"""
query GetPageById($id: Int!) {{
  pages {{
    single(id: $id) {{{_PAGE_FIELDS}    }}
  }}
}}
"""

GET_BY_PATH_QUERY = f"""
query GetPageByPath($path: String!, $locale: String!) {{
  pages {{
    singleByPath(path: $path, locale: $locale) {{{_PAGE_FIELDS}    }}
  }}
}}
"""

SYSTEM_INFO_QUERY = """
query TestConnection {
  system {
    info {
      dbVersion
      platform
      nodeVersion
    }
  }
}
"""


def paginate(items: list[T], page: int, limit: int) -> list[T]:
    """Return the 1-based ``page`` of ``items`` holding at most ``limit`` entries."""
    start = (page - 1) * limit
    return items[start : start + limit]


def extract_tags(value: Any) -> list[str]:
    """Flatten a Wiki.js tag array into unique tag titles.

    Tag objects contribute their ``title``; plain strings are kept as-is.
    Anything that is not a list yields no tags.
    """
    if not isinstance(value, list):
        return []

    tags: list[str] = []
    for tag in value:
        title = tag.get("title") if isinstance(tag, dict) else tag
        if isinstance(title, str) and title and title not in tags:
            tags.append(title)
    return tags


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_search_result(raw: RawSearchResult, now: datetime) -> WikiPage:
    """Convert a search hit. Search hits carry no body, author or tags."""
    return WikiPage(
        id=str(raw.id) if raw.id is not None else "",
        title=raw.title or "",
        description=raw.description or "",
        path=raw.path or "",
        locale=raw.locale or DEFAULT_CONFIG["default_locale"],
        content="",
        created_at=raw.created_at or now,
        updated_at=raw.updated_at or now,
        published_at=now,
        author=WikiAuthor(),
        tags=[],
    )


def normalize_list_item(raw: RawPageListItem, now: datetime) -> WikiPage:
    """Convert a page listing entry. Listing never includes the body."""
    updated_at = raw.updated_at or now
    return WikiPage(
        id=str(raw.id) if raw.id is not None else "",
        title=raw.title or "",
        description=raw.description or "",
        path=raw.path or "",
        locale=raw.locale or DEFAULT_CONFIG["default_locale"],
        content="",
        created_at=raw.created_at or now,
        updated_at=updated_at,
        published_at=updated_at if raw.is_published else None,
        author=WikiAuthor(),
        tags=extract_tags(raw.tags),
    )


def normalize_page(raw: RawPage, now: datetime) -> WikiPage:
    """Convert a single page record, including its body and author."""
    updated_at = raw.updated_at or now
    return WikiPage(
        id=str(raw.id) if raw.id is not None else "",
        title=raw.title or "",
        description=raw.description or "",
        path=raw.path or "",
        locale=raw.locale or DEFAULT_CONFIG["default_locale"],
        content=raw.content or "",
        created_at=raw.created_at or now,
        updated_at=updated_at,
        published_at=updated_at if raw.is_published else None,
        author=WikiAuthor(
            id=str(raw.author_id) if raw.author_id is not None else "0",
            name=raw.author_name or "Unknown",
            email=raw.author_email or "",
        ),
        tags=extract_tags(raw.tags),
    )


def _describe(error: Exception) -> str:
    if isinstance(error, WikiMcpError):
        return getattr(error, "message", None) or str(error)
    return str(error)


class WikiService:
    """Read-only access to Wiki.js pages."""

    def __init__(self, client: WikiJsClient):
        """Initialize the service with a Wiki.js client."""
        self.client = client

    async def search(self, query: str, page: int = 1, limit: int = 10) -> WikiPageList:
        """Search pages for a query.

        Args:
            query: Search text passed verbatim to Wiki.js
            page: 1-based page number
            limit: Results per page

        Returns:
            WikiPageList whose ``total`` is the upstream hit count

        Raises:
            AdapterError: If the upstream call fails
        """
        logger.debug(f'Searching pages with query: "{query}", page: {page}, limit: {limit}')
        try:
            data = await self.client.execute(SEARCH_QUERY, {"query": query})
            search = RawSearchResponse.model_validate(data["pages"]["search"])
            results = search.results or []
            now = _utcnow()
            pages = [normalize_search_result(r, now) for r in paginate(results, page, limit)]
            total = search.total_hits if search.total_hits is not None else len(results)
        except Exception as e:
            logger.error(f"Search failed: {_describe(e)}")
            raise AdapterError(f"Wiki.JS search failed: {_describe(e)}", cause=e) from e

        logger.info(
            "Search completed",
            extra={"extra_data": {"query": query, "total": total, "returned": len(pages)}},
        )
        return WikiPageList(pages=pages, total=total, page=page, limit=limit)

    async def list_pages(self, page: int = 1, limit: int = 20) -> WikiPageList:
        """List all pages, sliced to the requested page.

        Raises:
            AdapterError: If the upstream call fails
        """
        logger.debug(f"Listing pages, page: {page}, limit: {limit}")
        try:
            data = await self.client.execute(LIST_QUERY)
            all_pages = data["pages"]["list"] or []
            now = _utcnow()
            pages = [
                normalize_list_item(RawPageListItem.model_validate(item), now)
                for item in paginate(all_pages, page, limit)
            ]
        except Exception as e:
            logger.error(f"Page listing failed: {_describe(e)}")
            raise AdapterError(
                f"Wiki.JS page listing failed: {_describe(e)}", cause=e
            ) from e

        logger.info(
            "Page listing completed",
            extra={"extra_data": {"total": len(all_pages), "returned": len(pages)}},
        )
        return WikiPageList(pages=pages, total=len(all_pages), page=page, limit=limit)

    async def get_page(self, identifier: str) -> WikiPage:
        """Get a page by numeric ID or by path.

        Identifiers made only of digits are IDs; anything else is a path in
        the ``en`` locale.

        Raises:
            NotFoundError: If Wiki.js has no such page
            AdapterError: If the upstream call fails
        """
        logger.debug(f"Getting page with ID/path: {identifier}")
        is_numeric = bool(NUMERIC_ID.fullmatch(identifier))
        try:
            if is_numeric:
                data = await self.client.execute(GET_BY_ID_QUERY, {"id": int(identifier)})
                record = data["pages"]["single"]
            else:
                data = await self.client.execute(
                    GET_BY_PATH_QUERY,
                    {"path": identifier, "locale": DEFAULT_CONFIG["default_locale"]},
                )
                record = data["pages"]["singleByPath"]

            if not record:
                raise NotFoundError(f"Page not found: {identifier}")

            page = normalize_page(RawPage.model_validate(record), _utcnow())
        except Exception as e:
            logger.error(f"Page retrieval failed: {_describe(e)}")
            error_class = NotFoundError if isinstance(e, NotFoundError) else AdapterError
            raise error_class(
                f"Wiki.JS page retrieval failed: {_describe(e)}", cause=e
            ) from e

        logger.info(f"Page retrieved successfully: {page.title}")
        return page

    async def get_page_by_path(self, path: str) -> WikiPage:
        """Get a page by path."""
        return await self.get_page(path)

    async def test_connection(self) -> bool:
        """Probe Wiki.js with a system info query. Never raises."""
        logger.debug("Testing connection to Wiki.js")
        try:
            await self.client.execute(SYSTEM_INFO_QUERY)
        except Exception as e:
            logger.error(f"Connection test failed: {_describe(e)}")
            return False

        logger.info("Connection test successful")
        return True
