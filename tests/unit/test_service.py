"""Unit tests for the Wiki.js content adapter."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from wikijs_mcp.mcp_server.errors import (
    AdapterError,
    NotFoundError,
    UpstreamQueryError,
    UpstreamTransportError,
)
from wikijs_mcp.mcp_server.service import (
    GET_BY_ID_QUERY,
    GET_BY_PATH_QUERY,
    LIST_QUERY,
    SEARCH_QUERY,
    SYSTEM_INFO_QUERY,
    WikiService,
    extract_tags,
    paginate,
)


def list_item(index: int, **kwargs) -> dict:
    item = {
        "id": index,
        "title": f"Page {index}",
        "description": None,
        "path": f"page-{index}",
        "locale": "en",
        "contentType": "markdown",
        "isPublished": True,
        "isPrivate": False,
        "createdAt": "2024-01-02T03:04:05.000Z",
        "updatedAt": "2024-03-04T05:06:07.000Z",
        "tags": [{"id": 1, "title": "docs"}],
    }
    item.update(kwargs)
    return item


def single_page(**kwargs) -> dict:
    page = list_item(
        42,
        title="Deepgram Setup",
        path="deepgram",
        content="# Deepgram\n\nConfigure the API key.",
        tags=[{"id": 1, "title": "voice"}, {"id": 2, "title": "setup"}],
        authorId=7,
        authorName="Ada",
        authorEmail="ada@example.com",
    )
    page.update(kwargs)
    return page


class TestPaginate:
    """Test client-side pagination."""

    @pytest.mark.parametrize(
        "total,page,limit",
        [(0, 1, 10), (5, 1, 10), (25, 1, 20), (25, 2, 20), (25, 3, 20), (50, 5, 10), (7, 4, 2)],
    )
    def test_slice_length(self, total, page, limit):
        """Test returned length is min(limit, max(0, total - (page-1)*limit))."""
        items = list(range(total))
        result = paginate(items, page, limit)
        assert len(result) == min(limit, max(0, total - (page - 1) * limit))

    def test_slice_offsets(self):
        """Test the slice starts at (page-1)*limit."""
        assert paginate(list(range(25)), 2, 20) == [20, 21, 22, 23, 24]


class TestExtractTags:
    """Test tag normalization."""

    def test_tag_objects_use_title(self):
        assert extract_tags([{"id": 1, "title": "a"}, {"id": 2, "title": "b"}]) == ["a", "b"]

    def test_plain_strings_pass_through(self):
        assert extract_tags(["a", "b"]) == ["a", "b"]

    def test_duplicates_collapse(self):
        assert extract_tags([{"title": "a"}, "a"]) == ["a"]

    @pytest.mark.parametrize("value", [None, "docs", {"title": "docs"}, 3])
    def test_non_array_yields_no_tags(self, value):
        assert extract_tags(value) == []


class TestWikiService:
    """Test WikiService operations against a mocked GraphQL client."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = Mock()
        self.client.execute = AsyncMock()
        self.service = WikiService(self.client)

    @pytest.mark.asyncio
    async def test_search_deepgram_scenario(self):
        """Test a single search hit is normalized."""
        self.client.execute.return_value = {
            "pages": {
                "search": {
                    "results": [
                        {"id": "3", "title": "Deepgram Setup", "path": "deepgram", "locale": "en"}
                    ],
                    "totalHits": 1,
                }
            }
        }

        result = await self.service.search("deepgram", 1, 10)

        self.client.execute.assert_awaited_once_with(SEARCH_QUERY, {"query": "deepgram"})
        assert result.total == 1
        assert result.page == 1
        assert result.limit == 10
        assert len(result.pages) == 1
        page = result.pages[0]
        assert page.id == "3"
        assert page.title == "Deepgram Setup"
        assert page.content == ""
        assert page.description == ""
        assert page.tags == []
        assert page.author.id == "0"
        assert page.author.name == "Unknown"
        assert page.author.email == ""
        assert page.created_at.tzinfo is not None
        assert page.published_at is not None

    @pytest.mark.asyncio
    async def test_search_total_is_upstream_hits_not_slice(self):
        """Test total reports totalHits while pages are sliced."""
        results = [{"id": str(i), "title": f"T{i}", "path": f"p{i}", "locale": "en"} for i in range(12)]
        self.client.execute.return_value = {
            "pages": {"search": {"results": results, "totalHits": 12}}
        }

        result = await self.service.search("t", page=2, limit=5)

        assert result.total == 12
        assert [p.id for p in result.pages] == ["5", "6", "7", "8", "9"]

    @pytest.mark.asyncio
    async def test_search_page_past_end_is_empty(self):
        """Test a page beyond the results returns no pages."""
        self.client.execute.return_value = {
            "pages": {"search": {"results": [{"id": "1", "title": "x", "path": "x", "locale": "en"}], "totalHits": 1}}
        }

        result = await self.service.search("x", page=3, limit=10)

        assert result.pages == []
        assert result.total == 1

    @pytest.mark.asyncio
    async def test_search_wraps_upstream_errors(self):
        """Test upstream failures are wrapped with a stable prefix."""
        self.client.execute.side_effect = UpstreamTransportError("Request timeout: x")

        with pytest.raises(AdapterError) as exc_info:
            await self.service.search("x")

        assert str(exc_info.value) == "Wiki.JS search failed: Request timeout: x"
        assert isinstance(exc_info.value.cause, UpstreamTransportError)

    @pytest.mark.asyncio
    async def test_list_second_page_of_25(self):
        """Test list(2, 20) over 25 items returns offsets 20-24."""
        self.client.execute.return_value = {
            "pages": {"list": [list_item(i) for i in range(25)]}
        }

        result = await self.service.list_pages(2, 20)

        self.client.execute.assert_awaited_once_with(LIST_QUERY)
        assert result.total == 25
        assert [p.id for p in result.pages] == ["20", "21", "22", "23", "24"]
        assert all(p.content == "" for p in result.pages)

    @pytest.mark.asyncio
    async def test_list_normalization(self):
        """Test published date, tags and author defaults in listings."""
        self.client.execute.return_value = {
            "pages": {
                "list": [
                    list_item(1),
                    list_item(2, isPublished=False, tags="not-a-list", description="About"),
                ]
            }
        }

        result = await self.service.list_pages()

        published, draft = result.pages
        assert published.published_at == published.updated_at
        assert published.updated_at == datetime(2024, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
        assert published.tags == ["docs"]
        assert published.description == ""
        assert published.author.name == "Unknown"
        assert draft.published_at is None
        assert draft.tags == []
        assert draft.description == "About"

    @pytest.mark.asyncio
    async def test_list_wraps_query_errors(self):
        """Test GraphQL errors in listing are wrapped."""
        self.client.execute.side_effect = UpstreamQueryError([{"message": "Forbidden"}])

        with pytest.raises(AdapterError, match="^Wiki.JS page listing failed: GraphQL errors"):
            await self.service.list_pages()

    @pytest.mark.asyncio
    async def test_get_numeric_identifier_uses_id_query(self):
        """Test digits-only identifiers query by integer ID."""
        self.client.execute.return_value = {"pages": {"single": single_page()}}

        page = await self.service.get_page("42")

        self.client.execute.assert_awaited_once_with(GET_BY_ID_QUERY, {"id": 42})
        assert page.id == "42"
        assert page.content == "# Deepgram\n\nConfigure the API key."
        assert page.author.id == "7"
        assert page.author.name == "Ada"
        assert page.author.email == "ada@example.com"
        assert page.tags == ["voice", "setup"]

    @pytest.mark.asyncio
    async def test_get_path_identifier_uses_path_query(self):
        """Test other identifiers query by path in the en locale."""
        self.client.execute.return_value = {"pages": {"singleByPath": single_page()}}

        page = await self.service.get_page("my-page")

        self.client.execute.assert_awaited_once_with(
            GET_BY_PATH_QUERY, {"path": "my-page", "locale": "en"}
        )
        assert page.title == "Deepgram Setup"

    @pytest.mark.asyncio
    async def test_get_mixed_identifier_is_a_path(self):
        """Test identifiers with digits and other characters are paths."""
        self.client.execute.return_value = {"pages": {"singleByPath": single_page()}}

        await self.service.get_page("42a")

        assert self.client.execute.await_args.args[0] == GET_BY_PATH_QUERY

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["42\n", "٤٢", "４２"])
    async def test_get_non_ascii_or_trailing_newline_digits_are_paths(self, identifier):
        """Test only plain ASCII digit strings are treated as IDs."""
        self.client.execute.return_value = {"pages": {"singleByPath": single_page()}}

        await self.service.get_page(identifier)

        self.client.execute.assert_awaited_once_with(
            GET_BY_PATH_QUERY, {"path": identifier, "locale": "en"}
        )

    @pytest.mark.asyncio
    async def test_get_author_defaults(self):
        """Test missing author fields fall back to defaults."""
        self.client.execute.return_value = {
            "pages": {"single": single_page(authorId=None, authorName=None, authorEmail=None)}
        }

        page = await self.service.get_page("42")

        assert page.author.id == "0"
        assert page.author.name == "Unknown"
        assert page.author.email == ""

    @pytest.mark.asyncio
    async def test_get_missing_page_raises_not_found(self):
        """Test an empty record raises NotFoundError."""
        self.client.execute.return_value = {"pages": {"single": None}}

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_page("404")

        assert str(exc_info.value) == "Wiki.JS page retrieval failed: Page not found: 404"

    @pytest.mark.asyncio
    async def test_get_page_by_path_delegates(self):
        """Test the path alias."""
        self.client.execute.return_value = {"pages": {"singleByPath": single_page()}}

        page = await self.service.get_page_by_path("deepgram")

        assert page.path == "deepgram"

    @pytest.mark.asyncio
    async def test_connection_success(self):
        """Test connection probe returns True on success."""
        self.client.execute.return_value = {"system": {"info": {"platform": "linux"}}}

        assert await self.service.test_connection() is True
        self.client.execute.assert_awaited_once_with(SYSTEM_INFO_QUERY)

    @pytest.mark.asyncio
    async def test_connection_failure_returns_false(self):
        """Test connection probe swallows failures."""
        self.client.execute.side_effect = UpstreamTransportError("Cannot connect")

        assert await self.service.test_connection() is False
