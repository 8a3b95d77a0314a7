"""MCP tools for Wiki.js integration.

Each tool is a ``ToolDefinition``: a JSON schema advertised to clients, a
Pydantic model that parses the call arguments, and a handler turning those
arguments into rendered text. Handlers only talk to ``WikiService`` and let
its errors propagate; the dispatch layer reports them.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import mcp.types as types
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticUseDefault

from wikijs_mcp.mcp_server.formatting import (
    format_connection_status,
    format_page,
    format_page_list,
    format_search_results,
)
from wikijs_mcp.mcp_server.service import WikiService

logger = logging.getLogger(__name__)

# Hard ceiling for any page size requested by a caller
MAX_LIMIT = 50


class PaginationArgs(BaseModel):
    """Paging arguments shared by search and listing."""

    model_config = ConfigDict(extra="ignore")

    page: int = 1
    limit: int = 10

    @field_validator("page", "limit", mode="before")
    @classmethod
    def default_when_unset(cls, v: Any) -> Any:
        """Null or non-positive values fall back to the default."""
        if v is None or (isinstance(v, (int, float)) and v < 1):
            raise PydanticUseDefault()
        return v

    @field_validator("limit")
    @classmethod
    def cap_limit(cls, v: int) -> int:
        return min(v, MAX_LIMIT)


class SearchArgs(PaginationArgs):
    query: str


class ListArgs(PaginationArgs):
    limit: int = 20


class GetPageArgs(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    page_id: str = Field(alias="pageId", min_length=1)

    @field_validator("page_id", mode="before")
    @classmethod
    def accept_numeric_id(cls, v: Any) -> Any:
        # Some clients send numeric IDs as JSON numbers
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class NoArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")


Handler = Callable[[WikiService, Any], Awaitable[str]]


@dataclass(frozen=True)
class ToolDefinition:
    """Immutable description of one callable tool."""

    name: str
    title: str
    description: str
    arguments: type[BaseModel]
    handler: Handler
    input_schema: dict = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "input_schema", MappingProxyType(dict(self.input_schema)))

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=dict(self.input_schema),
        )


# Handlers


async def search_wiki_pages(service: WikiService, args: SearchArgs) -> str:
    result = await service.search(args.query, args.page, args.limit)
    return format_search_results(args.query, result)


async def list_wiki_pages(service: WikiService, args: ListArgs) -> str:
    result = await service.list_pages(args.page, args.limit)
    return format_page_list(result)


async def get_wiki_page(service: WikiService, args: GetPageArgs) -> str:
    page = await service.get_page(args.page_id)
    return format_page(page)


async def check_wiki_connection(service: WikiService, args: NoArgs) -> str:
    return format_connection_status(await service.test_connection())


TOOL_DEFINITIONS = (
    ToolDefinition(
        name="search_wiki_pages",
        title="Search Wiki Pages",
        description="Search Wiki.JS pages for specific topics or keywords",
        arguments=SearchArgs,
        handler=search_wiki_pages,
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "The search query to find in Wiki.JS pages",
                },
                "page": {
                    "type": "integer",
                    "description": "Page number for pagination (default: 1)",
                    "default": 1,
                },
                "limit": {
                    "type": "integer",
                    "description": f"Number of results per page (default: 10, max: {MAX_LIMIT})",
                    "default": 10,
                },
            },
            "required": ["query"],
        },
    ),
    ToolDefinition(
        name="list_wiki_pages",
        title="List Wiki Pages",
        description="List all available pages in Wiki.JS",
        arguments=ListArgs,
        handler=list_wiki_pages,
        input_schema={
            "type": "object",
            "properties": {
                "page": {
                    "type": "integer",
                    "description": "Page number for pagination (default: 1)",
                    "default": 1,
                },
                "limit": {
                    "type": "integer",
                    "description": f"Number of results per page (default: 20, max: {MAX_LIMIT})",
                    "default": 20,
                },
            },
            "required": [],
        },
    ),
    ToolDefinition(
        name="get_wiki_page",
        title="Get Wiki Page",
        description="Get a specific page from Wiki.JS by ID or path",
        arguments=GetPageArgs,
        handler=get_wiki_page,
        input_schema={
            "type": "object",
            "properties": {
                "pageId": {
                    "type": "string",
                    "description": (
                        "The ID (numeric) or path (string) of the page to retrieve. "
                        "Examples: '3' for ID, 'deepgram' for path"
                    ),
                },
            },
            "required": ["pageId"],
        },
    ),
)

LEGACY_TOOL_DEFINITIONS = (
    ToolDefinition(
        name="test_wiki_connection",
        title="Test Wiki Connection",
        description="Test the connection to Wiki.JS",
        arguments=NoArgs,
        handler=check_wiki_connection,
        input_schema={"type": "object", "properties": {}, "required": []},
    ),
)


class ToolRegistry:
    """Name to tool mapping bound to one ``WikiService``."""

    def __init__(self, service: WikiService):
        self.service = service
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition) -> None:
        if definition.name in self._tools:
            raise ValueError(f"Tool already registered: {definition.name}")
        self._tools[definition.name] = definition

    def get(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise ValueError(f"Unknown tool: {name}") from None

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def list_tools(self) -> list[types.Tool]:
        return [definition.to_tool() for definition in self._tools.values()]

    async def call(self, name: str, arguments: dict[str, Any] | None) -> str:
        """Validate arguments and run the named tool.

        Raises:
            ValueError: If the tool is unknown
            pydantic.ValidationError: If the arguments do not fit the tool
        """
        definition = self.get(name)
        args = definition.arguments.model_validate(arguments or {})
        logger.debug(f"Calling tool {name} with {args!r}")
        return await definition.handler(self.service, args)


def build_registry(service: WikiService, include_legacy: bool = True) -> ToolRegistry:
    """Create a registry holding the standard Wiki.js tools."""
    registry = ToolRegistry(service)
    definitions = TOOL_DEFINITIONS + (LEGACY_TOOL_DEFINITIONS if include_legacy else ())
    for definition in definitions:
        registry.register(definition)
    return registry
