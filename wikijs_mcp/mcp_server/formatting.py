"""Plain-text rendering of wiki pages for MCP tool results."""

from datetime import datetime

from wikijs_mcp.models.domain.pages import WikiPage, WikiPageList

PAGE_SEPARATOR = "\n---\n\n"


def format_date(value: datetime) -> str:
    """Render a date as ``M/D/YYYY``."""
    return f"{value.month}/{value.day}/{value.year}"


def format_tags(tags: list[str]) -> str:
    return ", ".join(tags) or "No tags"


def format_page_summary(page: WikiPage) -> str:
    """One block of a search or listing result."""
    return (
        f"**{page.title}**\n"
        f"Path: {page.path}\n"
        f"Updated: {format_date(page.updated_at)}\n"
        f"Author: {page.author.name}\n"
        f"Description: {page.description or 'No description'}\n"
        f"Tags: {format_tags(page.tags)}\n"
    )


def format_count(result: WikiPageList) -> str:
    return (
        f"Found {result.total} "
        f"(showing {len(result.pages)} on page {result.page})"
    )


def format_search_results(query: str, result: WikiPageList) -> str:
    if result.pages:
        body = PAGE_SEPARATOR.join(format_page_summary(p) for p in result.pages)
    else:
        body = "No pages found matching your search query."

    return f'**Search Results for: "{query}"**\n\n{format_count(result)}\n\n{body}'


def format_page_list(result: WikiPageList) -> str:
    if result.pages:
        body = PAGE_SEPARATOR.join(format_page_summary(p) for p in result.pages)
    else:
        body = "No pages found."

    return f"**Wiki.JS Pages**\n\n{format_count(result)}\n\n{body}"


def format_page(page: WikiPage) -> str:
    """Full rendering of a single page including its content."""
    return (
        f"**{page.title}**\n\n"
        f"Path: {page.path}\n"
        f"Created: {format_date(page.created_at)}\n"
        f"Updated: {format_date(page.updated_at)}\n"
        f"Author: {page.author.name} ({page.author.email})\n"
        f"Tags: {format_tags(page.tags)}\n\n"
        f"**Content:**\n\n{page.content}"
    )


def format_connection_status(connected: bool) -> str:
    if connected:
        return "✅ Successfully connected to Wiki.JS"
    return "❌ Failed to connect to Wiki.JS. Please check your configuration."
