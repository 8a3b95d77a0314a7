"""Utility functions for the Wiki.js MCP CLI."""

from rich.console import Console

# Diagnostics go to stderr; stdout belongs to the stdio transport
console = Console(stderr=True)


def echo_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓ {message}[/green]")


def echo_error(message: str) -> None:
    """Print error message."""
    console.print(f"[red]✗ {message}[/red]")


def echo_warning(message: str) -> None:
    """Print warning message."""
    console.print(f"[yellow]⚠ {message}[/yellow]")


def echo_info(message: str) -> None:
    """Print info message."""
    console.print(f"[blue]ℹ {message}[/blue]")


def mask_secret(secret: str, visible: int = 8) -> str:
    """Show only the first characters of a credential."""
    if len(secret) <= visible:
        return "*" * len(secret)
    return f"{secret[:visible]}..."
