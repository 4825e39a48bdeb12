"""CLI color utilities for terminal output.

Uses rich for formatting.
"""

from typing import List

from rich.box import ASCII
from rich.console import Console
from rich.table import Table
from rich.theme import Theme

custom_theme = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "dim": "dim white",
    "highlight": "bold cyan",
    "status_enriched": "bold green",
    "status_degraded": "bold yellow",
    "status_pending": "dim white",
})

console = Console(theme=custom_theme)


def print_header(text: str):
    """Print a section header."""
    console.print(f"\n[bold cyan]{text}[/bold cyan]")
    console.print("[dim]" + "-" * len(text) + "[/dim]")


def print_success(text: str):
    """Print success message."""
    console.print(f"[success][OK][/success] {text}")


def print_error(text: str):
    """Print error message."""
    console.print(f"[error][X][/error] {text}")


def print_warning(text: str):
    """Print warning message."""
    console.print(f"[warning][!][/warning] {text}")


def print_info(text: str):
    """Print info message."""
    console.print(f"[info][i][/info] {text}")


def print_key_value(key: str, value) -> None:
    console.print(f"  [dim]{key}:[/dim] {value}")


def truncate_text(text: str, length: int = 50) -> str:
    """Shorten text for table cells."""
    return text[: length - 3] + "..." if len(text) > length else text


def print_article_table(articles: List) -> None:
    """Print stored articles in a formatted table."""
    table = Table(show_header=True, header_style="bold cyan", box=ASCII)
    table.add_column("ID", style="cyan", width=6)
    table.add_column("Status", width=10)
    table.add_column("Published", style="dim", width=12)
    table.add_column("Title", style="white", width=50)
    table.add_column("Refs", style="yellow", width=5)

    for article in articles:
        if article.is_updated:
            status = "[status_enriched]ENRICHED[/status_enriched]"
        else:
            status = "[status_pending]PENDING[/status_pending]"

        table.add_row(
            str(article.id),
            status,
            article.published_at.strftime("%Y-%m-%d") if article.published_at else "-",
            truncate_text(article.title),
            str(len(article.references)),
        )

    console.print(table)
