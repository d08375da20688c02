"""Rendering of a ``SearchResult`` for the terminal.

Three formats:

- ``text``  — each match as its title line followed by its URL line
- ``table`` — a ``rich`` table with score, comments, author and title
- ``json``  — ``{"total": ..., "items": [...]}``
"""

from __future__ import annotations

import json
from enum import Enum

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hngrep.models import SearchResult


class OutputFormat(str, Enum):
    TEXT = "text"
    TABLE = "table"
    JSON = "json"


def render_text(result: SearchResult) -> str:
    """Render matches as ``title`` / ``url`` line pairs."""
    return "\n".join(str(item) for item in result.items)


def render_json(result: SearchResult) -> str:
    payload = {
        "total": result.total,
        "items": [item.model_dump(mode="json") for item in result.items],
    }
    return json.dumps(payload, indent=2)


def build_table(result: SearchResult) -> Table:
    """Build a ``rich`` table of the matches."""
    table = Table(
        title=escape(f"{result.total} {result.category} stories matching /{result.pattern}/"),
        show_lines=False,
    )
    table.add_column("Score", justify="right", style="cyan")
    table.add_column("Comments", justify="right")
    table.add_column("Author", style="magenta")
    table.add_column("Title", style="bold")
    table.add_column("URL", overflow="fold")
    for item in result.items:
        table.add_row(
            str(item.score),
            str(item.comment_count),
            escape(item.author),
            escape(item.title),
            escape(item.link),
        )
    return table


def render(result: SearchResult, fmt: OutputFormat, console: Console) -> None:
    """Write *result* to *console* in the requested format."""
    fmt = OutputFormat(fmt)
    if fmt is OutputFormat.TABLE:
        console.print(build_table(result))
        return

    text = render_json(result) if fmt is OutputFormat.JSON else render_text(result)
    if text:
        # Titles are plain text; keep rich from interpreting [brackets] as markup.
        console.print(text, markup=False, highlight=False, soft_wrap=True)
