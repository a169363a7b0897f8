"""Presentation of extracted references.

URLs are emitted as extracted; escaping for a particular markup is up to the consumer.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from chatrefs.models.reference import ReferenceItem

REFERENCES_TITLE = "References"


def format_badge(item: ReferenceItem) -> str:
    """``[n]`` for numbered citations, ``SRC`` otherwise."""

    if item.citation_number is not None:
        return f"[{item.citation_number}]"
    return "SRC"


def format_meta(item: ReferenceItem) -> str:
    """Domain line, with the occurrence count when the source was cited more than once."""

    if item.occurrences > 1:
        return f"{item.domain} • cited {item.occurrences} times"
    return item.domain


def render_text(items: Sequence[ReferenceItem]) -> str:
    """Render a numbered plain-text references list. Empty input renders as ``""``."""

    if not items:
        return ""
    lines = [REFERENCES_TITLE]
    for i, item in enumerate(items, start=1):
        lines.append(f"{i}. {format_badge(item)} {item.label} ({item.url})")
        lines.append(f"   {format_meta(item)}")
    return "\n".join(lines)


def build_table(items: Sequence[ReferenceItem]) -> Table:
    """Build a rich table of references."""

    table = Table(title=REFERENCES_TITLE, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Ref", style="bold cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Source", style="dim")
    table.add_column("URL", overflow="fold")

    for i, item in enumerate(items, start=1):
        # Text() keeps "[1]" from being parsed as console markup
        table.add_row(
            str(i),
            Text(format_badge(item)),
            Text(item.label),
            Text(format_meta(item)),
            Text(item.url),
        )
    return table


def render_table(items: Sequence[ReferenceItem], console: Console) -> None:
    """Print references as a table; prints a short notice when there are none."""

    if not items:
        console.print("No references found.", style="dim")
        return
    console.print(build_table(items))


def to_json(items: Sequence[ReferenceItem], *, indent: int | None = 2) -> str:
    """Serialize references with their external field names."""

    return json.dumps([item.to_public_dict() for item in items], ensure_ascii=False, indent=indent)
