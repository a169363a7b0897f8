"""CLI entrypoints for chatrefs."""

from __future__ import annotations

from pathlib import Path
from typing import get_args

import typer
from rich.console import Console

from chatrefs.config import OutputFormat, Settings, load_settings
from chatrefs.errors import ConversationFormatError
from chatrefs.logging import configure_logging, get_logger, source_context
from chatrefs.models.reference import ReferenceItem
from chatrefs.references.conversation import (
    extract_from_conversation,
    latest_message,
    load_conversation,
)
from chatrefs.references.extractor import extract_references
from chatrefs.render import render_table, render_text, to_json

app = typer.Typer(add_completion=False, help="Extract cited references from assistant text")
logger = get_logger(__name__)

_FORMATS: tuple[str, ...] = get_args(OutputFormat)


def _setup(output_format: str | None) -> tuple[Settings, OutputFormat]:
    settings = load_settings()
    configure_logging(settings.log_level)

    fmt = output_format or settings.output_format
    if fmt not in _FORMATS:
        raise typer.BadParameter(
            f"Unknown format {fmt!r}; expected one of: {', '.join(_FORMATS)}.",
            param_hint="--format",
        )
    return settings, fmt  # type: ignore[return-value]


def _emit(references: list[ReferenceItem], fmt: OutputFormat) -> None:
    if fmt == "json":
        typer.echo(to_json(references))
    elif fmt == "text":
        rendered = render_text(references)
        if rendered:
            typer.echo(rendered)
    else:
        render_table(references, Console())


@app.command()
def extract(
    text: str = typer.Argument(
        "",
        help="Assistant message text. If omitted, you must provide --text-file.",
        show_default=False,
    ),
    text_file: Path | None = typer.Option(
        None,
        "--text-file",
        "-f",
        help="Path to a UTF-8 text file containing the assistant message.",
    ),
    output_format: str | None = typer.Option(
        None,
        "--format",
        help="Output format: table, text or json (overrides CHATREFS_OUTPUT_FORMAT).",
    ),
) -> None:
    """Extract the ordered references list from a message."""

    settings, fmt = _setup(output_format)

    source = "argument"
    if not text:
        if text_file is None:
            raise typer.BadParameter(
                "You must provide either a positional TEXT or --text-file pointing to a text file."
            )
        try:
            text = text_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise typer.BadParameter(str(e), param_hint="--text-file") from e
        if not text.strip():
            raise typer.BadParameter("The text file is empty.", param_hint="--text-file")
        source = str(text_file)

    if len(text) > settings.max_text_chars:
        raise typer.BadParameter(
            f"Text is {len(text)} characters; the limit is {settings.max_text_chars} "
            "(CHATREFS_MAX_TEXT_CHARS)."
        )

    with source_context(source=source):
        references = extract_references(text)
        logger.info("Found %d references", len(references))
    _emit(references, fmt)


@app.command()
def conversation(
    path: Path = typer.Argument(..., help="Conversation JSON file as returned by the chat service."),
    output_format: str | None = typer.Option(
        None,
        "--format",
        help="Output format: table, text or json (overrides CHATREFS_OUTPUT_FORMAT).",
    ),
) -> None:
    """Extract references from the latest message of a conversation."""

    settings, fmt = _setup(output_format)

    try:
        conv = load_conversation(path)
    except (OSError, UnicodeDecodeError, ConversationFormatError) as e:
        raise typer.BadParameter(str(e), param_hint="PATH") from e

    message = latest_message(conv)
    if message is not None and len(message.text) > settings.max_text_chars:
        raise typer.BadParameter(
            f"Latest message is {len(message.text)} characters; the limit is "
            f"{settings.max_text_chars} (CHATREFS_MAX_TEXT_CHARS).",
            param_hint="PATH",
        )

    with source_context(source=str(path)):
        references = extract_from_conversation(conv)
        logger.info("Found %d references in conversation %s", len(references), conv.id)
    _emit(references, fmt)


if __name__ == "__main__":
    app()
