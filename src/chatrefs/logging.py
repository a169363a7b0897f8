"""Logging utilities.

The extraction engine only logs at DEBUG through module loggers and never configures
handlers itself; the CLI calls :func:`configure_logging`. Records carry the input
``source`` (a file path or ``message:<id>``) bound with :func:`source_context`.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from collections.abc import Iterator

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "chatrefs"

_source_var: contextvars.ContextVar[str] = contextvars.ContextVar("chatrefs_source", default="-")

# Library use: stay silent unless the application configures logging
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


class _SourceFilter(logging.Filter):
    """Stamp records with the input currently being processed."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.source = _source_var.get()  # type: ignore[attr-defined]
        return True


class _CliHandler(RichHandler):
    """Stderr rich handler installed by :func:`configure_logging`."""


@contextlib.contextmanager
def source_context(*, source: str) -> Iterator[None]:
    """Bind the input source for records logged inside the block.

    Args:
        source: Source identifier, e.g. a file path or ``message:<id>``.
    """

    token = _source_var.set(source)
    try:
        yield
    finally:
        _source_var.reset(token)


def configure_logging(level: str = "WARNING") -> None:
    """Install the stderr handler on the root logger, replacing an earlier one.

    Stdout is left alone so JSON output can be piped.

    Args:
        level: Logging level name, case-insensitive.
    """

    handler = _CliHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
    handler.addFilter(_SourceFilter())
    handler.setFormatter(logging.Formatter("[%(source)s] %(name)s: %(message)s"))

    root = logging.getLogger()
    for old in [h for h in root.handlers if isinstance(h, _CliHandler)]:
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)
