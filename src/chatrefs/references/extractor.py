"""Reference extraction entry point."""

from __future__ import annotations

from chatrefs.logging import get_logger
from chatrefs.models.reference import ReferenceItem
from chatrefs.references.aggregator import ReferenceAggregator
from chatrefs.references.matchers import scan_text
from chatrefs.references.sorter import sort_references

logger = get_logger(__name__)


def extract_references(text: str | None) -> list[ReferenceItem]:
    """Extract the ordered, deduplicated list of sources cited in ``text``.

    Numeric citations ``[n](url)``, named links ``[label](url)`` and bare URLs are matched
    independently over the whole text, merged per normalized URL, and ordered with numbered
    citations first.

    Args:
        text: Assistant message text. ``None`` and ``""`` are accepted.

    Returns:
        A new list of references; empty when nothing is cited.
    """

    if not text:
        return []

    aggregator = ReferenceAggregator()
    matched = 0
    for event in scan_text(text):
        matched += 1
        aggregator.add(event)

    references = sort_references(aggregator.items())
    logger.debug(
        "Extracted %d references from %d matches (%d discarded)",
        len(references),
        matched,
        aggregator.discarded,
    )
    return references
