"""Fold match events into one reference per normalized URL."""

from __future__ import annotations

from collections.abc import Iterable

from chatrefs.logging import get_logger
from chatrefs.models.reference import MatchEvent, ReferenceItem
from chatrefs.references.matchers import is_numeric_label
from chatrefs.utils.urls import default_label_of, domain_of, normalize_url

logger = get_logger(__name__)


def _usable_label(label: str | None) -> str | None:
    if label is None:
        return None
    trimmed = label.strip()
    if not trimmed or is_numeric_label(trimmed):
        return None
    return trimmed


class ReferenceAggregator:
    """Merge match events keyed by normalized URL.

    Merge rules for a URL seen again:
        - ``occurrences`` grows by one per event.
        - a non-numeric label replaces the stored one (later labels win).
        - the smallest citation number seen is kept.

    The mapping keeps first-seen order; final ordering belongs to the sorter.
    """

    def __init__(self) -> None:
        self._by_url: dict[str, ReferenceItem] = {}
        self.discarded = 0

    def add(self, event: MatchEvent) -> ReferenceItem | None:
        """Merge one event. Returns the affected item, or None if the event was discarded."""

        url = normalize_url(event.raw_url)
        if not url:
            self.discarded += 1
            logger.debug("Discarded match with empty url raw=%r", event.raw_url)
            return None

        label = _usable_label(event.label)
        existing = self._by_url.get(url)
        if existing is None:
            item = ReferenceItem(
                url=url,
                label=label or default_label_of(url) or url,
                domain=domain_of(url),
                citation_number=event.citation_number,
                occurrences=1,
            )
            self._by_url[url] = item
            return item

        existing.occurrences += 1
        if label is not None:
            existing.label = label
        if event.citation_number is not None and (
            existing.citation_number is None or event.citation_number < existing.citation_number
        ):
            existing.citation_number = event.citation_number
        return existing

    def extend(self, events: Iterable[MatchEvent]) -> None:
        for event in events:
            self.add(event)

    def items(self) -> list[ReferenceItem]:
        """Aggregated items in first-seen order."""

        return list(self._by_url.values())

    def __len__(self) -> int:
        return len(self._by_url)


def aggregate(events: Iterable[MatchEvent]) -> list[ReferenceItem]:
    """Fold ``events`` into deduplicated references, in first-seen order."""

    aggregator = ReferenceAggregator()
    aggregator.extend(events)
    return aggregator.items()
