"""Tests for merging match events into references."""

from __future__ import annotations

from chatrefs.models.reference import MatchEvent
from chatrefs.references.aggregator import ReferenceAggregator, aggregate

URL = "https://a.example.com/docs/report"


def test_new_numeric_citation_uses_url_label() -> None:
    """A numeric label is never used as the display label."""

    [item] = aggregate([MatchEvent(raw_url=URL, label="4", citation_number=4)])

    assert item.url == URL
    assert item.label == "report"
    assert item.domain == "a.example.com"
    assert item.citation_number == 4
    assert item.occurrences == 1


def test_new_named_link_label_is_trimmed() -> None:
    [item] = aggregate([MatchEvent(raw_url=URL, label="  Annual report  ")])

    assert item.label == "Annual report"
    assert item.citation_number is None


def test_smallest_citation_number_wins() -> None:
    """The stored number only ever decreases; every event counts as an occurrence."""

    [item] = aggregate(
        [
            MatchEvent(raw_url=URL, label="3", citation_number=3),
            MatchEvent(raw_url=URL, label="1", citation_number=1),
            MatchEvent(raw_url=URL, label="5", citation_number=5),
        ]
    )

    assert item.citation_number == 1
    assert item.occurrences == 3


def test_citation_number_fills_in_missing_one() -> None:
    [item] = aggregate(
        [
            MatchEvent(raw_url=URL, label="Report"),
            MatchEvent(raw_url=URL, label="2", citation_number=2),
        ]
    )

    assert item.citation_number == 2
    assert item.label == "Report"


def test_later_named_label_wins() -> None:
    [item] = aggregate(
        [
            MatchEvent(raw_url=URL, label="First"),
            MatchEvent(raw_url=URL, label="Second"),
            MatchEvent(raw_url=URL),
        ]
    )

    assert item.label == "Second"
    assert item.occurrences == 3


def test_blank_label_does_not_overwrite() -> None:
    """A whitespace-only label is ignored on merge."""

    [item] = aggregate([MatchEvent(raw_url=URL, label="Report"), MatchEvent(raw_url=URL, label="   ")])

    assert item.label == "Report"


def test_urls_differing_by_trailing_punctuation_merge() -> None:
    items = aggregate([MatchEvent(raw_url=URL + "."), MatchEvent(raw_url=URL), MatchEvent(raw_url=f"<{URL}>")])

    assert len(items) == 1
    assert items[0].url == URL
    assert items[0].occurrences == 3


def test_empty_normalized_url_is_discarded() -> None:
    aggregator = ReferenceAggregator()

    assert aggregator.add(MatchEvent(raw_url=" ... ")) is None
    assert len(aggregator) == 0
    assert aggregator.discarded == 1


def test_items_keep_first_seen_order() -> None:
    items = aggregate(
        [
            MatchEvent(raw_url="https://b.example.com/"),
            MatchEvent(raw_url="https://a.example.com/"),
            MatchEvent(raw_url="https://b.example.com/"),
        ]
    )

    assert [i.url for i in items] == ["https://b.example.com/", "https://a.example.com/"]


def test_unparseable_url_uses_fallbacks() -> None:
    [item] = aggregate([MatchEvent(raw_url="https://[broken")])

    assert item.domain == "unknown source"
    assert item.label == "https://[broken"
