"""Reference extraction: matchers, aggregation and ordering."""

from __future__ import annotations

from chatrefs.references.aggregator import ReferenceAggregator, aggregate
from chatrefs.references.conversation import (
    extract_from_conversation,
    latest_message,
    load_conversation,
    parse_conversation,
)
from chatrefs.references.extractor import extract_references
from chatrefs.references.matchers import MATCHER_RULES, MatcherKind, scan_text
from chatrefs.references.sorter import sort_references

__all__ = [
    "MATCHER_RULES",
    "MatcherKind",
    "ReferenceAggregator",
    "aggregate",
    "extract_from_conversation",
    "extract_references",
    "latest_message",
    "load_conversation",
    "parse_conversation",
    "scan_text",
    "sort_references",
]
