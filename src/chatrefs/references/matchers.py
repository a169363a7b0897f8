"""Pattern matchers for references in assistant text.

Three rules run in a fixed priority order, each over the full, unmodified text:

1. numeric citations ``[1](https://...)``
2. named markdown links ``[label](https://...)`` whose label is not purely numeric
3. bare ``http(s)://`` URLs

Spans are not consumed: a URL inside a citation is also seen by the bare-URL rule.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

from chatrefs.models.reference import MatchEvent

# Whitespace is pinned to the JavaScript \s set; Python's \s would also take \x1c-\x1f and \x85.
_WS = r"\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
# Citation digits are ASCII only.
_URL_IN_PARENS = r"(https?://[^" + _WS + r")]+)"

_NUMERIC_CITATION_RE = re.compile(r"\[([0-9]+)\]\(" + _URL_IN_PARENS + r"\)")
_NAMED_LINK_RE = re.compile(r"\[([^\]]+)\]\(" + _URL_IN_PARENS + r"\)")
_BARE_URL_RE = re.compile(r"https?://[^" + _WS + r"<>()]+")
_NUMERIC_LABEL_RE = re.compile(r"[0-9]+")


class MatcherKind(str, Enum):
    """Matcher rules, in priority order."""

    NUMERIC_CITATION = "numeric_citation"
    NAMED_LINK = "named_link"
    BARE_URL = "bare_url"


def is_numeric_label(label: str) -> bool:
    """Return True if the trimmed label consists of ASCII digits only."""

    return _NUMERIC_LABEL_RE.fullmatch(label.strip()) is not None


def _numeric_citation_event(m: re.Match[str]) -> MatchEvent | None:
    digits = m.group(1)
    return MatchEvent(raw_url=m.group(2), label=digits, citation_number=int(digits))


def _named_link_event(m: re.Match[str]) -> MatchEvent | None:
    label = m.group(1)
    if is_numeric_label(label):
        return None
    return MatchEvent(raw_url=m.group(2), label=label)


def _bare_url_event(m: re.Match[str]) -> MatchEvent | None:
    return MatchEvent(raw_url=m.group(0))


@dataclass(frozen=True)
class MatcherRule:
    """A compiled pattern plus the function turning its matches into events."""

    kind: MatcherKind
    pattern: re.Pattern[str]
    to_event: Callable[[re.Match[str]], MatchEvent | None]

    def scan(self, text: str) -> Iterator[MatchEvent]:
        """Yield events for every non-overlapping match, left to right."""

        for m in self.pattern.finditer(text):
            event = self.to_event(m)
            if event is not None:
                yield event


MATCHER_RULES: tuple[MatcherRule, ...] = (
    MatcherRule(MatcherKind.NUMERIC_CITATION, _NUMERIC_CITATION_RE, _numeric_citation_event),
    MatcherRule(MatcherKind.NAMED_LINK, _NAMED_LINK_RE, _named_link_event),
    MatcherRule(MatcherKind.BARE_URL, _BARE_URL_RE, _bare_url_event),
)


def scan_text(text: str, rules: tuple[MatcherRule, ...] = MATCHER_RULES) -> Iterator[MatchEvent]:
    """Run every rule over ``text`` in priority order and yield their events."""

    for rule in rules:
        yield from rule.scan(text)
