"""Final ordering of extracted references."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from chatrefs.models.reference import ReferenceItem


def collation_key(label: str) -> tuple[str, str, str, str]:
    """Locale-style sort key for a label.

    Compares base letters first (ignoring accents and case), then accents, then case with
    lowercase before uppercase, and finally code points.
    """

    decomposed = unicodedata.normalize("NFKD", label)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), decomposed.casefold(), decomposed.swapcase(), label)


def _sort_key(item: ReferenceItem) -> tuple[int, object]:
    if item.citation_number is not None:
        return (0, item.citation_number)
    return (1, collation_key(item.label))


def sort_references(items: Iterable[ReferenceItem]) -> list[ReferenceItem]:
    """Order references: numbered citations ascending, then the rest by label.

    The sort is stable, so labels that compare equal keep their first-seen order.
    """

    return sorted(items, key=_sort_key)
