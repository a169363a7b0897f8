"""Reference models.

``MatchEvent`` is the transient record a matcher emits; ``ReferenceItem`` is the deduplicated
output record, one per normalized URL.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class MatchEvent:
    """A single raw match produced by a pattern matcher."""

    raw_url: str
    label: str | None = None
    citation_number: int | None = None


class ReferenceItem(BaseModel):
    """A cited source extracted from assistant text.

    Serialized with the external field names (``citationNumber``) when dumped ``by_alias``.
    """

    model_config = ConfigDict(populate_by_name=True)

    url: str
    label: str
    domain: str
    citation_number: int | None = Field(default=None, ge=0, alias="citationNumber")
    occurrences: int = Field(default=1, ge=1)

    def to_public_dict(self) -> dict[str, object]:
        """Dump with external field names, omitting an absent citation number."""

        return self.model_dump(by_alias=True, exclude_none=True)
