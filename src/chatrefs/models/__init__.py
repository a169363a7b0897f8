"""Models used across the project."""

from __future__ import annotations

from chatrefs.models.conversation import Attribution, Conversation, ConversationMessage
from chatrefs.models.reference import MatchEvent, ReferenceItem

__all__ = [
    "Attribution",
    "Conversation",
    "ConversationMessage",
    "MatchEvent",
    "ReferenceItem",
]
