"""Extract references from chat service conversations."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from chatrefs.errors import ConversationFormatError
from chatrefs.logging import get_logger, source_context
from chatrefs.models.conversation import Conversation, ConversationMessage
from chatrefs.models.reference import ReferenceItem
from chatrefs.references.extractor import extract_references

logger = get_logger(__name__)


def parse_conversation(payload: str | bytes | dict[str, Any]) -> Conversation:
    """Parse a conversation payload (JSON text or decoded dict).

    Raises:
        ConversationFormatError: If the payload is not JSON or does not match the model.
    """

    try:
        if isinstance(payload, dict):
            return Conversation.model_validate(payload)
        return Conversation.model_validate_json(payload)
    except ValidationError as e:
        raise ConversationFormatError(f"Invalid conversation payload: {e}") from e


def load_conversation(path: Path) -> Conversation:
    """Load a conversation from a UTF-8 JSON file."""

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConversationFormatError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConversationFormatError(f"{path} must contain a JSON object")
    return parse_conversation(data)


def latest_message(conversation: Conversation) -> ConversationMessage | None:
    """Return the last message of the conversation, if any."""

    if not conversation.messages:
        return None
    return conversation.messages[-1]


def extract_from_conversation(conversation: Conversation) -> list[ReferenceItem]:
    """Extract references from the latest message of ``conversation``."""

    message = latest_message(conversation)
    if message is None:
        logger.info("Conversation %s has no messages", conversation.id)
        return []
    with source_context(source=f"message:{message.id}"):
        return extract_references(message.text)
