"""Conversation models.

Shapes of the chat service payload that supplies the assistant text. Only the fields the
references pipeline reads are modelled; unknown keys are ignored.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _ServiceModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Attribution(_ServiceModel):
    """Source attribution attached to a message by the service."""

    attribution_type: str | None = Field(default=None, alias="attributionType")
    provider_display_name: str | None = Field(default=None, alias="providerDisplayName")
    attribution_source: str | None = Field(default=None, alias="attributionSource")
    see_more_web_url: str | None = Field(default=None, alias="seeMoreWebUrl")


class ConversationMessage(_ServiceModel):
    """A single message in a conversation."""

    id: str
    text: str = ""
    created_date_time: datetime | None = Field(default=None, alias="createdDateTime")
    attributions: list[Attribution] = Field(default_factory=list)


class Conversation(_ServiceModel):
    """A conversation as returned after sending a chat message."""

    id: str
    display_name: str | None = Field(default=None, alias="displayName")
    status: str | None = None
    turn_count: int = Field(default=0, ge=0, alias="turnCount")
    messages: list[ConversationMessage] = Field(default_factory=list)
