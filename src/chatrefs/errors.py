"""Exceptions raised by chatrefs' outer surfaces.

The extraction engine itself never raises; these cover loading upstream payloads.
"""

from __future__ import annotations


class ChatRefsError(Exception):
    """Base error for chatrefs."""


class ConversationFormatError(ChatRefsError, ValueError):
    """A conversation payload is not valid JSON or does not match the expected shape."""
