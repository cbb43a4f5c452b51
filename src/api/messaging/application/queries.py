"""Queries accepted by MessageQueryService, and their results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from messaging.domain.aggregates import Message
from messaging.domain.value_objects import ChatId, MessageId

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


@dataclass(frozen=True)
class GetMessageQuery:
    message_id: MessageId


@dataclass(frozen=True)
class ListMessagesQuery:
    """List a chat's messages, newest first.

    Attributes:
        chat_id: The chat to list
        limit: Page size; 0 means DEFAULT_LIMIT, values above MAX_LIMIT are
            clamped
        offset: Messages to skip; negative values are treated as 0
        before: Only messages created strictly before this time
    """

    chat_id: ChatId
    limit: int = 0
    offset: int = 0
    before: datetime | None = None


@dataclass(frozen=True)
class GetThreadQuery:
    parent_message_id: MessageId


@dataclass(frozen=True)
class SearchMessagesQuery:
    chat_id: ChatId
    text: str
    limit: int = 0
    offset: int = 0


@dataclass(frozen=True)
class MessagePage:
    """A page of messages together with the effective pagination."""

    messages: list[Message]
    limit: int
    offset: int


def clamp_pagination(limit: int, offset: int) -> tuple[int, int]:
    """Apply the default and maximum page size.

    Returns:
        (limit, offset) with limit in 1..MAX_LIMIT and offset >= 0
    """
    if limit <= 0:
        limit = DEFAULT_LIMIT
    limit = min(limit, MAX_LIMIT)
    return limit, max(offset, 0)
