"""Domain events for the Message aggregate.

All events use aggregate_type "Message" and the message id as
aggregate_id. Payload identifiers are plain strings so events can be
serialized without knowledge of the value objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from shared_kernel.events import DomainEvent

MESSAGE_AGGREGATE_TYPE = "Message"


@dataclass(frozen=True, kw_only=True)
class MessageCreated(DomainEvent):
    """Event raised when a message is sent.

    Attributes:
        chat_id: The chat the message was posted in
        author_id: The user who sent the message
        content: The message text
        parent_message_id: The parent message for thread replies, else None
    """

    event_type: ClassVar[str] = "message.created"
    aggregate_type: ClassVar[str] = MESSAGE_AGGREGATE_TYPE

    chat_id: str
    author_id: str
    content: str
    parent_message_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class MessageEdited(DomainEvent):
    """Event raised when the author edits a message's content."""

    event_type: ClassVar[str] = "message.edited"
    aggregate_type: ClassVar[str] = MESSAGE_AGGREGATE_TYPE

    new_content: str
    edited_at: datetime


@dataclass(frozen=True, kw_only=True)
class MessageDeleted(DomainEvent):
    """Event raised when a message is soft-deleted."""

    event_type: ClassVar[str] = "message.deleted"
    aggregate_type: ClassVar[str] = MESSAGE_AGGREGATE_TYPE

    deleted_by: str
    deleted_at: datetime


@dataclass(frozen=True, kw_only=True)
class ReactionAdded(DomainEvent):
    event_type: ClassVar[str] = "message.reaction.added"
    aggregate_type: ClassVar[str] = MESSAGE_AGGREGATE_TYPE

    user_id: str
    emoji_code: str
    added_at: datetime


@dataclass(frozen=True, kw_only=True)
class ReactionRemoved(DomainEvent):
    event_type: ClassVar[str] = "message.reaction.removed"
    aggregate_type: ClassVar[str] = MESSAGE_AGGREGATE_TYPE

    user_id: str
    emoji_code: str
    removed_at: datetime


@dataclass(frozen=True, kw_only=True)
class AttachmentAdded(DomainEvent):
    """Event raised when a file is attached to a message.

    Attributes:
        file_id: The stored file
        file_name: Original file name
        file_size: Size in bytes
        mime_type: MIME type reported at upload
        added_at: When the attachment was added
    """

    event_type: ClassVar[str] = "message.attachment.added"
    aggregate_type: ClassVar[str] = MESSAGE_AGGREGATE_TYPE

    file_id: str
    file_name: str
    file_size: int
    mime_type: str
    added_at: datetime
