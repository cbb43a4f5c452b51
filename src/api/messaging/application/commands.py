"""Commands accepted by MessageService."""

from __future__ import annotations

from dataclasses import dataclass

from messaging.domain.value_objects import ChatId, FileId, MessageId
from shared_kernel.identifiers import UserId


@dataclass(frozen=True)
class SendMessageCommand:
    chat_id: ChatId
    author_id: UserId
    content: str
    parent_message_id: MessageId | None = None


@dataclass(frozen=True)
class EditMessageCommand:
    message_id: MessageId
    content: str
    editor_id: UserId


@dataclass(frozen=True)
class DeleteMessageCommand:
    message_id: MessageId
    deleter_id: UserId


@dataclass(frozen=True)
class AddReactionCommand:
    message_id: MessageId
    user_id: UserId
    emoji_code: str


@dataclass(frozen=True)
class RemoveReactionCommand:
    """Remove a user's reaction.

    The transport layer must bind user_id to the authenticated principal;
    the service removes exactly the (user_id, emoji_code) reaction.
    """

    message_id: MessageId
    user_id: UserId
    emoji_code: str


@dataclass(frozen=True)
class AddAttachmentCommand:
    message_id: MessageId
    user_id: UserId
    file_id: FileId
    file_name: str
    file_size: int
    mime_type: str
