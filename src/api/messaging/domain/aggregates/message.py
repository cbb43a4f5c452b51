"""Message aggregate for the Messaging context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from messaging.domain.events import (
    AttachmentAdded,
    MessageCreated,
    MessageDeleted,
    MessageEdited,
    ReactionAdded,
    ReactionRemoved,
)
from messaging.domain.observability import DefaultMessageProbe, MessageProbe
from messaging.domain.value_objects import (
    MAX_CONTENT_LENGTH,
    Attachment,
    ChatId,
    FileId,
    MessageId,
    Reaction,
)
from messaging.ports.exceptions import (
    ContentTooLongError,
    EmptyContentError,
    MessageDeletedError,
    NotAuthorError,
    ReactionAlreadyExistsError,
    ReactionNotFoundError,
)
from shared_kernel.identifiers import UserId
from shared_kernel.validation import required_id

if TYPE_CHECKING:
    from shared_kernel.events import DomainEvent


def _validate_content(content: str) -> None:
    if not content:
        raise EmptyContentError()
    if len(content) > MAX_CONTENT_LENGTH:
        raise ContentTooLongError(
            f"message content exceeds {MAX_CONTENT_LENGTH} characters"
        )


@dataclass
class Message:
    """Message aggregate representing a single chat message.

    A message is posted into a chat by its author and may be a reply in a
    thread (parent_message_id set). Messages are soft-deleted: the record
    is kept with is_deleted=True and stops accepting changes.

    Business rules:
    - chat_id, author_id and content are required; content is at most
      MAX_CONTENT_LENGTH characters
    - Only the author may edit or delete a message
    - A deleted message cannot be edited, deleted again, reacted to or
      receive attachments
    - A user may add a given emoji to a message only once
    - Removing a reaction is permitted on deleted messages
    - edited_at is set iff the content was edited; deleted_at iff is_deleted

    Versioning:
    - version is 1 after create() and increases by one per mutation
    - persisted_version is the version last read from or written to storage,
      used by repositories to detect concurrent writes

    Event collection:
    - All mutating operations record domain events carrying the new version
    - Events can be collected via collect_events() after persistence
    """

    id: MessageId
    chat_id: ChatId
    author_id: UserId
    content: str
    created_at: datetime
    parent_message_id: MessageId | None = None
    edited_at: datetime | None = None
    is_deleted: bool = False
    deleted_at: datetime | None = None
    version: int = 1
    persisted_version: int = 0
    _attachments: list[Attachment] = field(default_factory=list, repr=False)
    _reactions: list[Reaction] = field(default_factory=list, repr=False)
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)
    _probe: MessageProbe = field(
        default_factory=DefaultMessageProbe,
        repr=False,
    )

    @classmethod
    def create(
        cls,
        chat_id: ChatId,
        author_id: UserId,
        content: str,
        parent_message_id: MessageId | None = None,
        probe: MessageProbe | None = None,
    ) -> Message:
        """Factory method for sending a new message.

        Args:
            chat_id: The chat the message is posted in
            author_id: The sending user
            content: Message text (1 to MAX_CONTENT_LENGTH characters)
            parent_message_id: Parent message when replying in a thread
            probe: Optional observability probe

        Returns:
            A new Message with a MessageCreated event recorded

        Raises:
            ValidationError: If chat_id or author_id is missing
            EmptyContentError: If content is empty
            ContentTooLongError: If content exceeds MAX_CONTENT_LENGTH
        """
        required_id("chat_id", chat_id)
        required_id("author_id", author_id)
        _validate_content(content)

        now = datetime.now(UTC)
        message = cls(
            id=MessageId.generate(),
            chat_id=chat_id,
            author_id=author_id,
            content=content,
            created_at=now,
            parent_message_id=parent_message_id,
            _probe=probe or DefaultMessageProbe(),
        )
        message._pending_events.append(
            MessageCreated(
                aggregate_id=message.id.value,
                version=message.version,
                occurred_at=now,
                chat_id=chat_id.value,
                author_id=author_id.value,
                content=content,
                parent_message_id=(
                    parent_message_id.value if parent_message_id else None
                ),
            )
        )
        return message

    @classmethod
    def reconstruct(
        cls,
        *,
        id: MessageId,
        chat_id: ChatId,
        author_id: UserId,
        content: str,
        created_at: datetime,
        parent_message_id: MessageId | None,
        edited_at: datetime | None,
        is_deleted: bool,
        deleted_at: datetime | None,
        attachments: list[Attachment],
        reactions: list[Reaction],
        version: int,
        probe: MessageProbe | None = None,
    ) -> Message:
        """Rebuild a message from stored state.

        Used by repositories only. No business rules are checked and no
        events are recorded.
        """
        return cls(
            id=id,
            chat_id=chat_id,
            author_id=author_id,
            content=content,
            created_at=created_at,
            parent_message_id=parent_message_id,
            edited_at=edited_at,
            is_deleted=is_deleted,
            deleted_at=deleted_at,
            version=version,
            persisted_version=version,
            _attachments=list(attachments),
            _reactions=list(reactions),
            _probe=probe or DefaultMessageProbe(),
        )

    @property
    def attachments(self) -> list[Attachment]:
        """Attachments in insertion order (a copy)."""
        return list(self._attachments)

    @property
    def reactions(self) -> list[Reaction]:
        """Reactions in insertion order (a copy)."""
        return list(self._reactions)

    def edit_content(self, new_content: str, editor_id: UserId) -> None:
        """Replace the message content.

        Args:
            new_content: The new text
            editor_id: The user performing the edit

        Raises:
            MessageDeletedError: If the message is deleted
            EmptyContentError: If new_content is empty
            ContentTooLongError: If new_content exceeds MAX_CONTENT_LENGTH
            NotAuthorError: If editor_id is not the author
        """
        if self.is_deleted:
            raise MessageDeletedError("cannot edit deleted message")
        _validate_content(new_content)
        if not self.can_be_edited_by(editor_id):
            raise NotAuthorError("only the author can edit the message")

        now = datetime.now(UTC)
        self.content = new_content
        self.edited_at = now
        self.version += 1

        self._pending_events.append(
            MessageEdited(
                aggregate_id=self.id.value,
                version=self.version,
                occurred_at=now,
                new_content=new_content,
                edited_at=now,
            )
        )
        self._probe.content_edited(message_id=self.id.value, editor_id=editor_id.value)

    def delete(self, deleter_id: UserId) -> None:
        """Soft-delete the message.

        Raises:
            MessageDeletedError: If the message is already deleted
            NotAuthorError: If deleter_id is not the author
        """
        if self.is_deleted:
            raise MessageDeletedError("message is already deleted")
        if not self.can_be_edited_by(deleter_id):
            raise NotAuthorError("only the author can delete the message")

        now = datetime.now(UTC)
        self.is_deleted = True
        self.deleted_at = now
        self.version += 1

        self._pending_events.append(
            MessageDeleted(
                aggregate_id=self.id.value,
                version=self.version,
                occurred_at=now,
                deleted_by=deleter_id.value,
                deleted_at=now,
            )
        )
        self._probe.message_deleted(
            message_id=self.id.value, deleted_by=deleter_id.value
        )

    def add_reaction(self, user_id: UserId, emoji_code: str) -> None:
        """Add an emoji reaction. Any user may react.

        Raises:
            MessageDeletedError: If the message is deleted
            ValidationError: If user_id is missing
            InvalidEmojiError: If emoji_code is empty
            ReactionAlreadyExistsError: If the user already added this emoji
        """
        if self.is_deleted:
            raise MessageDeletedError("cannot react to deleted message")
        reaction = Reaction.create(user_id=user_id, emoji_code=emoji_code)
        if self.has_reaction(user_id, emoji_code):
            raise ReactionAlreadyExistsError(
                f"user already reacted with {emoji_code}"
            )

        self._reactions.append(reaction)
        self.version += 1

        self._pending_events.append(
            ReactionAdded(
                aggregate_id=self.id.value,
                version=self.version,
                occurred_at=reaction.added_at,
                user_id=user_id.value,
                emoji_code=emoji_code,
                added_at=reaction.added_at,
            )
        )
        self._probe.reaction_added(
            message_id=self.id.value, user_id=user_id.value, emoji_code=emoji_code
        )

    def remove_reaction(self, user_id: UserId, emoji_code: str) -> None:
        """Remove the reaction left by user_id with emoji_code.

        Other reactions keep their relative order.

        Raises:
            ReactionNotFoundError: If no such reaction exists
        """
        if not self.has_reaction(user_id, emoji_code):
            raise ReactionNotFoundError()

        self._reactions = [
            r for r in self._reactions if not r.matches(user_id, emoji_code)
        ]
        now = datetime.now(UTC)
        self.version += 1

        self._pending_events.append(
            ReactionRemoved(
                aggregate_id=self.id.value,
                version=self.version,
                occurred_at=now,
                user_id=user_id.value,
                emoji_code=emoji_code,
                removed_at=now,
            )
        )
        self._probe.reaction_removed(
            message_id=self.id.value, user_id=user_id.value, emoji_code=emoji_code
        )

    def add_attachment(
        self,
        file_id: FileId,
        file_name: str,
        file_size: int,
        mime_type: str,
    ) -> None:
        """Append a file attachment.

        Raises:
            MessageDeletedError: If the message is deleted
            ValidationError, InvalidFileNameError, InvalidFileSizeError,
            InvalidMimeTypeError: If the attachment is invalid
        """
        if self.is_deleted:
            raise MessageDeletedError("cannot add attachment to deleted message")
        attachment = Attachment.create(
            file_id=file_id,
            file_name=file_name,
            file_size=file_size,
            mime_type=mime_type,
        )

        self._attachments.append(attachment)
        now = datetime.now(UTC)
        self.version += 1

        self._pending_events.append(
            AttachmentAdded(
                aggregate_id=self.id.value,
                version=self.version,
                occurred_at=now,
                file_id=file_id.value,
                file_name=file_name,
                file_size=file_size,
                mime_type=mime_type,
                added_at=now,
            )
        )
        self._probe.attachment_added(
            message_id=self.id.value,
            file_id=file_id.value,
            file_size=file_size,
            mime_type=mime_type,
        )

    def is_edited(self) -> bool:
        return self.edited_at is not None

    def is_reply(self) -> bool:
        return self.parent_message_id is not None

    def can_be_edited_by(self, user_id: UserId) -> bool:
        return self.author_id == user_id

    def has_reaction(self, user_id: UserId, emoji_code: str) -> bool:
        return any(r.matches(user_id, emoji_code) for r in self._reactions)

    def reaction_count(self, emoji_code: str) -> int:
        """Number of users who reacted with emoji_code."""
        return sum(1 for r in self._reactions if r.emoji_code == emoji_code)

    def mark_persisted(self) -> None:
        """Record that the current version has been written to storage."""
        self.persisted_version = self.version

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
