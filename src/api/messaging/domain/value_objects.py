"""Value objects for the Messaging domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from messaging.ports.exceptions import (
    InvalidEmojiError,
    InvalidFileNameError,
    InvalidFileSizeError,
    InvalidMimeTypeError,
)
from shared_kernel.identifiers import UlidIdentifier, UserId
from shared_kernel.validation import required_id

MAX_CONTENT_LENGTH = 10_000
MAX_FILE_SIZE = 10 * 1024 * 1024


@dataclass(frozen=True)
class MessageId(UlidIdentifier):
    """Identifier for a Message aggregate."""


@dataclass(frozen=True)
class ChatId(UlidIdentifier):
    """Identifier for a chat (owned by the Chat context)."""


@dataclass(frozen=True)
class FileId(UlidIdentifier):
    """Identifier for an uploaded file held by the file store."""


@dataclass(frozen=True)
class Attachment:
    """A file attached to a message.

    Attachments only reference files; the bytes live in external storage.
    """

    file_id: FileId
    file_name: str
    file_size: int
    mime_type: str

    @classmethod
    def create(
        cls,
        file_id: FileId,
        file_name: str,
        file_size: int,
        mime_type: str,
    ) -> Attachment:
        """Create a validated attachment.

        Raises:
            ValidationError: If file_id is missing
            InvalidFileNameError: If file_name is empty
            InvalidFileSizeError: If file_size is not positive
            InvalidMimeTypeError: If mime_type is empty
        """
        required_id("file_id", file_id)
        if not file_name:
            raise InvalidFileNameError("file name cannot be empty")
        if file_size <= 0:
            raise InvalidFileSizeError("file size must be positive")
        if not mime_type:
            raise InvalidMimeTypeError("MIME type cannot be empty")
        return cls(
            file_id=file_id,
            file_name=file_name,
            file_size=file_size,
            mime_type=mime_type,
        )


@dataclass(frozen=True)
class Reaction:
    """An emoji reaction left by a user on a message."""

    user_id: UserId
    emoji_code: str
    added_at: datetime

    @classmethod
    def create(
        cls,
        user_id: UserId,
        emoji_code: str,
        added_at: datetime | None = None,
    ) -> Reaction:
        """Create a validated reaction.

        Raises:
            ValidationError: If user_id is missing
            InvalidEmojiError: If emoji_code is empty
        """
        required_id("user_id", user_id)
        if not emoji_code:
            raise InvalidEmojiError("emoji code cannot be empty")
        return cls(
            user_id=user_id,
            emoji_code=emoji_code,
            added_at=added_at or datetime.now(UTC),
        )

    def matches(self, user_id: UserId, emoji_code: str) -> bool:
        return self.user_id == user_id and self.emoji_code == emoji_code
