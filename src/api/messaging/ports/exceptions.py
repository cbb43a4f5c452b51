"""Errors raised by the Messaging bounded context.

Each error subclasses one of the shared families so callers can match
either the precise condition or its category.
"""

from shared_kernel.errors import (
    AlreadyExistsError,
    ForbiddenError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)


class EmptyContentError(InvalidInputError):
    """Message content is empty."""

    default_message = "message content cannot be empty"


class ContentTooLongError(InvalidInputError):
    """Message content exceeds the maximum length."""

    default_message = "message content is too long"


class InvalidEmojiError(InvalidInputError):
    default_message = "invalid emoji"


class InvalidFileNameError(InvalidInputError):
    default_message = "invalid file name"


class InvalidMimeTypeError(InvalidInputError):
    default_message = "invalid MIME type"


class InvalidFileSizeError(InvalidInputError):
    default_message = "invalid file size"


class ParentInDifferentChatError(InvalidInputError):
    """A thread reply must live in the same chat as its parent message."""

    default_message = "parent message is in a different chat"


class MessageNotFoundError(NotFoundError):
    default_message = "message not found"


class ChatNotFoundError(NotFoundError):
    default_message = "chat not found"


class ParentNotFoundError(NotFoundError):
    default_message = "parent message not found"


class ReactionNotFoundError(NotFoundError):
    default_message = "reaction not found"


class NotAuthorError(ForbiddenError):
    """Only the author of a message may edit, delete or attach to it."""

    default_message = "user is not the message author"


class NotChatParticipantError(ForbiddenError):
    default_message = "user is not a chat participant"


class MessageDeletedError(InvalidStateError):
    """The message is soft-deleted and no longer accepts changes."""

    default_message = "message is deleted"


class ReactionAlreadyExistsError(AlreadyExistsError):
    default_message = "reaction already exists"
