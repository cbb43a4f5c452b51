"""Domain events for the Messaging bounded context."""

from messaging.domain.events.message import (
    MESSAGE_AGGREGATE_TYPE,
    AttachmentAdded,
    MessageCreated,
    MessageDeleted,
    MessageEdited,
    ReactionAdded,
    ReactionRemoved,
)

MessageEvent = (
    MessageCreated
    | MessageEdited
    | MessageDeleted
    | ReactionAdded
    | ReactionRemoved
    | AttachmentAdded
)

MESSAGE_EVENT_TYPES: tuple[type, ...] = (
    MessageCreated,
    MessageEdited,
    MessageDeleted,
    ReactionAdded,
    ReactionRemoved,
    AttachmentAdded,
)

__all__ = [
    "MESSAGE_AGGREGATE_TYPE",
    "MESSAGE_EVENT_TYPES",
    "AttachmentAdded",
    "MessageCreated",
    "MessageDeleted",
    "MessageEdited",
    "MessageEvent",
    "ReactionAdded",
    "ReactionRemoved",
]
