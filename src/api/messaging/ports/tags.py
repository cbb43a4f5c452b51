"""Port for post-send tag processing.

After a message is stored, its content may carry tags (e.g. "#status done")
that drive commands in other contexts. Tag parsing and execution live
outside this context; Messaging only hands over a snapshot of the message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class PostSendJob:
    """Immutable snapshot of a sent message for background processing.

    Attributes:
        message_id: The stored message
        chat_id: Chat the message was posted in
        chat_type: Kind of chat, which decides the tags that apply
        author_id: Sending user
        content: Message text at send time
    """

    message_id: str
    chat_id: str
    chat_type: str
    author_id: str
    content: str


@runtime_checkable
class ITagProcessor(Protocol):
    """Parses and executes tags found in a sent message."""

    async def process(self, job: PostSendJob) -> None:
        ...
