"""Chat read model consumed by the Messaging context.

Chats are owned by the Chat context. Messaging only needs to know which
chat a message goes to and who may post in it, so it reads a projection
rather than the Chat aggregate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Protocol, runtime_checkable

from messaging.domain.value_objects import ChatId
from shared_kernel.identifiers import UserId


class ChatType(StrEnum):
    DISCUSSION = "discussion"
    TASK = "task"
    BUG = "bug"
    EPIC = "epic"


class ParticipantRole(StrEnum):
    ADMIN = "admin"
    MEMBER = "member"


@dataclass(frozen=True)
class ChatParticipant:
    user_id: UserId
    role: ParticipantRole
    joined_at: datetime


@dataclass(frozen=True)
class ChatReadModel:
    """Projection of a chat.

    Attributes:
        id: Chat ID
        workspace_id: Raw id of the workspace owning the chat
        chat_type: Kind of chat (plain discussion or a tracked item)
        title: Chat title
        is_public: Whether any workspace member may read the chat
        created_by: User who created the chat
        created_at: Creation time
        participants: Users allowed to post
    """

    id: ChatId
    workspace_id: str
    chat_type: ChatType
    title: str
    is_public: bool
    created_by: UserId
    created_at: datetime
    participants: tuple[ChatParticipant, ...] = field(default_factory=tuple)

    def has_participant(self, user_id: UserId) -> bool:
        return any(p.user_id == user_id for p in self.participants)


@runtime_checkable
class IChatReadModelRepository(Protocol):
    """Read-only access to chat projections."""

    async def get_by_id(self, chat_id: ChatId) -> ChatReadModel | None:
        """Retrieve a chat projection.

        Args:
            chat_id: The chat to look up

        Returns:
            The chat read model, or None if the chat does not exist
        """
        ...
