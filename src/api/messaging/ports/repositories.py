"""Repository protocols (ports) for the Messaging bounded context.

Repositories are split into a command side (writes) and a query side
(reads); IMessageRepository combines both for adapters that implement
the full contract. Lookups return None when nothing matches; any other
failure surfaces as PersistenceError with the original exception chained.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from messaging.domain.aggregates import Message
from messaging.domain.value_objects import ChatId, MessageId
from shared_kernel.identifiers import UserId


@runtime_checkable
class IMessageCommandRepository(Protocol):
    """Write side of message persistence."""

    async def save(self, message: Message) -> None:
        """Persist a message aggregate (insert or update).

        Implementations must compare message.persisted_version with the
        stored version, reject the write on mismatch and call
        message.mark_persisted() on success.

        Args:
            message: The Message aggregate to persist

        Raises:
            ConcurrencyConflictError: If the stored message changed since it
                was loaded
            PersistenceError: If the write failed
        """
        ...

    async def delete(self, message_id: MessageId) -> None:
        """Physically remove a message.

        Not used by the domain flow, which soft-deletes via Message.delete().
        """
        ...


@runtime_checkable
class IMessageQueryRepository(Protocol):
    """Read side of message persistence."""

    async def get_by_id(self, message_id: MessageId) -> Message | None:
        """Retrieve a message by ID.

        Returns:
            The Message aggregate, or None if not found
        """
        ...

    async def find_by_chat(
        self,
        chat_id: ChatId,
        limit: int,
        offset: int,
        before: datetime | None = None,
    ) -> list[Message]:
        """List messages of a chat, newest first.

        Args:
            chat_id: The chat to list
            limit: Maximum number of messages to return
            offset: Number of messages to skip
            before: Only include messages created strictly before this time

        Returns:
            Messages ordered by created_at descending
        """
        ...

    async def find_thread(self, parent_message_id: MessageId) -> list[Message]:
        """List direct replies to a message, oldest first."""
        ...

    async def count_by_chat(self, chat_id: ChatId) -> int:
        ...

    async def count_thread_replies(self, parent_message_id: MessageId) -> int:
        ...

    async def get_reaction_users(
        self, message_id: MessageId, emoji_code: str
    ) -> list[UserId]:
        """Users who reacted to a message with the given emoji."""
        ...

    async def search_in_chat(
        self,
        chat_id: ChatId,
        query: str,
        limit: int,
        offset: int,
    ) -> list[Message]:
        """Full-text search within a chat, newest first."""
        ...

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int,
        offset: int,
    ) -> list[Message]:
        ...


@runtime_checkable
class IMessageRepository(IMessageCommandRepository, IMessageQueryRepository, Protocol):
    """Full message repository contract."""
