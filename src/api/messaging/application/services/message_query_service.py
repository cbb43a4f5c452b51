"""Message query service.

Read-side use-cases. Queries never mutate aggregates and never publish
events; they share the command side's cancellation and validation rules.
"""

from __future__ import annotations

from messaging.application.observability import (
    DefaultMessageQueryServiceProbe,
    MessageQueryServiceProbe,
)
from messaging.application.queries import (
    GetMessageQuery,
    GetThreadQuery,
    ListMessagesQuery,
    MessagePage,
    SearchMessagesQuery,
    clamp_pagination,
)
from messaging.domain.aggregates import Message
from messaging.domain.value_objects import MessageId
from messaging.ports.exceptions import MessageNotFoundError, ParentNotFoundError
from messaging.ports.repositories import IMessageQueryRepository
from shared_kernel.errors import InvalidInputError, operation_context
from shared_kernel.execution_context import ensure_active
from shared_kernel.observability_context import ObservationContext
from shared_kernel.validation import required, required_id


class MessageQueryService:
    """Application service for reading messages."""

    def __init__(
        self,
        message_repository: IMessageQueryRepository,
        probe: MessageQueryServiceProbe | None = None,
    ):
        self._message_repository = message_repository
        self._probe = probe or DefaultMessageQueryServiceProbe()

    def _observed_probe(self) -> MessageQueryServiceProbe:
        context = ensure_active()
        return self._probe.with_context(
            ObservationContext.from_execution_context(context)
        )

    async def get_message(self, query: GetMessageQuery) -> Message:
        """Retrieve a single message.

        Raises:
            InvalidInputError: If message_id is missing
            MessageNotFoundError: If the message does not exist
        """
        probe = self._observed_probe()
        try:
            required_id("message_id", query.message_id)
        except InvalidInputError as e:
            raise e.with_context("validation failed")

        with operation_context("failed to load message"):
            message = await self._message_repository.get_by_id(query.message_id)
        if message is None:
            probe.message_not_found(message_id=query.message_id.value)
            raise MessageNotFoundError()

        probe.message_retrieved(message_id=message.id.value)
        return message

    async def list_messages(self, query: ListMessagesQuery) -> MessagePage:
        """List a chat's messages, newest first.

        A limit of 0 (or less) means the default page size; limits above the
        maximum are clamped and negative offsets are treated as 0.

        Raises:
            InvalidInputError: If chat_id is missing
        """
        probe = self._observed_probe()
        try:
            required_id("chat_id", query.chat_id)
        except InvalidInputError as e:
            raise e.with_context("validation failed")

        limit, offset = clamp_pagination(query.limit, query.offset)
        with operation_context("failed to find messages"):
            messages = await self._message_repository.find_by_chat(
                query.chat_id, limit=limit, offset=offset, before=query.before
            )

        probe.messages_listed(
            chat_id=query.chat_id.value,
            count=len(messages),
            limit=limit,
            offset=offset,
        )
        return MessagePage(messages=messages, limit=limit, offset=offset)

    async def get_thread(self, query: GetThreadQuery) -> list[Message]:
        """Return the direct replies to a message.

        Raises:
            InvalidInputError: If parent_message_id is missing
            ParentNotFoundError: If the parent message does not exist
        """
        probe = self._observed_probe()
        try:
            required_id("parent_message_id", query.parent_message_id)
        except InvalidInputError as e:
            raise e.with_context("validation failed")

        with operation_context("failed to load parent message"):
            parent = await self._message_repository.get_by_id(query.parent_message_id)
        if parent is None:
            raise ParentNotFoundError()

        with operation_context("failed to find thread"):
            replies = await self._message_repository.find_thread(
                query.parent_message_id
            )

        probe.thread_retrieved(
            parent_message_id=query.parent_message_id.value, count=len(replies)
        )
        return replies

    async def count_thread_replies(self, parent_message_id: MessageId) -> int:
        ensure_active()
        try:
            required_id("parent_message_id", parent_message_id)
        except InvalidInputError as e:
            raise e.with_context("validation failed")

        with operation_context("failed to count thread replies"):
            return await self._message_repository.count_thread_replies(
                parent_message_id
            )

    async def search_messages(self, query: SearchMessagesQuery) -> MessagePage:
        """Search a chat's messages by text.

        Raises:
            InvalidInputError: If chat_id or text is missing
        """
        probe = self._observed_probe()
        try:
            required_id("chat_id", query.chat_id)
            required("text", query.text)
        except InvalidInputError as e:
            raise e.with_context("validation failed")

        limit, offset = clamp_pagination(query.limit, query.offset)
        with operation_context("failed to search messages"):
            messages = await self._message_repository.search_in_chat(
                query.chat_id, query.text, limit=limit, offset=offset
            )

        probe.messages_searched(chat_id=query.chat_id.value, count=len(messages))
        return MessagePage(messages=messages, limit=limit, offset=offset)
